import json

import pytest

import orbweaver.__main__ as cli


def test_main_writes_tikz_and_json(tmp_path, capsys):
    tikz_path = tmp_path / "out" / "web.tex"
    json_path = tmp_path / "out" / "web.json"

    cli.main(
        [
            "--seed",
            "42",
            "--ring-count",
            "3",
            "--tikz-output-path",
            str(tikz_path),
            "--json-output-path",
            str(json_path),
        ]
    )

    assert "\\begin{tikzpicture}" in tikz_path.read_text(encoding="utf-8")
    data = json.loads(json_path.read_text(encoding="utf-8"))
    assert data["seed"] == 42
    assert data["params"]["ring_count"] == 3
    assert data["segments"][0]["role"] == "bridge"

    out = capsys.readouterr().out
    assert "Spokes:" in out
    assert "capture:" in out


def test_params_file_is_overridden_by_flags(tmp_path, monkeypatch):
    params_path = tmp_path / "params.json"
    params_path.write_text(json.dumps({"maxGapDegrees": 360, "ringCount": 2}), encoding="utf-8")

    seen = {}

    def _fake_generate(width, height, params, seed=None, attempts=1):
        seen.update(width=width, height=height, params=params, seed=seed, attempts=attempts)
        raise cli.WeaveError("stop here")

    monkeypatch.setattr(cli, "generate_with_reseed", _fake_generate)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--params", str(params_path), "--ring-count", "4", "--reseed-attempts", "2", "--width", "640"])

    assert excinfo.value.code == 1
    assert seen["params"].max_gap_degrees == 360
    assert seen["params"].ring_count == 4
    assert seen["attempts"] == 2
    assert seen["width"] == 640.0


def test_invalid_parameters_exit_with_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--min-clearance", "1.5"])

    assert excinfo.value.code == 1
    assert "min_clearance_factor" in capsys.readouterr().err


def test_unknown_parameter_file_key(tmp_path):
    params_path = tmp_path / "params.json"
    params_path.write_text(json.dumps({"spokeCount": 12}), encoding="utf-8")
    with pytest.raises(SystemExit):
        cli.main(["--params", str(params_path)])


def test_missing_parameter_file_exits_with_error(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--params", str(tmp_path / "absent.json")])

    assert excinfo.value.code == 1
    assert "cannot read parameter file" in capsys.readouterr().err


def test_malformed_parameter_file_exits_with_error(tmp_path, capsys):
    params_path = tmp_path / "params.json"
    params_path.write_text("{ringCount: 3", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--params", str(params_path)])

    assert excinfo.value.code == 1
    assert "not valid JSON" in capsys.readouterr().err
