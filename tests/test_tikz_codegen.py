import pytest

from orbweaver import WeaveParams, generate, generate_tikz_code, generate_tikz_document
from orbweaver.tikz_codegen.generator import _format_float


@pytest.fixture(scope="module")
def geometry():
    return generate(800, 600, WeaveParams(ring_count=3, cap_capacity=1), seed=42)


def test_every_segment_is_drawn_once(geometry):
    code = generate_tikz_code(geometry)

    assert code.startswith("\\begin{tikzpicture}")
    assert code.rstrip().endswith("\\end{tikzpicture}")
    assert code.count("\\draw[") == len(geometry.segments)
    assert code.count("\\draw[spoke]") == len(geometry.spokes)
    assert code.count("\\draw[capture]") == len(geometry.capture_trace.segments)
    assert code.count("\\draw[frame]") == 3
    assert "\\node[hub]" in code


def test_layers_put_capture_threads_in_front(geometry):
    code = generate_tikz_code(geometry)
    assert code.index("{bg}") < code.index("{main}") < code.index("{fg}")
    fg_block = code[code.index("{fg}") :]
    assert "\\draw[auxspiral]" not in fg_block


def test_unnormalized_code_flips_the_y_axis(geometry):
    code = generate_tikz_code(geometry, normalize=False)
    bridge = geometry.frame.bridge
    expected = f"({_format_float(bridge.start.x)}, {_format_float(600 - bridge.start.y)})"
    assert f"\\draw[bridge] {expected}" in code


def test_document_wraps_picture(geometry):
    document = generate_tikz_document(geometry, caption="seed 42 & friends")

    assert document.startswith("\\documentclass[border=2pt]{standalone}")
    assert "\\begin{tikzpicture}" in document
    assert "seed 42 \\& friends" in document
    assert document.rstrip().endswith("\\end{document}")
    assert "% global sizes" in document


def test_format_float():
    assert _format_float(1.23456789) == "1.2346"
    assert _format_float(2.0) == "2"
    assert _format_float(-0.00001) == "0"
    with pytest.raises(ValueError):
        _format_float(float("nan"))


def test_rejects_foreign_objects():
    with pytest.raises(TypeError):
        generate_tikz_code({"segments": []})
