import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from orbweaver import (
    ValidationError,
    WeaveError,
    WeaveParams,
    WebGeometry,
    angular_gaps,
    generate_tikz_document,
    generate_with_reseed,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _load_params(path: Optional[str]) -> Dict[str, Any]:
    if not path:
        return {}
    try:
        with open(path, encoding="utf-8") as fin:
            data = json.load(fin)
    except OSError as exc:
        raise ValidationError(f"cannot read parameter file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ValidationError(f"parameter file {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValidationError(f"parameter file {path} must hold a JSON object")
    return data


def _build_params(args: argparse.Namespace) -> WeaveParams:
    try:
        params = WeaveParams.from_mapping(_load_params(args.params))
    except (KeyError, TypeError) as exc:
        raise ValidationError(f"bad parameter file: {exc}") from exc
    return params.replace(
        max_gap_degrees=args.max_gap,
        min_clearance_factor=args.min_clearance,
        ring_count=args.ring_count,
        cap_capacity=args.cap_capacity,
        jitter_factor=args.jitter,
    )


def _print_summary(geometry: WebGeometry) -> None:
    hub = geometry.hub
    print(f"Canvas: {geometry.width:g} x {geometry.height:g} (seed={geometry.seed})")
    print(f"Hub: ({hub.x:.3f}, {hub.y:.3f})")
    print("Origins:")
    for name, point in zip(("top A", "top B", "bottom"), geometry.origins):
        print(f"  {name}: ({point.x:.3f}, {point.y:.3f})")
    gaps = angular_gaps(geometry.spokes)
    print(f"Spokes: {len(geometry.spokes)} (max gap {gaps.max():.3f} deg)")
    print(f"Auxiliary terminal spoke: {geometry.aux_trace.terminal_index}")
    print(f"Capture ring levels: {geometry.capture_trace.levels}")
    print("Segments:")
    for role, count in geometry.role_counts().items():
        print(f"  {role}: {count}")


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Weave an orb-weaver web skeleton")
    parser.add_argument("--width", type=float, default=800.0, help="Canvas width (default: 800)")
    parser.add_argument("--height", type=float, default=600.0, help="Canvas height (default: 600)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--params", help="JSON file with weave parameters")
    parser.add_argument("--max-gap", type=float, help="Largest angular gap between spokes, degrees")
    parser.add_argument("--min-clearance", type=float, help="Clearance factor for new spokes, in (0, 1)")
    parser.add_argument("--ring-count", type=int, help="Auxiliary spiral revolutions")
    parser.add_argument("--cap-capacity", type=int, help="Capture rings per auxiliary zone")
    parser.add_argument("--jitter", type=float, help="Frame jitter factor")
    parser.add_argument(
        "--reseed-attempts",
        type=int,
        default=1,
        help="Retry failed weaves with seed+1, seed+2, ... (default: 1 attempt)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--tikz-output-path",
        help="Write a standalone TikZ document of the web to the given path",
    )
    parser.add_argument(
        "--json-output-path",
        help="Write the full geometry as JSON to the given path",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    try:
        params = _build_params(args)
        geometry = generate_with_reseed(
            args.width,
            args.height,
            params,
            seed=args.seed,
            attempts=args.reseed_attempts,
        )
    except (ValidationError, WeaveError) as exc:
        logger.error("Weave failed: %s", exc)
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1)

    _print_summary(geometry)

    if args.tikz_output_path:
        output_path = Path(args.tikz_output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing TikZ document to %s", output_path)
        output_path.write_text(generate_tikz_document(geometry), encoding="utf-8")
        print(f"TikZ document written to {output_path}")

    if args.json_output_path:
        output_path = Path(args.json_output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing geometry JSON to %s", output_path)
        output_path.write_text(json.dumps(geometry.to_dict(), indent=2), encoding="utf-8")
        print(f"Geometry JSON written to {output_path}")


if __name__ == "__main__":
    main(sys.argv[1:])
