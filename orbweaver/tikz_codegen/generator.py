"""TikZ renderer for woven web geometry."""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Optional, Tuple

from ..primitives import Vector
from ..weave.model import Segment, SegmentRole, WebGeometry

# Longest picture side in centimetres when normalizing.
TARGET_SPAN_CM = 8.0

ROLE_STYLES: Dict[SegmentRole, str] = {
    SegmentRole.BRIDGE: "bridge",
    SegmentRole.ANCHOR_A: "anchor",
    SegmentRole.ANCHOR_B: "anchor",
    SegmentRole.FRAME_A: "frame",
    SegmentRole.FRAME_B: "frame",
    SegmentRole.FRAME_C: "frame",
    SegmentRole.BRANCH: "branch",
    SegmentRole.SPOKE: "spoke",
    SegmentRole.AUXILIARY: "auxspiral",
    SegmentRole.CAPTURE: "capture",
}

# Drawing order, back to front.
LAYERS: List[Tuple[str, Tuple[SegmentRole, ...]]] = [
    ("bg", (SegmentRole.AUXILIARY, SegmentRole.BRANCH)),
    (
        "main",
        (
            SegmentRole.BRIDGE,
            SegmentRole.ANCHOR_A,
            SegmentRole.ANCHOR_B,
            SegmentRole.FRAME_A,
            SegmentRole.FRAME_B,
            SegmentRole.FRAME_C,
            SegmentRole.SPOKE,
        ),
    ),
    ("fg", (SegmentRole.CAPTURE,)),
]

standalone_tpl = r"""\documentclass[border=2pt]{standalone}
\usepackage{tikz}
\tikzset{
  %% global sizes (scale-aware; override per web if needed)
  web/line width/.store in=\webLW,      web/line width=0.6pt,
  web/thread width/.store in=\webLWthin, web/thread width=0.3pt,
  bridge/.style={line width=\webLW},
  anchor/.style={line width=\webLW},
  frame/.style={line width=\webLW},
  branch/.style={line width=\webLWthin, dash pattern=on 2pt off 2pt, gray},
  spoke/.style={line width=\webLWthin},
  auxspiral/.style={line width=\webLWthin, dotted, gray},
  capture/.style={line width=\webLWthin, line cap=round},
  hub/.style={circle,fill=black,inner sep=0pt,minimum size=2pt},
}
\pgfdeclarelayer{bg}\pgfdeclarelayer{fg}\pgfsetlayers{bg,main,fg}
\begin{document}
%s
\end{document}
"""


def _format_float(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        raise ValueError("Cannot format non-finite float for TikZ output")
    formatted = f"{value:.4f}"
    formatted = formatted.rstrip("0").rstrip(".")
    if formatted in ("", "-0"):
        return "0"
    return formatted


def _bounds(points: Iterable[Vector]) -> Tuple[float, float, float, float]:
    xs: List[float] = []
    ys: List[float] = []
    for point in points:
        xs.append(point.x)
        ys.append(point.y)
    if not xs:
        return (0.0, 0.0, 0.0, 0.0)
    return (min(xs), min(ys), max(xs), max(ys))


class _Projector:
    """Map canvas coordinates (y down) onto TikZ coordinates (y up)."""

    def __init__(self, geometry: WebGeometry, normalize: bool):
        self.normalize = normalize
        self.height = geometry.height
        self.scale = 1.0
        self.cx = 0.0
        self.cy = 0.0
        if normalize:
            endpoints = [p for s in geometry.segments for p in (s.start, s.end)]
            min_x, min_y, max_x, max_y = _bounds(endpoints)
            span = max(max_x - min_x, max_y - min_y, 1e-9)
            self.scale = TARGET_SPAN_CM / span
            self.cx = 0.5 * (min_x + max_x)
            self.cy = 0.5 * (min_y + max_y)

    def __call__(self, point: Vector) -> str:
        if self.normalize:
            x = (point.x - self.cx) * self.scale
            y = (self.cy - point.y) * self.scale
        else:
            x = point.x
            y = self.height - point.y
        return f"({_format_float(x)}, {_format_float(y)})"


def _draw(segment: Segment, project: _Projector) -> str:
    style = ROLE_STYLES[segment.role]
    return f"    \\draw[{style}] {project(segment.start)} -- {project(segment.end)};"


def generate_tikz_code(geometry: WebGeometry, *, normalize: bool = True) -> str:
    """Return a ``tikzpicture`` drawing every segment of ``geometry``."""

    if not isinstance(geometry, WebGeometry):
        raise TypeError("geometry must be an instance of WebGeometry")

    project = _Projector(geometry, normalize)
    lines: List[str] = ["\\begin{tikzpicture}"]
    for layer, roles in LAYERS:
        drawn = [_draw(s, project) for s in geometry.segments if s.role in roles]
        if not drawn:
            continue
        lines.append(f"  \\begin{{pgfonlayer}}{{{layer}}}")
        lines.extend(drawn)
        lines.append("  \\end{pgfonlayer}")
    lines.append(f"  \\node[hub] at {project(geometry.hub)} {{}};")
    lines.append("\\end{tikzpicture}")
    return "\n".join(lines)


def generate_tikz_document(geometry: WebGeometry, *, normalize: bool = True, caption: Optional[str] = None) -> str:
    """Render a standalone LaTeX document containing the web."""

    body = generate_tikz_code(geometry, normalize=normalize)
    if caption:
        body = "\\begin{tabular}{c}\n" + body + "\\\\\n" + _escape_text(caption) + "\n\\end{tabular}"
    return standalone_tpl % body


def _escape_text(text: str) -> str:
    repl = {
        "\\": r"\textbackslash{}",
        "&": r"\&",
        "%": r"\%",
        "#": r"\#",
        "_": r"\_",
        "{": r"\{",
        "}": r"\}",
        "$": r"\$",
        "~": r"\textasciitilde{}",
        "^": r"\textasciicircum{}",
    }
    return "".join(repl.get(c, c) for c in text)
