"""SVG renderer: draws a LayoutResult as an SVG document."""

from __future__ import annotations

from deptree.config import SizeMode
from deptree.layout.positioning import fits_canvas
from deptree.layout.types import LayoutNode, LayoutResult, RoutedConnection

# ─── Constants ──────────────────────────────────────────────────────────────

FONT_FAMILY = "Arial, sans-serif"
TITLE_PREFIX = "Dependency tree: "
TITLE_Y = 25  # baseline when the top padding leaves room
TITLE_GAP = 4  # clearance between the title baseline and the level-0 boxes
TITLE_FONT_OFFSET = 4  # title is this much larger than the normal node font

TEXT_PADDING = 10
TEXT_PADDING_COMPACT = 6
LEVEL_PREFIX = "L"
LEVEL_FONT_OFFSET = 2
LEVEL_FONT_OFFSET_COMPACT = 1
LEVEL_PADDING = 5
LEVEL_PADDING_COMPACT = 3
LEVEL_Y = 12
LEVEL_Y_COMPACT = 9

COLOR_TEXT = "#333333"
COLOR_LEVEL = "#999999"
COLOR_CONNECTION = "#666666"
COLOR_NODE_FILL = "#f8f9fa"
COLOR_NODE_BORDER = "#cccccc"
COLOR_ROOT_FILL = "#e3f2fd"
COLOR_ROOT_BORDER = "#2196f3"

_CONNECTION_STROKE = f'stroke="{COLOR_CONNECTION}" stroke-width="1.5"'


def _escape(s: str) -> str:
    return s.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


def _font(size: int, bold: bool = False) -> str:
    weight = ' font-weight="bold"' if bold else ""
    return f'font-family="{FONT_FAMILY}" font-size="{size}"{weight}'


def _num(v: float) -> str:
    """Format a coordinate without a trailing ``.0``."""
    return str(int(v)) if float(v).is_integer() else f"{v:g}"


def _title_y(canvas_padding: int) -> int:
    """Title baseline, kept inside the band above the level-0 row."""
    return min(TITLE_Y, canvas_padding - TITLE_GAP)


# ─── Node Rendering ─────────────────────────────────────────────────────────


def _render_node(ln: LayoutNode, font_size: int, compact: bool) -> str:
    fill, stroke, stroke_w = (
        (COLOR_ROOT_FILL, COLOR_ROOT_BORDER, 2) if ln.is_root else (COLOR_NODE_FILL, COLOR_NODE_BORDER, 1)
    )
    x, y, w, h = ln.x, ln.y, ln.width, ln.height

    text_pad = TEXT_PADDING_COMPACT if compact else TEXT_PADDING
    text_y = y + h // 2

    level_size = font_size - (LEVEL_FONT_OFFSET_COMPACT if compact else LEVEL_FONT_OFFSET)
    level_pad = LEVEL_PADDING_COMPACT if compact else LEVEL_PADDING
    level_y = y + (LEVEL_Y_COMPACT if compact else LEVEL_Y)

    return "\n".join(
        [
            f'<rect x="{x}" y="{y}" width="{w}" height="{h}" fill="{fill}" stroke="{stroke}" stroke-width="{stroke_w}"/>',
            f'<text x="{x + text_pad}" y="{text_y}" dominant-baseline="central" text-anchor="start" '
            f'{_font(font_size, ln.is_root)} fill="{COLOR_TEXT}">{_escape(ln.label or ln.namespace)}</text>',
            f'<text x="{x + w - level_pad}" y="{level_y}" text-anchor="end" '
            f'{_font(level_size)} fill="{COLOR_LEVEL}">{LEVEL_PREFIX}{ln.level}</text>',
        ]
    )


# ─── Connection Rendering ───────────────────────────────────────────────────


def _render_connection(conn: RoutedConnection) -> str:
    x1, y1 = conn.from_point
    x2, y2 = conn.to_point
    return (
        f'<line x1="{_num(x1)}" y1="{_num(y1)}" x2="{_num(x2)}" y2="{_num(y2)}" '
        f'{_CONNECTION_STROKE} marker-end="url(#arrowhead)"/>'
    )


# ─── Public Renderer ────────────────────────────────────────────────────────


class SvgRenderer:
    """SVG drawing surface: consumes a LayoutResult, produces an SVG string."""

    def render(self, result: LayoutResult) -> str:
        svg_w, svg_h = result.width, result.height
        compact = result.size_mode is SizeMode.COMPACT
        title = _escape(f"{TITLE_PREFIX}{result.root_namespace}")
        title_font = _font(result.profile.font_size + TITLE_FONT_OFFSET, bold=True)

        parts = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{svg_w}" height="{svg_h}" viewBox="0 0 {svg_w} {svg_h}">',
            "<defs>",
            '  <marker id="arrowhead" markerWidth="10" markerHeight="7" refX="10" refY="3.5" orient="auto">',
            f'    <polygon points="0 0, 10 3.5, 0 7" fill="{COLOR_CONNECTION}"/>',
            "  </marker>",
            "</defs>",
            f'<rect width="{svg_w}" height="{svg_h}" fill="white"/>',
            f'<text x="{svg_w // 2}" y="{_title_y(result.profile.canvas_padding)}" text-anchor="middle" '
            f'{title_font} fill="{COLOR_TEXT}">{title}</text>',
        ]

        # Connections (behind nodes)
        for conn in result.connections:
            parts.append(_render_connection(conn))

        # Nodes (on top); boxes past the canvas edge are not drawn
        for ln in result.nodes:
            if fits_canvas(ln, svg_w, svg_h):
                parts.append(_render_node(ln, result.profile.font_size, compact))

        parts.append("</svg>")
        return "\n".join(parts)
