"""
canvas.py — SVG Structure Renderer
====================================
Pure rendering function: VisualState + kind → SVG string.

The renderer consumes:
  • state   – the current VisualState (elements, frames, pegs, overlay)
  • kind    – which picture to draw ("sort", "array", "stack", "queue",
              "linked_list", "recursion", "hanoi")
  • config  – visual config (canvas size, colors, fonts, …)

And produces an SVG string ready to inject into the DOM.

Design decisions:
  - NO mutation.  This function is stateless — the caller passes in
    everything it needs and gets back a string.
  - Flag-based coloring is a dict lookup: the highest-priority flag an
    element carries picks its fill.
  - The call stack is drawn for any state that has frames, so Hanoi shows
    its pegs AND the recursion driving them.
"""

from typing import Any, Dict, Optional, Sequence

from structures.element import Element, Flag
from structures.frame import CallFrame
from structures.state import PEG_NAMES, VisualState


# ---------------------------------------------------------------------------
# Visual Config — color palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 900
    height: int = 520
    bg:     str = "#0d1117"

    # element colors (flag → fill)
    flag_colors: Dict[str, str] = {
        "default":     "#1c2128",
        "comparing":   "#eab308",   # yellow
        "swapping":    "#ef4444",   # red
        "shifting":    "#f97316",   # orange
        "active":      "#3b82f6",   # blue
        "key":         "#a855f7",   # purple
        "minimum":     "#06b6d4",   # cyan
        "merging":     "#14b8a6",   # teal
        "dividing":    "#6366f1",   # indigo
        "inserting":   "#22c55e",   # green
        "removing":    "#991b1b",   # dark red
        "highlighted": "#ec4899",   # pink
        "extracted":   "#f59e0b",   # amber
        "sorted":      "#10b981",   # emerald
    }

    # first match wins when an element carries several flags
    flag_priority = (
        Flag.SWAPPING, Flag.REMOVING, Flag.SHIFTING, Flag.COMPARING, Flag.KEY,
        Flag.MINIMUM, Flag.MERGING, Flag.INSERTING, Flag.EXTRACTED, Flag.HIGHLIGHTED,
        Flag.ACTIVE, Flag.DIVIDING, Flag.SORTED,
    )

    # cells / bars
    cell_size:        int = 56
    cell_gap:         int = 10
    bar_width_max:    int = 48
    bar_height_max:   int = 300
    stroke:           str = "#30363d"
    label_color:      str = "#e6edf3"
    label_size:       int = 14
    index_color:      str = "#7d8590"
    index_size:       int = 11

    # frames
    frame_width:      int = 260
    frame_height:     int = 34
    frame_active:     str = "#0ea5e9"
    frame_returning:  str = "#10b981"
    frame_idle:       str = "#161b22"

    # pegs
    peg_color:        str = "#7d8590"
    disk_colors = ("#ef4444", "#f97316", "#eab308", "#22c55e", "#3b82f6", "#a855f7")

    # overlay text
    overlay_text:     str = "#7d8590"
    overlay_accent:   str = "#0ea5e9"


CONFIG = CanvasConfig()

FONT = "font-family=\"'DM Sans', sans-serif\""
MONO = "font-family=\"'JetBrains Mono', monospace\""


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_state(
    state: Optional[VisualState],
    kind: str = "sort",
    config: CanvasConfig = CONFIG,
) -> str:
    """
    Returns an SVG string.

    Args:
        state  : Snapshot to draw (None draws an empty canvas).
        kind   : Registry kind of the loaded visualizer.
        config : Visual config.
    """
    svg_parts = [
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
    ]

    if state is not None:
        if kind == "sort":
            svg_parts.append(_render_bars(state.elements, config))
        elif kind == "stack":
            svg_parts.append(_render_stack(state.elements, config))
        elif kind == "linked_list":
            svg_parts.append(_render_cells(state.elements, config, arrows=True,
                                           current=state.overlay.get("current")))
        elif kind in ("array", "queue"):
            svg_parts.append(_render_cells(state.elements, config, front_rear=kind == "queue"))
        elif kind == "hanoi":
            svg_parts.append(_render_pegs(state.pegs, config))

        if state.frames:
            svg_parts.append(_render_frames(state.frames, config, right=kind == "hanoi"))

        if state.overlay.get("merge"):
            buffer = state.overlay["merge"]
            svg_parts.append(
                f'<text x="20" y="30" font-size="13" {MONO} fill="{config.overlay_accent}">'
                f'left = {_listing(buffer["left"], buffer["i"])}   '
                f'right = {_listing(buffer["right"], buffer["j"])}</text>'
            )

        if "output" in state.overlay:
            printed = " ".join(str(v) for v in state.overlay["output"])
            svg_parts.append(
                f'<text x="20" y="{config.height - 20}" font-size="13" {MONO} '
                f'fill="{config.overlay_accent}">output: {printed}</text>'
            )

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


def _listing(values: Sequence[Any], cursor: int) -> str:
    """[1, (5), 9]: the value under the cursor in parentheses."""
    items = [f"({v})" if i == cursor else str(v) for i, v in enumerate(values)]
    return "[" + ", ".join(items) + "]"


def fill_for(element: Element, config: CanvasConfig = CONFIG) -> str:
    """Fill color for an element: its highest-priority flag, else the default."""
    for flag in config.flag_priority:
        if element.has(flag):
            return config.flag_colors[flag.value]
    return config.flag_colors["default"]


# ---------------------------------------------------------------------------
# Bars (sorting)
# ---------------------------------------------------------------------------
def _render_bars(elements: Sequence[Element], config: CanvasConfig) -> str:
    if not elements:
        return _empty_label("Empty Array", config)

    n = len(elements)
    slot = (config.width - 40) / n
    width = min(config.bar_width_max, slot - 4)
    peak = max((abs(e.value) for e in elements if e.value is not None), default=0) or 1
    base = 60 + config.bar_height_max

    parts = ['<g class="bars">']
    for i, element in enumerate(elements):
        value = element.value if element.value is not None else 0
        height = max(4, abs(value) / peak * config.bar_height_max)
        x = 20 + i * slot + (slot - width) / 2
        parts.append(
            f'  <rect class="bar" data-id="{element.id}" x="{x:.1f}" y="{base - height:.1f}" '
            f'width="{width:.1f}" height="{height:.1f}" rx="4" fill="{fill_for(element, config)}"/>'
        )
        parts.append(
            f'  <text x="{x + width / 2:.1f}" y="{base + 18}" text-anchor="middle" '
            f'font-size="{config.label_size}" {FONT} fill="{config.label_color}">{value}</text>'
        )
        parts.append(
            f'  <text x="{x + width / 2:.1f}" y="{base + 34}" text-anchor="middle" '
            f'font-size="{config.index_size}" {FONT} fill="{config.index_color}">{i}</text>'
        )
    parts.append('</g>')
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Cells (array / queue / linked list)
# ---------------------------------------------------------------------------
def _render_cells(
    elements: Sequence[Element],
    config: CanvasConfig,
    arrows: bool = False,
    front_rear: bool = False,
    current: Optional[int] = None,
) -> str:
    if not elements:
        return _empty_label("Empty", config)

    size, gap = config.cell_size, config.cell_gap
    if arrows:
        gap = 36
    y = 160
    parts = ['<g class="cells">']
    for i, element in enumerate(elements):
        x = 20 + i * (size + gap)
        shown = "" if element.value is None else element.value
        parts.append(
            f'  <rect class="cell" data-id="{element.id}" x="{x}" y="{y}" width="{size}" height="{size}" '
            f'rx="6" fill="{fill_for(element, config)}" stroke="{config.stroke}" stroke-width="2"/>'
        )
        parts.append(
            f'  <text x="{x + size / 2}" y="{y + size / 2 + 5}" text-anchor="middle" '
            f'font-size="{config.label_size}" {FONT} fill="{config.label_color}">{shown}</text>'
        )
        parts.append(
            f'  <text x="{x + size / 2}" y="{y + size + 18}" text-anchor="middle" '
            f'font-size="{config.index_size}" {FONT} fill="{config.index_color}">{i}</text>'
        )
        if arrows:
            x_end = x + size + gap - 4
            parts.append(
                f'  <line x1="{x + size}" y1="{y + size / 2}" x2="{x_end}" y2="{y + size / 2}" '
                f'stroke="{config.stroke}" stroke-width="2"/>'
            )
            parts.append(
                f'  <polygon points="{x_end},{y + size / 2} {x_end - 8},{y + size / 2 - 5} '
                f'{x_end - 8},{y + size / 2 + 5}" fill="{config.stroke}"/>'
            )
        if current == i:
            parts.append(
                f'  <text x="{x + size / 2}" y="{y - 12}" text-anchor="middle" font-size="12" '
                f'{FONT} fill="{config.overlay_accent}">current</text>'
            )

    if arrows:
        x = 20 + len(elements) * (size + gap)
        parts.append(
            f'  <text x="{x}" y="{y + size / 2 + 5}" font-size="13" {MONO} '
            f'fill="{config.overlay_text}">None</text>'
        )
        parts.append(
            f'  <text x="{20 + size / 2}" y="{y - 30}" text-anchor="middle" font-size="12" '
            f'{FONT} fill="{config.overlay_text}">head</text>'
        )
    if front_rear:
        last = 20 + (len(elements) - 1) * (size + gap)
        parts.append(
            f'  <text x="{20 + size / 2}" y="{y - 12}" text-anchor="middle" font-size="12" '
            f'{FONT} fill="{config.overlay_text}">front</text>'
        )
        parts.append(
            f'  <text x="{last + size / 2}" y="{y + size + 36}" text-anchor="middle" font-size="12" '
            f'{FONT} fill="{config.overlay_text}">rear</text>'
        )
    parts.append('</g>')
    return "\n".join(parts)


def _render_stack(elements: Sequence[Element], config: CanvasConfig) -> str:
    """Vertical stack, top of stack drawn highest."""
    if not elements:
        return _empty_label("Empty Stack", config)

    width, height = 140, 36
    x = 60
    bottom = config.height - 40
    parts = ['<g class="stack">']
    for i, element in enumerate(elements):
        y = bottom - (i + 1) * (height + 4)
        parts.append(
            f'  <rect class="cell" data-id="{element.id}" x="{x}" y="{y}" width="{width}" height="{height}" '
            f'rx="6" fill="{fill_for(element, config)}" stroke="{config.stroke}" stroke-width="2"/>'
        )
        parts.append(
            f'  <text x="{x + width / 2}" y="{y + height / 2 + 5}" text-anchor="middle" '
            f'font-size="{config.label_size}" {FONT} fill="{config.label_color}">{element.value}</text>'
        )
    top_y = bottom - len(elements) * (height + 4)
    parts.append(
        f'  <text x="{x + width + 12}" y="{top_y + height / 2 + 5}" font-size="12" '
        f'{FONT} fill="{config.overlay_accent}">← top</text>'
    )
    parts.append('</g>')
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Call stack
# ---------------------------------------------------------------------------
def _render_frames(frames: Sequence[CallFrame], config: CanvasConfig, right: bool = False) -> str:
    """Most recent call nearest the top of the panel."""
    x = config.width - config.frame_width - 20 if right else 40
    parts = ['<g class="call-stack">',
             f'  <text x="{x}" y="24" font-size="13" font-weight="700" {FONT} '
             f'fill="{config.overlay_accent}">Call Stack (depth {len(frames)})</text>']

    visible = list(reversed(frames))[:12]
    for row, frame in enumerate(visible):
        y = 36 + row * (config.frame_height + 4)
        if frame.is_returning:
            fill = config.frame_returning
        elif frame.is_active:
            fill = config.frame_active
        else:
            fill = config.frame_idle
        text = frame.call
        if frame.is_returning:
            text += f" → {frame.return_value}"
        elif frame.note:
            text += f"  ({frame.note})"
        parts.append(
            f'  <rect class="frame" data-id="{frame.id}" x="{x + frame.depth * 2}" y="{y}" '
            f'width="{config.frame_width}" height="{config.frame_height}" rx="6" '
            f'fill="{fill}" stroke="{config.stroke}" stroke-width="1"/>'
        )
        parts.append(
            f'  <text x="{x + frame.depth * 2 + 10}" y="{y + config.frame_height / 2 + 5}" '
            f'font-size="12" {MONO} fill="{config.label_color}">{text}</text>'
        )
    if len(frames) > len(visible):
        parts.append(
            f'  <text x="{x}" y="{36 + len(visible) * (config.frame_height + 4) + 14}" '
            f'font-size="11" fill="#484f58">… +{len(frames) - len(visible)} more</text>'
        )
    parts.append('</g>')
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Tower of Hanoi
# ---------------------------------------------------------------------------
def _render_pegs(pegs: Sequence[Sequence[int]], config: CanvasConfig) -> str:
    if not pegs:
        return ""
    largest = max((max(peg) for peg in pegs if peg), default=1)
    spacing = 170
    base_y = config.height - 60
    parts = ['<g class="pegs">']
    for p, peg in enumerate(pegs):
        cx = 110 + p * spacing
        parts.append(
            f'  <rect x="{cx - 4}" y="{base_y - 200}" width="8" height="200" fill="{config.peg_color}"/>'
        )
        parts.append(
            f'  <text x="{cx}" y="{base_y + 24}" text-anchor="middle" font-size="14" '
            f'{FONT} fill="{config.label_color}">{PEG_NAMES[p]}</text>'
        )
        for level, disk in enumerate(peg):
            width = 30 + disk / largest * 120
            color = config.disk_colors[(disk - 1) % len(config.disk_colors)]
            parts.append(
                f'  <rect class="disk" data-size="{disk}" x="{cx - width / 2:.1f}" '
                f'y="{base_y - (level + 1) * 24}" width="{width:.1f}" height="20" rx="6" fill="{color}"/>'
            )
    parts.append(
        f'  <rect x="30" y="{base_y}" width="{2 * spacing + 160}" height="8" fill="{config.peg_color}"/>'
    )
    parts.append('</g>')
    return "\n".join(parts)


def _empty_label(text: str, config: CanvasConfig) -> str:
    return (
        f'<text x="{config.width / 2}" y="{config.height / 2}" text-anchor="middle" '
        f'font-size="16" {FONT} fill="{config.overlay_text}">{text}</text>'
    )
