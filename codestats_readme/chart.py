import logging
from math import isfinite
from typing import Any, Iterable, Mapping, Sequence, Tuple, Union

import wcwidth

from codestats_readme.errors import ChartError
from codestats_readme.ranking import TOP_N, rank

logger = logging.getLogger(__name__)

BAR = "█"
DEFAULT_WIDTH = 42


def display_width(s: str) -> int:
    w = wcwidth.wcswidth(s)
    # wcswidth gives -1 when s holds control characters
    return w if w >= 0 else len(s)


def pad_to_width(s: str, target: int, align: str = "left") -> str:
    """
    Pad `s` with spaces to display width `target`. Wide (CJK, emoji) characters
    count double so labels line up in a monospace block. Never truncates.
    """
    pad = target - display_width(s)
    if pad <= 0:
        return s
    if align == "right":
        return " " * pad + s
    return s + " " * pad


def _is_drawable(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return isfinite(value) and value >= 0
    except OverflowError:
        return False


def format_value(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def render_bars(data: Union[Mapping[str, float], Iterable[Tuple[str, float]]],
                width: int = DEFAULT_WIDTH, bar: str = BAR) -> str:
    """
    Horizontal bar chart, one line per entry, in the mapping's own order:

          ts | ██████████████████████████████████████████ | 220
          go | ███████████████████████                    | 120

    The largest value fills exactly `width` cells. `data` may also be a
    sequence of (label, value) pairs, in which case repeated labels get a line each.
    """
    items = list(data.items()) if isinstance(data, Mapping) else list(data)
    if not items:
        return ""
    if not isinstance(width, int) or isinstance(width, bool) or width < 1:
        raise ChartError(f"width must be a positive integer, got {width!r}")
    for key, value in items:
        if not _is_drawable(value):
            raise ChartError(f"value for {key!r} is not a finite non-negative number: {value!r}")
    maximum = max(value for _, value in items)
    if maximum <= 0:
        raise ChartError("cannot scale bars when every value is zero")

    label_w = max(display_width(str(key)) for key, _ in items)
    lines = []
    for key, value in items:
        shown = int(round(value / maximum * width))
        cells = bar * shown + " " * (width - shown)
        lines.append(f"  {pad_to_width(str(key), label_w, align='right')} | {cells} | {format_value(value)}\n")
    return "".join(lines)


def build_chart(entries: Sequence[Tuple[Any, Any]], width: int = DEFAULT_WIDTH, limit: int = TOP_N) -> str:
    """Rank raw (label, language-object) pairs and draw the top ones. Returns "" on any rendering failure."""
    ranked = rank(entries, limit)
    if not ranked:
        return ""
    try:
        return render_bars([(m.label, m.metric) for m in ranked], width=width)
    except Exception as e:
        logger.error("Chart generation failed: %s", e)
        return ""
