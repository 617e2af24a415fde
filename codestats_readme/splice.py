import logging
import re
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Any, Optional

logger = logging.getLogger(__name__)

SECTION = "codestats"
START_MARKER = f"<!-- START_SECTION:{SECTION} -->"
END_MARKER = f"<!-- END_SECTION:{SECTION} -->"
FENCE_OPEN = "```text\n"
FENCE_CLOSE = "```\n"

# Markers may carry extra text inside their own comment, never across an
# earlier "-->" on the same line; the interior may span lines.
_IN_COMMENT = r"(?:(?!-->)[^\n])*"
SECTION_RE = re.compile(
    rf"<!--{_IN_COMMENT}?START_SECTION:{SECTION}{_IN_COMMENT}-->"
    r"[\s\S]*?"
    rf"<!--{_IN_COMMENT}?END_SECTION:{SECTION}{_IN_COMMENT}-->"
)


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def replace_section(document: Any, new_content: Any, header: Any = "", footer: Any = "") -> str:
    """
    Swap the first START_SECTION/END_SECTION span of `document` for a fenced
    block holding `new_content`, with `header` and `footer` just inside the markers.

    Returns the document untouched when there is no marker pair, and "" when
    `document` is not a string.
    """
    if not isinstance(document, str):
        logger.error("replace_section: document must be a string, got %s", type(document).__name__)
        return ""
    replacement = (
        f"{START_MARKER}\n"
        f"{_as_text(header)}{FENCE_OPEN}{_as_text(new_content)}{FENCE_CLOSE}"
        f"{_as_text(footer)}{END_MARKER}"
    )
    # callable replacement: chart text is inserted literally, no backslash escapes
    return SECTION_RE.sub(lambda m: replacement, document, count=1)


def has_section(document: str) -> bool:
    return SECTION_RE.search(document) is not None


def build_header(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"*Language experience level (Last update {format_datetime(now.astimezone(timezone.utc), usegmt=True)})*\n\n"


def build_footer(profile_url: str) -> str:
    return f"\n> My [CodeStats profile]({profile_url}) in detail.\n"
