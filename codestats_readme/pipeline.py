"""
Fetch -> rank -> render -> splice -> write -> notify.

One sequential chain per run. The completion callback fires exactly once after
the write attempt (even a failed one) and never when the fetch or parse failed.
"""

import json
import logging
from datetime import datetime
from typing import Any, Callable, NamedTuple, Optional

import requests

from codestats_readme.chart import build_chart
from codestats_readme.config import Config
from codestats_readme.errors import PayloadError
from codestats_readme.fetch import fetch_stats
from codestats_readme.ranking import TOP_N, languages_from_payload
from codestats_readme.splice import build_footer, build_header, has_section, replace_section

logger = logging.getLogger(__name__)


class WriteOutcome(NamedTuple):
    read_ok: bool
    written: bool


OnComplete = Callable[[WriteOutcome], Any]


def _noop(outcome: WriteOutcome) -> None:
    return None


def update_document(config: Config, content: str, on_complete: OnComplete = _noop,
                    now: Optional[datetime] = None) -> WriteOutcome:
    header = build_header(now) if config.show_title else ""
    footer = build_footer(config.profile_url) if config.show_link else ""

    try:
        with open(config.readme_file, "r", encoding="utf-8") as fh:
            original = fh.read()
    except OSError as e:
        logger.error("Error reading README file %s: %s", config.readme_file, e)
        outcome = WriteOutcome(read_ok=False, written=False)
        on_complete(outcome)
        return outcome

    if not has_section(original):
        logger.warning("No START_SECTION/END_SECTION:codestats markers in %s, leaving it unchanged",
                       config.readme_file)
    result = replace_section(original, content, header, footer)

    written = False
    try:
        with open(config.readme_file, "w", encoding="utf-8") as fh:
            fh.write(result)
        written = True
        logger.info("%s updated.", config.readme_file)
    except OSError as e:
        logger.error("Error writing README file %s: %s", config.readme_file, e)

    outcome = WriteOutcome(read_ok=True, written=written)
    on_complete(outcome)
    return outcome


def handle_response(config: Config, error: Optional[Exception], status: Optional[int], body: Optional[str],
                    on_complete: OnComplete = _noop, now: Optional[datetime] = None) -> bool:
    """Run the chart pipeline for one fetch result. Returns True when the document step ran."""
    if error is not None:
        logger.error("API request failed: %s", error)
        return False
    if status is None or not 200 <= status < 300:
        logger.error("API request failed with status: %s", status if status is not None else "unknown")
        return False
    try:
        languages = languages_from_payload(json.loads(body))
    except (TypeError, ValueError, PayloadError) as e:
        logger.error("Error parsing API response: %s", e)
        return False

    logger.debug("Received %d languages", len(languages))
    chart = build_chart(languages, width=config.graph_width, limit=TOP_N)
    if not chart:
        logger.warning("No language with usable experience points, writing an empty chart")
    update_document(config, chart, on_complete, now=now)
    return True


def run(config: Config, session: Optional[requests.Session] = None,
        committer: Optional[OnComplete] = None) -> bool:
    result = fetch_stats(config.api_url, session=session)
    on_complete = committer if (committer is not None and config.commit) else _noop
    return handle_response(config, result.error, result.status, result.body, on_complete)
