import logging
from dataclasses import dataclass
from math import isfinite
from typing import Any, List, Mapping, NamedTuple, Sequence, Tuple, Union

from codestats_readme.errors import PayloadError

logger = logging.getLogger(__name__)

TOP_N = 6
METRIC_FIELD = "xps"


class LanguageMetric(NamedTuple):
    label: str
    metric: float


@dataclass(frozen=True)
class Valid:
    label: str
    metric: float


@dataclass(frozen=True)
class Rejected:
    label: Any
    reason: str


def _is_number(x: Any) -> bool:
    # bool is an int subclass but never a metric
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def validate_entry(label: Any, raw: Any) -> Union[Valid, Rejected]:
    """
    Classify one (label, raw) pair from the API payload.
    `raw` is either the language object ({"xps": ...}) or the bare metric.
    """
    if not isinstance(label, str) or not label:
        return Rejected(label, "label is not a non-empty string")
    if isinstance(raw, Mapping):
        if METRIC_FIELD not in raw:
            return Rejected(label, f"missing '{METRIC_FIELD}' field")
        value = raw[METRIC_FIELD]
    else:
        value = raw
    if value is None:
        return Rejected(label, "metric is null")
    if not _is_number(value):
        return Rejected(label, f"metric is {type(value).__name__}, not a number")
    try:
        # ints beyond float range count as infinite
        as_float = float(value)
    except OverflowError:
        return Rejected(label, "metric is not finite")
    if not isfinite(as_float):
        return Rejected(label, "metric is not finite")
    if value < 0:
        return Rejected(label, "metric is negative")
    return Valid(label, value)


def rank(entries: Sequence[Tuple[Any, Any]], limit: int = TOP_N) -> List[LanguageMetric]:
    """
    Drop invalid entries, order by metric descending (stable on ties) and keep the top `limit`.
    Duplicate labels are kept as separate entries.
    """
    if not _is_number(limit) or (isinstance(limit, float) and not isfinite(limit)) or int(limit) != limit or limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit!r}")
    valid: List[LanguageMetric] = []
    for label, raw in entries:
        result = validate_entry(label, raw)
        if isinstance(result, Rejected):
            logger.debug("Skipping language %r: %s", result.label, result.reason)
            continue
        valid.append(LanguageMetric(result.label, result.metric))
    valid.sort(key=lambda m: m.metric, reverse=True)
    return valid[:int(limit)]


def languages_from_payload(payload: Any) -> List[Tuple[Any, Any]]:
    if not isinstance(payload, dict):
        raise PayloadError(f"expected a JSON object, got {type(payload).__name__}")
    languages = payload.get("languages")
    if not isinstance(languages, dict):
        raise PayloadError("payload has no 'languages' object")
    return list(languages.items())
