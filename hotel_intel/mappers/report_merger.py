import copy
import json
import logging
import re
from collections.abc import Mapping

from hotel_intel.exceptions.custom import MalformedPayloadError
from hotel_intel.mappers.report_defaults import NOT_AVAILABLE, default_report

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*")


def _merge_into(target: dict, incoming: Mapping) -> None:
    for key, value in incoming.items():
        # null from the model means "unknown", keep what the base says
        if value is None and key in target:
            continue
        current = target.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            # recurse only object-to-object; target[key] is already our copy
            _merge_into(current, value)
        else:
            target[key] = copy.deepcopy(value)


def deep_merge(base: Mapping, incoming: Mapping) -> dict:
    """Merge ``incoming`` over ``base`` without touching either input.

    Mappings present on both sides are merged key by key. Everything else
    (lists, scalars, a string where a mapping was expected) is taken from
    ``incoming`` as is. Keys only in ``base`` are kept and keys only in
    ``incoming`` are passed through.
    """
    merged = copy.deepcopy(dict(base))
    _merge_into(merged, incoming)
    return merged


def _is_blank(value) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and value.strip() in ("", NOT_AVAILABLE)


def normalize_report(
    incoming: Mapping,
    hotel_name: str,
    city: str,
    base: Mapping | None = None,
) -> dict:
    """Reconcile a model payload against the canonical report shape.

    The result always carries every default field. ``basic_info.hotel_name``
    and ``basic_info.city`` fall back to the user's query when the payload
    leaves them empty.
    """
    if not isinstance(incoming, Mapping):
        raise MalformedPayloadError(
            f"Report payload must be an object, got {type(incoming).__name__}"
        )

    report = deep_merge(base if base is not None else default_report(), incoming)

    info = report.get("basic_info")
    if not isinstance(info, dict):
        logger.warning(
            "basic_info for %s was %s, rebuilding identity block",
            hotel_name, type(info).__name__,
        )
        info = default_report()["basic_info"]
        report["basic_info"] = info

    if _is_blank(info.get("hotel_name")):
        info["hotel_name"] = hotel_name
    if _is_blank(info.get("city")):
        info["city"] = city

    return report


def _loads_object(text: str) -> dict | None:
    try:
        obj = json.loads(text)
    except (json.JSONDecodeError, ValueError):
        return None
    return obj if isinstance(obj, dict) else None


def parse_report_payload(text: str | None) -> dict:
    """Extract the JSON object from model output text.

    Raises MalformedPayloadError if no object can be recovered.
    """
    if not text or not text.strip():
        raise MalformedPayloadError("Model returned an empty response")

    stripped = _FENCE_RE.sub("", text).strip().rstrip("`")
    parsed = _loads_object(stripped)
    if parsed is not None:
        return parsed

    # Fallback: take everything between the outermost braces
    first, last = text.find("{"), text.rfind("}")
    if first != -1 and last > first:
        parsed = _loads_object(text[first:last + 1])
        if parsed is not None:
            return parsed

    raise MalformedPayloadError("Could not parse a JSON object from the model response")
