import json
import re
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

_GREEDY_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """
    Pulls the first JSON object out of a completion that may carry prose,
    markdown fences or trailing commentary around it.
    """
    if not text:
        return None

    decoder = json.JSONDecoder()
    start = text.find("{")
    while start != -1:
        try:
            obj, _ = decoder.raw_decode(text, start)
            if isinstance(obj, dict):
                return obj
        except ValueError:
            pass
        start = text.find("{", start + 1)

    # Last resort: outermost braces
    match = _GREEDY_OBJECT.search(text)
    if match:
        try:
            obj = json.loads(match.group())
            if isinstance(obj, dict):
                return obj
        except ValueError:
            pass

    logger.error(f"No JSON object found in LLM response: {text[:300]!r}")
    return None


def as_int(value: Any) -> Optional[int]:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


def as_float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def as_text(value: Any) -> Optional[str]:
    """Normalizes list-or-string fields (tags, hashtags) to a comma separated string."""
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        joined = ", ".join(str(v).strip() for v in value if str(v).strip())
        return joined or None
    text = str(value).strip()
    return text or None
