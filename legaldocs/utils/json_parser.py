import json
import re
from typing import Any, Dict, Optional

from legaldocs.utils.logging import get_logger

LOGGER = get_logger(__name__)

_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)
_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


def parse_json_object(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """Parse the JSON object embedded in a model response.

    Handles:
    - Markdown code blocks (```json ... ```)
    - Prose before or after the object
    - Trailing commas before a closing brace or bracket

    Args:
        text: The text containing a JSON object

    Returns:
        The parsed object, or None if no object could be recovered
    """
    if not text:
        return None

    cleaned_text = _FENCE_PATTERN.sub("", text.strip()).strip()

    try:
        parsed = json.loads(cleaned_text)
        return parsed if isinstance(parsed, dict) else None
    except json.JSONDecodeError as e:
        LOGGER.debug(f"Direct JSON parse failed: {e}, searching for embedded object")

    match = _OBJECT_PATTERN.search(cleaned_text)
    if not match:
        LOGGER.warning("No JSON object found in response text")
        return None

    candidate = match.group(0)
    for attempt in (candidate, re.sub(r",\s*([}\]])", r"\1", candidate)):
        try:
            parsed = json.loads(attempt)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed

    LOGGER.error("Failed to parse JSON object from response text")
    return None
