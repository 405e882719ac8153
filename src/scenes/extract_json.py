"""Pull a JSON payload out of free-form model text.

Models are asked for bare JSON but regularly wrap it in ```json fences or
surround it with prose. Both are tolerated here.
"""

import json
import logging
import re
from typing import Any

from exceptions import ExtractionError

logger = logging.getLogger(__name__)

_FENCE_PATTERN = re.compile(r"```[a-zA-Z]*[ \t]*\n?(.*?)```", re.DOTALL)


def extract_json(text: str) -> str:
    """
    Return the JSON text contained in a model response.

    Args:
        text: Raw model response

    Returns:
        The JSON object text with fences and surrounding prose removed

    Raises:
        ExtractionError: If the response contains no JSON object

    Example:
        >>> extract_json('Here you go:\\n```json\\n{"version": 1}\\n```')
        '{"version": 1}'
    """
    candidate = (text or "").strip()
    if not candidate:
        raise ExtractionError("Model response was empty")

    fenced = _FENCE_PATTERN.search(candidate)
    if fenced:
        candidate = fenced.group(1).strip()

    if candidate.startswith("{"):
        end = candidate.rfind("}")
        return candidate[:end + 1] if end != -1 else candidate

    start = candidate.find("{")
    end = candidate.rfind("}")
    if start == -1 or end < start:
        raise ExtractionError("Model response did not contain a JSON object")
    return candidate[start:end + 1]


def parse_json_payload(text: str) -> Any:
    """
    Extract and decode the JSON payload of a model response.

    Raises:
        ExtractionError: If no parseable JSON is found
    """
    payload = extract_json(text)
    try:
        return json.loads(payload)
    except RecursionError as e:
        raise ExtractionError("Model response was nested too deeply to decode") from e
    except ValueError as e:
        logger.debug(f"Unparseable JSON payload: {payload[:200]}")
        raise ExtractionError(f"Model response was not valid JSON: {e}") from e
