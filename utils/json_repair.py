"""Helpers for parsing JSON returned by an LLM"""
import json
import logging
import re

from core.errors import ContentParseError

logger = logging.getLogger(__name__)


def repair_json(text: str) -> str:
    """Attempt to repair common LLM JSON errors.

    Applies progressively aggressive fixes:
    1. Strip code fences
    2. Remove JS-style comments
    3. Remove trailing commas before ] or }
    4. Remove control characters
    5. Extract the first {...} or [...] block if surrounded by extra text
    """
    if not text:
        return text

    s = text.strip()

    # 1. Strip code fences
    if s.startswith("```"):
        lines = [l for l in s.split("\n") if not l.startswith("```")]
        s = "\n".join(lines).strip()

    # 2. Remove JS-style comments (// to EOL, /* ... */); keep URLs intact
    s = re.sub(r'(?<!:)//[^\n]*', '', s)
    s = re.sub(r'/\*.*?\*/', '', s, flags=re.DOTALL)

    # 3. Remove trailing commas before ] or }
    s = re.sub(r',\s*([}\]])', r'\1', s)

    # 4. Remove control characters except \n and \t
    s = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f]', '', s)

    # 5. Extract first balanced block
    match = re.search(r'[\[{]', s)
    if match:
        s = s[match.start():]
        opener = s[0]
        closer = "}" if opener == "{" else "]"
        depth = 0
        for i, ch in enumerate(s):
            if ch == opener:
                depth += 1
            elif ch == closer:
                depth -= 1
            if depth == 0:
                s = s[:i + 1]
                break

    return s


def parse_json_response(text: str):
    """Repair and parse an LLM JSON response

    Raises:
        ContentParseError: If the text is empty or still not valid JSON
    """
    if not text or not text.strip():
        raise ContentParseError("Empty JSON response")
    cleaned = repair_json(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning(f"JSON parse failed: {e}")
        logger.debug(f"Cleaned response was: {cleaned[:500]}...")
        raise ContentParseError(f"Invalid JSON response: {e}") from e
