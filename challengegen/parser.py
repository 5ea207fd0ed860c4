# challengegen/parser.py
import json
import logging
import re

from pydantic import ValidationError

from challengegen.errors import ParseError
from challengegen.schemas import ChallengeType, GeneratedChallenge

logger = logging.getLogger(__name__)

_OPENING_FENCE = re.compile(r"^```[A-Za-z0-9_+-]*")
_CLOSING_FENCE = re.compile(r"```$")


def clean(raw: str) -> str:
    """Strip surrounding whitespace and markdown code fences from model output."""
    text = (raw or "").strip()
    # Repeat until stable so clean(clean(x)) == clean(x)
    while True:
        stripped = _CLOSING_FENCE.sub("", _OPENING_FENCE.sub("", text, count=1), count=1).strip()
        if stripped == text:
            return text
        text = stripped


def parse(text: str, challenge_type: ChallengeType = ChallengeType.MULTIPLE_CHOICE) -> GeneratedChallenge:
    """
    Decode cleaned model output into a GeneratedChallenge.

    Raises ParseError (carrying the original text) on malformed JSON, a
    document that is not an object, or fields of the wrong type.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as e:
        logger.warning("Model output is not valid JSON: %s", text[:500])
        raise ParseError(f"Failed to parse AI response: {e}", raw_text=text) from e

    if not isinstance(data, dict):
        raise ParseError(
            f"Failed to parse AI response: expected a JSON object, got {type(data).__name__}", raw_text=text
        )

    # The model never decides the challenge type
    data["challenge_type"] = challenge_type

    try:
        return GeneratedChallenge.model_validate(data)
    except ValidationError as e:
        logger.warning("Model output does not match the challenge shape: %s", e.errors())
        raise ParseError(f"Failed to parse AI response: {e.error_count()} invalid field(s)", raw_text=text) from e
    except RecursionError as e:
        raise ParseError("Failed to parse AI response: document nested too deeply", raw_text=text) from e
