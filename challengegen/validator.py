# challengegen/validator.py
"""
Compliance validation for generated challenges.

validate() decides whether a candidate may be accepted. check_quality() is an
advisory pass whose findings never block acceptance. sanitize() normalises an
accepted candidate without changing what it says.
"""
import logging
from typing import List

from challengegen.patterns import DEFAULT_PATTERNS, PatternSet
from challengegen.schemas import GeneratedChallenge, OrderedSequence, SingleOption, ValidationResult

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 200
MIN_QUESTION_LENGTH = 10
MAX_QUESTION_LENGTH = 500
MIN_OPTIONS = 2
ELLIPSIS = "..."


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


class ComplianceValidator:
    def __init__(self, patterns: PatternSet = DEFAULT_PATTERNS):
        self.patterns = patterns

    @staticmethod
    def _searchable_text(candidate: GeneratedChallenge) -> str:
        parts = [candidate.title, candidate.description, candidate.question]
        parts.extend(opt.text for opt in candidate.options)
        if candidate.explanation:
            parts.append(candidate.explanation)
        return " ".join(parts).lower()

    def validate(self, candidate: GeneratedChallenge) -> ValidationResult:
        """Run every check and collect the findings; no check short-circuits another."""
        result = ValidationResult()
        full_text = self._searchable_text(candidate)

        for pattern in self.patterns.forbidden:
            if pattern.lower() in full_text:
                result.reject(f"Contains forbidden pattern: '{pattern}'")

        for pattern in self.patterns.warning:
            if pattern.lower() in full_text:
                result.warn(f"Contains sensitive content: '{pattern}'", review=True)

        self._check_structure(candidate, result)

        if len(candidate.title) > MAX_TITLE_LENGTH:
            result.warn(f"Title is longer than {MAX_TITLE_LENGTH} characters")
        if len(candidate.description) > MAX_DESCRIPTION_LENGTH:
            result.warn(f"Description is longer than {MAX_DESCRIPTION_LENGTH} characters")

        seen = set()
        for opt in candidate.options:
            key = opt.text.lower()
            if key in seen:
                result.warn(f"Duplicate option text: '{opt.text}'")
            seen.add(key)

        if not result.is_valid:
            logger.info("Challenge %r rejected: %s", candidate.title, "; ".join(result.errors))
        elif result.needs_review:
            logger.info("Challenge %r flagged for review: %s", candidate.title, "; ".join(result.warnings))
        return result

    def _check_structure(self, candidate: GeneratedChallenge, result: ValidationResult) -> None:
        if not candidate.title:
            result.reject("Title is required")
        if not candidate.question:
            result.reject("Question is required")
        if len(candidate.options) < MIN_OPTIONS:
            result.reject(f"At least {MIN_OPTIONS} options required")
        if not candidate.correct_answer:
            result.reject("Correct answer is required")
            return

        option_ids = set(candidate.option_ids())
        key = candidate.answer_key()
        if isinstance(key, SingleOption):
            if key.option_id not in option_ids:
                result.reject(f"Correct answer '{key.option_id}' not found in options")
        elif isinstance(key, OrderedSequence):
            seen = set()
            for option_id in key.option_ids:
                if option_id not in option_ids:
                    result.reject(f"Correct answer '{option_id}' not found in options")
                elif option_id in seen:
                    result.reject(f"Correct answer lists option '{option_id}' more than once")
                seen.add(option_id)
            # A partial ordering cannot be scored
            for option_id in candidate.option_ids():
                if option_id not in seen:
                    result.reject(f"Correct answer omits option '{option_id}'")

    def check_quality(self, candidate: GeneratedChallenge) -> List[str]:
        issues = []
        if len(candidate.question) < MIN_QUESTION_LENGTH:
            issues.append(f"Question is too short (minimum {MIN_QUESTION_LENGTH} characters)")
        if len(candidate.question) > MAX_QUESTION_LENGTH:
            issues.append(f"Question is too long (maximum {MAX_QUESTION_LENGTH} characters)")

        if len(candidate.options) >= 4:
            lengths = {len(opt.text) for opt in candidate.options}
            if len(lengths) == 1:
                issues.append("All options have identical length (may indicate low quality)")

        if not candidate.question.strip().endswith("?"):
            issues.append("Question should end with a question mark")
        return issues

    def sanitize(self, candidate: GeneratedChallenge) -> GeneratedChallenge:
        """Return a trimmed, length-limited copy; the candidate itself is left untouched."""
        sanitized = candidate.model_copy(deep=True)
        sanitized.title = _truncate(sanitized.title.strip(), MAX_TITLE_LENGTH)
        sanitized.description = _truncate(sanitized.description.strip(), MAX_DESCRIPTION_LENGTH)
        sanitized.question = sanitized.question.strip()
        sanitized.correct_answer = sanitized.correct_answer.strip()
        if sanitized.explanation is not None:
            sanitized.explanation = sanitized.explanation.strip()
        if sanitized.difficulty_justification is not None:
            sanitized.difficulty_justification = sanitized.difficulty_justification.strip()
        for opt in sanitized.options:
            opt.text = opt.text.strip()
        return sanitized
