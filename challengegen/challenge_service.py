# challengegen/challenge_service.py
"""
Challenge generation pipeline.

    prompt -> model call -> clean/parse -> validate -> sanitize -> hand-off

Every failure is returned as a GenerationOutcome instead of raised, so one
bad item never takes down the caller or its batch siblings.
"""
import asyncio
import hashlib
import logging
import random
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from challengegen.challenge_publisher import ChallengePublisher
from challengegen.errors import EmptyResponseError, ParseError, PublishError, TransportError
from challengegen.llm_client import AnthropicClient
from challengegen.parser import clean, parse
from challengegen.prompts import PromptBuilder
from challengegen.schemas import (
    BatchReport,
    ChallengeRecord,
    ChallengeType,
    CredentialCheck,
    FailureKind,
    GeneratedChallenge,
    GenerationOutcome,
    GenerationRequest,
    QuestionData,
)
from challengegen.validator import ComplianceValidator

logger = logging.getLogger(__name__)

BASE_TIME_LIMITS = {
    ChallengeType.MULTIPLE_CHOICE: 30,
    ChallengeType.TIMELINE: 45,
    ChallengeType.TRUE_FALSE: 20,
}
EXTRA_SECONDS_PER_TIER = 10
BASE_POINTS = 100
ACTIVE_DAYS = 30


def calculate_time_limit(difficulty_tier: int, challenge_type: ChallengeType) -> int:
    return BASE_TIME_LIMITS.get(challenge_type, 30) + (difficulty_tier - 1) * EXTRA_SECONDS_PER_TIER


def hash_answer(answer: str) -> str:
    return hashlib.sha256(answer.strip().lower().encode("utf-8")).hexdigest()


def hash_question(question: str) -> str:
    # lowercase + collapse whitespace so trivial reformatting still collides
    normalized = " ".join(question.lower().split())
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


def is_duplicate_question(question: str, existing: Sequence[str]) -> bool:
    target = hash_question(question)
    return any(hash_question(q) == target for q in existing)


def to_challenge_record(
    request: GenerationRequest, challenge: GeneratedChallenge, needs_review: bool = False
) -> ChallengeRecord:
    """Convert a sanitized candidate into the record handed to persistence."""
    # Options are shuffled for display; the answer is stored only as a hash
    options = random.sample(challenge.options, k=len(challenge.options))
    return ChallengeRecord(
        category_name=request.category_name,
        difficulty_tier=request.difficulty_tier,
        challenge_type=request.challenge_type,
        title=challenge.title,
        description=challenge.description,
        question_data=QuestionData(type=request.challenge_type, question=challenge.question, options=options),
        correct_answer_hash=hash_answer(challenge.canonical_answer()),
        base_points=BASE_POINTS,
        time_limit_seconds=calculate_time_limit(request.difficulty_tier, request.challenge_type),
        active_until=datetime.now(timezone.utc) + timedelta(days=ACTIVE_DAYS),
        needs_review=needs_review,
    )


class ChallengeGenerator:
    def __init__(
        self,
        client: AnthropicClient,
        prompt_builder: Optional[PromptBuilder] = None,
        validator: Optional[ComplianceValidator] = None,
        publisher: Optional[ChallengePublisher] = None,
    ):
        self.client = client
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.validator = validator or ComplianceValidator()
        self.publisher = publisher

    async def generate_one(self, request: GenerationRequest) -> GenerationOutcome:
        """Run the full pipeline for one request and report the outcome as a value."""
        system_prompt, user_prompt = self.prompt_builder.build(request.to_context())

        try:
            raw = await self.client.generate(system_prompt, user_prompt)
        except TransportError as e:
            return GenerationOutcome.failed(
                FailureKind.TRANSPORT, f"AI generation failed: {e}", status_code=e.status_code
            )
        except EmptyResponseError as e:
            return GenerationOutcome.failed(FailureKind.EMPTY_RESPONSE, f"AI generation failed: {e}")

        cleaned = clean(raw)
        try:
            candidate = parse(cleaned, request.challenge_type)
        except ParseError as e:
            logger.warning("Discarding unparseable output for %s: %s", request.category_name, e.raw_text[:500])
            return GenerationOutcome.failed(FailureKind.PARSE, str(e), raw_response=raw)

        validation = self.validator.validate(candidate)
        if not validation.is_valid:
            return GenerationOutcome.failed(
                FailureKind.VALIDATION,
                "Challenge failed legal validation",
                validation=validation,
                challenge=candidate,
                raw_response=cleaned,
            )

        sanitized = self.validator.sanitize(candidate)
        quality_issues = self.validator.check_quality(sanitized)

        if is_duplicate_question(sanitized.question, request.exclude_questions):
            return GenerationOutcome.failed(
                FailureKind.DUPLICATE,
                "Generated question is too similar to existing questions",
                validation=validation,
                challenge=sanitized,
                quality_issues=quality_issues,
                raw_response=cleaned,
            )

        record = to_challenge_record(request, sanitized, needs_review=validation.needs_review)

        if request.publish:
            try:
                if self.publisher is None:
                    raise PublishError("Publish requested but no publisher is configured")
                await self.publisher.publish_challenge(record)
            except PublishError as e:
                logger.warning("Publishing %s challenge failed: %s", request.category_name, e)
                return GenerationOutcome.failed(
                    FailureKind.PUBLISH,
                    str(e),
                    validation=validation,
                    challenge=sanitized,
                    record=record,
                    quality_issues=quality_issues,
                    raw_response=cleaned,
                )

        logger.info(
            "Generated %s challenge %r for %s tier %d (needs_review=%s)",
            request.challenge_type.value, sanitized.title, request.category_name,
            request.difficulty_tier, validation.needs_review,
        )
        return GenerationOutcome(
            success=True,
            validation=validation,
            challenge=sanitized,
            record=record,
            quality_issues=quality_issues,
            raw_response=cleaned,
        )

    async def generate_batch(self, requests: List[GenerationRequest]) -> BatchReport:
        """Run every request independently; outcomes come back in request order."""
        results = await asyncio.gather(*(self.generate_one(r) for r in requests), return_exceptions=True)

        outcomes = []
        for request, result in zip(requests, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.error(
                    "Unexpected failure generating for %s tier %d",
                    request.category_name, request.difficulty_tier, exc_info=result,
                )
                result = GenerationOutcome.failed(FailureKind.UNEXPECTED, f"Unexpected error: {result}")
            outcomes.append(result)

        report = BatchReport(outcomes=outcomes)
        logger.info("Batch finished: %d succeeded, %d failed", report.succeeded, report.failed)
        return report

    async def validate_credential(self) -> CredentialCheck:
        return await self.client.validate_api_key()
