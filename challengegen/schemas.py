# challengegen/schemas.py
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class ChallengeType(str, Enum):
    MULTIPLE_CHOICE = "multiple_choice"
    TIMELINE = "timeline"
    TRUE_FALSE = "true_false"


class FailureKind(str, Enum):
    TRANSPORT = "transport"
    EMPTY_RESPONSE = "empty_response"
    PARSE = "parse"
    VALIDATION = "validation"
    DUPLICATE = "duplicate"
    PUBLISH = "publish"
    UNEXPECTED = "unexpected"


class PromptContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    category_name: str
    category_description: str = ""
    difficulty_tier: int
    challenge_type: ChallengeType
    # Prior question texts, listed verbatim in the prompt so the model avoids them
    existing_questions: Tuple[str, ...] = ()


# --- Correct-answer encodings ---

@dataclass(frozen=True)
class SingleOption:
    """Multiple-choice and true/false answers: one option id."""
    option_id: str


@dataclass(frozen=True)
class OrderedSequence:
    """Timeline answers: option ids in chronological order."""
    option_ids: Tuple[str, ...]


AnswerKey = Union[SingleOption, OrderedSequence]


class ChallengeOption(BaseModel):
    id: str = ""
    text: str = ""

    @field_validator("id", "text", mode="before")
    @classmethod
    def null_to_empty(cls, value):
        return "" if value is None else value


class GeneratedChallenge(BaseModel):
    """A candidate challenge exactly as the model produced it."""
    title: str = ""
    description: str = ""
    question: str = ""
    options: List[ChallengeOption] = Field(default_factory=list)
    correct_answer: str = ""
    explanation: Optional[str] = None
    difficulty_justification: Optional[str] = None
    # Stamped by the parser from the request, never read from model output
    challenge_type: ChallengeType = ChallengeType.MULTIPLE_CHOICE

    @field_validator("title", "description", "question", "correct_answer", mode="before")
    @classmethod
    def null_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("options", mode="before")
    @classmethod
    def null_to_no_options(cls, value):
        return [] if value is None else value

    def option_ids(self) -> List[str]:
        return [opt.id for opt in self.options]

    def answer_key(self) -> AnswerKey:
        if self.challenge_type == ChallengeType.TIMELINE:
            return OrderedSequence(tuple(part.strip() for part in self.correct_answer.split(",")))
        return SingleOption(self.correct_answer)

    def canonical_answer(self) -> str:
        """The correct answer with timeline ids re-joined without spacing."""
        key = self.answer_key()
        if isinstance(key, OrderedSequence):
            return ",".join(key.option_ids)
        return key.option_id


class ValidationResult(BaseModel):
    is_valid: bool = True
    needs_review: bool = False
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    @computed_field
    @property
    def passed(self) -> bool:
        return self.is_valid

    def reject(self, message: str) -> None:
        self.is_valid = False
        self.errors.append(message)

    def warn(self, message: str, review: bool = False) -> None:
        self.warnings.append(message)
        if review:
            self.needs_review = True


# --- Persistence hand-off ---

class QuestionData(BaseModel):
    type: ChallengeType
    question: str
    options: List[ChallengeOption]


class ChallengeRecord(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    category_name: str
    difficulty_tier: int
    challenge_type: ChallengeType
    title: str
    description: str
    question_data: QuestionData
    correct_answer_hash: str
    base_points: int = 100
    time_limit_seconds: int
    ai_generated: bool = True
    is_active: bool = True
    active_until: datetime
    needs_review: bool = False


# --- Pipeline inputs and outputs ---

class GenerationRequest(BaseModel):
    category_name: str = Field(..., min_length=1)
    category_description: str = ""
    difficulty_tier: int
    challenge_type: ChallengeType = ChallengeType.MULTIPLE_CHOICE
    exclude_questions: List[str] = Field(default_factory=list)
    publish: bool = False

    def to_context(self) -> PromptContext:
        return PromptContext(
            category_name=self.category_name,
            category_description=self.category_description,
            difficulty_tier=self.difficulty_tier,
            challenge_type=self.challenge_type,
            existing_questions=tuple(self.exclude_questions),
        )


class GenerationOutcome(BaseModel):
    success: bool
    failure: Optional[FailureKind] = None
    error: Optional[str] = None
    validation: Optional[ValidationResult] = None
    challenge: Optional[GeneratedChallenge] = None
    record: Optional[ChallengeRecord] = None
    quality_issues: List[str] = Field(default_factory=list)
    raw_response: Optional[str] = None
    status_code: Optional[int] = None

    @computed_field
    @property
    def needs_review(self) -> bool:
        return bool(self.validation and self.validation.needs_review)

    @classmethod
    def failed(cls, kind: FailureKind, error: str, **kwargs) -> "GenerationOutcome":
        return cls(success=False, failure=kind, error=error, **kwargs)


class BatchReport(BaseModel):
    outcomes: List[GenerationOutcome]

    @computed_field
    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @computed_field
    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.success)


class CredentialCheck(BaseModel):
    ok: bool
    error: Optional[str] = None


# --- Admin API bodies ---

class GenerateChallengeRequest(GenerationRequest):
    difficulty_tier: int = Field(..., ge=1, le=5)


class BatchGenerateRequest(BaseModel):
    items: List[GenerateChallengeRequest] = Field(..., min_length=1, max_length=50)
