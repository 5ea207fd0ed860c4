from __future__ import annotations

import json
from typing import Callable, Dict, Any

import httpx
import pytest

from challengegen.schemas import ChallengeType, GeneratedChallenge, GenerationRequest


# ====================
# Candidate Fixtures
# ====================

AFROBEATS_CHALLENGE: Dict[str, Any] = {
    "title": "Afrobeats Anthems",
    "description": "Name the artist behind a classic Afrobeats record from the 2010s.",
    "question": "Which artist released the 2012 single \"Azonto\"?",
    "options": [
        {"id": "a", "text": "Wizkid"},
        {"id": "b", "text": "Fuse ODG"},
        {"id": "c", "text": "Davido"},
        {"id": "d", "text": "Burna Boy"},
    ],
    "correct_answer": "b",
    "explanation": "Fuse ODG released Azonto in 2012, helping popularise the dance craze.",
    "difficulty_justification": "Well known to regular listeners of the genre.",
}

TIMELINE_CHALLENGE: Dict[str, Any] = {
    "title": "Afrobeats Through the Years",
    "description": "Put these milestones in order.",
    "question": "Arrange these events in chronological order (earliest to latest)?",
    "options": [
        {"id": "a", "text": "Burna Boy releases African Giant (2019)"},
        {"id": "b", "text": "Fela Kuti forms Africa 70 (1970)"},
        {"id": "c", "text": "Wizkid joins Drake on One Dance (2016)"},
        {"id": "d", "text": "Davido drops Fall (2017)"},
    ],
    "correct_answer": "b,c,d,a",
    "explanation": "Africa 70 came first, African Giant last.",
}

TRUE_FALSE_CHALLENGE: Dict[str, Any] = {
    "title": "Afrobeat Origins",
    "description": "True or false about the roots of the genre.",
    "question": "Is Fela Kuti credited as a pioneer of Afrobeat?",
    "options": [
        {"id": "a", "text": "True"},
        {"id": "b", "text": "False"},
    ],
    "correct_answer": "a",
    "explanation": "Fela Kuti shaped Afrobeat in the late 1960s.",
}


@pytest.fixture
def mc_data() -> Dict[str, Any]:
    return json.loads(json.dumps(AFROBEATS_CHALLENGE))


@pytest.fixture
def mc_candidate() -> GeneratedChallenge:
    return GeneratedChallenge.model_validate(AFROBEATS_CHALLENGE)


@pytest.fixture
def timeline_candidate() -> GeneratedChallenge:
    return GeneratedChallenge.model_validate({**TIMELINE_CHALLENGE, "challenge_type": ChallengeType.TIMELINE})


@pytest.fixture
def true_false_candidate() -> GeneratedChallenge:
    return GeneratedChallenge.model_validate({**TRUE_FALSE_CHALLENGE, "challenge_type": ChallengeType.TRUE_FALSE})


@pytest.fixture
def afrobeats_request() -> GenerationRequest:
    return GenerationRequest(
        category_name="Afrobeats (2010s)",
        category_description="The sound that took West African pop global.",
        difficulty_tier=2,
        challenge_type=ChallengeType.MULTIPLE_CHOICE,
    )


# ====================
# Generation Endpoint Fakes
# ====================

def make_envelope(text: str) -> Dict[str, Any]:
    """Messages-API response envelope with a single text block."""
    return {
        "id": "msg_test",
        "type": "message",
        "role": "assistant",
        "content": [{"type": "text", "text": text}],
        "model": "claude-test",
        "usage": {"input_tokens": 120, "output_tokens": 240},
    }


def fenced(data: Dict[str, Any]) -> str:
    return "```json\n" + json.dumps(data, indent=2) + "\n```"


@pytest.fixture
def envelope() -> Callable[[str], Dict[str, Any]]:
    return make_envelope


@pytest.fixture
def fence() -> Callable[[Dict[str, Any]], str]:
    return fenced


@pytest.fixture
def text_transport() -> Callable[[str], httpx.MockTransport]:
    """Factory for a transport that answers every call with the given model text."""
    def _factory(text: str) -> httpx.MockTransport:
        return httpx.MockTransport(lambda request: httpx.Response(200, json=make_envelope(text)))
    return _factory
