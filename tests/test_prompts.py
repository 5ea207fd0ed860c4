"""Tests for prompt construction."""

import pytest

from challengegen.prompts import (
    DIFFICULTY_DESCRIPTIONS,
    FALLBACK_DIFFICULTY,
    SYSTEM_PROMPT,
    PromptBuilder,
    difficulty_description,
)
from challengegen.schemas import ChallengeType, PromptContext


def _context(challenge_type=ChallengeType.MULTIPLE_CHOICE, tier=2, existing=()):
    return PromptContext(
        category_name="Afrobeats (2010s)",
        category_description="The sound that took West African pop global.",
        difficulty_tier=tier,
        challenge_type=challenge_type,
        existing_questions=tuple(existing),
    )


class TestDifficultyDescription:

    @pytest.mark.parametrize("tier,prefix", [
        (1, "Beginner"), (2, "Intermediate"), (3, "Advanced"), (4, "Expert"), (5, "Master"),
    ])
    def test_known_tiers(self, tier, prefix):
        assert difficulty_description(tier).startswith(prefix)

    @pytest.mark.parametrize("tier", [0, 6, -1, 99])
    def test_unknown_tiers_fall_back(self, tier):
        assert difficulty_description(tier) == FALLBACK_DIFFICULTY


class TestSystemPrompt:

    def test_states_platform_rules(self):
        for phrase in ("endorsements", "gambling", "medical", "public figures", "13+"):
            assert phrase in SYSTEM_PROMPT

    def test_demands_single_json_object(self):
        assert "single valid JSON object" in SYSTEM_PROMPT
        assert '"correct_answer"' in SYSTEM_PROMPT

    def test_build_returns_shared_system_prompt(self):
        system, _ = PromptBuilder().build(_context())
        assert system is SYSTEM_PROMPT


class TestUserPrompt:

    @pytest.mark.parametrize("challenge_type", list(ChallengeType))
    @pytest.mark.parametrize("tier", [1, 3, 5, 9])
    def test_contains_category_and_difficulty(self, challenge_type, tier):
        prompt = PromptBuilder().build_user_prompt(_context(challenge_type, tier))
        assert "Afrobeats (2010s)" in prompt
        assert difficulty_description(tier) in prompt

    def test_multiple_choice_requirements(self):
        prompt = PromptBuilder().build_user_prompt(_context(ChallengeType.MULTIPLE_CHOICE))
        assert "exactly 4 options" in prompt
        assert "Exactly ONE option must be correct" in prompt
        assert "plausible but clearly wrong" in prompt

    def test_timeline_requests_ordered_ids(self):
        prompt = PromptBuilder().build_user_prompt(_context(ChallengeType.TIMELINE))
        assert "chronological order" in prompt
        assert '"correct_answer": "b,a,d,c"' in prompt

    def test_true_false_requests_two_options(self):
        prompt = PromptBuilder().build_user_prompt(_context(ChallengeType.TRUE_FALSE))
        assert "exactly 2 options" in prompt
        assert '"text": "True"' in prompt
        assert '"text": "False"' in prompt

    @pytest.mark.parametrize("challenge_type", list(ChallengeType))
    def test_existing_questions_listed_verbatim(self, challenge_type):
        existing = ["Who produced \"Ye\" in 2018?", "Which city is Afrobeats' birthplace?"]
        prompt = PromptBuilder().build_user_prompt(_context(challenge_type, existing=existing))
        assert "DO NOT create questions similar to these existing ones" in prompt
        for question in existing:
            assert question in prompt

    def test_no_exclusion_block_without_history(self):
        prompt = PromptBuilder().build_user_prompt(_context())
        assert "DO NOT create questions similar" not in prompt

    def test_braces_in_category_are_kept_literally(self):
        context = PromptContext(
            category_name="Hits {2015}",
            difficulty_tier=1,
            challenge_type=ChallengeType.TIMELINE,
        )
        prompt = PromptBuilder().build_user_prompt(context)
        assert "Hits {2015}" in prompt
        assert "(none provided)" in prompt

    def test_every_tier_has_a_description(self):
        assert sorted(DIFFICULTY_DESCRIPTIONS) == [1, 2, 3, 4, 5]
