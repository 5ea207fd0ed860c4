# challengegen/prompts.py
"""Prompt templates for trivia challenge generation."""
import logging
from typing import Dict, Tuple

from challengegen.schemas import ChallengeType, PromptContext

logger = logging.getLogger(__name__)

DIFFICULTY_DESCRIPTIONS: Dict[int, str] = {
    1: "Beginner - Basic knowledge, widely known facts",
    2: "Intermediate - Requires some familiarity with the topic",
    3: "Advanced - Deep knowledge, less commonly known facts",
    4: "Expert - Requires extensive knowledge, obscure details",
    5: "Master - Only true experts would know, very specific details",
}
FALLBACK_DIFFICULTY = "Medium difficulty"


def difficulty_description(tier: int) -> str:
    return DIFFICULTY_DESCRIPTIONS.get(tier, FALLBACK_DIFFICULTY)


SYSTEM_PROMPT = """You are an expert challenge creator for a skill-based trivia platform focused on African pop culture.

Your role is to generate engaging, culturally relevant, and legally compliant challenges that test users' knowledge.

CRITICAL RULES:
1. NO celebrity endorsements or suggestions they use/recommend products
2. NO claims about gambling, winnings, or prizes
3. NO medical/health claims about products or people
4. NO false statements about public figures
5. FOCUS on cultural knowledge, historical facts, and artistic appreciation
6. Questions must be factual and verifiable
7. Avoid controversial topics (politics, religion, violence)
8. Keep content family-friendly (suitable for ages 13+)

OUTPUT FORMAT:
Respond ONLY with a single valid JSON object in this exact structure, with no text before or after it:
{
  "title": "Challenge title (max 100 chars)",
  "description": "Brief description (max 200 chars)",
  "question": "The actual question",
  "options": [
    {"id": "a", "text": "Option A"},
    {"id": "b", "text": "Option B"},
    {"id": "c", "text": "Option C"},
    {"id": "d", "text": "Option D"}
  ],
  "correct_answer": "a",
  "explanation": "Why this answer is correct (optional)",
  "difficulty_justification": "Why this is difficulty X"
}"""


MULTIPLE_CHOICE_PROMPT = """Generate a multiple-choice challenge for the category: "{category}"
Category description: {description}

Difficulty: Tier {tier} ({difficulty})

Requirements:
- Create a factual question about {category}
- Provide exactly 4 options with ids "a", "b", "c", "d"
- Exactly ONE option must be correct
- Other options should be plausible but clearly wrong
- Question should test {difficulty}
- "correct_answer" is the id of the correct option
"""

TIMELINE_PROMPT = """Generate a timeline challenge for the category: "{category}"
Category description: {description}

Difficulty: Tier {tier} ({difficulty})

Create a question asking users to arrange exactly 4 events in chronological order.

Requirements:
- All events must be related to {category}
- Events should span different time periods
- Events must be factual and verifiable
- Difficulty appropriate for {difficulty}
- "correct_answer" lists ALL 4 option ids from earliest to latest, comma-separated

Output format:
{{
  "title": "Challenge title",
  "description": "Description",
  "question": "Arrange these events in chronological order (earliest to latest)",
  "options": [
    {{"id": "a", "text": "Event 1 (Year)"}},
    {{"id": "b", "text": "Event 2 (Year)"}},
    {{"id": "c", "text": "Event 3 (Year)"}},
    {{"id": "d", "text": "Event 4 (Year)"}}
  ],
  "correct_answer": "b,a,d,c",
  "explanation": "Chronological order explanation",
  "difficulty_justification": "Why this difficulty"
}}
"""

TRUE_FALSE_PROMPT = """Generate a true/false challenge for the category: "{category}"
Category description: {description}

Difficulty: Tier {tier} ({difficulty})

Create a statement that users must identify as true or false.

Requirements:
- Statement must be factual and verifiable
- Should test knowledge appropriate for {difficulty}
- Provide exactly 2 options: {{"id": "a", "text": "True"}} and {{"id": "b", "text": "False"}}
- "correct_answer" is the id of the correct option
- Include a brief explanation
"""

TEMPLATES: Dict[ChallengeType, str] = {
    ChallengeType.MULTIPLE_CHOICE: MULTIPLE_CHOICE_PROMPT,
    ChallengeType.TIMELINE: TIMELINE_PROMPT,
    ChallengeType.TRUE_FALSE: TRUE_FALSE_PROMPT,
}

EXCLUSION_BLOCK = """
DO NOT create questions similar to these existing ones:
{questions}
"""

REMINDER = """
Remember:
- NO celebrity endorsements
- NO prize/gambling claims
- ONLY factual, verifiable information
- Family-friendly content

Respond ONLY with the JSON structure specified in your system prompt."""


class PromptBuilder:
    """
    Builds the (system, user) prompt pair for one generation call.

    Holds no state, so a single instance can be shared by concurrent pipeline runs.
    """

    system_prompt = SYSTEM_PROMPT

    def build(self, context: PromptContext) -> Tuple[str, str]:
        return self.system_prompt, self.build_user_prompt(context)

    def build_user_prompt(self, context: PromptContext) -> str:
        template = TEMPLATES[context.challenge_type]
        prompt = template.format(
            category=context.category_name,
            description=context.category_description or "(none provided)",
            tier=context.difficulty_tier,
            difficulty=difficulty_description(context.difficulty_tier),
        )

        if context.existing_questions:
            prompt += EXCLUSION_BLOCK.format(questions="\n".join(context.existing_questions))
            logger.debug(
                "Added %d existing questions to %s prompt for %s",
                len(context.existing_questions), context.challenge_type.value, context.category_name,
            )

        return prompt + REMINDER
