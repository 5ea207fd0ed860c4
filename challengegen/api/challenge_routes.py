# challengegen/api/challenge_routes.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from challengegen.challenge_service import ChallengeGenerator
from challengegen.schemas import (
    BatchGenerateRequest,
    BatchReport,
    CredentialCheck,
    GenerateChallengeRequest,
    GenerationOutcome,
)

logger = logging.getLogger(__name__)

# Auth and rate limiting are applied by the gateway in front of this router
router = APIRouter(prefix="/admin")


def get_generator(request: Request) -> ChallengeGenerator:
    generator = getattr(request.app.state, "generator", None)
    if generator is None:
        raise HTTPException(status_code=503, detail="challenge generator not initialised")
    return generator


@router.post("/challenges/generate", response_model=GenerationOutcome)
async def generate_challenge(
    payload: GenerateChallengeRequest, generator: ChallengeGenerator = Depends(get_generator)
):
    outcome = await generator.generate_one(payload)
    if not outcome.success:
        logger.info("Generation for %s failed (%s): %s", payload.category_name, outcome.failure, outcome.error)
    return outcome


@router.post("/challenges/generate-batch", response_model=BatchReport)
async def generate_batch(payload: BatchGenerateRequest, generator: ChallengeGenerator = Depends(get_generator)):
    return await generator.generate_batch(list(payload.items))


@router.get("/ai/validate-key", response_model=CredentialCheck)
async def validate_key(generator: ChallengeGenerator = Depends(get_generator)):
    check = await generator.validate_credential()
    if not check.ok:
        raise HTTPException(status_code=503, detail=f"API key validation failed: {check.error}")
    return check
