# challengegen/main.py
import logging

import uvicorn
from fastapi import FastAPI

from challengegen.api.challenge_routes import router as challenge_router
from challengegen.challenge_publisher import ChallengePublisher
from challengegen.challenge_service import ChallengeGenerator
from challengegen.config import Settings
from challengegen.llm_client import AnthropicClient

settings = Settings.from_env()
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

# APP Initialization
app = FastAPI(title="Challenge Generator")
app.include_router(challenge_router)


@app.on_event("startup")
async def startup_event():
    client = AnthropicClient(
        api_key=settings.anthropic_api_key,
        model=settings.anthropic_model,
        base_url=settings.anthropic_base_url,
    )
    app.state.generator = ChallengeGenerator(client, publisher=ChallengePublisher(settings.redis_url))
    logger.info("Challenge generator ready (model=%s)", settings.anthropic_model)


@app.on_event("shutdown")
async def shutdown_event():
    generator = getattr(app.state, "generator", None)
    if generator is not None and generator.publisher is not None:
        await generator.publisher.close()


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run("challengegen.main:app", host="0.0.0.0", port=settings.port)
