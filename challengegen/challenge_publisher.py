# challengegen/challenge_publisher.py
import json
import logging

import redis.asyncio as redis

from challengegen.config import DEFAULT_REDIS_URL
from challengegen.errors import PublishError
from challengegen.schemas import ChallengeRecord

logger = logging.getLogger(__name__)

PUBSUB_CHANNEL_PREFIX = "challenge_channel:"  # live notifications, one channel per category and tier
QUEUE_KEY_PREFIX = "generated_challenges:"  # durable hand-off list drained by the persistence worker


def _routing_key(record: ChallengeRecord) -> str:
    return f"{record.category_name}:{record.difficulty_tier}"


class ChallengePublisher:
    """
    Hands accepted challenges to the persistence collaborator over Redis.

    Each record is pushed onto a per-category/tier list and announced on the
    matching pub/sub channel. Nothing is read back; storage is owned elsewhere.
    """
    def __init__(self, redis_url: str = DEFAULT_REDIS_URL, client=None):
        if client is None:
            client = redis.from_url(redis_url, decode_responses=True)
            logger.info(f"ChallengePublisher initialized with Redis URL: {redis_url}")
        self.redis = client

    async def publish_challenge(self, record: ChallengeRecord) -> None:
        key = _routing_key(record)
        message = json.dumps({"type": "CHALLENGE_GENERATED", **record.model_dump(mode="json")})
        try:
            await self.redis.rpush(f"{QUEUE_KEY_PREFIX}{key}", message)
            await self.redis.publish(f"{PUBSUB_CHANNEL_PREFIX}{key}", message)
        except redis.RedisError as e:
            logger.error(f"Failed to hand off challenge {record.id} for {key}: {e}")
            raise PublishError(f"Failed to save challenge: {e}") from e
        logger.info(f"Published challenge {record.id} to {PUBSUB_CHANNEL_PREFIX}{key}")

    async def close(self) -> None:
        await self.redis.aclose()
