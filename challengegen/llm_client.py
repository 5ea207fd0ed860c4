# challengegen/llm_client.py
import json
import logging
from typing import Optional

import httpx

from challengegen.config import DEFAULT_ANTHROPIC_BASE_URL, DEFAULT_ANTHROPIC_MODEL
from challengegen.errors import EmptyResponseError, TransportError
from challengegen.schemas import CredentialCheck

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 60.0
# Creative but bounded output
TEMPERATURE = 0.7
MAX_TOKENS = 2000
ANTHROPIC_VERSION = "2023-06-01"

PROBE_SYSTEM_PROMPT = "You are a test assistant."
PROBE_USER_PROMPT = "Say 'API key is valid' if you can read this."


class AnthropicClient:
    """
    Thin client for the Anthropic messages endpoint.

    Configuration is fixed at construction, and every call opens its own
    AsyncClient, so one instance is safe to share between in-flight requests.
    Nothing is retried here; retry policy belongs to the caller.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_ANTHROPIC_MODEL,
        base_url: str = DEFAULT_ANTHROPIC_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    def _headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        }

    def _payload(self, system_prompt: str, user_prompt: str) -> dict:
        return {
            "model": self.model,
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
            "system": system_prompt,
            "messages": [{"role": "user", "content": user_prompt}],
        }

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        """Send one (system, user) prompt pair and return the model's first text block."""
        url = f"{self.base_url}/messages"
        logger.info("Calling generation endpoint %s with model %s", url, self.model)

        try:
            async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT_SECONDS, transport=self._transport) as client:
                resp = await client.post(url, headers=self._headers(), json=self._payload(system_prompt, user_prompt))
        except httpx.TimeoutException as e:
            logger.warning("Generation request timed out after %.0fs", REQUEST_TIMEOUT_SECONDS)
            raise TransportError(f"request timed out: {e}", body=str(e)) from e
        except httpx.RequestError as e:
            logger.warning("Generation request failed: %s", e)
            raise TransportError(f"failed to make request: {e}", body=str(e)) from e

        if resp.status_code != httpx.codes.OK:
            logger.warning("Generation endpoint returned status %d", resp.status_code)
            raise TransportError(
                f"API error (status {resp.status_code}): {resp.text}",
                status_code=resp.status_code,
                body=resp.text,
            )

        try:
            envelope = resp.json()
        except json.JSONDecodeError as e:
            logger.error("Generation endpoint returned an undecodable envelope: %s", resp.text[:500])
            raise TransportError(
                f"failed to decode response: {e}", status_code=resp.status_code, body=resp.text
            ) from e

        blocks = envelope.get("content") if isinstance(envelope, dict) else None
        if not blocks:
            raise EmptyResponseError("no content in response")
        if not isinstance(blocks, list):
            raise EmptyResponseError(f"response content is not a list of blocks: {type(blocks).__name__}")

        for block in blocks:
            if isinstance(block, dict) and block.get("type", "text") == "text" and isinstance(block.get("text"), str):
                usage = envelope.get("usage") or {}
                logger.debug(
                    "Generation used %s input / %s output tokens",
                    usage.get("input_tokens"), usage.get("output_tokens"),
                )
                return block["text"]

        raise EmptyResponseError("no text block in response content")

    async def validate_api_key(self) -> CredentialCheck:
        """Probe the credential with a trivial generation through the normal path."""
        try:
            await self.generate(PROBE_SYSTEM_PROMPT, PROBE_USER_PROMPT)
        except (TransportError, EmptyResponseError) as e:
            logger.warning("API key validation failed: %s", e)
            return CredentialCheck(ok=False, error=str(e))
        return CredentialCheck(ok=True)
