"""
Chat gateway client.

Talks to the chat service that fronts the model providers. A request
carries the rendered turn prompt as ``message``, the model id, and the
conversation so far as ``context``; the reply is a completion envelope
whose first choice holds the model's raw text.

The streaming variant reads server-sent ``data:`` frames until the
``[DONE]`` sentinel and reassembles the fragments, so callers always
get one complete string to interpret.
"""

import json
import logging
from typing import AsyncIterator, Optional, Protocol

import httpx
from pydantic import ValidationError

from customer_sim.config import GatewayConfig, settings
from customer_sim.gateway.transport import GatewayError, error_detail, join_url, post_json
from customer_sim.schemas.gateway_schema import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

STREAM_SENTINEL = "[DONE]"


class ChatGateway(Protocol):
    """What the session controller needs from a chat backend."""

    async def complete(self, request: ChatRequest, provider: str = "openai") -> str:
        ...


class HttpChatGateway:
    """HTTP client for the chat gateway endpoints."""

    def __init__(
        self,
        config: Optional[GatewayConfig] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._config = config or settings.gateway
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=self._config.timeout_sec)

    async def __aenter__(self) -> "HttpChatGateway":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def chat_url(self, provider: str = "openai") -> str:
        path = self._config.groq_chat_path if provider == "groq" else self._config.chat_path
        return join_url(self._config.base_url, path)

    async def complete(self, request: ChatRequest, provider: str = "openai") -> str:
        """Send one non-streaming chat request and return the raw reply text."""
        if self._config.use_streaming:
            return await self.complete_streaming(request)

        data = await post_json(
            self._client, self.chat_url(provider), request.to_wire(), what="Chat gateway"
        )
        try:
            envelope = ChatResponse.model_validate(data)
        except ValidationError as exc:
            raise GatewayError("Chat gateway returned an unexpected body") from exc
        content = envelope.first_content()
        logger.debug("Chat gateway reply (%d chars) from %s", len(content), request.model)
        return content

    async def stream(self, request: ChatRequest) -> AsyncIterator[str]:
        """Yield content fragments from the streaming endpoint."""
        url = join_url(self._config.base_url, self._config.chat_stream_path)
        try:
            async with self._client.stream("POST", url, json=request.to_wire()) as response:
                if response.is_error:
                    await response.aread()
                    raise GatewayError(
                        f"Chat stream returned {response.status_code}: {error_detail(response)}",
                        status_code=response.status_code,
                    )
                async for line in response.aiter_lines():
                    done, fragment = self._parse_frame(line)
                    if done:
                        return
                    if fragment:
                        yield fragment
        except httpx.TimeoutException as exc:
            raise GatewayError("Chat stream timed out") from exc
        except httpx.HTTPError as exc:
            raise GatewayError(f"Chat stream failed: {exc}") from exc
        except GatewayError:
            raise
        except Exception as exc:
            logger.error("Chat stream failed unexpectedly: %r", exc)
            raise GatewayError(f"Chat stream failed: {exc!r}") from exc

    async def complete_streaming(self, request: ChatRequest) -> str:
        """Consume the stream and return the reassembled reply."""
        fragments = [fragment async for fragment in self.stream(request)]
        return "".join(fragments)

    @staticmethod
    def _parse_frame(line: str) -> tuple[bool, Optional[str]]:
        """Decode one SSE line into (finished, content fragment)."""
        if not line.startswith("data:"):
            return False, None
        data = line[len("data:"):].strip()
        if data == STREAM_SENTINEL:
            return True, None
        try:
            payload = json.loads(data)
        except ValueError:
            logger.debug("Skipping undecodable stream frame: %r", data)
            return False, None
        if not isinstance(payload, dict):
            return False, None
        if payload.get("error"):
            message = payload.get("message") or payload["error"]
            raise GatewayError(f"Chat stream error: {message}")
        content = payload.get("content")
        return False, content if isinstance(content, str) else None
