"""
Speech synthesis for customer replies.

The speech gateway turns text into a stored audio file and returns its
URL. ``SpeechService`` caches that URL per exact (trimmed) text so a
repeated line is never synthesized twice, and allows one playback at a
time. A cached URL that fails to play is evicted and synthesized again.
"""

import logging
from typing import Awaitable, Callable, Optional, Protocol

import httpx
from pydantic import ValidationError

from customer_sim.config import GatewayConfig, settings
from customer_sim.gateway.transport import GatewayError, join_url, post_json
from customer_sim.schemas.gateway_schema import SpeechRequest, SpeechResponse

logger = logging.getLogger(__name__)

AudioPlayer = Callable[[str], Awaitable[None]]


class PlaybackError(RuntimeError):
    """Raised by an audio player when a URL cannot be played."""


class PlaybackBusyError(RuntimeError):
    """Raised when playback is requested while another one is active."""


class SpeechGateway(Protocol):
    async def synthesize(self, request: SpeechRequest) -> SpeechResponse:
        ...


class HttpSpeechGateway:
    """HTTP client for the text-to-speech endpoint."""

    def __init__(
        self,
        config: Optional[GatewayConfig] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._config = config or settings.gateway
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=self._config.timeout_sec)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def synthesize(self, request: SpeechRequest) -> SpeechResponse:
        url = join_url(self._config.base_url, self._config.tts_path)
        data = await post_json(self._client, url, request.model_dump(), what="Speech gateway")
        try:
            speech = SpeechResponse.model_validate(data)
        except ValidationError as exc:
            raise GatewayError("Speech gateway returned no audio URL") from exc
        logger.debug("Synthesized %d chars -> %s", len(request.text), speech.blob_name)
        return speech


class SpeechService:
    """Speaks customer lines through a player, with caching and exclusivity."""

    def __init__(
        self,
        gateway: SpeechGateway,
        player: AudioPlayer,
        *,
        voice: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> None:
        self._gateway = gateway
        self._player = player
        self.voice = voice or settings.model.tts_voice
        self.model = model or settings.model.tts_model
        self._base_url = base_url or settings.gateway.base_url
        self._cache: dict[str, str] = {}
        self._speaking = False

    @property
    def speaking(self) -> bool:
        return self._speaking

    def cached_url(self, text: str) -> Optional[str]:
        return self._cache.get(text.strip())

    def resolve(self, audio_url: str) -> str:
        """Make a gateway-relative audio URL absolute."""
        if audio_url.startswith(("http://", "https://")):
            return audio_url
        return join_url(self._base_url, audio_url)

    async def speak(self, text: str) -> Optional[str]:
        """Play ``text`` and return the URL played; None for blank text.

        Raises:
            PlaybackBusyError: If a playback is already in progress.
            GatewayError: If synthesis fails.
            PlaybackError: If the freshly synthesized audio cannot be played.
        """
        key = text.strip()
        if not key:
            return None
        if self._speaking:
            raise PlaybackBusyError("Another line is still playing")

        self._speaking = True
        try:
            cached = self._cache.get(key)
            if cached is not None:
                try:
                    url = self.resolve(cached)
                    await self._player(url)
                    return url
                except PlaybackError as exc:
                    logger.warning("Cached audio failed to play, re-synthesizing: %s", exc)
                    self._cache.pop(key, None)

            speech = await self._gateway.synthesize(
                SpeechRequest(text=key, voice=self.voice, model=self.model)
            )
            self._cache[key] = speech.audio_url
            url = self.resolve(speech.audio_url)
            await self._player(url)
            return url
        finally:
            self._speaking = False
