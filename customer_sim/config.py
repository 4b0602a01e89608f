"""
Centralized configuration with environment variable overrides.

Gateway endpoints, model choices, and the game constants (replacement
delay, per-transition reward, starting satisfaction) are configurable
here. Nothing is hardcoded in the session or state machine logic.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from customer_sim.logging_context import session_log_handler

load_dotenv()

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("openai", "groq")
SUPPORTED_LANGUAGE_CODES = ("en", "vi", "ko", "ja", "zh", "th")


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


def _safe_bool(env_var: str, default: str) -> bool:
    raw = os.getenv(env_var, default).strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"Invalid boolean for {env_var}: {raw!r}")


@dataclass(frozen=True)
class ModelConfig:
    """Chat and speech model settings."""

    llm_model: str = os.getenv("LLM_MODEL", "gpt-4o-mini")
    llm_provider: str = os.getenv("LLM_PROVIDER", "openai")
    tts_model: str = os.getenv("TTS_MODEL", "tts-1")
    tts_voice: str = os.getenv("TTS_VOICE", "alloy")


@dataclass(frozen=True)
class GatewayConfig:
    """Endpoints of the chat and speech gateway service."""

    base_url: str = os.getenv("GATEWAY_BASE_URL", "http://localhost:3000")
    chat_path: str = os.getenv("CHAT_PATH", "/api/chat")
    groq_chat_path: str = os.getenv("GROQ_CHAT_PATH", "/api/chat/groq")
    chat_stream_path: str = os.getenv("CHAT_STREAM_PATH", "/api/chat/stream")
    tts_path: str = os.getenv("TTS_PATH", "/api/tts")
    timeout_sec: float = _safe_float("GATEWAY_TIMEOUT", "30.0")
    use_streaming: bool = _safe_bool("USE_STREAMING", "false")


@dataclass(frozen=True)
class GameConfig:
    """Rules of the role-play game."""

    replacement_delay_sec: float = _safe_float("REPLACEMENT_DELAY_SEC", "5.0")
    state_change_reward: int = _safe_int("STATE_CHANGE_REWARD", "10")
    initial_satisfaction: int = _safe_int("INITIAL_SATISFACTION", "50")
    default_language: str = os.getenv("DEFAULT_LANGUAGE", "en")
    max_input_length: int = _safe_int("MAX_INPUT_LENGTH", "500")
    empty_reply_text: str = os.getenv("EMPTY_REPLY_TEXT", "Sorry, I don't understand.")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    model: ModelConfig = field(default_factory=ModelConfig)
    gateway: GatewayConfig = field(default_factory=GatewayConfig)
    game: GameConfig = field(default_factory=GameConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "restaurant-customer-sim")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.model.llm_provider not in SUPPORTED_PROVIDERS:
        raise ValueError(
            f"LLM_PROVIDER must be one of {SUPPORTED_PROVIDERS}, got {config.model.llm_provider!r}"
        )
    if config.gateway.timeout_sec <= 0:
        raise ValueError(
            f"GATEWAY_TIMEOUT must be > 0, got {config.gateway.timeout_sec}"
        )
    if config.game.replacement_delay_sec < 0:
        raise ValueError(
            f"REPLACEMENT_DELAY_SEC must be >= 0, got {config.game.replacement_delay_sec}"
        )
    if config.game.state_change_reward < 0:
        raise ValueError(
            f"STATE_CHANGE_REWARD must be >= 0, got {config.game.state_change_reward}"
        )
    if not 0 <= config.game.initial_satisfaction <= 100:
        raise ValueError(
            "INITIAL_SATISFACTION must be between 0 and 100, "
            f"got {config.game.initial_satisfaction}"
        )
    if config.game.max_input_length < 1:
        raise ValueError(
            f"MAX_INPUT_LENGTH must be >= 1, got {config.game.max_input_length}"
        )
    if config.game.default_language not in SUPPORTED_LANGUAGE_CODES:
        raise ValueError(
            f"DEFAULT_LANGUAGE must be one of {SUPPORTED_LANGUAGE_CODES}, "
            f"got {config.game.default_language!r}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        handlers=[session_log_handler()],
    )
    logger.info("Configuration loaded for '%s'", config.app_name)
    return config


# Singleton instance
settings = load_config()
