"""Chat models selectable for the customer role."""

import logging
from typing import NamedTuple, Optional

logger = logging.getLogger(__name__)


class ModelOption(NamedTuple):
    id: str
    name: str
    provider: str


MODEL_OPTIONS: tuple[ModelOption, ...] = (
    ModelOption("gpt-3.5-turbo", "GPT-3.5 Turbo", "openai"),
    ModelOption("gpt-4", "GPT-4", "openai"),
    ModelOption("gpt-4-turbo", "GPT-4 Turbo", "openai"),
    ModelOption("gpt-4o-mini", "GPT-4o Mini", "openai"),
    ModelOption("gpt-5-mini", "GPT-5 Mini", "openai"),
    ModelOption("gpt-5-nano", "GPT-5 Nano", "openai"),
    ModelOption("llama-3.1-8b-instant", "Llama 3.1 8B Instant", "groq"),
    ModelOption("gemma2-9b-it", "Gemma2 9B IT", "groq"),
)


def get_model(model_id: str) -> Optional[ModelOption]:
    """Return the catalog entry for ``model_id``, or None if unknown."""
    for option in MODEL_OPTIONS:
        if option.id == model_id:
            return option
    return None


def provider_for(model_id: str, default: str = "openai") -> str:
    """Provider serving ``model_id``; unknown models use ``default``."""
    option = get_model(model_id)
    if option is None:
        logger.debug("Model %s not in catalog, assuming provider %s", model_id, default)
        return default
    return option.provider
