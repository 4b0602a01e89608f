"""Request/response models for the chat and speech gateways."""

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from customer_sim.schemas.conversation_schema import ChatMessage


class ChatRequest(BaseModel):
    """Body posted to the chat gateway."""
    message: str
    model: str
    context: list[ChatMessage] = Field(default_factory=list)

    def to_wire(self) -> dict:
        return {
            "message": self.message,
            "model": self.model,
            "context": [m.to_wire() for m in self.context],
        }


class ChoiceMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: Optional[str] = None


class ChatChoice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: Optional[ChoiceMessage] = None


class ChatResponse(BaseModel):
    """Completion envelope returned by the chat gateway."""

    model_config = ConfigDict(extra="ignore")

    choices: list[ChatChoice] = Field(default_factory=list)

    def first_content(self) -> str:
        """Content of the first choice, or an empty string."""
        if not self.choices or self.choices[0].message is None:
            return ""
        return self.choices[0].message.content or ""


class SpeechRequest(BaseModel):
    """Body posted to the speech-synthesis gateway."""
    text: str
    voice: str
    model: str


class SpeechResponse(BaseModel):
    """Location of the synthesized audio."""

    model_config = ConfigDict(extra="ignore")

    audio_url: str = Field(validation_alias=AliasChoices("audioUrl", "url", "audio_url"))
    blob_name: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("blobName", "blob_name")
    )
