"""Conversation message and per-turn result schemas."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from customer_sim.schemas.customer_schema import CustomerState


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ChatMessage(BaseModel):
    """A single message in the session history."""

    role: Role
    content: str

    def to_wire(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


class AITurnResult(BaseModel):
    """Structured interpretation of one model reply."""

    response: str
    state: Optional[str] = None
    satisfaction_change: int = 0
    intent: Optional[str] = None
    party_size: Optional[int] = None
    order_items: Optional[list[str]] = None
    parsed: bool = True


class StateUpdate(BaseModel):
    """Outcome of applying one turn result to a customer."""

    previous_state: CustomerState
    new_state: CustomerState
    previous_satisfaction: int
    new_satisfaction: int
    score_delta: int = 0
    replacement_due: bool = False
    unrecognized_state: Optional[str] = None

    @property
    def state_changed(self) -> bool:
        return self.new_state != self.previous_state

    @property
    def satisfaction_delta(self) -> int:
        """Movement actually applied after clamping."""
        return self.new_satisfaction - self.previous_satisfaction


class TurnReport(BaseModel):
    """Everything the front end needs to render one completed turn."""

    generation: int
    result: AITurnResult
    update: StateUpdate
    score: int
    replacement_scheduled: bool = False
    warnings: list[str] = Field(default_factory=list)
