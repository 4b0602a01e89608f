"""Shared test fixtures and helpers."""

import asyncio
import json
import random
from typing import Optional, Union

import pytest

from customer_sim.catalog.customers import create_customer
from customer_sim.catalog.languages import get_language
from customer_sim.config import GameConfig
from customer_sim.conversation.guardrails import GuardrailPipeline
from customer_sim.conversation.response_parser import ResponseInterpreter
from customer_sim.conversation.state_machine import CustomerStateMachine
from customer_sim.schemas.conversation_schema import AITurnResult
from customer_sim.schemas.customer_schema import Customer, CustomerState
from customer_sim.schemas.gateway_schema import ChatRequest
from customer_sim.session.controller import SessionController

Reply = Union[str, Exception]


class FakeChatGateway:
    """In-memory chat gateway: returns queued replies and records requests.

    A queued exception is raised instead of returned. When ``hold`` is
    set, every call waits for it before answering.
    """

    def __init__(self, replies: Optional[list[Reply]] = None) -> None:
        self.replies: list[Reply] = list(replies or [])
        self.requests: list[tuple[ChatRequest, str]] = []
        self.hold: Optional[asyncio.Event] = None

    def queue(self, *replies: Reply) -> None:
        self.replies.extend(replies)

    async def complete(self, request: ChatRequest, provider: str = "openai") -> str:
        self.requests.append((request, provider))
        if self.hold is not None:
            await self.hold.wait()
        reply = self.replies.pop(0) if self.replies else ""
        if isinstance(reply, Exception):
            raise reply
        return reply


def reply_json(
    response: str = "Okay.",
    state: Optional[str] = None,
    change: object = 0,
    intent: Optional[str] = None,
    **extra: object,
) -> str:
    """Render a model reply in the expected JSON shape."""
    body: dict[str, object] = {"response": response, "satisfaction_change": change}
    if state is not None:
        body["state"] = state
    if intent is not None:
        body["intent"] = intent
    body.update(extra)
    return json.dumps(body, ensure_ascii=False)


def make_result(
    state: Optional[str] = None,
    change: int = 0,
    response: str = "Okay.",
    **kwargs,
) -> AITurnResult:
    return AITurnResult(response=response, state=state, satisfaction_change=change, **kwargs)


@pytest.fixture
def english():
    return get_language("en")


@pytest.fixture
def vietnamese():
    return get_language("vi")


@pytest.fixture
def customer(english) -> Customer:
    return create_customer(english, rng=random.Random(1))


@pytest.fixture
def seated_customer(customer) -> Customer:
    customer.state = CustomerState.SEATED_IDLE
    return customer


@pytest.fixture
def interpreter():
    return ResponseInterpreter()


@pytest.fixture
def state_machine():
    return CustomerStateMachine()


@pytest.fixture
def guardrail_pipeline():
    return GuardrailPipeline(max_input_length=50)


@pytest.fixture
def game_config():
    return GameConfig(
        replacement_delay_sec=0.05,
        state_change_reward=10,
        initial_satisfaction=50,
        default_language="en",
        max_input_length=200,
        empty_reply_text="Sorry, I don't understand.",
    )


@pytest.fixture
def chat_gateway():
    return FakeChatGateway()


@pytest.fixture
def controller(chat_gateway, game_config):
    return SessionController(
        chat_gateway, game=game_config, model="gpt-4o-mini", rng=random.Random(7)
    )
