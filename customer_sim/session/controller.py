"""
Session controller — one role-play game, one customer at a time.

Runs a turn end to end: validate the staff's message, record it, ask the
chat gateway for the customer's reply, interpret it, apply it to the
customer, record the reply, and keep the result for diagnostics.

Every customer lives in its own generation. Starting a game or replacing
a customer opens a new generation; replies and scheduled replacements
that belong to an older generation are discarded instead of being
applied to the wrong customer.

Usage:
    controller = SessionController(HttpChatGateway())
    controller.start_game("vi")
    report = await controller.submit("Xin chào, mời anh vào!")
"""

from __future__ import annotations

import random
import uuid
from typing import Optional

from customer_sim.catalog.customers import create_customer
from customer_sim.catalog.languages import get_language, get_language_codes
from customer_sim.catalog.models import provider_for
from customer_sim.catalog.restaurant import DEFAULT_RESTAURANT
from customer_sim.config import GameConfig, settings
from customer_sim.conversation.guardrails import GuardrailPipeline, GuardrailResult
from customer_sim.conversation.replacement import ReplacementScheduler
from customer_sim.conversation.response_parser import ResponseInterpreter
from customer_sim.conversation.state_machine import CustomerStateMachine, mood_for
from customer_sim.gateway.chat_client import ChatGateway
from customer_sim.gateway.speech_client import SpeechService
from customer_sim.gateway.transport import GatewayError
from customer_sim.logging_context import get_session_logger, set_session_id
from customer_sim.prompts.prompt_templates import (
    build_opening_message,
    build_system_prompt,
    build_turn_prompt,
)
from customer_sim.schemas.conversation_schema import (
    AITurnResult,
    ChatMessage,
    Role,
    TurnReport,
)
from customer_sim.schemas.customer_schema import Customer, LanguageOption, RestaurantInfo
from customer_sim.schemas.gateway_schema import ChatRequest

logger = get_session_logger(__name__)


class SessionError(RuntimeError):
    """Base class for turns the controller refuses or abandons."""


class SessionNotStartedError(SessionError):
    """Raised when a message is sent before a game is started."""


class TurnInProgressError(SessionError):
    """Raised when a message arrives while the previous turn is outstanding."""


class StaleTurnError(SessionError):
    """Raised when the game moved on while the gateway call was in flight."""


class InvalidInputError(SessionError):
    """Raised when the staff's message fails an input guardrail."""

    def __init__(self, violations: list[GuardrailResult]) -> None:
        super().__init__("; ".join(v.message or v.violation_type or "invalid" for v in violations))
        self.violations = violations


class SessionController:
    """Orchestrates turns between the staff and the simulated customer."""

    def __init__(
        self,
        chat_gateway: ChatGateway,
        *,
        game: Optional[GameConfig] = None,
        model: Optional[str] = None,
        provider: Optional[str] = None,
        restaurant: Optional[RestaurantInfo] = None,
        speech: Optional[SpeechService] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._chat = chat_gateway
        self._speech = speech
        self._game = game or settings.game
        self._rng = rng
        self.model = model or settings.model.llm_model
        self.provider = provider or provider_for(self.model, settings.model.llm_provider)
        self.restaurant = restaurant or DEFAULT_RESTAURANT

        self._interpreter = ResponseInterpreter()
        self._machine = CustomerStateMachine(self._game.state_change_reward)
        self._guardrails = GuardrailPipeline(self._game.max_input_length)
        self._replacements = ReplacementScheduler(self._game.replacement_delay_sec)

        self.language: LanguageOption = self._resolve_language(self._game.default_language)
        self.session_id: Optional[str] = None
        self.generation = 0
        self.customer: Optional[Customer] = None
        self.messages: list[ChatMessage] = []
        self.score = 0
        self.last_result: Optional[AITurnResult] = None
        self._in_flight: Optional[int] = None

    # ------------------------------------------------------------------ #
    # State exposed to the front end
    # ------------------------------------------------------------------ #

    @property
    def started(self) -> bool:
        return self.customer is not None

    @property
    def busy(self) -> bool:
        return self._in_flight is not None and self._in_flight == self.generation

    @property
    def replacement_delay_sec(self) -> float:
        return self._replacements.delay_sec

    @property
    def replacement_pending(self) -> bool:
        return self._replacements.pending

    @property
    def mood(self) -> str:
        return mood_for(self.customer.satisfaction) if self.customer else mood_for(50)

    @property
    def last_customer_line(self) -> Optional[str]:
        for message in reversed(self.messages):
            if message.role == Role.ASSISTANT:
                return message.content
        return None

    # ------------------------------------------------------------------ #
    # Game lifecycle
    # ------------------------------------------------------------------ #

    def start_game(
        self, language_code: Optional[str] = None, model: Optional[str] = None
    ) -> Customer:
        """Start a new game, discarding any pending replacement and history."""
        if language_code is not None:
            self.language = self._resolve_language(language_code)
        if model is not None:
            self.model = model
            self.provider = provider_for(model, self.provider)

        self._replacements.cancel()
        self.generation += 1
        self.session_id = f"GAME-{uuid.uuid4().hex[:8]}"
        set_session_id(self.session_id)
        self.score = 0
        self.last_result = None
        customer = self._spawn_customer()
        logger.info(
            "Game started: language=%s model=%s provider=%s",
            self.language.code, self.model, self.provider,
        )
        return customer

    def reset(self) -> None:
        """End the current game without starting another one."""
        self._replacements.cancel()
        self.generation += 1
        self.customer = None
        self.messages = []
        self.score = 0
        self.last_result = None
        logger.info("Game reset")

    async def wait_for_replacement(self) -> None:
        """Block until a pending replacement has run or been cancelled."""
        await self._replacements.wait()

    def _spawn_customer(self) -> Customer:
        self.customer = create_customer(
            self.language, rng=self._rng, satisfaction=self._game.initial_satisfaction
        )
        self.messages = [
            ChatMessage(role=Role.ASSISTANT, content=build_opening_message(self.language))
        ]
        return self.customer

    def _replace_customer(self, generation: int) -> None:
        if generation != self.generation or self.customer is None:
            logger.info(
                "Discarding replacement for generation %d (current %d)",
                generation, self.generation,
            )
            return
        departed = self.customer
        self.generation += 1
        customer = self._spawn_customer()
        logger.info("Customer %s replaced by %s", departed.id, customer.id)

    # ------------------------------------------------------------------ #
    # Turns
    # ------------------------------------------------------------------ #

    async def submit(self, text: str) -> TurnReport:
        """Process one staff message and return the customer's interpreted reply.

        Raises:
            SessionNotStartedError: No game is running.
            InvalidInputError: The message is blank or too long.
            TurnInProgressError: The previous turn has not finished.
            GatewayError: The chat gateway failed; nothing was changed.
            StaleTurnError: The customer changed while waiting for the reply.
        """
        if self.customer is None:
            raise SessionNotStartedError("Start a game before talking to a customer")
        violations = self._guardrails.check_player_input(text)
        if violations:
            raise InvalidInputError(violations)
        if self.busy:
            raise TurnInProgressError("Still waiting for the customer's reply")

        generation = self.generation
        customer = self.customer
        prior = list(self.messages)
        self.messages.append(ChatMessage(role=Role.USER, content=text))

        request = ChatRequest(
            message=build_turn_prompt(customer, text, self.restaurant),
            model=self.model,
            context=[ChatMessage(role=Role.SYSTEM, content=build_system_prompt()), *prior],
        )

        self._in_flight = generation
        try:
            raw = await self._chat.complete(request, self.provider)
        except GatewayError as exc:
            logger.error("Turn aborted, chat gateway failed: %s", exc)
            self._rollback(generation, prior)
            raise
        except BaseException as exc:
            logger.error("Turn aborted before the customer replied: %r", exc)
            self._rollback(generation, prior)
            raise
        finally:
            if self._in_flight == generation:
                self._in_flight = None

        if generation != self.generation:
            logger.warning(
                "Discarding reply for generation %d (current %d)", generation, self.generation
            )
            raise StaleTurnError("The customer changed before the reply arrived")

        if not raw.strip():
            raw = self._game.empty_reply_text

        result = self._interpreter.interpret(raw)
        update = self._machine.apply(customer, result)
        self.score += update.score_delta
        self.messages.append(ChatMessage(role=Role.ASSISTANT, content=result.response))
        self.last_result = result

        scheduled = False
        if update.replacement_due:
            scheduled = self._replacements.schedule(generation, self._replace_customer)

        warnings = [
            v.message or v.violation_type or ""
            for v in self._guardrails.check_turn(result, update)
        ]
        return TurnReport(
            generation=generation,
            result=result,
            update=update,
            score=self.score,
            replacement_scheduled=scheduled,
            warnings=warnings,
        )

    def _rollback(self, generation: int, prior: list[ChatMessage]) -> None:
        # A newer generation already owns a fresh history.
        if generation == self.generation:
            self.messages = prior

    async def speak(self, text: Optional[str] = None) -> Optional[str]:
        """Speak ``text`` (default: the customer's last line) if speech is configured."""
        if self._speech is None:
            return None
        line = text if text is not None else self.last_customer_line
        if not line:
            return None
        return await self._speech.speak(line)

    @staticmethod
    def _resolve_language(code: str) -> LanguageOption:
        language = get_language(code)
        if language is None:
            raise ValueError(
                f"Unsupported language {code!r}; choose one of {get_language_codes()}"
            )
        return language
