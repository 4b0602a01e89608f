"""
Guardrails around a turn.

Two independent layers, each checking a different concern:
1. InputGuardrail     — rejects blank or over-long staff input before any
                        network call
2. DiagnosticGuardrail — flags suspicious model replies (fallback parse,
                        unknown state, out-of-range delta, broken character)

Only input violations block a turn. Reply diagnostics are warnings
shown to the operator; the customer's politeness policy itself lives in
the prompt and is not enforced here.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from customer_sim.conversation.state_machine import EXPECTED_CHANGE_RANGE
from customer_sim.schemas.conversation_schema import AITurnResult, StateUpdate

logger = logging.getLogger(__name__)

DEFAULT_MAX_INPUT_LENGTH = 500


@dataclass
class GuardrailResult:
    """Outcome of a single guardrail check."""
    passed: bool
    violation_type: Optional[str] = None
    message: Optional[str] = None
    severity: str = "warning"  # "warning" | "block"


class InputGuardrail:
    """Validates staff input before a turn is recorded."""

    def __init__(self, max_length: int = DEFAULT_MAX_INPUT_LENGTH) -> None:
        self.max_length = max_length

    def check_not_blank(self, text: str) -> GuardrailResult:
        if not text or not text.strip():
            return GuardrailResult(
                passed=False,
                violation_type="empty_input",
                message="Say something to the customer first.",
                severity="block",
            )
        return GuardrailResult(passed=True)

    def check_length(self, text: str) -> GuardrailResult:
        if len(text) > self.max_length:
            return GuardrailResult(
                passed=False,
                violation_type="input_too_long",
                message=f"Message is {len(text)} characters; the limit is {self.max_length}.",
                severity="block",
            )
        return GuardrailResult(passed=True)


class DiagnosticGuardrail:
    """Flags model replies that did not follow the reply contract."""

    CHARACTER_BREAKS = [
        "as an ai", "as a language model", "i am an ai", "i'm an ai",
        "how can i help you today", "what can i get for you",
        "welcome to our restaurant",
    ]

    def check_parsed(self, result: AITurnResult) -> GuardrailResult:
        if not result.parsed:
            return GuardrailResult(
                passed=False,
                violation_type="unstructured_reply",
                message="Reply had no usable JSON; shown as plain text with no state change.",
            )
        return GuardrailResult(passed=True)

    def check_state(self, update: StateUpdate) -> GuardrailResult:
        if update.unrecognized_state is not None:
            return GuardrailResult(
                passed=False,
                violation_type="unknown_state",
                message=f"Model returned unknown state '{update.unrecognized_state}'; ignored.",
            )
        return GuardrailResult(passed=True)

    def check_change_range(self, result: AITurnResult) -> GuardrailResult:
        low, high = EXPECTED_CHANGE_RANGE
        if not low <= result.satisfaction_change <= high:
            return GuardrailResult(
                passed=False,
                violation_type="change_out_of_range",
                message=(
                    f"Satisfaction change {result.satisfaction_change} is outside "
                    f"[{low}, {high}]."
                ),
            )
        return GuardrailResult(passed=True)

    def check_character(self, result: AITurnResult) -> GuardrailResult:
        lower = result.response.lower()
        for pattern in self.CHARACTER_BREAKS:
            if pattern in lower:
                return GuardrailResult(
                    passed=False,
                    violation_type="character_break",
                    message=f"Reply breaks the customer role with: '{pattern}'.",
                )
        return GuardrailResult(passed=True)


class GuardrailPipeline:
    """Composes the guardrails into pre-gateway and post-gateway checks."""

    def __init__(self, max_input_length: int = DEFAULT_MAX_INPUT_LENGTH) -> None:
        self.input = InputGuardrail(max_input_length)
        self.diagnostics = DiagnosticGuardrail()

    def check_player_input(self, text: str) -> list[GuardrailResult]:
        """Pre-gateway: blocking checks on the staff's message."""
        blank = self.input.check_not_blank(text)
        if not blank.passed:
            return [blank]
        results = [self.input.check_length(text)]
        return [r for r in results if not r.passed]

    def check_turn(self, result: AITurnResult, update: StateUpdate) -> list[GuardrailResult]:
        """Post-gateway: warnings about the interpreted reply."""
        results = [
            self.diagnostics.check_parsed(result),
            self.diagnostics.check_state(update),
            self.diagnostics.check_change_range(result),
            self.diagnostics.check_character(result),
        ]
        failed = [r for r in results if not r.passed]
        for r in failed:
            logger.info("Turn diagnostic: %s", r.message)
        return failed
