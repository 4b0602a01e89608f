"""
Tolerant interpretation of free-text model replies.

The model is asked for a JSON object but may wrap it in prose, prefix
positive numbers with ``+``, or leave trailing commas. The interpreter
takes the span between the first ``{`` and the last ``}``, repairs the
two known defects, and parses it. Anything else degrades to a fallback
that passes the raw text through as the customer's reply.

Parsing yields a tagged outcome (``ParsedReply`` or ``FallbackReply``);
neither ``parse`` nor ``interpret`` raises.

Usage:
    result = ResponseInterpreter().interpret('{"response": "Hi", "state": "seated_idle"}')
    assert result.state == "seated_idle"
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Optional, Union

from customer_sim.logging_context import get_session_logger
from customer_sim.schemas.conversation_schema import AITurnResult
from customer_sim.utils import coerce_int, coerce_optional_int

logger = get_session_logger(__name__)

_PLUS_NUMBER = re.compile(r"(:\s*)\+(\d)")
_TRAILING_COMMA = re.compile(r",\s*([}\]])")


@dataclass(frozen=True)
class ParsedReply:
    """The reply contained a parseable JSON object."""
    payload: dict[str, Any]
    raw: str


@dataclass(frozen=True)
class FallbackReply:
    """No usable JSON object; the raw text is the whole reply."""
    raw: str
    reason: str


ParseOutcome = Union[ParsedReply, FallbackReply]


def extract_candidate(text: str) -> Optional[str]:
    """Return the text from the first ``{`` to the last ``}``, if any."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        return None
    return text[start:end + 1]


def repair_json(candidate: str) -> str:
    """Strip ``+`` before numeric values and drop trailing commas."""
    repaired = _PLUS_NUMBER.sub(r"\1\2", candidate)
    return _TRAILING_COMMA.sub(r"\1", repaired)


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    text = text.strip()
    return text or None


def _order_items(value: Any) -> Optional[list[str]]:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        items = [str(item).strip() for item in value if item is not None]
    else:
        items = [part.strip() for part in str(value).split(",")]
    items = [item for item in items if item]
    return items or None


class ResponseInterpreter:
    """Recovers an AITurnResult from arbitrary model output."""

    def parse(self, raw: str) -> ParseOutcome:
        """Classify ``raw`` as a parsed JSON payload or a fallback."""
        if not isinstance(raw, str):
            raw = "" if raw is None else str(raw)

        candidate = extract_candidate(raw)
        if candidate is None:
            return FallbackReply(raw=raw, reason="no JSON object found")

        try:
            payload = json.loads(repair_json(candidate))
        except (ValueError, RecursionError) as exc:
            logger.warning("Failed to parse model reply: %s", exc)
            logger.debug("Raw reply: %r", raw)
            return FallbackReply(raw=raw, reason=f"invalid JSON: {exc}")

        if not isinstance(payload, dict):
            return FallbackReply(raw=raw, reason="JSON payload is not an object")
        return ParsedReply(payload=payload, raw=raw)

    def interpret(self, raw: str) -> AITurnResult:
        """Always returns a result; malformed replies fall back to passthrough."""
        outcome = self.parse(raw)
        if isinstance(outcome, ParsedReply):
            return self._from_payload(outcome)
        return self._fallback(outcome)

    def _from_payload(self, outcome: ParsedReply) -> AITurnResult:
        payload = outcome.payload
        return AITurnResult(
            response=_optional_text(payload.get("response")) or outcome.raw,
            state=_optional_text(payload.get("state")),
            satisfaction_change=coerce_int(payload.get("satisfaction_change"), 0),
            intent=_optional_text(payload.get("intent")),
            party_size=coerce_optional_int(payload.get("party_size")),
            order_items=_order_items(payload.get("order_items")),
            parsed=True,
        )

    @staticmethod
    def _fallback(outcome: FallbackReply) -> AITurnResult:
        logger.debug("Using raw reply as response (%s)", outcome.reason)
        return AITurnResult(response=outcome.raw, parsed=False)
