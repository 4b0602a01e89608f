"""
Customer state machine driven by the model's declared turn results.

Defines the 14 customer states of a restaurant visit. Unlike a scripted
flow there is no transition graph: each turn the model picks the next
state freely. This module only parses that choice into the closed state
set, moves satisfaction by the declared delta within [0, 100], rewards
every actual state change, and decides when the customer must be
replaced.

Usage:
    machine = CustomerStateMachine()
    update = machine.apply(customer, result)
    if update.replacement_due:
        ...
"""

from typing import Optional

from customer_sim.logging_context import get_session_logger
from customer_sim.schemas.conversation_schema import AITurnResult, StateUpdate
from customer_sim.schemas.customer_schema import Customer, CustomerState
from customer_sim.utils import clamp

logger = get_session_logger(__name__)

MIN_SATISFACTION = 0
MAX_SATISFACTION = 100
DEFAULT_STATE_CHANGE_REWARD = 10

# Declared deltas outside this range are applied but reported.
EXPECTED_CHANGE_RANGE = (-30, 30)

TERMINAL_STATES = frozenset({CustomerState.LEAVING, CustomerState.END_SESSION})

_MOODS = ((80, "😊"), (60, "🙂"), (40, "😐"), (20, "😕"))


def parse_state(raw: Optional[str]) -> Optional[CustomerState]:
    """Map a model-supplied state string onto the closed state set.

    Accepts value spelling (``"seated_idle"``) and member names
    (``"SEATED_IDLE"``), ignoring case, surrounding whitespace, and
    spaces or hyphens used in place of underscores. Returns None when
    the string names no known state.
    """
    if raw is None:
        return None
    key = raw.strip().lower().replace("-", "_").replace(" ", "_")
    if not key:
        return None
    try:
        return CustomerState(key)
    except ValueError:
        return None


def mood_for(satisfaction: int) -> str:
    """Emoji summarizing a satisfaction level."""
    for threshold, emoji in _MOODS:
        if satisfaction >= threshold:
            return emoji
    return "😠"


def is_terminal(state: CustomerState) -> bool:
    return state in TERMINAL_STATES


class CustomerStateMachine:
    """
    Applies turn results to a customer.

    The customer is updated in place; the returned StateUpdate records
    what moved, the score earned, and whether a replacement is due.
    """

    def __init__(self, state_change_reward: int = DEFAULT_STATE_CHANGE_REWARD) -> None:
        self.state_change_reward = state_change_reward

    def apply(self, customer: Customer, result: AITurnResult) -> StateUpdate:
        previous_state = customer.state
        previous_satisfaction = customer.satisfaction

        new_state = previous_state
        unrecognized: Optional[str] = None
        if result.state is not None:
            parsed = parse_state(result.state)
            if parsed is None:
                unrecognized = result.state
                logger.warning(
                    "Unrecognized state %r from model; keeping %s",
                    result.state, previous_state.value,
                )
            else:
                new_state = parsed

        new_satisfaction = clamp(
            previous_satisfaction + result.satisfaction_change,
            MIN_SATISFACTION,
            MAX_SATISFACTION,
        )

        customer.state = new_state
        customer.satisfaction = new_satisfaction

        changed = new_state != previous_state
        score_delta = self.state_change_reward if changed else 0
        replacement_due = is_terminal(new_state) or new_satisfaction == MIN_SATISFACTION

        if changed:
            logger.info(
                "State transition: %s -> %s (customer: %s)",
                previous_state.value, new_state.value, customer.id,
            )
        logger.info(
            "Satisfaction: %d -> %d (declared %+d, intent: %s)",
            previous_satisfaction, new_satisfaction,
            result.satisfaction_change, result.intent,
        )
        if result.order_items:
            logger.info("Order items: %s", ", ".join(result.order_items))

        return StateUpdate(
            previous_state=previous_state,
            new_state=new_state,
            previous_satisfaction=previous_satisfaction,
            new_satisfaction=new_satisfaction,
            score_delta=score_delta,
            replacement_due=replacement_due,
            unrecognized_state=unrecognized,
        )
