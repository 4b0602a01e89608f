from customer_sim.conversation.guardrails import GuardrailPipeline
from customer_sim.conversation.replacement import ReplacementScheduler
from customer_sim.conversation.response_parser import ResponseInterpreter
from customer_sim.conversation.state_machine import (
    CustomerState,
    CustomerStateMachine,
    parse_state,
)

__all__ = [
    "CustomerStateMachine",
    "CustomerState",
    "parse_state",
    "ResponseInterpreter",
    "ReplacementScheduler",
    "GuardrailPipeline",
]
