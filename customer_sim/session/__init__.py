from customer_sim.session.controller import (
    InvalidInputError,
    SessionController,
    SessionError,
    SessionNotStartedError,
    StaleTurnError,
    TurnInProgressError,
)

__all__ = [
    "InvalidInputError",
    "SessionController",
    "SessionError",
    "SessionNotStartedError",
    "StaleTurnError",
    "TurnInProgressError",
]
