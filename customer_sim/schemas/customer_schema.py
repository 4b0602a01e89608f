"""Customer profile, language and restaurant data models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CustomerState(str, Enum):
    """All states a customer can be in during a visit."""
    WAITING_OUTSIDE = "waiting_outside"
    CONFIRM_SEATING = "confirm_seating"
    SEATED_IDLE = "seated_idle"
    REQUEST_MENU = "request_menu"
    ORDERING = "ordering"
    KITCHEN_PENDING = "kitchen_pending"
    KITCHEN_READY = "kitchen_ready"
    SERVING = "serving"
    EATING = "eating"
    BILL_REQUESTED = "bill_requested"
    PAYING = "paying"
    TIPPING = "tipping"
    LEAVING = "leaving"
    END_SESSION = "end_session"


class Politeness(str, Enum):
    EASYGOING = "easygoing"
    NEUTRAL = "neutral"
    PICKY = "picky"


class LanguageOption(BaseModel):
    """A language the customer can speak, with the phrases it uses."""

    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    flag: str
    country: str
    greeting: str
    goodbye: str
    common_phrases: tuple[str, ...] = ()


class Customer(BaseModel):
    """
    The simulated customer currently being served.

    Created by the customer factory and updated in place only by the
    state machine. Assignment is validated, so satisfaction can never
    leave [0, 100].
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str
    name: str
    seat: int = 1
    state: CustomerState = CustomerState.WAITING_OUTSIDE
    wants: list[str] = Field(default_factory=list)
    fallbacks: list[str] = Field(default_factory=list)
    allow_others: bool = False
    needs_menu_time: bool = True
    politeness: Politeness = Politeness.EASYGOING
    will_tip_if_good_service: bool = True
    info_questions: list[str] = Field(default_factory=list)
    can_pay: bool = True
    pay_only_if_matched_items: bool = True
    leave_on_rude: bool = True
    satisfaction: int = Field(default=50, ge=0, le=100)
    language: LanguageOption
    nationality: str


class RestaurantInfo(BaseModel):
    """Static restaurant facts the customer may ask about."""

    model_config = ConfigDict(frozen=True)

    available_dishes: tuple[str, ...] = ()
    sold_out_dishes: tuple[str, ...] = ()
    empty_tables: tuple[int, ...] = ()
    opening_hours: Optional[str] = None
