"""
Customer factory.

Builds a fresh customer for the selected language. Every customer starts
waiting outside, easygoing, at the configured starting satisfaction, and
wants the same default dishes; only the name is drawn at random from the
pool for the customer's nationality.
"""

import logging
import random
import uuid
from typing import Optional

from customer_sim.catalog.restaurant import (
    DEFAULT_FALLBACKS,
    DEFAULT_INFO_QUESTIONS,
    DEFAULT_WANTS,
)
from customer_sim.schemas.customer_schema import (
    Customer,
    CustomerState,
    LanguageOption,
    Politeness,
)

logger = logging.getLogger(__name__)

DEFAULT_SATISFACTION = 50

# Keyed by the nationality (LanguageOption.country) of the customer.
CUSTOMER_NAMES: dict[str, tuple[str, ...]] = {
    "United States": ("John Smith", "Sarah Johnson", "Mike Brown", "Lisa Davis"),
    "Vietnam": ("Nguyễn Minh", "Trần Thị Lan", "Lê Văn Hùng", "Phạm Thị Mai"),
    "South Korea": ("김민수", "박지영", "이준호", "최수진"),
    "Japan": ("田中太郎", "佐藤花子", "鈴木一郎", "高橋美咲"),
    "China": ("王小明", "李小红", "张伟", "陈美丽"),
    "Thailand": ("สมชาย", "สมหญิง", "วิชัย", "มาลี"),
}

FALLBACK_NAMES: tuple[str, ...] = CUSTOMER_NAMES["United States"]


def pick_name(nationality: str, rng: Optional[random.Random] = None) -> str:
    """Draw a name uniformly from the nationality's pool."""
    names = CUSTOMER_NAMES.get(nationality)
    if not names:
        logger.warning("No name pool for nationality %r, using default pool", nationality)
        names = FALLBACK_NAMES
    return (rng or random).choice(names)


def create_customer(
    language: LanguageOption,
    *,
    rng: Optional[random.Random] = None,
    satisfaction: int = DEFAULT_SATISFACTION,
    seat: int = 1,
) -> Customer:
    """Create a new customer who speaks ``language``."""
    customer = Customer(
        id=f"cust_{uuid.uuid4().hex[:6]}",
        name=pick_name(language.country, rng),
        seat=seat,
        state=CustomerState.WAITING_OUTSIDE,
        wants=list(DEFAULT_WANTS),
        fallbacks=list(DEFAULT_FALLBACKS),
        allow_others=False,
        needs_menu_time=True,
        politeness=Politeness.EASYGOING,
        will_tip_if_good_service=True,
        info_questions=list(DEFAULT_INFO_QUESTIONS),
        can_pay=True,
        pay_only_if_matched_items=True,
        leave_on_rude=True,
        satisfaction=satisfaction,
        language=language,
        nationality=language.country,
    )
    logger.info(
        "New customer created: %s (%s, %s)", customer.name, customer.id, language.code
    )
    return customer
