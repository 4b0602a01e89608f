"""Per-turn prompt construction from the customer profile and restaurant state."""

from typing import Optional

from customer_sim.catalog.languages import OPENING_LINES
from customer_sim.prompts.system_prompts import (
    CUSTOMER_SYSTEM_PROMPT,
    OUTPUT_CONTRACT,
    RUDENESS_POLICY,
)
from customer_sim.schemas.customer_schema import Customer, LanguageOption, RestaurantInfo


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def build_system_prompt() -> str:
    """The system instruction sent first on every turn."""
    return CUSTOMER_SYSTEM_PROMPT


def build_opening_message(language: LanguageOption) -> str:
    """First line a newly arrived customer says, in their own language."""
    line = OPENING_LINES.get(language.code, OPENING_LINES["en"])
    return f"{language.greeting}! {line}"


def build_customer_profile(customer: Customer) -> str:
    """Serialize the customer's full current profile."""
    lines = [
        "Customer Information:",
        f"- Name: {customer.name} {customer.language.flag}",
        f"- Nationality: {customer.nationality}",
        f"- Language: {customer.language.name}",
        f"- Current State: {customer.state.value}",
        f"- Satisfaction Level: {customer.satisfaction}%",
        f"- Personality: {customer.politeness.value}",
        f"- Wants to eat: {', '.join(customer.wants)}",
        f"- Fallback options: {', '.join(customer.fallbacks)}",
        f"- Needs menu time: {_yes_no(customer.needs_menu_time)}",
        f"- Can pay: {_yes_no(customer.can_pay)}",
        f"- Will tip if good service: {_yes_no(customer.will_tip_if_good_service)}",
    ]
    return "\n".join(lines)


def build_restaurant_context(restaurant: Optional[RestaurantInfo]) -> str:
    """Describe what the restaurant can offer right now."""
    if restaurant is None:
        return ""
    lines = ["Restaurant Information:"]
    if restaurant.available_dishes:
        lines.append(f"- Available dishes: {', '.join(restaurant.available_dishes)}")
    if restaurant.sold_out_dishes:
        lines.append(f"- Sold out today: {', '.join(restaurant.sold_out_dishes)}")
    lines.append(f"- Empty tables: {len(restaurant.empty_tables)}")
    if restaurant.opening_hours:
        lines.append(f"- Opening hours: {restaurant.opening_hours}")
    return "\n".join(lines)


def build_turn_prompt(
    customer: Customer,
    player_message: str,
    restaurant: Optional[RestaurantInfo] = None,
) -> str:
    """Build the per-turn prompt quoting the staff's last utterance verbatim."""
    language = customer.language
    sections = [
        f"You are a {customer.nationality} customer in a Vietnamese restaurant. "
        "You are talking to the restaurant staff (the player).",
        build_customer_profile(customer),
    ]
    restaurant_context = build_restaurant_context(restaurant)
    if restaurant_context:
        sections.append(restaurant_context)

    sections.append(
        "Respond as a real customer would:\n"
        "- Be polite and friendly\n"
        "- Ask about menu, tables, food\n"
        "- Express personal preferences\n"
        "- React according to your personality\n"
        "- Do NOT roleplay as restaurant staff\n"
        f"- Reply in {language.name}\n"
        f"- You can use some words from your country: {', '.join(language.common_phrases)}\n"
        f"- Greet with: {language.greeting}\n"
        f"- Say goodbye with: {language.goodbye}"
    )
    sections.append(
        "CUSTOMER PERSONALITY:\n"
        f"- Personality: {customer.politeness.value}\n"
        f"- Current satisfaction: {customer.satisfaction}%\n"
        f"- Will tip if good service: {_yes_no(customer.will_tip_if_good_service)}\n"
        f"- Will leave if treated rudely: {_yes_no(customer.leave_on_rude)}"
    )
    sections.append(f'The restaurant staff just said: "{player_message}"')
    sections.append(OUTPUT_CONTRACT.strip())
    sections.append(RUDENESS_POLICY.strip())
    sections.append(f"Respond as a {customer.nationality} customer:")
    return "\n\n".join(sections)
