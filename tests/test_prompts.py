"""Tests for system and per-turn prompt construction."""

from customer_sim.catalog.languages import LANGUAGE_OPTIONS, OPENING_LINES
from customer_sim.catalog.restaurant import DEFAULT_RESTAURANT
from customer_sim.prompts.prompt_templates import (
    build_customer_profile,
    build_opening_message,
    build_restaurant_context,
    build_system_prompt,
    build_turn_prompt,
)
from customer_sim.prompts.system_prompts import OUTPUT_CONTRACT, RUDENESS_POLICY
from customer_sim.schemas.customer_schema import CustomerState, RestaurantInfo


class TestSystemPrompt:
    def test_describes_the_customer_role(self):
        prompt = build_system_prompt()
        assert "customer in a Vietnamese restaurant" in prompt

    def test_includes_reply_contract(self):
        prompt = build_system_prompt()
        assert '"satisfaction_change"' in prompt
        assert "NO + sign" in prompt

    def test_lists_every_state(self):
        prompt = build_system_prompt()
        for state in CustomerState:
            assert state.value in prompt

    def test_is_session_constant(self):
        assert build_system_prompt() == build_system_prompt()


class TestRudenessPolicy:
    def test_instructs_offended_exit(self):
        assert 'intent = "offended"' in RUDENESS_POLICY
        assert 'state = "leaving"' in RUDENESS_POLICY
        assert "[-30, -10]" in RUDENESS_POLICY

    def test_has_example_for_each_language(self):
        for label in ("Vietnamese", "English", "Korean", "Japanese", "Chinese", "Thai"):
            assert label in RUDENESS_POLICY


class TestOpeningMessage:
    def test_english(self, english):
        assert build_opening_message(english) == (
            "Hello! I want to eat here. Do you have any empty tables?"
        )

    def test_vietnamese(self, vietnamese):
        assert build_opening_message(vietnamese).startswith("Xin chào! ")

    def test_every_language_has_an_opening(self):
        for language in LANGUAGE_OPTIONS:
            message = build_opening_message(language)
            assert message == f"{language.greeting}! {OPENING_LINES[language.code]}"


class TestCustomerProfile:
    def test_contains_current_profile(self, seated_customer):
        seated_customer.satisfaction = 72
        profile = build_customer_profile(seated_customer)
        assert seated_customer.name in profile
        assert "Current State: seated_idle" in profile
        assert "Satisfaction Level: 72%" in profile
        assert "Phở Bò" in profile
        assert "Nationality: United States" in profile


class TestRestaurantContext:
    def test_default_restaurant(self):
        context = build_restaurant_context(DEFAULT_RESTAURANT)
        assert "Bún Bò Huế" in context
        assert "Sold out today: Chả Cá Lã Vọng" in context
        assert "Empty tables: 6" in context
        assert "7:00 - 22:00" in context

    def test_none(self):
        assert build_restaurant_context(None) == ""

    def test_empty_restaurant_omits_optional_lines(self):
        context = build_restaurant_context(RestaurantInfo())
        assert "Sold out" not in context
        assert "Empty tables: 0" in context


class TestTurnPrompt:
    def test_quotes_staff_message_verbatim(self, customer):
        prompt = build_turn_prompt(customer, 'Welcome! "Table for two?"')
        assert 'The restaurant staff just said: "Welcome! "Table for two?""' in prompt

    def test_includes_contract_and_policy(self, customer):
        prompt = build_turn_prompt(customer, "Hello")
        assert OUTPUT_CONTRACT.strip() in prompt
        assert RUDENESS_POLICY.strip() in prompt

    def test_includes_restaurant_when_given(self, customer):
        with_info = build_turn_prompt(customer, "Hello", DEFAULT_RESTAURANT)
        without = build_turn_prompt(customer, "Hello")
        assert "Restaurant Information:" in with_info
        assert "Restaurant Information:" not in without

    def test_language_instructions(self, vietnamese):
        from customer_sim.catalog.customers import create_customer

        customer = create_customer(vietnamese)
        prompt = build_turn_prompt(customer, "Xin chào")
        assert "Reply in Tiếng Việt" in prompt
        assert "Cảm ơn" in prompt
        assert prompt.endswith("Respond as a Vietnam customer:")

    def test_reflects_latest_state(self, customer):
        customer.state = CustomerState.BILL_REQUESTED
        assert "Current State: bill_requested" in build_turn_prompt(customer, "Here you go")
