"""
Console front end — play the restaurant staff against an AI customer.

Live mode talks to the chat gateway configured in the environment.
Scenario mode replays canned model replies through the real session
controller, interpreter and state machine, so it runs with no gateway,
no API keys and no network calls.

Usage:
    python console_demo.py
    python console_demo.py --language vi --model llama-3.1-8b-instant
    python console_demo.py --scenario happy
    python console_demo.py --scenario rude

In-game commands: /debug, /restaurant, /new, /quit
"""

import argparse
import asyncio
import json
from typing import Optional

from customer_sim.catalog.languages import get_language_codes
from customer_sim.catalog.models import MODEL_OPTIONS
from customer_sim.config import settings
from customer_sim.gateway.chat_client import HttpChatGateway
from customer_sim.gateway.transport import GatewayError
from customer_sim.schemas.conversation_schema import TurnReport
from customer_sim.schemas.gateway_schema import ChatRequest
from customer_sim.session.controller import (
    InvalidInputError,
    SessionController,
    SessionError,
)

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"


class ScriptedChatGateway:
    """Returns canned model replies in order, standing in for the chat gateway."""

    def __init__(self, replies: list[str]) -> None:
        self._replies = list(replies)

    async def complete(self, request: ChatRequest, provider: str = "openai") -> str:
        if not self._replies:
            return ""
        return self._replies.pop(0)


def _reply(response: str, state: str, change: int, intent: str, **extra: object) -> str:
    return json.dumps(
        {"response": response, "state": state, "satisfaction_change": change,
         "intent": intent, **extra},
        ensure_ascii=False,
    )


# Staff lines paired with the model reply the scripted gateway returns.
SCENARIOS: dict[str, list[tuple[str, str]]] = {
    "happy": [
        ("Good evening! Table for how many?",
         _reply("Just two of us, please.", "confirm_seating", 5, "seating", party_size=2)),
        ("Right this way, table 3 by the window.",
         _reply("Lovely, thank you. Could we see the menu?", "request_menu", 5, "menu")),
        ("Here you go. The Phở Bò is very popular tonight.",
         _reply("We'll take two Phở Bò and one Gỏi Cuốn.", "ordering", 10, "order",
                order_items=["Phở Bò", "Phở Bò", "Gỏi Cuốn"])),
        ("Your food is ready, enjoy!",
         _reply("This smells wonderful!", "eating", 10, "eat")),
        ("Here is your bill.",
         _reply("Thank you, keep the change. Great service!", "tipping", 10, "tip")),
    ],
    "rude": [
        ("What do you want?",
         _reply("Oh... a table for one, please?", "confirm_seating", -5, "seating",
                party_size=1)),
        ("Ugh, sit wherever. Hurry up and order, you idiot.",
         _reply("How rude! I'm leaving. Goodbye!", "leaving", -25, "offended")),
    ],
    "messy": [
        ("Welcome! How many people?",
         'Sure! {"response": "Three people.", "state": "confirm_seating", '
         '"satisfaction_change": +5, "party_size": "3 people",}'),
        ("Please follow me.",
         "I'm happy to follow you to the table."),
        ("Anything to drink?",
         _reply("Water is fine.", "thirsty", 2, "drink")),
    ],
}


class ConsoleSession:
    """Drives a SessionController from the terminal."""

    def __init__(self, controller: SessionController, language_code: Optional[str] = None) -> None:
        self.controller = controller
        self.language_code = language_code

    def customer_say(self, text: str) -> None:
        customer = self.controller.customer
        name = customer.name if customer else "Customer"
        print(f"{GREEN}{BOLD}[{name} {self.controller.mood}]{RESET} {GREEN}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def banner(self, title: str) -> None:
        language = self.controller.language
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  RESTAURANT ROLE-PLAY - {title}{RESET}")
        print(f"{BOLD}  Customer language: {language.flag} {language.name}{RESET}")
        print(f"{BOLD}  Model: {self.controller.model} ({self.controller.provider}){RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        print()

    def introduce_customer(self) -> None:
        customer = self.controller.customer
        if customer is None:
            return
        self.system_log(
            f"New customer {customer.name} from {customer.nationality} "
            f"(seat {customer.seat}, {customer.politeness.value})"
        )
        line = self.controller.last_customer_line
        if line:
            self.customer_say(line)

    def show_status(self) -> None:
        customer = self.controller.customer
        if customer is None:
            return
        self.system_log(
            f"State: {customer.state.value} | Satisfaction: {customer.satisfaction} "
            f"{self.controller.mood} | Score: {self.controller.score}"
        )

    def show_debug(self) -> None:
        result = self.controller.last_result
        if result is None:
            self.system_log("No customer reply yet.")
            return
        print(f"{YELLOW}{BOLD}  Last AI result{RESET}")
        print(f"{YELLOW}  state:               {result.state}{RESET}")
        print(f"{YELLOW}  satisfaction_change: {result.satisfaction_change}{RESET}")
        print(f"{YELLOW}  intent:              {result.intent}{RESET}")
        print(f"{YELLOW}  party_size:          {result.party_size}{RESET}")
        print(f"{YELLOW}  order_items:         {result.order_items}{RESET}")
        print(f"{DIM}{result.model_dump_json(indent=2)}{RESET}")

    def show_restaurant(self) -> None:
        info = self.controller.restaurant
        print(f"{YELLOW}{BOLD}  Restaurant{RESET}")
        print(f"{YELLOW}  Available:    {', '.join(info.available_dishes)}{RESET}")
        print(f"{YELLOW}  Sold out:     {', '.join(info.sold_out_dishes) or 'none'}{RESET}")
        print(f"{YELLOW}  Empty tables: {len(info.empty_tables)}{RESET}")
        print(f"{YELLOW}  Hours:        {info.opening_hours}{RESET}")

    def show_report(self, report: TurnReport) -> None:
        self.customer_say(report.result.response)
        update = report.update
        delta = update.satisfaction_delta
        sign = "+" if delta >= 0 else ""
        self.system_log(
            f"Satisfaction {update.previous_satisfaction} -> {update.new_satisfaction} "
            f"({sign}{delta}, declared {report.result.satisfaction_change})"
        )
        if update.state_changed:
            self.system_log(
                f"State {update.previous_state.value} -> {update.new_state.value} "
                f"(+{update.score_delta} points)"
            )
        for warning in report.warnings:
            print(f"{YELLOW}  !! {warning}{RESET}")
        if report.replacement_scheduled:
            self.system_log(
                f"Customer is leaving; next customer in {self.controller.replacement_delay_sec:g}s"
            )
        self.show_status()

    async def take_turn(self, text: str) -> Optional[TurnReport]:
        try:
            report = await self.controller.submit(text)
        except InvalidInputError as exc:
            print(f"{RED}  {exc}{RESET}")
            return None
        except GatewayError as exc:
            print(f"{RED}  The customer didn't hear you ({exc}). Try again.{RESET}")
            return None
        except SessionError as exc:
            print(f"{RED}  {exc}{RESET}")
            return None
        self.show_report(report)
        return report

    async def run_scenario(self, name: str, steps: list[str]) -> None:
        """Auto-play a scripted scenario."""
        self.controller.start_game(self.language_code)
        self.banner(f"Scenario: {name}")
        self.introduce_customer()

        for step in steps:
            print(f"\n{BLUE}[Staff] {RESET}{step}")
            report = await self.take_turn(step)
            if report is not None and report.replacement_scheduled:
                await self.controller.wait_for_replacement()
                self.introduce_customer()
                break

        print(f"\n{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  Scenario '{name}' complete. Final score: {self.controller.score}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    async def run(self) -> None:
        self.controller.start_game(self.language_code)
        self.banner("Type /quit to exit")
        self.introduce_customer()
        generation = self.controller.generation

        while True:
            user_input = (await asyncio.to_thread(input, f"\n{BLUE}[Staff] {RESET}")).strip()
            if self.controller.generation != generation:
                self.introduce_customer()
                generation = self.controller.generation
            if not user_input:
                continue
            command = user_input.lower()
            if command in ("/quit", "/exit", "quit", "exit"):
                print(f"\n{DIM}Session ended. Final score: {self.controller.score}{RESET}")
                return
            if command == "/debug":
                self.show_debug()
                continue
            if command == "/restaurant":
                self.show_restaurant()
                continue
            if command == "/new":
                self.controller.start_game()
                self.introduce_customer()
                generation = self.controller.generation
                continue

            await self.take_turn(user_input)


async def _run(args: argparse.Namespace) -> None:
    if args.scenario:
        staff_lines = [staff for staff, _ in SCENARIOS[args.scenario]]
        gateway = ScriptedChatGateway([reply for _, reply in SCENARIOS[args.scenario]])
        controller = SessionController(gateway, model=args.model)
        await ConsoleSession(controller, args.language).run_scenario(args.scenario, staff_lines)
        return

    async with HttpChatGateway() as gateway:
        controller = SessionController(gateway, model=args.model)
        await ConsoleSession(controller, args.language).run()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Restaurant customer role-play console")
    parser.add_argument(
        "--language",
        choices=get_language_codes(),
        default=settings.game.default_language,
        help="Language the customer speaks",
    )
    parser.add_argument(
        "--model",
        choices=[option.id for option in MODEL_OPTIONS],
        default=settings.model.llm_model,
        help="Chat model playing the customer",
    )
    parser.add_argument(
        "--scenario",
        choices=sorted(SCENARIOS),
        default=None,
        help="Replay a scripted scenario offline instead of interactive mode",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    asyncio.run(_run(args))


if __name__ == "__main__":
    main()
