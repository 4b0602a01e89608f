"""Tests for the offline console scenarios."""

import pytest

from console_demo import SCENARIOS, ConsoleSession, ScriptedChatGateway
from customer_sim.schemas.customer_schema import CustomerState
from customer_sim.session.controller import SessionController


def run_controller(name: str, game_config) -> tuple[SessionController, list[str]]:
    steps = SCENARIOS[name]
    gateway = ScriptedChatGateway([reply for _, reply in steps])
    return SessionController(gateway, game=game_config), [staff for staff, _ in steps]


class TestScenarios:
    @pytest.mark.asyncio
    async def test_happy_path_scores_every_transition(self, game_config, capsys):
        controller, steps = run_controller("happy", game_config)
        await ConsoleSession(controller, "en").run_scenario("happy", steps)
        assert controller.customer.state == CustomerState.TIPPING
        assert controller.score == 50
        assert "Final score: 50" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_rude_path_replaces_customer(self, game_config, capsys):
        controller, steps = run_controller("rude", game_config)
        await ConsoleSession(controller, "vi").run_scenario("rude", steps)
        assert controller.customer.state == CustomerState.WAITING_OUTSIDE
        assert controller.customer.language.code == "vi"
        assert controller.generation == 2
        assert controller.score == 20
        assert "next customer in 0.05s" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_messy_replies_are_tolerated(self, game_config, capsys):
        controller, steps = run_controller("messy", game_config)
        await ConsoleSession(controller, "en").run_scenario("messy", steps)
        assert controller.customer.state == CustomerState.CONFIRM_SEATING
        assert controller.customer.satisfaction == 57
        out = capsys.readouterr().out
        assert "no usable JSON" in out
        assert "thirsty" in out

    @pytest.mark.asyncio
    async def test_exhausted_script_falls_back_to_placeholder(self, game_config):
        controller = SessionController(ScriptedChatGateway([]), game=game_config)
        controller.start_game()
        report = await controller.submit("Hello?")
        assert report.result.response == game_config.empty_reply_text
