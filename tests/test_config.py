"""Tests for configuration loading and validation."""

import pytest

from customer_sim.config import (
    AppConfig,
    GameConfig,
    GatewayConfig,
    ModelConfig,
    _safe_bool,
    _safe_float,
    _safe_int,
    _validate_config,
)


class TestConfigValidation:
    def test_default_config_passes_validation(self):
        config = AppConfig()
        _validate_config(config)  # should not raise

    def test_default_game_rules(self):
        game = GameConfig()
        assert game.initial_satisfaction == 50
        assert game.state_change_reward == 10

    def test_unknown_provider(self):
        config = AppConfig(model=ModelConfig(llm_provider="anthropic"))
        with pytest.raises(ValueError, match="LLM_PROVIDER"):
            _validate_config(config)

    def test_groq_provider_accepted(self):
        _validate_config(AppConfig(model=ModelConfig(llm_provider="groq")))

    def test_non_positive_timeout(self):
        config = AppConfig(gateway=GatewayConfig(timeout_sec=0))
        with pytest.raises(ValueError, match="GATEWAY_TIMEOUT"):
            _validate_config(config)

    def test_negative_replacement_delay(self):
        config = AppConfig(game=GameConfig(replacement_delay_sec=-1))
        with pytest.raises(ValueError, match="REPLACEMENT_DELAY_SEC"):
            _validate_config(config)

    def test_negative_reward(self):
        config = AppConfig(game=GameConfig(state_change_reward=-10))
        with pytest.raises(ValueError, match="STATE_CHANGE_REWARD"):
            _validate_config(config)

    def test_initial_satisfaction_out_of_range(self):
        config = AppConfig(game=GameConfig(initial_satisfaction=150))
        with pytest.raises(ValueError, match="INITIAL_SATISFACTION"):
            _validate_config(config)

    def test_zero_max_input_length(self):
        config = AppConfig(game=GameConfig(max_input_length=0))
        with pytest.raises(ValueError, match="MAX_INPUT_LENGTH"):
            _validate_config(config)

    def test_unsupported_default_language(self):
        config = AppConfig(game=GameConfig(default_language="fr"))
        with pytest.raises(ValueError, match="DEFAULT_LANGUAGE"):
            _validate_config(config)


class TestEnvParsing:
    def test_safe_int_reads_env(self, monkeypatch):
        monkeypatch.setenv("TEST_INT", "42")
        assert _safe_int("TEST_INT", "0") == 42

    def test_safe_int_uses_default(self, monkeypatch):
        monkeypatch.delenv("TEST_INT", raising=False)
        assert _safe_int("TEST_INT", "7") == 7

    def test_safe_int_names_variable_on_error(self, monkeypatch):
        monkeypatch.setenv("TEST_INT", "ten")
        with pytest.raises(ValueError, match="TEST_INT"):
            _safe_int("TEST_INT", "0")

    def test_safe_float_names_variable_on_error(self, monkeypatch):
        monkeypatch.setenv("TEST_FLOAT", "soon")
        with pytest.raises(ValueError, match="TEST_FLOAT"):
            _safe_float("TEST_FLOAT", "1.0")

    @pytest.mark.parametrize("raw", ["1", "true", "YES", "on"])
    def test_safe_bool_truthy(self, monkeypatch, raw):
        monkeypatch.setenv("TEST_BOOL", raw)
        assert _safe_bool("TEST_BOOL", "false") is True

    @pytest.mark.parametrize("raw", ["0", "false", "No", "off"])
    def test_safe_bool_falsy(self, monkeypatch, raw):
        monkeypatch.setenv("TEST_BOOL", raw)
        assert _safe_bool("TEST_BOOL", "true") is False

    def test_safe_bool_rejects_garbage(self, monkeypatch):
        monkeypatch.setenv("TEST_BOOL", "maybe")
        with pytest.raises(ValueError, match="TEST_BOOL"):
            _safe_bool("TEST_BOOL", "false")
