"""
Tests for the parameterless entry point.
"""
import pytest

import main as main_module
from config import STRATEGY_CLEAR, STRATEGY_SWAP
from core.errors import ConfigError, FetchError

pytestmark = pytest.mark.unit


@pytest.fixture
def entry(monkeypatch, sync_config):
    """Point main() at ``sync_config`` and record which mode it runs."""
    calls = []
    monkeypatch.setattr(main_module.SyncConfig, "from_env", classmethod(lambda cls: sync_config))
    monkeypatch.setattr(main_module, "run_clear_mode", lambda config: calls.append((STRATEGY_CLEAR, config)))
    monkeypatch.setattr(main_module, "run_swap_mode", lambda config: calls.append((STRATEGY_SWAP, config)))
    return calls


@pytest.mark.parametrize("strategy", [STRATEGY_CLEAR, STRATEGY_SWAP])
def test_dispatches_on_configured_strategy(entry, sync_config, strategy):
    sync_config.strategy = strategy

    assert main_module.main() == 0
    assert entry == [(strategy, sync_config)]


def test_run_failure_propagates(monkeypatch, entry):
    def failing(config):
        raise FetchError(500, "boom")

    monkeypatch.setattr(main_module, "run_swap_mode", failing)

    with pytest.raises(FetchError):
        main_module.main()


def test_invalid_config_stops_before_running(entry, sync_config):
    sync_config.source_url = ""

    with pytest.raises(ConfigError):
        main_module.main()

    assert entry == []


def test_keyboard_interrupt_is_reraised(monkeypatch, entry):
    def interrupted(config):
        raise KeyboardInterrupt

    monkeypatch.setattr(main_module, "run_swap_mode", interrupted)

    with pytest.raises(KeyboardInterrupt):
        main_module.main()
