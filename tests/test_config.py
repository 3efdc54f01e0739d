"""
Tests for settings loading and validation.
"""
import pytest

from config import Settings
from conftest import NEWS_TIME
from models import ManagementMode


class TestDefaults:

    def test_scheduled_event(self):
        event = Settings().scheduled_event()
        assert event.time == NEWS_TIME
        assert event.seconds_before == 10
        assert event.close_after_seconds == 3600

    def test_specs(self):
        settings = Settings(trailing=True, stop_loss=20, take_profit=60, risk=2.5)
        assert settings.fixed_stops().stop_loss == 20
        assert settings.fixed_stops().take_profit == 60
        assert settings.risk_spec().risk_percent == 2.5
        assert settings.management_mode() == ManagementMode(trailing=True)


class TestFromEnv:

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("NEWS_SYMBOL", "GBPUSD")
        monkeypatch.setenv("NEWS_HOUR", "12")
        monkeypatch.setenv("NEWS_SELL", "false")
        monkeypatch.setenv("NEWS_RISK", "0.5")
        settings = Settings.from_env()
        assert settings.symbol == "GBPUSD"
        assert settings.hour == 12
        assert settings.sell is False
        assert settings.risk == 0.5

    def test_empty_value_keeps_default(self, monkeypatch):
        monkeypatch.setenv("NEWS_STOP_LOSS", "")
        assert Settings.from_env().stop_loss == 15


class TestValidation:

    @pytest.mark.parametrize("kwargs", [
        {"month": 13},
        {"day": 31, "month": 4},
        {"year": 1969},
        {"stop_loss": -1},
        {"risk": -0.1},
        {"seconds_before": 0},
        {"atr_period": 0},
        {"lots": 0.001},
    ])
    def test_out_of_range(self, kwargs):
        with pytest.raises(ValueError):
            Settings(**kwargs)
