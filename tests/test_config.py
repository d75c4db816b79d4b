"""
Tests for settings, logging setup and the global store.
"""

import json
import logging

import structlog

from ecochallenge.config import BURN_ADDRESS, Settings, get_limits_config
from ecochallenge.database import StateStore, close_store, get_store
from ecochallenge.utils import request_context, setup_logging


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.max_challenges == 1000
        assert settings.default_creation_fee == 1000
        assert settings.burn_address == BURN_ADDRESS
        assert settings.legacy_not_completed_error is False

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("ECOCHALLENGE_MAX_CHALLENGES", "5")
        monkeypatch.setenv("ECOCHALLENGE_LEGACY_NOT_COMPLETED_ERROR", "true")
        settings = Settings(_env_file=None)
        assert settings.max_challenges == 5
        assert settings.legacy_not_completed_error is True

    def test_limits(self):
        limits = get_limits_config()
        assert limits.max_name_length == 100
        assert limits.max_description_length == 500
        assert limits.max_grace_period == 30
        assert (limits.min_difficulty, limits.max_difficulty) == (1, 10)


class TestStore:
    """Tests for the global state store."""

    def test_global_store_is_shared(self):
        close_store()
        try:
            assert get_store() is get_store()
        finally:
            close_store()

    def test_clear(self):
        store = StateStore(creation_fee=5)
        store.next_challenge_id = 3
        store.challenges_by_name["x"] = 0
        store.clear()
        assert store.next_challenge_id == 0
        assert store.challenges_by_name == {}
        assert store.authority.authority_contract is None


class TestLogging:
    """Tests for setup_logging."""

    def teardown_method(self):
        structlog.reset_defaults()
        root = logging.getLogger()
        for handler in list(root.handlers):
            if type(handler) in (logging.StreamHandler, logging.FileHandler):
                root.removeHandler(handler)
                handler.close()

    def test_console_logging(self, capsys):
        setup_logging(Settings(_env_file=None, log_level="DEBUG"))
        assert logging.getLogger().level == logging.DEBUG
        assert "Logging configured" in capsys.readouterr().out

    def test_file_logging(self, tmp_path):
        settings = Settings(_env_file=None, log_to_file=True, log_dir=str(tmp_path / "logs"))
        setup_logging(settings)
        structlog.get_logger("ecochallenge.test").info("Challenge created", challenge_id=0)
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = (tmp_path / "logs" / "ecochallenge.log").read_text().splitlines()
        events = [json.loads(line) for line in lines]
        assert events[-1]["event"] == "Challenge created"
        assert events[-1]["challenge_id"] == 0

    def test_level_override(self, capsys):
        """An explicit level wins over the configured one."""
        setup_logging(Settings(_env_file=None, log_level="INFO"), level="warning")
        assert logging.getLogger().level == logging.WARNING

        structlog.get_logger("ecochallenge.test").info("Challenge created")
        structlog.get_logger("ecochallenge.test").warning("Join rejected")
        out = capsys.readouterr().out
        assert "Challenge created" not in out
        assert "Join rejected" in out

    def test_request_context_binds_caller(self, tmp_path):
        """Events inside a request carry the bound caller; later ones do not."""
        settings = Settings(_env_file=None, log_to_file=True, log_dir=str(tmp_path))
        setup_logging(settings)
        logger = structlog.get_logger("ecochallenge.test")

        with request_context("ST1TEST", challenge_id=4):
            logger.info("Participant joined")
        logger.info("Outside request")
        for handler in logging.getLogger().handlers:
            handler.flush()

        events = [json.loads(line) for line in (tmp_path / "ecochallenge.log").read_text().splitlines()]
        joined = next(e for e in events if e["event"] == "Participant joined")
        outside = next(e for e in events if e["event"] == "Outside request")
        assert joined["caller"] == "ST1TEST"
        assert joined["challenge_id"] == 4
        assert "caller" not in outside
