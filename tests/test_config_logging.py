"""
Test suite for configuration and structured logging

Tests environment-driven settings and the JSON log records emitted by the
engine.
"""

import io
import json
import logging
import pytest
from pydantic import ValidationError

from loan_tradeoff.amount import Amount
from loan_tradeoff.config import TradeoffConfig, get_config, reload_config
from loan_tradeoff.exceptions import MissingStartDateError
from loan_tradeoff.logging_config import JSONFormatter, setup_logging, get_logger, log_action
from loan_tradeoff.tradeoff import TradeoffComparison


class ListHandler(logging.Handler):
    """Collects records for assertions"""

    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def env(monkeypatch):
    """Environment overrides that are undone and reloaded after the test"""
    yield monkeypatch
    monkeypatch.undo()
    reload_config()


@pytest.fixture
def captured():
    """Capture every record from the tradeoff engine at DEBUG"""
    logger = logging.getLogger("loan_tradeoff")
    handler = ListHandler()
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    yield handler
    logger.removeHandler(handler)
    logger.setLevel(previous_level)


class TestTradeoffConfig:
    """Test settings loading"""

    def test_defaults(self, env):
        """Test default values"""
        for name in ("TRADEOFF_DEFAULT_PERIOD_DAYS", "TRADEOFF_DEFAULT_MODE", "TRADEOFF_API_PORT"):
            env.delenv(name, raising=False)
        settings = TradeoffConfig(_env_file=None)
        assert settings.default_period_days == 31
        assert settings.default_mode == "idealized"
        assert settings.log_format == "json"
        assert settings.api_port == 8090

    def test_environment_override(self, env):
        """Test TRADEOFF_ variables override defaults"""
        env.setenv("TRADEOFF_DEFAULT_PERIOD_DAYS", "15")
        settings = reload_config()
        assert settings.default_period_days == 15
        assert get_config() is settings
        assert TradeoffComparison().period_days == 15

    def test_invalid_period_days(self, env):
        """Test non-positive period days are rejected"""
        env.setenv("TRADEOFF_DEFAULT_PERIOD_DAYS", "0")
        with pytest.raises(ValidationError):
            TradeoffConfig(_env_file=None)

    def test_invalid_mode(self, env):
        """Test unknown default modes are rejected"""
        env.setenv("TRADEOFF_DEFAULT_MODE", "optimistic")
        with pytest.raises(ValidationError):
            TradeoffConfig(_env_file=None)

    def test_default_mode_used_by_simulator(self, env):
        """Test scenarios without a mode use the configured default"""
        env.setenv("TRADEOFF_DEFAULT_MODE", "real-world")
        reload_config()
        with pytest.raises(MissingStartDateError):
            TradeoffComparison().simulate_scenario(1000, 3)


class TestJSONFormatter:
    """Test JSON log formatting"""

    def test_format_structured_fields(self):
        """Test action, resource and extra data are serialized"""
        record = logging.LogRecord("loan_tradeoff.test", logging.INFO, __file__, 1,
                                   "Scenario simulated", (), None)
        record.action = "simulate_scenario"
        record.resource = "scenario"
        record.extra = {"net": Amount("1")}

        entry = json.loads(JSONFormatter().format(record))
        assert entry["level"] == "INFO"
        assert entry["logger"] == "loan_tradeoff.test"
        assert entry["message"] == "Scenario simulated"
        assert entry["action"] == "simulate_scenario"
        assert entry["resource"] == "scenario"
        assert entry["extra"]["net"] == "1.00000000000000000000"
        assert "correlation_id" not in entry

    def test_format_exception(self):
        """Test exception info is included"""
        try:
            raise ValueError("boom")
        except ValueError:
            import sys
            record = logging.LogRecord("loan_tradeoff.test", logging.ERROR, __file__, 1,
                                       "failed", (), sys.exc_info())

        entry = json.loads(JSONFormatter().format(record))
        assert "ValueError: boom" in entry["exception"]


class TestSetupLogging:
    """Test logger configuration"""

    def test_single_handler(self):
        """Test repeated setup does not stack handlers"""
        setup_logging(logger_name="loan_tradeoff_setup_test")
        logger = setup_logging(level="DEBUG", logger_name="loan_tradeoff_setup_test")
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
        assert logger.propagate is False

    def test_text_format(self):
        """Test the plain text formatter"""
        logger = setup_logging(logger_name="loan_tradeoff_text_test", log_format="text")
        assert not isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_log_file(self, tmp_path):
        """Test logs can be written to a file"""
        log_file = tmp_path / "tradeoff.log"
        logger = setup_logging(logger_name="loan_tradeoff_file_test", log_file=str(log_file))
        log_action(logger, "info", "hello", action="greet")
        logger.handlers[0].flush()

        entry = json.loads(log_file.read_text().strip())
        assert entry["action"] == "greet"


class TestLogAction:
    """Test structured log helper"""

    def test_respects_level(self):
        """Test records below the logger level are not emitted"""
        logger = get_logger("loan_tradeoff_level_test")
        handler = ListHandler()
        logger.addHandler(handler)
        logger.setLevel(logging.WARNING)
        try:
            log_action(logger, "debug", "hidden")
            log_action(logger, "warning", "shown", action="warn", extra={"a": 1})
        finally:
            logger.removeHandler(handler)

        assert [r.getMessage() for r in handler.records] == ["shown"]
        assert handler.records[0].action == "warn"
        assert handler.records[0].extra == {"a": 1}

    def test_stream_output(self):
        """Test records reach a stream as JSON"""
        stream = io.StringIO()
        logger = get_logger("loan_tradeoff_stream_test")
        handler = logging.StreamHandler(stream)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        try:
            log_action(logger, "info", "posted", correlation_id="abc-123")
        finally:
            logger.removeHandler(handler)

        assert json.loads(stream.getvalue())["correlation_id"] == "abc-123"


class TestEngineLogging:
    """Test the records emitted by simulations"""

    def test_scenario_records(self, captured):
        """Test one info record per scenario and one debug record per period"""
        TradeoffComparison(period_days=31).simulate_scenario(1000, 3, loan_rate=0.05, deposit_apy=0.04)

        scenario_records = [r for r in captured.records if getattr(r, "action", None) == "simulate_scenario"]
        period_records = [r for r in captured.records if getattr(r, "action", None) == "settle_period"]
        assert len(scenario_records) == 1
        assert scenario_records[0].levelno == logging.INFO
        assert len(period_records) == 3
        assert all(r.levelno == logging.DEBUG for r in period_records)

    def test_month_end_posting_records(self, captured):
        """Test deposits log each month-end posting"""
        TradeoffComparison().simulate_scenario(1000, 2, deposit_apy=0.04,
                                               mode="real-world", start_date="2024-01-15")

        postings = [r for r in captured.records if getattr(r, "action", None) == "post_interest"]
        assert [r.extra["posting_date"] for r in postings] == ["2024-01-31", "2024-02-29"]
