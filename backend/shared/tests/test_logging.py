import json
import logging
from datetime import UTC, datetime
from enum import Enum
from unittest.mock import patch

import pytest
import structlog

from shared.logging import _serialize_enums, setup_logging
from shiritori.logic.enums import Difficulty, EliminationReason


@pytest.fixture(autouse=True)
def _reset_root_logger():
    """Close and detach the handlers setup_logging installed."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        handler.close()
        root.removeHandler(handler)


@pytest.fixture
def file_logging():
    """Let setup_logging open a log file even though pytest is running."""
    with patch("shared.logging._is_test", return_value=False):
        yield


def _file_handlers() -> list[logging.FileHandler]:
    return [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]


class TestHandlers:
    def test_stdout_only_by_default(self):
        assert setup_logging() is None

        (handler,) = logging.getLogger().handlers
        assert isinstance(handler, logging.StreamHandler)
        assert isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)

    def test_repeated_setup_replaces_handlers(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_log_dir_ignored_under_pytest(self, tmp_path):
        assert setup_logging(log_dir=tmp_path / "logs") is None
        assert not (tmp_path / "logs").exists()
        assert _file_handlers() == []

    @pytest.mark.usefixtures("file_logging")
    def test_timestamped_file_in_created_dir(self, tmp_path):
        log_dir = tmp_path / "logs" / "shiritori"
        with patch("shared.logging.datetime") as mock_dt:
            mock_dt.now.return_value = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)
            log_path = setup_logging(log_dir=str(log_dir))

        assert log_path == log_dir / "2026-01-02_03-04-05.log"
        (handler,) = _file_handlers()
        assert handler.baseFilename == str(log_path)


class TestLevels:
    def test_default_level_is_info(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        setup_logging()
        assert logging.getLogger().level == logging.INFO

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        setup_logging(level=logging.DEBUG)
        assert logging.getLogger().level == logging.DEBUG

    def test_level_from_env_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        setup_logging()
        assert logging.getLogger().level == logging.WARNING

    @pytest.mark.parametrize(("var", "value"), [("LOG_LEVEL", "bogus"), ("LOG_FORMAT", "xml")])
    def test_invalid_env_raises(self, monkeypatch, var, value):
        monkeypatch.setenv(var, value)
        with pytest.raises(ValueError, match=f"Invalid {var}"):
            setup_logging()


@pytest.mark.usefixtures("file_logging")
class TestFileOutput:
    def test_console_format_keeps_japanese_text(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "console")
        log_path = setup_logging(log_dir=tmp_path)

        structlog.get_logger("test.console").info("word accepted", word="りんご")

        content = log_path.read_text(encoding="utf-8")
        assert "word accepted" in content
        assert "りんご" in content

    def test_json_format_with_context_and_enums(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "json")
        log_path = setup_logging(log_dir=tmp_path)

        structlog.contextvars.bind_contextvars(session_id="session-1")
        structlog.get_logger("test.json").info(
            "participant eliminated",
            reason=EliminationReason.ENDS_WITH_N,
            word="みかん",
            remaining=("p1", "p3"),
        )

        parsed = json.loads(log_path.read_text(encoding="utf-8").splitlines()[0])
        assert parsed["event"] == "participant eliminated"
        assert parsed["session_id"] == "session-1"
        assert parsed["reason"] == "ends_with_n"
        assert parsed["word"] == "みかん"
        assert parsed["remaining"] == ["p1", "p3"]
        assert parsed["level"] == "info"


class TestSerializeEnums:
    class _Color(Enum):
        RED = "red"

    def test_top_level_enum(self):
        assert _serialize_enums(None, "", {"difficulty": Difficulty.HARD}) == {"difficulty": "hard"}

    def test_enum_keys_and_values_inside_dict(self):
        result = _serialize_enums(None, "", {"counts": {Difficulty.EASY: 3, "x": self._Color.RED}})
        assert result["counts"] == {"easy": 3, "x": "red"}

    def test_containers_become_lists(self):
        result = _serialize_enums(None, "", {"words": ("りんご", "ごりら"), "ids": frozenset({"p1"})})
        assert result == {"words": ["りんご", "ごりら"], "ids": ["p1"]}

    def test_plain_values_unchanged(self):
        assert _serialize_enums(None, "", {"count": 42, "name": "test"}) == {"count": 42, "name": "test"}
