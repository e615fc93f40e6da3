import logging
from unittest.mock import MagicMock, Mock, patch

from opencycle_admin.utils.logger import ROUTED_LOGGERS, InterceptHandler, setup_logging


def _record(name: str, level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name=name,
        level=level,
        pathname="test.py",
        lineno=1,
        msg="Query took %sms",
        args=(12,),
        exc_info=None,
    )


class TestInterceptHandler:
    def test_is_logging_handler(self):
        assert isinstance(InterceptHandler(), logging.Handler)

    def test_drops_opentelemetry_records(self):
        with patch("opencycle_admin.utils.logger.logger") as mock_logger:
            InterceptHandler().emit(_record("opentelemetry.exporter.otlp"))

        mock_logger.opt.assert_not_called()

    def test_forwards_formatted_message(self):
        with patch("opencycle_admin.utils.logger.logger") as mock_logger:
            mock_opt = MagicMock()
            mock_logger.opt.return_value = mock_opt
            mock_logger.level.return_value = Mock()
            mock_logger.level.return_value.name = "INFO"

            InterceptHandler().emit(_record("sqlalchemy.engine"))

        mock_opt.log.assert_called_once_with("INFO", "Query took 12ms")

    def test_unknown_level_falls_back_to_number(self):
        record = _record("uvicorn", level=25)
        record.levelname = "NOTICE"

        with patch("opencycle_admin.utils.logger.logger") as mock_logger:
            mock_opt = MagicMock()
            mock_logger.opt.return_value = mock_opt
            mock_logger.level.side_effect = ValueError("unknown level")

            InterceptHandler().emit(record)

        mock_opt.log.assert_called_once_with(25, "Query took 12ms")


class TestSetupLogging:
    def test_routes_standard_loggers(self, monkeypatch):
        monkeypatch.delenv("OTEL_EXPORTER_OTLP_ENDPOINT", raising=False)

        with patch("opencycle_admin.utils.logger.logger"):
            setup_logging("warning")

        assert logging.root.level == logging.WARNING
        for name in ROUTED_LOGGERS:
            routed = logging.getLogger(name)
            assert routed.propagate is False
            assert any(isinstance(h, InterceptHandler) for h in routed.handlers)

    def test_console_sink_uses_level(self, monkeypatch):
        monkeypatch.delenv("OTEL_EXPORTER_OTLP_ENDPOINT", raising=False)
        monkeypatch.setenv("LOG_LEVEL", "debug")

        with patch("opencycle_admin.utils.logger.logger") as mock_logger:
            setup_logging()

        mock_logger.remove.assert_called_once()
        assert mock_logger.add.call_count == 1
        assert mock_logger.add.call_args.kwargs["level"] == "DEBUG"

    def test_otlp_sink_added_when_endpoint_set(self, monkeypatch):
        monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://collector:4317")

        with (
            patch("opencycle_admin.utils.logger.logger"),
            patch("opencycle_admin.utils.logger._add_otlp_sink") as add_sink,
        ):
            setup_logging("INFO")

        add_sink.assert_called_once_with("http://collector:4317", "INFO")

    def test_otlp_failure_does_not_raise(self, monkeypatch, capsys):
        monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://collector:4317")

        with (
            patch("opencycle_admin.utils.logger.logger"),
            patch(
                "opencycle_admin.utils.logger._add_otlp_sink",
                side_effect=RuntimeError("grpc missing"),
            ),
        ):
            setup_logging("INFO")

        assert "OTLP log export setup failed: grpc missing" in capsys.readouterr().err
