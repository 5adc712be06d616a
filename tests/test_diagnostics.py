"""Tests for the diagnostic sink."""

import logging

from dbrepo.diagnostics import DiagnosticSink


class TestDiagnosticSink:
    """Test diagnostics are kept and forwarded to the logger."""

    def test_records_with_context(self):
        sink = DiagnosticSink()
        sink.info("built", table="T", column="C")
        sink.warning("degraded", table="T", column="D")

        assert [d.message for d in sink.records] == ["built", "degraded"]
        assert [d.column for d in sink.warnings] == ["D"]
        assert sink.warnings[0].level_name == "WARNING"

    def test_forwards_to_given_logger(self, caplog):
        sink = DiagnosticSink(logging.getLogger("tests.sink"))
        with caplog.at_level(logging.DEBUG, logger="tests.sink"):
            sink.error("failed")

        assert caplog.records[-1].name == "tests.sink"
        assert caplog.records[-1].levelno == logging.ERROR

    def test_independent_sinks(self):
        """Sinks are plain values; nothing is shared between them."""
        first, second = DiagnosticSink(), DiagnosticSink()
        first.warning("only here")
        assert second.records == []

    def test_clear(self):
        sink = DiagnosticSink()
        sink.debug("x")
        sink.clear()
        assert sink.records == []
