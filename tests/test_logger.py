"""
Tests for logger functionality.
"""

import pytest
from delegatehub.logger import SOURCES, StructuredLogger, get_logger, reset_logger


@pytest.fixture
def logger(tmp_path):
    return StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)


class TestStructuredLogger:
    """Test structured logging functionality."""

    def test_logger_creation(self, logger):
        assert logger.logger.name == "test"
        assert tuple(logger.sources) == SOURCES
        assert logger.get_metrics()["queries_sent"] == 0

    def test_log_with_context(self, tmp_path):
        """Context is appended to the message as JSON."""
        logger = StructuredLogger(
            name="test-context",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.error("Failed to fetch delegates", order_by="delegatedVotes", status=502)

        content = next(tmp_path.glob("*.log")).read_text()
        assert "Failed to fetch delegates" in content
        assert '"order_by": "delegatedVotes"' in content
        assert '"status": 502' in content


class TestQueryMetrics:
    def test_metrics_tracking(self, logger):
        logger.record_query_attempt("subgraph")
        logger.record_query_success("subgraph")

        logger.record_query_attempt("hub")
        logger.record_query_failure("hub", "Timeout")

        metrics = logger.get_metrics()

        assert metrics["queries_sent"] == 2
        assert metrics["queries_successful"] == 1
        assert metrics["queries_failed"] == 1
        assert metrics["errors_by_type"] == {"Timeout": 1}
        assert metrics["sources"]["subgraph"]["success_rate"] == 1.0
        assert metrics["sources"]["hub"]["success_rate"] == 0.0

    def test_failures_are_recorded_per_source(self, logger):
        logger.record_query_attempt("hub")
        logger.record_query_failure("hub", "Timeout")
        logger.record_query_attempt("ens")
        logger.record_query_failure("ens", "Timeout")
        logger.record_query_attempt("ens")
        logger.record_query_failure("ens", "GraphQLError")

        sources = logger.get_metrics()["sources"]

        assert sources["hub"]["failures"] == 1
        assert sources["hub"]["errors"] == {"Timeout": 1}
        assert sources["ens"]["failures"] == 2
        assert sources["ens"]["errors"] == {"Timeout": 1, "GraphQLError": 1}
        assert sources["subgraph"]["failures"] == 0
        assert logger.get_metrics()["errors_by_type"] == {"Timeout": 2, "GraphQLError": 1}

    def test_success_rate_calculation(self, logger):
        for _ in range(3):
            logger.record_query_attempt("ens")
        logger.record_query_success("ens")
        logger.record_query_success("ens")

        success_rate = logger.get_metrics()["sources"]["ens"]["success_rate"]

        assert success_rate == pytest.approx(0.667, rel=0.01)

    def test_get_metrics_returns_a_snapshot(self, logger):
        logger.record_query_attempt("rpc")
        logger.record_query_failure("rpc", "ValueError")

        snapshot = logger.get_metrics()
        snapshot["sources"]["rpc"]["attempts"] = 99
        snapshot["sources"]["rpc"]["errors"]["ValueError"] = 99
        snapshot["errors_by_type"].clear()

        assert logger.sources["rpc"].attempts == 1
        assert logger.sources["rpc"].errors == {"ValueError": 1}
        assert logger.get_metrics()["errors_by_type"] == {"ValueError": 1}

    def test_unlisted_source_is_tracked(self, logger):
        logger.record_query_attempt("archive")
        logger.record_query_success("archive")

        assert logger.get_metrics()["sources"]["archive"]["successes"] == 1

    def test_metrics_summary(self, tmp_path):
        logger = StructuredLogger(
            name="test-summary",
            log_dir=tmp_path,
            enable_console=False,
        )
        logger.record_query_attempt("subgraph")
        logger.record_query_success("subgraph")
        logger.record_query_attempt("hub")
        logger.record_query_failure("hub", "HTTPError_500")

        logger.log_metrics_summary()

        content = next(tmp_path.glob("*.log")).read_text()
        assert "Queries: 1/2 (1 failed)" in content
        assert "subgraph: 1/1 (100.0% success)" in content
        assert "hub: 0/1 (0.0% success)" in content
        assert "HTTPError_500: 1" in content
        assert "ens:" not in content
        assert content.index("subgraph: 1/1") < content.index("hub: 0/1")

    def test_summary_skipped_without_traffic(self, tmp_path):
        logger = StructuredLogger(name="test-quiet", log_dir=tmp_path, enable_console=False)

        logger.log_metrics_summary()

        assert "Session Metrics" not in next(tmp_path.glob("*.log")).read_text()


class TestGlobalLogger:
    """Test global logger singleton."""

    def test_get_logger_singleton(self, tmp_path):
        reset_logger()

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger2 = get_logger()

        assert logger1 is logger2

    def test_reset_logger(self, tmp_path):
        reset_logger()

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger1.record_query_attempt("subgraph")

        reset_logger()

        logger2 = get_logger(log_dir=tmp_path, enable_console=False)

        assert logger2.get_metrics()["queries_sent"] == 0
