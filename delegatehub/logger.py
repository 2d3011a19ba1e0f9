"""
Logging for delegatehub.

Messages go to stderr and a dated file under ``logs/``; keyword context is
appended as JSON. The logger also keeps per-source query counters for the
endpoints a session talks to (subgraph, hub, ens, rpc) and can print a
summary of them when a command finishes.
"""

import json
import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

SOURCES = ("subgraph", "hub", "ens", "rpc")


@dataclass
class SourceStats:
    attempts: int = 0
    successes: int = 0
    failures: int = 0
    errors: Dict[str, int] = field(default_factory=dict)

    @property
    def success_rate(self) -> float:
        if not self.attempts:
            return 0.0
        return round(self.successes / self.attempts, 3)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "attempts": self.attempts,
            "successes": self.successes,
            "failures": self.failures,
            "success_rate": self.success_rate,
            "errors": dict(self.errors),
        }


class StructuredLogger:
    """Console and file logger carrying query counters per source."""

    def __init__(
        self,
        name: str = "delegatehub",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Args:
            name: Logger name
            level: Console log level (DEBUG, INFO, WARNING, ERROR)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to stderr
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()

        self.sources: Dict[str, SourceStats] = {source: SourceStats() for source in SOURCES}

        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_handler.setFormatter(logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"delegatehub_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        self._log(logging.ERROR, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Query counters

    def _stats(self, source: str) -> SourceStats:
        return self.sources.setdefault(source, SourceStats())

    def record_query_attempt(self, source: str):
        """Count a request sent to ``source`` (subgraph, hub, ens, rpc)."""
        self._stats(source).attempts += 1

    def record_query_success(self, source: str):
        self._stats(source).successes += 1

    def record_query_failure(self, source: str, error_type: str):
        stats = self._stats(source)
        stats.failures += 1
        stats.errors[error_type] = stats.errors.get(error_type, 0) + 1

    def get_metrics(self) -> dict:
        """Snapshot of the counters; mutating it does not touch the logger."""
        sources = {name: stats.as_dict() for name, stats in self.sources.items()}
        errors_by_type: Dict[str, int] = {}
        for stats in self.sources.values():
            for error_type, count in stats.errors.items():
                errors_by_type[error_type] = errors_by_type.get(error_type, 0) + count
        return {
            "queries_sent": sum(s.attempts for s in self.sources.values()),
            "queries_successful": sum(s.successes for s in self.sources.values()),
            "queries_failed": sum(s.failures for s in self.sources.values()),
            "errors_by_type": errors_by_type,
            "sources": sources,
        }

    def log_metrics_summary(self):
        """Log one line per source that saw traffic, with its failure causes."""
        metrics = self.get_metrics()
        if not metrics["queries_sent"]:
            return

        self.info("=== Query Session Metrics ===")
        self.info(
            f"Queries: {metrics['queries_successful']}/{metrics['queries_sent']} "
            f"({metrics['queries_failed']} failed)"
        )
        for name, stats in metrics["sources"].items():
            if not stats["attempts"]:
                continue
            self.info(
                f"  {name}: {stats['successes']}/{stats['attempts']} "
                f"({stats['success_rate'] * 100:.1f}% success)"
            )
            for error_type, count in stats["errors"].items():
                self.info(f"    {error_type}: {count}")


_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "delegatehub",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Arguments only take effect on the first call (or the first after
    ``reset_logger``).
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Drop the global logger so the next get_logger() builds a fresh one."""
    global _global_logger
    _global_logger = None
