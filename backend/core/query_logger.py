# backend/core/query_logger.py

import logging
import time
from typing import Any, Dict

from sqlalchemy import event
from sqlalchemy.engine import Engine

from core.config import get_settings

logger = logging.getLogger("sqlalchemy.engine")
query_logger = logging.getLogger("query_performance")


class QueryLogger:
    """Tracks query timings and reports slow statements"""

    def __init__(self, slow_query_threshold: float = 1.0):
        self.slow_query_threshold = slow_query_threshold
        self.query_stats: Dict[str, Any] = {
            "total_queries": 0,
            "slow_queries": 0,
            "total_time": 0.0,
        }

    def record(self, statement: str, elapsed: float) -> None:
        self.query_stats["total_queries"] += 1
        self.query_stats["total_time"] += elapsed

        if elapsed >= self.slow_query_threshold:
            self.query_stats["slow_queries"] += 1
            query_logger.warning(
                f"Slow query ({elapsed:.3f}s): {' '.join(statement.split())[:500]}"
            )

    def reset_stats(self):
        """Reset query statistics"""
        self.query_stats = {
            "total_queries": 0,
            "slow_queries": 0,
            "total_time": 0.0,
        }


query_logger_instance = QueryLogger()


def setup_query_logging(engine: Engine) -> QueryLogger:
    """Attach timing hooks to an engine."""
    settings = get_settings()
    query_logger_instance.slow_query_threshold = settings.slow_query_threshold_seconds

    if settings.log_sql_queries:
        logger.setLevel(logging.INFO)

    @event.listens_for(engine, "before_cursor_execute")
    def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("query_start_time", []).append(time.perf_counter())

    @event.listens_for(engine, "after_cursor_execute")
    def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        started = conn.info["query_start_time"].pop(-1)
        query_logger_instance.record(statement, time.perf_counter() - started)

    return query_logger_instance
