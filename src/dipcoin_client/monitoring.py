"""
Operation statistics for DipCoin client.

The SDK facade records the outcome and latency of every public call here,
both in aggregate and per operation name.
"""

import time
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Optional


@dataclass(frozen=True)
class OperationRecord:
    """Outcome of one SDK call."""
    operation: str
    success: bool
    duration_ms: float
    recorded_at: float
    error: Optional[str] = None


@dataclass
class Statistics:
    """Running totals over a set of operation records."""
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    total_duration_ms: float = 0.0
    max_duration_ms: float = 0.0
    last_error: Optional[str] = None

    @property
    def avg_duration_ms(self) -> float:
        if not self.total_requests:
            return 0.0
        return self.total_duration_ms / self.total_requests

    @property
    def success_rate(self) -> float:
        if not self.total_requests:
            return 0.0
        return self.successful_requests / self.total_requests

    def add(self, record: OperationRecord) -> None:
        self.total_requests += 1
        self.total_duration_ms += record.duration_ms
        if record.duration_ms > self.max_duration_ms:
            self.max_duration_ms = record.duration_ms

        if record.success:
            self.successful_requests += 1
        else:
            self.failed_requests += 1
            self.last_error = record.error


class PerformanceMonitor:
    """Keeps aggregate and per-operation statistics plus a bounded history."""

    def __init__(self, max_history: int = 1000):
        self._totals = Statistics()
        self._by_operation: Dict[str, Statistics] = {}
        self._history: Deque[OperationRecord] = deque(maxlen=max_history)

    def record(
        self,
        operation: str,
        success: bool,
        duration_ms: float,
        error: Optional[str] = None,
    ) -> OperationRecord:
        record = OperationRecord(
            operation=operation,
            success=success,
            duration_ms=duration_ms,
            recorded_at=time.time(),
            error=error,
        )
        self._totals.add(record)
        self._by_operation.setdefault(operation, Statistics()).add(record)
        self._history.append(record)
        return record

    @property
    def statistics(self) -> Statistics:
        """Totals across all operations."""
        return self._totals

    def get_operation_stats(self, operation: str) -> Statistics:
        """Totals for one operation; empty if it was never called."""
        return self._by_operation.get(operation, Statistics())

    def get_recent_requests(self, count: int = 10) -> List[OperationRecord]:
        """Most recent records, oldest first."""
        if count <= 0:
            return []
        return list(self._history)[-count:]

    def reset(self) -> None:
        self._totals = Statistics()
        self._by_operation.clear()
        self._history.clear()
