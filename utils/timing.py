"""
Performance Timing Utilities

Provides utilities for measuring and tracking the latency of remote capture calls.
"""

import time
import logging
from typing import Optional, Dict, List, Any
from contextlib import contextmanager
from datetime import datetime
from pydantic import BaseModel, Field
import statistics

logger = logging.getLogger(__name__)


class TimingResult(BaseModel):
    """
    Result of a timed operation.

    Attributes:
        operation_name: Name of the operation that was timed
        execution_time: Time taken to execute the operation in seconds
        timestamp: When the operation was executed
        success: Whether the operation completed successfully
        metadata: Additional metadata about the operation
    """
    operation_name: str
    execution_time: float = Field(description="Execution time in seconds")
    timestamp: datetime = Field(default_factory=datetime.now)
    success: bool = True
    metadata: Dict[str, Any] = Field(default_factory=dict)


class OperationTimingStats(BaseModel):
    """
    Aggregated timing statistics for multiple calls of the same operation.
    """
    operation_name: str
    total_operations: int = 0
    successful_operations: int = 0
    failed_operations: int = 0
    average_execution_time: float = 0.0
    median_execution_time: float = 0.0
    min_execution_time: float = 0.0
    max_execution_time: float = 0.0

    @property
    def success_rate(self) -> float:
        """Success rate as a percentage."""
        if self.total_operations == 0:
            return 0.0
        return (self.successful_operations / self.total_operations) * 100.0


class PerformanceTimer:
    """
    Context manager for timing operations and collecting performance statistics.

    History is bounded so that a long-lived client does not grow without limit.
    """

    def __init__(self, enable_logging: bool = True, max_history: int = 1000):
        """
        Initialize the performance timer.

        Args:
            enable_logging: Whether to log timing results
            max_history: Maximum number of timing results kept in memory
        """
        self._enable_logging = enable_logging
        self._max_history = max_history
        self._timing_history: List[TimingResult] = []

    @contextmanager
    def time_operation(
        self,
        operation_name: str,
        metadata: Optional[Dict[str, Any]] = None
    ):
        """
        Context manager for timing an operation.

        Args:
            operation_name: Name of the operation being timed
            metadata: Additional metadata to store with the timing result

        Yields:
            TimingResult object that will be populated with timing data
        """
        start_time = time.perf_counter()
        result = TimingResult(
            operation_name=operation_name,
            execution_time=0.0,
            metadata=metadata or {}
        )

        try:
            yield result
            result.success = True
        except Exception:
            result.success = False
            raise
        finally:
            result.execution_time = time.perf_counter() - start_time

            self._timing_history.append(result)
            if len(self._timing_history) > self._max_history:
                del self._timing_history[0]

            if self._enable_logging:
                status = "succeeded" if result.success else "failed"
                logger.debug(
                    f"Operation '{operation_name}' {status} in {result.execution_time*1000:.2f}ms"
                )

    def get_operation_stats(self, operation_name: str) -> Optional[OperationTimingStats]:
        """
        Get aggregated statistics for a specific operation type.

        Args:
            operation_name: Name of the operation to get stats for

        Returns:
            OperationTimingStats with statistics, or None if no operations found
        """
        operation_results = [r for r in self._timing_history if r.operation_name == operation_name]

        if not operation_results:
            return None

        execution_times = [r.execution_time for r in operation_results]
        successful = [r for r in operation_results if r.success]

        return OperationTimingStats(
            operation_name=operation_name,
            total_operations=len(operation_results),
            successful_operations=len(successful),
            failed_operations=len(operation_results) - len(successful),
            average_execution_time=statistics.mean(execution_times),
            median_execution_time=statistics.median(execution_times),
            min_execution_time=min(execution_times),
            max_execution_time=max(execution_times)
        )
