#!/usr/bin/env python3
"""
Runs the four projections (costs, revenue, hardware sizing, validation)
for a configuration snapshot, either inline or on a background worker.

The background runner tags each request with a monotonically increasing
sequence number; a result is accepted only if no newer request has been
submitted since, so the latest snapshot always wins.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, Future
from functools import partial
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from estimator.cost_engine import Costs, calculate_costs
from estimator.revenue_engine import RevenueCalculations, calculate_station_revenue
from estimator.hardware import HardwareRequirements, calculate_hardware_requirements
from estimator.validation import ValidationResult, validate_settings, has_validation_errors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Estimate:
    """All derived projections for one configuration snapshot"""
    costs: Costs
    revenue: RevenueCalculations
    hardware: HardwareRequirements
    validation: List[ValidationResult] = field(default_factory=list)
    sequence: int = 0

    @property
    def has_errors(self) -> bool:
        return has_validation_errors(self.validation)


def compute_estimate(config, sequence: int = 0) -> Estimate:
    """Compute every projection inline. Revenue consumes the computed costs."""
    costs = calculate_costs(config)
    return Estimate(
        costs=costs,
        revenue=calculate_station_revenue(config, costs),
        hardware=calculate_hardware_requirements(config),
        validation=validate_settings(config),
        sequence=sequence,
    )


class EstimateRunner:
    """
    Single-worker background calculator with last-write-wins semantics.

    Args:
        on_result: Optional callback invoked with each accepted Estimate
    """

    def __init__(self, on_result: Optional[Callable[[Estimate], None]] = None):
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="estimate")
        self._lock = threading.Lock()
        self._sequence = 0
        self._latest: Optional[Estimate] = None
        self._settled: Optional[threading.Event] = None
        self._on_result = on_result

    @property
    def sequence(self) -> int:
        """Sequence number of the newest submitted request."""
        return self._sequence

    def submit(self, config) -> int:
        """Queue a snapshot for calculation and return its sequence number."""
        with self._lock:
            self._sequence += 1
            sequence = self._sequence
            settled = threading.Event()
            self._settled = settled
            future = self._executor.submit(compute_estimate, config, sequence)
        future.add_done_callback(partial(self._handle_done, settled))
        return sequence

    def _handle_done(self, settled: threading.Event, future: Future) -> None:
        try:
            self._accept(future)
        finally:
            settled.set()

    def _accept(self, future: Future) -> None:
        try:
            estimate = future.result()
        except Exception:
            logger.exception("Estimate calculation failed; keeping previous result")
            return

        with self._lock:
            if estimate.sequence != self._sequence:
                logger.debug("Discarding stale estimate %d (latest is %d)", estimate.sequence, self._sequence)
                return
            self._latest = estimate

        if self._on_result is not None:
            self._on_result(estimate)

    def latest(self) -> Optional[Estimate]:
        """Newest accepted estimate, or None before the first result."""
        with self._lock:
            return self._latest

    def wait(self, timeout: Optional[float] = None) -> Optional[Estimate]:
        """Block until the newest submission resolves, then return the latest estimate."""
        with self._lock:
            settled = self._settled
        if settled is not None:
            settled.wait(timeout)
        return self.latest()

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()
