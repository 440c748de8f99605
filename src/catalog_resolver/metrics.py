"""Running usage metrics for the matching engine."""

from __future__ import annotations

from collections import Counter
from typing import Any


class ResolutionMetrics:
    """Counters and running averages over resolution calls.

    A resolution counts as successful when it returned at least one
    result. Average confidence is the running mean of the top score over
    successful calls only.
    """

    def __init__(self) -> None:
        self.total = 0
        self.successful = 0
        self.degraded = 0
        self.average_confidence = 0.0
        self.average_processing_ms = 0.0
        self.mode_usage: Counter[str] = Counter()
        self.generator_failures: Counter[str] = Counter()

    def record(
        self,
        *,
        mode: str,
        elapsed_ms: float,
        top_score: float | None,
        failed_generators: list[str] | None = None,
    ) -> None:
        self.total += 1
        self.average_processing_ms += (elapsed_ms - self.average_processing_ms) / self.total
        self.mode_usage[mode] += 1

        if failed_generators:
            self.degraded += 1
            self.generator_failures.update(failed_generators)

        if top_score is not None:
            self.successful += 1
            self.average_confidence += (top_score - self.average_confidence) / self.successful

    def snapshot(self) -> dict[str, Any]:
        return {
            "total_resolutions": self.total,
            "successful_resolutions": self.successful,
            "degraded_resolutions": self.degraded,
            "average_confidence": round(self.average_confidence, 2),
            "average_processing_ms": round(self.average_processing_ms, 2),
            "mode_usage": dict(self.mode_usage),
            "generator_failures": dict(self.generator_failures),
        }
