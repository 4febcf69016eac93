"""
Result statistics and reporting.

Derives the reportable summary of a search from its best chromosome and
guards the engine's feasibility contract: a best chromosome that exceeds
any capacity means repair or generation is broken, and is reported as an
InternalConsistencyError rather than as >100% utilization.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from .knapsack import Knapsack


class InternalConsistencyError(RuntimeError):
    """Raised when a final solution violates a knapsack capacity."""
    pass


@dataclass(frozen=True)
class ResultSummary:
    """
    Summary of one search run.

    Attributes:
        total_profit: Sum of values of the picked items
        picked_items: Picked item ids, ascending
        utilization: Per-dimension utilization formatted as "12.34%"
        utilization_ratios: Per-dimension consumed / capacity
        iterations: Generations executed
        duration: Wall time spent in generation steps, in seconds (seeding excluded)
        best_history: Best-ever total value after seeding and after each step
        known_optimum: Optimum declared by the instance header, if any
    """
    total_profit: int = 0
    picked_items: List[int] = field(default_factory=list)
    utilization: List[str] = field(default_factory=list)
    utilization_ratios: List[float] = field(default_factory=list)
    iterations: int = 0
    duration: float = 0.0
    best_history: List[int] = field(default_factory=list)
    known_optimum: Optional[int] = None

    @property
    def optimum_gap(self) -> Optional[float]:
        """Relative gap to the known optimum, or None if unknown."""
        if not self.known_optimum:
            return None
        return (self.known_optimum - self.total_profit) / self.known_optimum

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form for YAML export."""
        return {
            'total_profit': self.total_profit,
            'picked_items': list(self.picked_items),
            'picked_count': len(self.picked_items),
            'utilization': list(self.utilization),
            'utilization_ratios': [round(r, 6) for r in self.utilization_ratios],
            'iterations': self.iterations,
            'duration_seconds': round(self.duration, 6),
            'known_optimum': self.known_optimum,
        }


def collect_statistics(
    knapsack: Knapsack,
    chromosome,
    iterations: int = 0,
    duration: float = 0.0,
    best_history: Optional[List[int]] = None
) -> ResultSummary:
    """
    Build the result summary for a chromosome.

    Args:
        knapsack: Problem instance
        chromosome: Best chromosome found (anything with a boolean `items` vector)
        iterations: Generations executed
        duration: Elapsed seconds
        best_history: Best-ever value trace

    Returns:
        ResultSummary

    Raises:
        InternalConsistencyError: If any dimension is over capacity
    """
    selected = np.asarray(chromosome.items, dtype=bool)
    utilization = knapsack.weights[selected].sum(axis=0)

    if np.any(utilization > knapsack.capacity_array):
        raise InternalConsistencyError(
            "Violated knapsack capacity!\n"
            f"capacity:    {list(knapsack.capacity)}\n"
            f"utilization: {[int(u) for u in utilization]}"
        )

    ratios = []
    for used, capacity in zip(utilization, knapsack.capacity):
        # a zero capacity can only be met with zero consumption here
        ratios.append(float(used) / capacity if capacity else 0.0)

    return ResultSummary(
        total_profit=int(knapsack.values[selected].sum()),
        picked_items=sorted(int(i) + 1 for i in np.flatnonzero(selected)),
        utilization=[f"{ratio * 100:.2f}%" for ratio in ratios],
        utilization_ratios=ratios,
        iterations=iterations,
        duration=duration,
        best_history=list(best_history) if best_history is not None else [],
        known_optimum=knapsack.known_optimum,
    )


def format_report(summary: ResultSummary, title: str = "GA") -> str:
    """Generate a human-readable search report."""
    lines = []
    lines.append("=" * 60)
    lines.append(f"{title} RESULT")
    lines.append("=" * 60)
    lines.append(f"  -> Total profit: {summary.total_profit}")
    if summary.optimum_gap is not None:
        lines.append(
            f"  -> Known optimum: {summary.known_optimum} "
            f"(gap {summary.optimum_gap * 100:.2f}%)"
        )
    lines.append(f"  -> Picked items ({len(summary.picked_items)}): {summary.picked_items}")
    lines.append(f"  -> Utilization: {' '.join(summary.utilization)}")
    lines.append(f"  -> Iterations: {summary.iterations}")
    lines.append(f"  -> Duration: {_format_duration(summary.duration)}")
    lines.append("=" * 60)
    return "\n".join(lines)


def print_report(summary: ResultSummary, title: str = "GA") -> None:
    print(format_report(summary, title))


def _format_duration(seconds: float) -> str:
    whole, nanos = divmod(int(round(seconds * 1_000_000_000)), 1_000_000_000)
    if whole and nanos:
        return f"{whole} s {nanos} ns"
    if whole:
        return f"{whole} s"
    return f"{nanos} ns"
