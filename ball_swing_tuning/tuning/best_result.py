"""
Best-result accumulator for the gain sweep.

Holds the fastest-settling gain triple found so far. The record only moves
on a strictly smaller settle tick count, and every improvement is handed to
the reporting callback at the moment it happens. A settle at tick 0 is not
recorded.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional


@dataclass(frozen=True)
class GainResult:
    """Settle tick count of one gain triple."""

    ticks: int
    k_p: float
    k_i: float
    k_d: float


def format_result(result: GainResult) -> str:
    """Console line for an improvement: tick count followed by the gains."""
    return f"i: {result.ticks} p: {result.k_p} i: {result.k_i} d: {result.k_d}"


@dataclass
class BestResult:
    """
    Monotonically improving best record.

    Attributes:
        best: Current best result (None until something settles)
        history: Every improvement, in the order it was found
        on_improvement: Called with each new best
    """

    best: Optional[GainResult] = None
    history: List[GainResult] = field(default_factory=list)
    on_improvement: Optional[Callable[[GainResult], None]] = None

    @property
    def ticks(self) -> Optional[int]:
        return None if self.best is None else self.best.ticks

    def offer(self, ticks: Optional[int], k_p: float, k_i: float, k_d: float) -> bool:
        """
        Offer a simulation outcome.

        Args:
            ticks: Settle tick count, or None if the run did not settle.
                0 is ignored like None
            k_p, k_i, k_d: Gains of the run

        Returns:
            True if the outcome became the new best
        """
        if not ticks:
            return False
        if self.best is not None and ticks >= self.best.ticks:
            return False

        self.best = GainResult(ticks=ticks, k_p=k_p, k_i=k_i, k_d=k_d)
        self.history.append(self.best)
        if self.on_improvement is not None:
            self.on_improvement(self.best)
        return True
