"""Explicit knobs for a single graph execution."""
import random
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable


@dataclass
class ExecutionOptions:
    node_delay: float = 0.1                         # seconds of simulated work per node
    api_delay: tuple[float, float] = (0.2, 0.5)     # simulated network latency range
    rng: random.Random = field(default_factory=random.Random)
    clock: Callable[[], float] = time.time

    @classmethod
    def instant(cls, seed: int | None = None) -> "ExecutionOptions":
        """No cosmetic delays; optionally seeded. Used by tests and batch callers."""
        return cls(node_delay=0.0, api_delay=(0.0, 0.0), rng=random.Random(seed))

    def timestamp(self) -> str:
        return datetime.fromtimestamp(self.clock(), timezone.utc).isoformat()

    def api_latency(self) -> float:
        low, high = self.api_delay
        if high <= low:
            return max(low, 0.0)
        return self.rng.uniform(low, high)
