"""
Per-pass minimization history.

`SGDMinimizer.minimize()` appends one record per completed pass over the
training data: the cost at the end of the pass (penalty included), the
iteration counter, and the learning rate that will be used next.

Design goals
------------
- No dependency on cost functions, updaters or arrays
- Deterministic ordering and explicit pass indexing
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Union


Number = Union[int, float]


@dataclass
class History:
    """
    Container for per-pass minimization metrics.

    Attributes
    ----------
    history : Dict[str, List[float]]
        Mapping from metric name to a list of per-pass values, ordered by
        pass index.
    passes : List[int]
        Zero-based pass indices corresponding to the entries in `history`.
    """

    history: Dict[str, List[float]] = field(default_factory=dict)
    passes: List[int] = field(default_factory=list)

    def append_pass(self, pass_idx: int, logs: Mapping[str, Number]) -> None:
        """
        Append metrics for a completed pass.

        Metric values are coerced to `float` before storage.
        """
        self.passes.append(int(pass_idx))
        for k, v in logs.items():
            self.history.setdefault(k, []).append(float(v))

    def last(self) -> Dict[str, float]:
        """
        Return metrics from the most recent pass.
        """
        return {k: float(vs[-1]) for k, vs in self.history.items() if vs}

    def clear(self) -> None:
        self.history.clear()
        self.passes.clear()

    def __len__(self) -> int:
        return len(self.passes)
