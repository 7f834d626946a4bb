from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from wlcollide.errors import InvalidParameter


DEFAULT_K_MAX = 3
DEFAULT_TUPLE_STATE_CEILING = int(os.environ.get("WLCOLLIDE_TUPLE_STATE_CEILING", "250000"))
DEFAULT_ISO_ATTEMPT_BUDGET = int(os.environ.get("WLCOLLIDE_ISO_ATTEMPT_BUDGET", "2000000"))
DEFAULT_BATCH_SIZE = 256


@dataclass(frozen=True)
class RunConfig:
    """
    Settings for one enumerate-and-classify run.

    n:                    vertex count of the enumerated graphs.
    k_max:                highest WL dimension tried when separating a bucket.
    tuple_state_ceiling:  max number of k-tuple states a refinement may allocate.
    iso_attempt_budget:   max vertex assignments per exact isomorphism search.
    checkpoint_interval:  accepted graphs between checkpoints (None = never).
    checkpoint_path:      where checkpoints are read from / written to.
    processes:            worker processes for classification (1 = inline).
    max_graphs:           stop enumeration after this many graphs (None = all).
    verify:               cross-check the enumerator against networkx/nauty.
    prune_dimension:      k-WL dimension used to prefilter exact
                          isomorphism searches (0 = off).
    """

    n: int
    k_max: int = DEFAULT_K_MAX
    tuple_state_ceiling: int = DEFAULT_TUPLE_STATE_CEILING
    iso_attempt_budget: int = DEFAULT_ISO_ATTEMPT_BUDGET
    checkpoint_interval: Optional[int] = None
    checkpoint_path: Optional[str] = None
    processes: int = 1
    max_graphs: Optional[int] = None
    verify: bool = False
    prune_dimension: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.n, int) or self.n < 1:
            raise InvalidParameter(f"n must be an integer >= 1, got {self.n!r}.")
        if self.k_max < 1:
            raise InvalidParameter(f"k_max must be >= 1, got {self.k_max}.")
        if self.tuple_state_ceiling < 1:
            raise InvalidParameter("tuple_state_ceiling must be positive.")
        if self.iso_attempt_budget < 1:
            raise InvalidParameter("iso_attempt_budget must be positive.")
        if self.checkpoint_interval is not None and self.checkpoint_interval < 1:
            raise InvalidParameter("checkpoint_interval must be positive when given.")
        if self.processes < 1:
            raise InvalidParameter("processes must be >= 1.")
        if self.max_graphs is not None and self.max_graphs < 1:
            raise InvalidParameter("max_graphs must be positive when given.")
        if self.prune_dimension < 0:
            raise InvalidParameter("prune_dimension must be >= 0.")

    @property
    def batch_size(self) -> int:
        return self.checkpoint_interval or DEFAULT_BATCH_SIZE
