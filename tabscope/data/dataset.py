import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from ..config import TRAIN_FRACTION
from ..utils import Row

logger = logging.getLogger(__name__)


@dataclass
class SplitDataset:
    train: List[Row] = field(default_factory=list)
    test: List[Row] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when either side of the split has no rows."""
        return not self.train or not self.test

    def copy(self) -> "SplitDataset":
        return SplitDataset(
            train=[dict(row) for row in self.train],
            test=[dict(row) for row in self.test],
        )


def train_test_split(
    rows: List[Row],
    train_fraction: float = TRAIN_FRACTION,
    random_state: Optional[int] = None,
    permutation: Optional[Sequence[int]] = None,
) -> SplitDataset:
    """
    Shuffle `rows` and split them into train/test.

    The first floor(n * train_fraction) shuffled rows form the training set.
    The shuffle is random by default; pass `random_state` for a seeded shuffle
    or an explicit `permutation` of row indices to pin the partition exactly
    (e.g. `range(len(rows))` keeps the input order).
    """
    if not 0 < train_fraction < 1:
        raise ValueError(f"train_fraction must be strictly between 0 and 1, got {train_fraction}")

    n = len(rows)
    if permutation is not None:
        order = [int(i) for i in permutation]
        if sorted(order) != list(range(n)):
            raise ValueError(f"permutation must contain each index 0..{n - 1} exactly once")
    else:
        rng = np.random.default_rng(random_state)
        order = rng.permutation(n).tolist()

    shuffled = [rows[i] for i in order]
    split_index = int(np.floor(n * train_fraction))

    logger.debug(f"Split {n} rows into {split_index} train / {n - split_index} test")
    return SplitDataset(train=shuffled[:split_index], test=shuffled[split_index:])
