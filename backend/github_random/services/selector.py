import random
from typing import Optional, Sequence

from ..errors import EmptySelection
from ..schemas import RepositoryRecord


def pick_one(records: Sequence[RepositoryRecord], rng: Optional[random.Random] = None) -> RepositoryRecord:
    """Return one of ``records`` chosen uniformly at random."""
    if not records:
        raise EmptySelection()
    return (rng or random).choice(records)
