# File: medcase_app/modules/cases/logics/elimination_logic.py

import random
from typing import Iterable, List, Optional


def eliminable_positions(num_options: int, correct_index: Optional[int],
                         eliminated: Iterable[int]) -> List[int]:
    """Shuffled positions that may still be removed.

    The correct position is never eliminable. An ungraded case (no known
    correct position) has nothing eliminable, since any pick could be the
    right answer.
    """
    if correct_index is None:
        return []
    taken = set(eliminated)
    return [i for i in range(num_options) if i != correct_index and i not in taken]


def pick_elimination(num_options: int, correct_index: Optional[int],
                     eliminated: Iterable[int],
                     rng: Optional[random.Random] = None) -> Optional[int]:
    """Pick one incorrect, not yet eliminated position at random."""
    candidates = eliminable_positions(num_options, correct_index, eliminated)
    if not candidates:
        return None
    return (rng or random).choice(candidates)
