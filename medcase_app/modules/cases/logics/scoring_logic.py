# File: medcase_app/modules/cases/logics/scoring_logic.py
# Points for an answered case, reduced by the help the learner used.

from typing import Any, Dict, Iterable, Mapping, Tuple


def calculate_penalties(base_points: int, help_used: Iterable[str],
                        penalty_pct: Mapping[str, int]) -> int:
    """
    Sum the penalty of every help entry.

    Each entry costs ``floor(base_points * pct / 100)``; unknown kinds cost
    nothing. Repeated entries (two eliminations) are charged twice.
    """
    total = 0
    for kind in help_used:
        pct = penalty_pct.get(kind, 0)
        total += (base_points * pct) // 100
    return total


def calculate_points(base_points: int, is_correct: bool, help_used: Iterable[str],
                     penalty_pct: Mapping[str, int]) -> Tuple[int, Dict[str, Any]]:
    """
    Final points for an attempt and the breakdown shown to the learner.

    Returns:
        (total, {'base': ..., 'penalties': ..., 'total': ...})
    """
    help_used = list(help_used)
    penalties = calculate_penalties(base_points, help_used, penalty_pct)
    total = max(0, base_points - penalties) if is_correct else 0
    breakdown = {
        'base': base_points,
        'penalties': penalties,
        'help_used': help_used,
        'total': total,
    }
    return total, breakdown
