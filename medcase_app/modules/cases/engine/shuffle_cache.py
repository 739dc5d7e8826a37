"""
Fingerprint-keyed cache of presentation orders.

A case is reshuffled only when its answer fields change; asking again for
the same data returns the stored ShuffleResult unchanged.
"""

from __future__ import annotations

import random
from collections.abc import Mapping
from typing import Any, Dict, Optional

from medcase_app.core.logging_config import get_logger
from medcase_app.core.signals import answers_shuffled

from ..schemas import ShuffleResult
from .shuffle_engine import ShuffleEngine

logger = get_logger('medcase.cases.cache')


class ShuffleCache:
    """Holds at most one live ShuffleResult per case id."""

    def __init__(self, entries: Optional[Dict[str, ShuffleResult]] = None):
        self._entries: Dict[str, ShuffleResult] = dict(entries or {})

    @staticmethod
    def _key(case_id: Any) -> str:
        return str(case_id)

    def __contains__(self, case_id) -> bool:
        return self._key(case_id) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, case_id) -> Optional[ShuffleResult]:
        return self._entries.get(self._key(case_id))

    def get_or_shuffle(self, case_id, record: Mapping,
                       rng: Optional[random.Random] = None) -> Optional[ShuffleResult]:
        """
        Return the cached order for ``case_id`` or compute a new one.

        A new order is computed when there is no entry or the fingerprint of
        ``record`` differs from the one the entry was built from. Records that
        are not ready (no options) drop the entry and return ``None``.
        """
        key = self._key(case_id)
        fingerprint = ShuffleEngine.fingerprint_case(record)
        if fingerprint is None:
            self._entries.pop(key, None)
            return None

        cached = self._entries.get(key)
        if cached is not None and cached.fingerprint == fingerprint:
            return cached

        result = ShuffleEngine.shuffle_case(record, rng=rng)
        self._entries[key] = result
        logger.debug("Case %s reshuffled (fingerprint %s)", case_id, fingerprint[:12])
        answers_shuffled.send(
            self,
            case_id=case_id,
            fingerprint=fingerprint,
            correct_index=result.correct_index,
        )
        return result

    def invalidate(self, case_id) -> bool:
        """Forget the order for ``case_id`` so the next view reshuffles."""
        return self._entries.pop(self._key(case_id), None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {key: result.to_dict() for key, result in self._entries.items()}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Dict[str, Any]]]) -> 'ShuffleCache':
        entries = {
            str(key): ShuffleResult.from_dict(value)
            for key, value in (data or {}).items()
            if isinstance(value, dict)
        }
        return cls(entries)
