from .answer_validator import AnswerValidator, normalize_text
from .shuffle_cache import ShuffleCache
from .shuffle_engine import ShuffleEngine, answer_fingerprint

__all__ = [
    'AnswerValidator',
    'ShuffleCache',
    'ShuffleEngine',
    'answer_fingerprint',
    'normalize_text',
]
