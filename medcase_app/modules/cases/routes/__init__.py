from .. import cases_bp
from . import api  # noqa: F401

__all__ = ['cases_bp']
