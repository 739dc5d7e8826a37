"""Database models package for MedCase."""

from ..extensions import db

from .app_settings import AppSettings
from .medical_case import MedicalCase, UserCaseHistory

__all__ = [
    'db',
    'AppSettings',
    'MedicalCase',
    'UserCaseHistory',
]
