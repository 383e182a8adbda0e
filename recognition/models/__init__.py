"""
Database models package.

This package contains all SQLAlchemy models for the application.
"""

# Local application imports
from recognition.models.audit import AuditAction, AuditEntity, AuditLog
from recognition.models.base import Base
from recognition.models.configuration import EligibilityConfig, VotingGroupConfig
from recognition.models.employees import Employee
from recognition.models.voting import Nomination, VotingPeriod, VotingPeriodStatus, WinnerHistory, WinnerType

__all__ = [
    "Base",
    # Directory
    "Employee",
    # Voting
    "Nomination",
    "VotingPeriod",
    "VotingPeriodStatus",
    "WinnerHistory",
    "WinnerType",
    # Configuration
    "EligibilityConfig",
    "VotingGroupConfig",
    # Audit
    "AuditAction",
    "AuditEntity",
    "AuditLog",
]
