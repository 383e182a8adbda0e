"""
Pydantic schemas package.

This package contains all Pydantic schemas for request/response
validation and serialization.
"""

# Local application imports
from recognition.schemas.audit import Actor, AuditChange, AuditLogResponse
from recognition.schemas.common import BaseResponse, PaginationMeta
from recognition.schemas.configuration import EligibilityConfigSchema, VotingGroupConfigSchema
from recognition.schemas.voting import (
    Criteria,
    NominationCreate,
    NominationUpdate,
    VoteResult,
    VotingPeriodCreate,
    VotingPeriodResults,
    VotingPeriodUpdate,
)

__all__ = [
    # Audit schemas
    "Actor",
    "AuditChange",
    "AuditLogResponse",
    # Common schemas
    "BaseResponse",
    "PaginationMeta",
    # Configuration schemas
    "EligibilityConfigSchema",
    "VotingGroupConfigSchema",
    # Voting schemas
    "Criteria",
    "NominationCreate",
    "NominationUpdate",
    "VoteResult",
    "VotingPeriodCreate",
    "VotingPeriodResults",
    "VotingPeriodUpdate",
]
