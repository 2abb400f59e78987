"""Domain services."""

from assessmenttasks.domain.services.assessments import (
    AssessmentNotFoundError,
    AssessmentService,
)
from assessmenttasks.domain.services.auth_service import (
    AuthService,
    InvalidCredentialsError,
)
from assessmenttasks.domain.services.errors import PersistenceError

__all__ = [
    "AssessmentNotFoundError",
    "AssessmentService",
    "AuthService",
    "InvalidCredentialsError",
    "PersistenceError",
]
