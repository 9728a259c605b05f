from .errors import (
    SchedulingError, NotFoundError, InvalidArgumentError, InvalidStateError, ConflictError,
    SchedulingErrorCode
)
from .catalog_service import CatalogService
from .scheduling_service import SessionSchedulerService
from .enrollment_service import EnrollmentService
from .attendance_service import AttendanceService
from .auth_service import AuthService

__all__ = [
    'SchedulingError',
    'NotFoundError',
    'InvalidArgumentError',
    'InvalidStateError',
    'ConflictError',
    'SchedulingErrorCode',
    'CatalogService',
    'SessionSchedulerService',
    'EnrollmentService',
    'AttendanceService',
    'AuthService'
]
