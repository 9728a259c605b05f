# services/errors.py
"""
Domain errors raised by the scheduling services.
Controllers turn them into JSON responses; nothing here is retried.
"""


class SchedulingErrorCode:
    """Scheduling-specific error codes."""
    CLASS_NOT_FOUND = 'class_not_found'
    INSTRUCTOR_NOT_FOUND = 'instructor_not_found'
    SESSION_NOT_FOUND = 'session_not_found'
    MEMBER_NOT_FOUND = 'member_not_found'
    ENROLLMENT_NOT_FOUND = 'enrollment_not_found'
    ATTENDANCE_NOT_FOUND = 'attendance_not_found'
    TENANT_NOT_FOUND = 'tenant_not_found'

    INVALID_INTERVAL = 'invalid_interval'
    INVALID_CAPACITY = 'invalid_capacity'
    INVALID_ARGUMENT = 'invalid_argument'

    NOT_A_TRAINER = 'not_a_trainer'
    INVALID_STATUS_TRANSITION = 'invalid_status_transition'
    INACTIVE_MEMBERSHIP = 'inactive_membership'
    NOT_ENROLLED = 'not_enrolled'

    ROOM_CONFLICT = 'room_conflict'
    INSTRUCTOR_CONFLICT = 'instructor_conflict'
    SCHEDULE_CONFLICT = 'schedule_conflict'
    ALREADY_ENROLLED = 'already_enrolled'
    SESSION_FULL = 'session_full'
    ALREADY_CHECKED_IN = 'already_checked_in'
    ALREADY_CHECKED_OUT = 'already_checked_out'
    DUPLICATE_CLASS_NAME = 'duplicate_class_name'
    CLASS_HAS_SESSIONS = 'class_has_sessions'


class SchedulingError(Exception):
    """Base class for every rejected scheduling operation."""

    status_code = 400
    default_code = SchedulingErrorCode.INVALID_ARGUMENT

    def __init__(self, message, error_code=None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code

    def to_dict(self):
        return {
            'success': False,
            'message': self.message,
            'error_code': self.error_code
        }


class NotFoundError(SchedulingError):
    """A referenced record does not exist or belongs to another gym."""
    status_code = 404
    default_code = SchedulingErrorCode.SESSION_NOT_FOUND


class InvalidArgumentError(SchedulingError):
    """Malformed input, e.g. an end time that is not after the start time."""
    status_code = 400
    default_code = SchedulingErrorCode.INVALID_ARGUMENT


class InvalidStateError(SchedulingError):
    """A referenced record exists but cannot play the requested part."""
    status_code = 400
    default_code = SchedulingErrorCode.NOT_A_TRAINER


class ConflictError(SchedulingError):
    """The operation would break a uniqueness or capacity invariant."""
    status_code = 409
    default_code = SchedulingErrorCode.SCHEDULE_CONFLICT
