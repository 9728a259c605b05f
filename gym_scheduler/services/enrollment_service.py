# services/enrollment_service.py
"""
Session enrollment service.
Members take and give up places in class sessions; instructors mark who attended.
"""

import logging

from gym_scheduler.models import ClassSession, SessionEnrollment
from .catalog_service import CatalogService
from .errors import (
    NotFoundError, InvalidArgumentError, ConflictError, SchedulingErrorCode
)
from .transaction import atomic, scoped

logger = logging.getLogger('enrollment_service')


def _already_enrolled(error):
    return ConflictError('Member is already enrolled in this session',
                         SchedulingErrorCode.ALREADY_ENROLLED)


class EnrollmentService:
    """Service class for class session enrollment and attendance flags."""

    @staticmethod
    def _locked_session(gym_id, session_id):
        """Load a session with a row lock so concurrent enrollments see a stable count."""
        session = (
            scoped(ClassSession.query, ClassSession, gym_id)
            .filter(ClassSession.id == session_id)
            .with_for_update()
            .first()
        )
        if session is None:
            raise NotFoundError('Class session not found', SchedulingErrorCode.SESSION_NOT_FOUND)
        return session

    @staticmethod
    def enroll(gym_id, session_id, member_id):
        """
        Give a member a place in a session.

        Args:
            gym_id: Caller's gym, or None for a platform-wide caller
            session_id: Target session
            member_id: Member taking the place; must belong to the session's gym

        Returns:
            ClassSession: The session with the new enrollment appended
        """
        with atomic(logger, 'Enroll member', on_integrity_error=_already_enrolled):
            session = EnrollmentService._locked_session(gym_id, session_id)
            CatalogService.get_member(session.gym_id, member_id)

            if session.find_enrollment(member_id) is not None:
                raise ConflictError('Member is already enrolled in this session',
                                    SchedulingErrorCode.ALREADY_ENROLLED)

            if session.is_full():
                raise ConflictError('Session is full', SchedulingErrorCode.SESSION_FULL)

            session.enrollments.append(SessionEnrollment(member_id=member_id, attended=False))

        logger.info(f"Member {member_id} enrolled in session {session_id} "
                    f"({session.enrolled_count}/{session.effective_capacity})")
        return session

    @staticmethod
    def unenroll(gym_id, session_id, member_id):
        """Remove a member's place; attendance flags of other members are untouched."""
        with atomic(logger, 'Unenroll member'):
            session = EnrollmentService._locked_session(gym_id, session_id)

            enrollment = session.find_enrollment(member_id)
            if enrollment is None:
                raise NotFoundError('Member not enrolled in this session',
                                    SchedulingErrorCode.ENROLLMENT_NOT_FOUND)

            session.enrollments.remove(enrollment)

        logger.info(f"Member {member_id} unenrolled from session {session_id}")
        return session

    @staticmethod
    def mark_attendance(gym_id, session_id, member_id, attended):
        """Set the attended flag of one enrollment."""
        if not isinstance(attended, bool):
            raise InvalidArgumentError('Attended must be true or false')

        with atomic(logger, 'Mark attendance'):
            session = EnrollmentService._locked_session(gym_id, session_id)

            enrollment = session.find_enrollment(member_id)
            if enrollment is None:
                raise NotFoundError('Member not enrolled in this session',
                                    SchedulingErrorCode.ENROLLMENT_NOT_FOUND)

            enrollment.attended = attended

        logger.info(f"Attendance for member {member_id} in session {session_id} set to {attended}")
        return session

    # Derived session views

    @staticmethod
    def is_full(session):
        return session.is_full()

    @staticmethod
    def is_past(session, now=None):
        return session.is_past(now)

    @staticmethod
    def attendance_stats(session):
        return session.attendance_stats()
