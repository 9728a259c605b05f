# services/attendance_service.py
"""
Class check-in ledger.
A class check-in writes an Attendance row and marks the member's enrollment as
attended in the same transaction; removing the check-in undoes both.
"""

import logging

from gym_scheduler.extensions import db
from gym_scheduler.models import Attendance, AttendanceType, ClassSession, utcnow
from gym_scheduler.utils.time_utils import minutes_between
from .catalog_service import CatalogService
from .errors import (
    NotFoundError, InvalidStateError, ConflictError, SchedulingErrorCode
)
from .transaction import atomic, scoped

logger = logging.getLogger('attendance_service')


class AttendanceService:
    """Service class for class check-in, check-out and ledger history."""

    @staticmethod
    def get_attendance(gym_id, attendance_id):
        attendance = scoped(Attendance.query, Attendance, gym_id).filter(
            Attendance.id == attendance_id
        ).first()
        if attendance is None:
            raise NotFoundError('Attendance record not found', SchedulingErrorCode.ATTENDANCE_NOT_FOUND)
        return attendance

    @staticmethod
    def get_open_check_in(gym_id, member_id):
        """The member's check-in that has no check-out yet, if any."""
        return (
            Attendance.query
            .filter(
                Attendance.gym_id == gym_id,
                Attendance.member_id == member_id,
                Attendance.check_out_time.is_(None)
            )
            .order_by(Attendance.check_in_time.desc())
            .first()
        )

    @staticmethod
    def check_in_to_class(gym_id, member_id, session_id, user_id=None, notes=None, now=None):
        """
        Check a member in to a class session.

        Args:
            gym_id: Caller's gym, or None for a platform-wide caller
            member_id: Member checking in
            session_id: Session the member is enrolled in
            user_id: Staff user recording the check-in
            notes: Free text stored on the ledger row
            now: Check-in instant, defaults to the current UTC time

        Returns:
            Attendance: The new ledger row
        """
        with atomic(logger, 'Class check-in'):
            member = CatalogService.get_member(gym_id, member_id)

            if not member.has_active_membership:
                raise InvalidStateError("Member's membership is not active",
                                        SchedulingErrorCode.INACTIVE_MEMBERSHIP)

            if AttendanceService.get_open_check_in(member.gym_id, member.id) is not None:
                raise ConflictError('Member already checked in', SchedulingErrorCode.ALREADY_CHECKED_IN)

            session = scoped(ClassSession.query, ClassSession, member.gym_id).filter(
                ClassSession.id == session_id
            ).first()
            if session is None:
                raise NotFoundError('Class session not found', SchedulingErrorCode.SESSION_NOT_FOUND)

            enrollment = session.find_enrollment(member.id)
            if enrollment is None:
                raise InvalidStateError('Member is not enrolled in this class',
                                        SchedulingErrorCode.NOT_ENROLLED)

            enrollment.attended = True

            attendance = Attendance(
                gym_id=member.gym_id,
                member_id=member.id,
                class_session_id=session.id,
                check_in_time=now or utcnow(),
                attendance_type=AttendanceType.CLASS,
                notes=notes,
                created_by=user_id
            )
            db.session.add(attendance)

        logger.info(f"Member {member_id} checked in to session {session_id}")
        return attendance

    @staticmethod
    def check_out(gym_id, attendance_id, now=None):
        """Close an open check-in and store its duration in whole minutes."""
        with atomic(logger, 'Check-out'):
            attendance = AttendanceService.get_attendance(gym_id, attendance_id)

            if attendance.check_out_time is not None:
                raise ConflictError('Member already checked out', SchedulingErrorCode.ALREADY_CHECKED_OUT)

            attendance.check_out_time = now or utcnow()
            attendance.duration = minutes_between(attendance.check_in_time, attendance.check_out_time)

        logger.info(f"Attendance {attendance_id} checked out after {attendance.duration} min")
        return attendance

    @staticmethod
    def remove_check_in(gym_id, attendance_id):
        """Delete a ledger row and clear the attended flag it set."""
        with atomic(logger, 'Remove check-in'):
            attendance = AttendanceService.get_attendance(gym_id, attendance_id)

            if attendance.class_session is not None:
                enrollment = attendance.class_session.find_enrollment(attendance.member_id)
                if enrollment is not None:
                    enrollment.attended = False

            db.session.delete(attendance)

        logger.info(f"Check-in {attendance_id} removed")
        return True

    @staticmethod
    def list_member_history(gym_id, member_id):
        member = CatalogService.get_member(gym_id, member_id)
        return (
            Attendance.query
            .filter(Attendance.member_id == member.id)
            .order_by(Attendance.check_in_time.desc())
            .all()
        )
