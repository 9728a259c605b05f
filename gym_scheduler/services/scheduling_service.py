# services/scheduling_service.py
"""
Class session scheduling service.
Validates and persists class sessions: class and instructor resolution, the
trainer check, room and instructor double-booking detection and status changes.
"""

import logging

from gym_scheduler.extensions import db
from gym_scheduler.models import ClassSession, SessionStatus, Attendance
from gym_scheduler.utils.time_utils import parse_iso_date, day_bounds
from .catalog_service import CatalogService
from .errors import (
    NotFoundError, InvalidArgumentError, InvalidStateError, ConflictError, SchedulingErrorCode
)
from .transaction import atomic, lock_tenant, scoped
from .validation import positive_int, required_text, instant

logger = logging.getLogger('session_scheduler')

UPDATABLE_FIELDS = (
    'class_id', 'instructor_id', 'start_time', 'end_time',
    'room', 'max_capacity', 'status', 'notes'
)


def room_conflict_error():
    return ConflictError('Room is already booked for this time slot',
                         SchedulingErrorCode.ROOM_CONFLICT)


def instructor_conflict_error():
    return ConflictError('Instructor is already scheduled for this time slot',
                         SchedulingErrorCode.INSTRUCTOR_CONFLICT)


def _overlap_constraint_error(error):
    """Map a PostgreSQL exclusion violation back to the matching conflict."""
    if 'excl_session_instructor_overlap' in str(error.orig):
        return instructor_conflict_error()
    return room_conflict_error()


class SessionSchedulerService:
    """Service for creating, changing and querying class sessions."""

    # ===============================
    # CONFLICT DETECTION
    # ===============================

    @staticmethod
    def _overlapping(gym_id, start_time, end_time, exclude_session_id=None):
        """Sessions of a gym whose [start, end) overlaps the given half-open range."""
        query = ClassSession.query.filter(
            ClassSession.gym_id == gym_id,
            ClassSession.start_time < end_time,
            ClassSession.end_time > start_time
        )
        if exclude_session_id:
            query = query.filter(ClassSession.id != exclude_session_id)
        return query

    @staticmethod
    def find_room_conflict(gym_id, room, start_time, end_time, exclude_session_id=None):
        """Return a session already holding the room in that time range, or None."""
        return (
            SessionSchedulerService._overlapping(gym_id, start_time, end_time, exclude_session_id)
            .filter(ClassSession.room == room)
            .order_by(ClassSession.start_time)
            .first()
        )

    @staticmethod
    def find_instructor_conflict(gym_id, instructor_id, start_time, end_time, exclude_session_id=None):
        """Return a session the instructor already teaches in that time range, or None."""
        return (
            SessionSchedulerService._overlapping(gym_id, start_time, end_time, exclude_session_id)
            .filter(ClassSession.instructor_id == instructor_id)
            .order_by(ClassSession.start_time)
            .first()
        )

    @staticmethod
    def _resolve_trainer(gym_id, instructor_id):
        instructor = CatalogService.get_instructor(gym_id, instructor_id)
        if not instructor.is_trainer:
            raise InvalidStateError('Selected staff member is not a trainer',
                                    SchedulingErrorCode.NOT_A_TRAINER)
        return instructor

    @staticmethod
    def _check_interval(start_time, end_time):
        if end_time <= start_time:
            raise InvalidArgumentError('End time must be after start time',
                                       SchedulingErrorCode.INVALID_INTERVAL)

    # ===============================
    # SESSION WRITES
    # ===============================

    @staticmethod
    def create_session(gym_id, class_id, instructor_id, start_time, end_time, room,
                       max_capacity=None, notes=None):
        """
        Schedule a new class session.

        Input values are parsed first. Lookups then run in a fixed order and the
        first failure wins: class, instructor, trainer position, interval, room
        overlap, instructor overlap.

        Args:
            gym_id: Caller's gym, or None for a platform-wide caller
            class_id: Class definition to schedule
            instructor_id: Staff member teaching the session
            start_time: Start instant (datetime or ISO-8601 string)
            end_time: End instant, strictly after start_time
            room: Room identifier
            max_capacity: Places available; defaults to the class capacity
            notes: Free text

        Returns:
            ClassSession: The persisted session, status 'scheduled', no enrollments
        """
        with atomic(logger, 'Create session', on_integrity_error=_overlap_constraint_error):
            if not class_id:
                raise InvalidArgumentError('Class is required')
            if not instructor_id:
                raise InvalidArgumentError('Instructor is required')
            start_time = instant(start_time, 'Start time')
            end_time = instant(end_time, 'End time')
            room = required_text(room, 'Room')
            if max_capacity is not None and max_capacity != '':
                max_capacity = positive_int(max_capacity, 'Max capacity', SchedulingErrorCode.INVALID_CAPACITY)

            fitness_class = CatalogService.get_class(gym_id, class_id)

            # Platform-wide callers schedule into the class's own gym
            session_gym_id = gym_id or fitness_class.gym_id
            lock_tenant(session_gym_id)

            SessionSchedulerService._resolve_trainer(session_gym_id, instructor_id)
            SessionSchedulerService._check_interval(start_time, end_time)

            if SessionSchedulerService.find_room_conflict(session_gym_id, room, start_time, end_time):
                raise room_conflict_error()

            if SessionSchedulerService.find_instructor_conflict(session_gym_id, instructor_id,
                                                                start_time, end_time):
                raise instructor_conflict_error()

            session = ClassSession(
                gym_id=session_gym_id,
                class_id=fitness_class.id,
                instructor_id=instructor_id,
                start_time=start_time,
                end_time=end_time,
                room=room,
                max_capacity=max_capacity or fitness_class.capacity,
                status=SessionStatus.SCHEDULED,
                notes=notes
            )
            db.session.add(session)

        logger.info(f"Session created: {session.id} class={class_id} room={room} "
                    f"{start_time.isoformat()}-{end_time.isoformat()}")
        return session

    @staticmethod
    def update_session(gym_id, session_id, patch):
        """
        Apply a partial update to a session.

        Only the checks touched by a field that actually changes are re-run, and
        conflict lookups skip the session itself:
        - class changed: class must resolve in the session's gym
        - instructor changed: must resolve and be a trainer; instructor overlap re-checked
        - start/end changed: interval, room overlap and instructor overlap re-checked
        - room changed: room overlap re-checked

        Args:
            gym_id: Caller's gym, or None for a platform-wide caller
            session_id: Session to change
            patch: dict limited to UPDATABLE_FIELDS

        Returns:
            ClassSession: The updated session
        """
        with atomic(logger, 'Update session', on_integrity_error=_overlap_constraint_error):
            unknown = set(patch) - set(UPDATABLE_FIELDS)
            if unknown:
                raise InvalidArgumentError(f"Cannot update fields: {', '.join(sorted(unknown))}")

            session = SessionSchedulerService.get_session(gym_id, session_id)
            lock_tenant(session.gym_id)

            changes = {}

            if 'max_capacity' in patch and patch['max_capacity'] is not None:
                changes['max_capacity'] = positive_int(patch['max_capacity'], 'Max capacity',
                                                       SchedulingErrorCode.INVALID_CAPACITY)

            if patch.get('class_id') and patch['class_id'] != session.class_id:
                fitness_class = CatalogService.get_class(session.gym_id, patch['class_id'])
                changes['class_id'] = fitness_class.id

            instructor_changed = bool(patch.get('instructor_id')) and patch['instructor_id'] != session.instructor_id
            if instructor_changed:
                SessionSchedulerService._resolve_trainer(session.gym_id, patch['instructor_id'])
                changes['instructor_id'] = patch['instructor_id']

            start_time = session.start_time
            end_time = session.end_time
            if patch.get('start_time'):
                start_time = instant(patch['start_time'], 'Start time')
            if patch.get('end_time'):
                end_time = instant(patch['end_time'], 'End time')
            time_changed = start_time != session.start_time or end_time != session.end_time

            room = session.room
            if 'room' in patch and patch['room'] is not None:
                room = required_text(patch['room'], 'Room')
            room_changed = room != session.room

            if time_changed:
                SessionSchedulerService._check_interval(start_time, end_time)
                changes['start_time'] = start_time
                changes['end_time'] = end_time
            if room_changed:
                changes['room'] = room

            if time_changed or room_changed:
                if SessionSchedulerService.find_room_conflict(session.gym_id, room, start_time, end_time,
                                                              exclude_session_id=session.id):
                    raise room_conflict_error()

            if time_changed or instructor_changed:
                instructor_id = changes.get('instructor_id', session.instructor_id)
                if SessionSchedulerService.find_instructor_conflict(session.gym_id, instructor_id,
                                                                    start_time, end_time,
                                                                    exclude_session_id=session.id):
                    raise instructor_conflict_error()

            if 'status' in patch and patch['status'] is not None:
                new_status = patch['status']
                if new_status not in SessionStatus.ALL:
                    raise InvalidArgumentError(f"Status must be one of: {', '.join(SessionStatus.ALL)}")
                if not SessionStatus.can_transition(session.status, new_status):
                    raise InvalidStateError(f"Cannot change status from {session.status} to {new_status}",
                                            SchedulingErrorCode.INVALID_STATUS_TRANSITION)
                changes['status'] = new_status

            if 'notes' in patch:
                changes['notes'] = patch['notes']

            session.from_dict(changes)

        logger.info(f"Session updated: {session.id} fields={sorted(changes)}")
        return session

    @staticmethod
    def delete_session(gym_id, session_id):
        """Delete a session and its enrollments; check-in ledger rows keep no reference."""
        with atomic(logger, 'Delete session'):
            session = SessionSchedulerService.get_session(gym_id, session_id)

            Attendance.query.filter(Attendance.class_session_id == session.id).update(
                {Attendance.class_session_id: None}, synchronize_session=False
            )
            db.session.delete(session)

        logger.info(f"Session deleted: {session_id}")
        return True

    # ===============================
    # SESSION QUERIES
    # ===============================

    @staticmethod
    def get_session(gym_id, session_id):
        session = scoped(ClassSession.query, ClassSession, gym_id).filter(
            ClassSession.id == session_id
        ).first()
        if session is None:
            raise NotFoundError('Class session not found', SchedulingErrorCode.SESSION_NOT_FOUND)
        return session

    @staticmethod
    def list_sessions(gym_id):
        return (
            scoped(ClassSession.query, ClassSession, gym_id)
            .order_by(ClassSession.start_time)
            .all()
        )

    @staticmethod
    def list_sessions_by_date(gym_id, day):
        """
        Get the sessions starting on one calendar day.

        Args:
            gym_id: Caller's gym, or None for a platform-wide caller
            day: date, datetime or 'YYYY-MM-DD'

        Returns:
            list: Sessions ordered by start time
        """
        try:
            day = parse_iso_date(day)
        except ValueError:
            raise InvalidArgumentError(f'Invalid date: {day}')

        day_start, next_day_start = day_bounds(day)
        return (
            scoped(ClassSession.query, ClassSession, gym_id)
            .filter(ClassSession.start_time >= day_start, ClassSession.start_time < next_day_start)
            .order_by(ClassSession.start_time)
            .all()
        )
