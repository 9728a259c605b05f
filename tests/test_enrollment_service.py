"""Tests for the per-member enrollment state machine and the derived session views."""

from datetime import datetime

import pytest

from gym_scheduler.models import ClassSession, SessionEnrollment
from gym_scheduler.services import (
    SessionSchedulerService, EnrollmentService,
    NotFoundError, InvalidArgumentError, ConflictError, SchedulingErrorCode
)
from tests.conftest import at


@pytest.fixture
def session(gym, yoga, trainer):
    return SessionSchedulerService.create_session(gym.id, yoga.id, trainer.id, at(9), at(10), 'Room A')


def test_enroll_appends_unattended_enrollment(gym, session, member):
    result = EnrollmentService.enroll(gym.id, session.id, member.id)

    assert [e.member_id for e in result.enrollments] == [member.id]
    enrollment = result.enrollments[0]
    assert enrollment.attended is False
    assert isinstance(enrollment.enrollment_date, datetime)


def test_enroll_twice_is_conflict(gym, session, member):
    EnrollmentService.enroll(gym.id, session.id, member.id)

    with pytest.raises(ConflictError) as excinfo:
        EnrollmentService.enroll(gym.id, session.id, member.id)
    assert excinfo.value.message == 'Member is already enrolled in this session'
    assert excinfo.value.error_code == SchedulingErrorCode.ALREADY_ENROLLED
    assert SessionEnrollment.query.count() == 1


def test_reenroll_after_unenroll_starts_fresh(gym, session, member):
    """Test the prior attendance flag is not retained after unenroll + enroll."""
    EnrollmentService.enroll(gym.id, session.id, member.id)
    EnrollmentService.mark_attendance(gym.id, session.id, member.id, True)
    EnrollmentService.unenroll(gym.id, session.id, member.id)

    result = EnrollmentService.enroll(gym.id, session.id, member.id)

    assert len(result.enrollments) == 1
    assert result.enrollments[0].attended is False
    assert SessionEnrollment.query.count() == 1


def test_capacity_boundary(gym, yoga, trainer, make_member):
    session = SessionSchedulerService.create_session(
        gym.id, yoga.id, trainer.id, at(9), at(10), 'Room A', max_capacity=2
    )
    first, second, third = make_member('Ann'), make_member('Ben'), make_member('Cat')

    EnrollmentService.enroll(gym.id, session.id, first.id)
    EnrollmentService.enroll(gym.id, session.id, second.id)
    assert EnrollmentService.is_full(session)

    with pytest.raises(ConflictError) as excinfo:
        EnrollmentService.enroll(gym.id, session.id, third.id)
    assert excinfo.value.message == 'Session is full'
    assert excinfo.value.error_code == SchedulingErrorCode.SESSION_FULL

    EnrollmentService.unenroll(gym.id, session.id, first.id)
    result = EnrollmentService.enroll(gym.id, session.id, third.id)
    assert sorted(e.member_id for e in result.enrollments) == sorted([second.id, third.id])

    with pytest.raises(ConflictError):
        EnrollmentService.enroll(gym.id, session.id, first.id)


def test_enroll_unknown_session_or_member(gym, session, member):
    with pytest.raises(NotFoundError, match='Class session not found'):
        EnrollmentService.enroll(gym.id, 'missing', member.id)

    with pytest.raises(NotFoundError) as excinfo:
        EnrollmentService.enroll(gym.id, session.id, 'missing')
    assert excinfo.value.error_code == SchedulingErrorCode.MEMBER_NOT_FOUND


def test_unenroll_and_mark_attendance_unknown_session(gym, member):
    with pytest.raises(NotFoundError, match='Class session not found') as excinfo:
        EnrollmentService.unenroll(gym.id, 'missing', member.id)
    assert excinfo.value.error_code == SchedulingErrorCode.SESSION_NOT_FOUND

    with pytest.raises(NotFoundError, match='Class session not found') as excinfo:
        EnrollmentService.mark_attendance(gym.id, 'missing', member.id, True)
    assert excinfo.value.error_code == SchedulingErrorCode.SESSION_NOT_FOUND


def test_enroll_member_of_other_gym_is_not_found(gym, other_gym, session, make_member):
    outsider = make_member('Olga', gym_id=other_gym.id)

    with pytest.raises(NotFoundError):
        EnrollmentService.enroll(gym.id, session.id, outsider.id)


def test_unenroll_missing_enrollment(gym, session, member):
    with pytest.raises(NotFoundError, match='Member not enrolled in this session'):
        EnrollmentService.unenroll(gym.id, session.id, member.id)


def test_unenroll_keeps_other_members(gym, session, make_member):
    stay, leave = make_member('Ann'), make_member('Ben')
    EnrollmentService.enroll(gym.id, session.id, stay.id)
    EnrollmentService.enroll(gym.id, session.id, leave.id)
    EnrollmentService.mark_attendance(gym.id, session.id, stay.id, True)

    result = EnrollmentService.unenroll(gym.id, session.id, leave.id)

    assert [(e.member_id, e.attended) for e in result.enrollments] == [(stay.id, True)]


def test_mark_attendance_is_idempotent(gym, session, member):
    EnrollmentService.enroll(gym.id, session.id, member.id)

    EnrollmentService.mark_attendance(gym.id, session.id, member.id, True)
    result = EnrollmentService.mark_attendance(gym.id, session.id, member.id, True)

    assert len(result.enrollments) == 1
    assert result.enrollments[0].attended is True

    result = EnrollmentService.mark_attendance(gym.id, session.id, member.id, False)
    assert result.enrollments[0].attended is False


def test_mark_attendance_requires_enrollment(gym, session, member):
    with pytest.raises(NotFoundError):
        EnrollmentService.mark_attendance(gym.id, session.id, member.id, True)


@pytest.mark.parametrize("value", ['yes', 1, None])
def test_mark_attendance_requires_bool(gym, session, member, value):
    EnrollmentService.enroll(gym.id, session.id, member.id)

    with pytest.raises(InvalidArgumentError):
        EnrollmentService.mark_attendance(gym.id, session.id, member.id, value)


def test_attendance_stats(gym, session, make_member):
    assert EnrollmentService.attendance_stats(session) == {'attended': 0, 'total': 0, 'percentage': 0}

    members = [make_member(name) for name in ('Ann', 'Ben', 'Cat')]
    for m in members:
        EnrollmentService.enroll(gym.id, session.id, m.id)
    result = EnrollmentService.mark_attendance(gym.id, session.id, members[0].id, True)

    assert EnrollmentService.attendance_stats(result) == {'attended': 1, 'total': 3, 'percentage': 33}


def test_effective_capacity_falls_back_to_class(yoga):
    unsaved = ClassSession(max_capacity=None, fitness_class=yoga)
    assert unsaved.effective_capacity == yoga.capacity


def test_is_past(session):
    assert EnrollmentService.is_past(session, now=at(9, 1))
    assert not EnrollmentService.is_past(session, now=at(9))
    assert not EnrollmentService.is_past(session, now=at(8))
