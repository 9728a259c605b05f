# controllers/classes/sessions.py
"""
Class session routes: timetable queries, scheduling, enrollment and attendance flags.
Domain rejections raised by the services become JSON errors in the app-level handler.
"""

import logging

from flask import jsonify
from flask_login import login_required

from gym_scheduler.controllers import json_payload, json_form, submitted_data, validation_error
from gym_scheduler.models import RoleType
from gym_scheduler.services import SessionSchedulerService, EnrollmentService
from gym_scheduler.utils.auth import role_required, tenant_required, current_gym_id
from gym_scheduler.utils.serializers import serialize_session
from .forms import SessionForm, SessionUpdateForm

from . import classes_bp

logger = logging.getLogger('sessions_api')


# ===============================
# TIMETABLE QUERIES
# ===============================

@classes_bp.route('/sessions/all', methods=['GET'])
@login_required
@tenant_required
def list_sessions():
    sessions = SessionSchedulerService.list_sessions(current_gym_id())
    return jsonify({
        'success': True,
        'sessions': [serialize_session(s, include_enrollments=False) for s in sessions]
    })


@classes_bp.route('/sessions/date/<date_str>', methods=['GET'])
@login_required
@tenant_required
def list_sessions_by_date(date_str):
    """Sessions starting on one day (YYYY-MM-DD), ordered by start time."""
    sessions = SessionSchedulerService.list_sessions_by_date(current_gym_id(), date_str)
    return jsonify({
        'success': True,
        'date': date_str,
        'sessions': [serialize_session(s, include_enrollments=False) for s in sessions]
    })


@classes_bp.route('/sessions/<session_id>', methods=['GET'])
@login_required
@tenant_required
def get_session(session_id):
    """One session with class, instructor and member display data."""
    session = SessionSchedulerService.get_session(current_gym_id(), session_id)
    return jsonify({'success': True, 'session': serialize_session(session)})


# ===============================
# SCHEDULING
# ===============================

@classes_bp.route('/sessions', methods=['POST'])
@login_required
@role_required(*RoleType.SCHEDULERS)
@tenant_required
def create_session():
    """
    Schedule a class session.

    Expected JSON:
        class_id, instructor_id, start_time, end_time (ISO 8601), room,
        optional max_capacity and notes
    """
    form = json_form(SessionForm, json_payload())
    if not form.validate():
        return validation_error(form)

    session = SessionSchedulerService.create_session(
        current_gym_id(),
        class_id=form.class_id.data,
        instructor_id=form.instructor_id.data,
        start_time=form.start_time.data,
        end_time=form.end_time.data,
        room=form.room.data,
        max_capacity=form.max_capacity.data,
        notes=form.notes.data or None
    )

    return jsonify({
        'success': True,
        'message': 'Class session created successfully',
        'session': serialize_session(session)
    }), 201


@classes_bp.route('/sessions/<session_id>', methods=['PUT'])
@login_required
@role_required(*RoleType.SCHEDULERS)
@tenant_required
def update_session(session_id):
    """Apply the fields present in the JSON body; absent fields keep their stored values."""
    payload = json_payload()
    form = json_form(SessionUpdateForm, payload)
    if not form.validate():
        return validation_error(form)

    session = SessionSchedulerService.update_session(
        current_gym_id(), session_id, submitted_data(form, payload)
    )

    return jsonify({
        'success': True,
        'message': 'Class session updated successfully',
        'session': serialize_session(session)
    })


@classes_bp.route('/sessions/<session_id>', methods=['DELETE'])
@login_required
@role_required(*RoleType.SCHEDULERS)
@tenant_required
def delete_session(session_id):
    SessionSchedulerService.delete_session(current_gym_id(), session_id)
    return jsonify({'success': True, 'message': 'Class session deleted successfully'})


# ===============================
# ENROLLMENT AND ATTENDANCE
# ===============================

@classes_bp.route('/sessions/<session_id>/enroll', methods=['POST'])
@login_required
@tenant_required
def enroll_member(session_id):
    member_id = json_payload().get('member_id')
    if not member_id:
        return jsonify({
            'success': False,
            'message': 'Member ID is required',
            'error_code': 'invalid_argument'
        }), 400

    session = EnrollmentService.enroll(current_gym_id(), session_id, str(member_id))

    return jsonify({
        'success': True,
        'message': 'Member enrolled successfully',
        'session': serialize_session(session)
    })


@classes_bp.route('/sessions/<session_id>/enroll/<member_id>', methods=['DELETE'])
@login_required
@tenant_required
def unenroll_member(session_id, member_id):
    session = EnrollmentService.unenroll(current_gym_id(), session_id, member_id)

    return jsonify({
        'success': True,
        'message': 'Member unenrolled successfully',
        'session': serialize_session(session)
    })


@classes_bp.route('/sessions/<session_id>/attendance/<member_id>', methods=['PUT'])
@login_required
@tenant_required
def mark_attendance(session_id, member_id):
    """Set one enrollment's attended flag from {"attended": true|false}."""
    attended = json_payload().get('attended')

    session = EnrollmentService.mark_attendance(current_gym_id(), session_id, member_id, attended)
    logger.info(f"Attendance marked for member {member_id} in session {session_id}: {attended}")

    return jsonify({
        'success': True,
        'message': 'Attendance updated successfully',
        'session': serialize_session(session)
    })
