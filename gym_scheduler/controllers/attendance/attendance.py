# controllers/attendance/attendance.py
"""
Class check-in ledger routes.
"""

from flask import jsonify
from flask_login import login_required, current_user

from gym_scheduler.controllers import json_payload
from gym_scheduler.services import AttendanceService
from gym_scheduler.utils.auth import tenant_required, current_gym_id
from gym_scheduler.utils.serializers import serialize_attendance

from . import attendance_bp


@attendance_bp.route('/', methods=['POST'])
@login_required
@tenant_required
def check_in():
    """
    Check a member in to a class session they are enrolled in.

    Expected JSON:
        member_id, session_id, optional notes
    """
    data = json_payload()
    member_id = data.get('member_id')
    session_id = data.get('session_id')

    if not member_id or not session_id:
        return jsonify({
            'success': False,
            'message': 'Member ID and session ID are required',
            'error_code': 'invalid_argument'
        }), 400

    attendance = AttendanceService.check_in_to_class(
        current_gym_id(),
        member_id=str(member_id),
        session_id=str(session_id),
        user_id=current_user.id,
        notes=data.get('notes')
    )

    return jsonify({
        'success': True,
        'message': 'Check-in recorded successfully',
        'attendance': serialize_attendance(attendance)
    }), 201


@attendance_bp.route('/checkout/<attendance_id>', methods=['PUT'])
@login_required
@tenant_required
def check_out(attendance_id):
    attendance = AttendanceService.check_out(current_gym_id(), attendance_id)

    return jsonify({
        'success': True,
        'message': 'Check-out recorded successfully',
        'attendance': serialize_attendance(attendance)
    })


@attendance_bp.route('/<attendance_id>', methods=['DELETE'])
@login_required
@tenant_required
def remove_check_in(attendance_id):
    AttendanceService.remove_check_in(current_gym_id(), attendance_id)
    return jsonify({'success': True, 'message': 'Check-in removed successfully'})


@attendance_bp.route('/member/<member_id>', methods=['GET'])
@login_required
@tenant_required
def member_history(member_id):
    """Ledger rows of one member, newest first."""
    records = AttendanceService.list_member_history(current_gym_id(), member_id)
    return jsonify({
        'success': True,
        'member_id': member_id,
        'attendance': [serialize_attendance(a) for a in records]
    })
