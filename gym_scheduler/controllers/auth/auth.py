# controllers/auth/auth.py
"""
Authentication routes for the JSON API: login, logout and the current user.
"""

from flask import jsonify
from flask_login import login_required, current_user

from gym_scheduler.controllers import json_payload, json_form, validation_error
from gym_scheduler.services import AuthService
from .forms import LoginForm

from . import auth_bp


@auth_bp.route('/login', methods=['POST'])
def login():
    """
    Start a session.

    Expected JSON:
        email, password, optional remember_me
    """
    form = json_form(LoginForm, json_payload())
    if not form.validate():
        return validation_error(form)

    success, user, message = AuthService.authenticate_user(
        email=form.email.data,
        password=form.password.data,
        remember_me=form.remember_me.data
    )

    if not success:
        return jsonify({
            'success': False,
            'message': message,
            'error_code': 'invalid_credentials'
        }), 401

    return jsonify({'success': True, 'message': message, 'user': user.to_dict()})


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    AuthService.logout_user_session()
    return jsonify({'success': True, 'message': 'You have been logged out successfully.'})


@auth_bp.route('/me', methods=['GET'])
@login_required
def me():
    return jsonify({'success': True, 'user': current_user.to_dict()})
