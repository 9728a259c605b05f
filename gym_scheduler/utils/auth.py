# utils/auth.py
from functools import wraps
from flask import jsonify
from flask_login import current_user


def _auth_error(message, error_code, status):
    return jsonify({'success': False, 'message': message, 'error_code': error_code}), status


def role_required(*roles):
    """Decorator to require specific role(s)."""

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                return _auth_error('Authentication required', 'authentication_required', 401)

            if not current_user.has_any_role(roles):
                return _auth_error(f'Role required: {", ".join(roles)}', 'insufficient_role', 403)

            return f(*args, **kwargs)

        return decorated_function

    return decorator


def tenant_required(f):
    """Decorator that rejects users bound to no gym unless they are superadmins."""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return _auth_error('Authentication required', 'authentication_required', 401)

        if not current_user.is_superadmin and not current_user.gym_id:
            return _auth_error('User is not assigned to a gym', 'tenant_required', 403)

        return f(*args, **kwargs)

    return decorated_function


def current_gym_id():
    """Gym the current user acts for; None for superadmins, who see every gym."""
    if current_user.is_superadmin:
        return None
    return current_user.gym_id
