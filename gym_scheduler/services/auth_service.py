# services/auth_service.py
"""
Authentication for the JSON API.
Wraps Flask-Login so controllers only deal with (success, user, message) results.
"""

import logging

from flask_login import login_user, logout_user, current_user

from gym_scheduler.extensions import db
from gym_scheduler.models import User, utcnow

logger = logging.getLogger('auth_service')


class AuthService:
    """Service class for login and logout."""

    @staticmethod
    def authenticate_user(email, password, remember_me=False):
        """
        Authenticate a user by email and password and start a login session.

        Args:
            email: Account email, compared case-insensitively
            password: Plain-text password
            remember_me: Whether to set the remember-me cookie

        Returns:
            tuple: (success: bool, user: User|None, message: str)
        """
        user = User.query.filter(
            User.email == email.strip().lower(),
            User.is_active.is_(True)
        ).first()

        if user is None or not user.check_password(password):
            logger.warning(f"Failed login attempt for: {email}")
            return False, None, "Invalid email or password"

        user.last_login = utcnow()
        db.session.commit()

        login_user(user, remember=remember_me)

        logger.info(f"Successful login for user: {user.email}")
        return True, user, "Login successful"

    @staticmethod
    def logout_user_session():
        """End the current login session."""
        email = current_user.email if current_user.is_authenticated else 'anonymous'
        logout_user()
        logger.info(f"User logged out: {email}")
        return True
