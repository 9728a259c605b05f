# controllers/auth/forms.py
"""
Flask-WTF form for API login.
"""

from wtforms import StringField, PasswordField, BooleanField
from wtforms.validators import DataRequired, Email, Length

from gym_scheduler.controllers import ApiForm


class LoginForm(ApiForm):
    """User login form with email and password."""

    email = StringField(
        'Email',
        validators=[
            DataRequired(message='Email is required'),
            Email(message='Invalid email address'),
            Length(max=120, message='Email is too long')
        ]
    )

    password = PasswordField(
        'Password',
        validators=[
            DataRequired(message='Password is required'),
            Length(min=1, max=255, message='Password is too long')
        ]
    )

    remember_me = BooleanField('Remember me', default=False)
