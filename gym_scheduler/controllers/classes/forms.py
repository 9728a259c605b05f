# controllers/classes/forms.py
"""
Flask-WTF forms validating the JSON payloads of the class and session endpoints.
CSRF is off: these forms only ever see API request bodies.
"""

from wtforms import StringField, IntegerField, TextAreaField, BooleanField
from wtforms.validators import (
    DataRequired, Length, NumberRange, Optional, AnyOf, ValidationError
)

from gym_scheduler.controllers import ApiForm
from gym_scheduler.models import ClassCategory, ClassDifficulty, SessionStatus
from gym_scheduler.utils.time_utils import parse_iso_datetime


def iso_datetime(form, field):
    """Validate an ISO-8601 timestamp, e.g. 2024-05-06T09:00:00Z."""
    if not field.data:
        return
    try:
        parse_iso_datetime(field.data)
    except ValueError:
        raise ValidationError('Must be an ISO 8601 datetime')


class ClassForm(ApiForm):
    """Class definition payload."""

    name = StringField('Name', validators=[
        DataRequired(message='Name is required'),
        Length(max=120, message='Name must be at most 120 characters')
    ])
    description = TextAreaField('Description', validators=[Optional()])
    category = StringField('Category', validators=[
        DataRequired(message='Category is required'),
        AnyOf(ClassCategory.ALL, message='Not a valid category')
    ])
    duration = IntegerField('Duration', validators=[
        DataRequired(message='Duration is required'),
        NumberRange(min=1, message='Duration must be positive')
    ])
    capacity = IntegerField('Capacity', validators=[
        DataRequired(message='Capacity is required'),
        NumberRange(min=1, message='Capacity must be positive')
    ])
    difficulty = StringField('Difficulty', validators=[
        Optional(),
        AnyOf(ClassDifficulty.ALL, message='Not a valid difficulty')
    ])
    is_active = BooleanField('Active', default=True)


class ClassUpdateForm(ClassForm):
    """Partial class update; every field is optional."""

    name = StringField('Name', validators=[Optional(), Length(max=120)])
    category = StringField('Category', validators=[
        Optional(), AnyOf(ClassCategory.ALL, message='Not a valid category')
    ])
    duration = IntegerField('Duration', validators=[
        Optional(), NumberRange(min=1, message='Duration must be positive')
    ])
    capacity = IntegerField('Capacity', validators=[
        Optional(), NumberRange(min=1, message='Capacity must be positive')
    ])


class SessionForm(ApiForm):
    """New class session payload."""

    class_id = StringField('Class', validators=[DataRequired(message='Class is required')])
    instructor_id = StringField('Instructor', validators=[DataRequired(message='Instructor is required')])
    start_time = StringField('Start time', validators=[
        DataRequired(message='Start time is required'), iso_datetime
    ])
    end_time = StringField('End time', validators=[
        DataRequired(message='End time is required'), iso_datetime
    ])
    room = StringField('Room', validators=[
        DataRequired(message='Room is required'),
        Length(max=50, message='Room must be at most 50 characters')
    ])
    max_capacity = IntegerField('Max capacity', validators=[
        Optional(), NumberRange(min=1, message='Max capacity must be positive')
    ])
    notes = TextAreaField('Notes', validators=[Optional()])


class SessionUpdateForm(ApiForm):
    """Partial session update; only the keys present in the payload are applied."""

    class_id = StringField('Class', validators=[Optional()])
    instructor_id = StringField('Instructor', validators=[Optional()])
    start_time = StringField('Start time', validators=[Optional(), iso_datetime])
    end_time = StringField('End time', validators=[Optional(), iso_datetime])
    room = StringField('Room', validators=[Optional(), Length(max=50)])
    max_capacity = IntegerField('Max capacity', validators=[
        Optional(), NumberRange(min=1, message='Max capacity must be positive')
    ])
    status = StringField('Status', validators=[
        Optional(), AnyOf(SessionStatus.ALL, message='Not a valid status')
    ])
    notes = TextAreaField('Notes', validators=[Optional()])
