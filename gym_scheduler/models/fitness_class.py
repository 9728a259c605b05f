# models/fitness_class.py
from sqlalchemy import Index, CheckConstraint

from gym_scheduler.extensions import db
from .base import BaseModel


class ClassCategory:
    """Class category constants."""
    YOGA = 'yoga'
    CARDIO = 'cardio'
    STRENGTH = 'strength'
    HIIT = 'hiit'
    PILATES = 'pilates'
    DANCE = 'dance'
    MARTIAL_ARTS = 'martial_arts'
    OTHER = 'other'

    ALL = (YOGA, CARDIO, STRENGTH, HIIT, PILATES, DANCE, MARTIAL_ARTS, OTHER)


class ClassDifficulty:
    """Class difficulty constants."""
    BEGINNER = 'beginner'
    INTERMEDIATE = 'intermediate'
    ADVANCED = 'advanced'
    ALL_LEVELS = 'all_levels'

    ALL = (BEGINNER, INTERMEDIATE, ADVANCED, ALL_LEVELS)


class FitnessClass(BaseModel):
    """A class definition in a gym's catalog (e.g. 'Morning Yoga')."""

    __tablename__ = 'fitness_class'

    gym_id = db.Column(db.String(36), db.ForeignKey('gym.id'), nullable=False, index=True)
    name = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text, nullable=True, default='')
    category = db.Column(db.String(20), nullable=False)
    duration = db.Column(db.Integer, nullable=False)  # minutes
    capacity = db.Column(db.Integer, nullable=False)
    difficulty = db.Column(db.String(20), default=ClassDifficulty.ALL_LEVELS, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    sessions = db.relationship('ClassSession', back_populates='fitness_class', lazy='dynamic')

    __table_args__ = (
        Index('uq_class_gym_name', 'gym_id', 'name', unique=True),
        Index('idx_class_gym_category_active', 'gym_id', 'category', 'is_active'),
        CheckConstraint('capacity > 0', name='ck_class_capacity_positive'),
        CheckConstraint('duration > 0', name='ck_class_duration_positive'),
    )

    def __repr__(self):
        return f'<FitnessClass {self.name} ({self.category})>'
