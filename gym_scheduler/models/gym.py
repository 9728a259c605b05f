# models/gym.py
from gym_scheduler.extensions import db
from .base import BaseModel


class Gym(BaseModel):
    """A tenant. Every scheduling record belongs to exactly one gym."""

    __tablename__ = 'gym'

    name = db.Column(db.String(120), nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    users = db.relationship('User', back_populates='gym', lazy='dynamic')

    def __repr__(self):
        return f'<Gym {self.name}>'
