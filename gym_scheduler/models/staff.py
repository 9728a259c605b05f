# models/staff.py
from sqlalchemy import Index

from gym_scheduler.extensions import db
from .base import BaseModel


class StaffPosition:
    """Staff position constants."""
    MANAGER = 'manager'
    TRAINER = 'trainer'
    RECEPTIONIST = 'receptionist'
    MAINTENANCE = 'maintenance'
    NUTRITIONIST = 'nutritionist'
    OTHER = 'other'

    ALL = (MANAGER, TRAINER, RECEPTIONIST, MAINTENANCE, NUTRITIONIST, OTHER)


class Staff(BaseModel):
    __tablename__ = 'staff'

    gym_id = db.Column(db.String(36), db.ForeignKey('gym.id'), nullable=False, index=True)
    first_name = db.Column(db.String(80), nullable=False)
    last_name = db.Column(db.String(80), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    phone = db.Column(db.String(20), nullable=True)
    position = db.Column(db.String(20), nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    __table_args__ = (
        Index('idx_staff_gym_position', 'gym_id', 'position'),
    )

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    @property
    def is_trainer(self):
        return self.position == StaffPosition.TRAINER

    def __repr__(self):
        return f'<Staff {self.full_name} ({self.position})>'
