# models/user.py
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from sqlalchemy import Index

from gym_scheduler.extensions import db
from .base import BaseModel


class RoleType:
    """Define role types as constants."""
    SUPERADMIN = 'superadmin'
    ADMIN = 'admin'
    MANAGER = 'manager'
    STAFF = 'staff'

    ALL = (SUPERADMIN, ADMIN, MANAGER, STAFF)

    # Roles allowed to change the class catalog and the timetable
    SCHEDULERS = (SUPERADMIN, ADMIN, MANAGER)


class User(UserMixin, BaseModel):
    """Application user. Superadmins have no gym and see every tenant."""

    __tablename__ = 'users'

    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(80), nullable=True)
    last_name = db.Column(db.String(80), nullable=True)
    role = db.Column(db.String(20), default=RoleType.STAFF, nullable=False)
    gym_id = db.Column(db.String(36), db.ForeignKey('gym.id'), nullable=True, index=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    last_login = db.Column(db.DateTime, nullable=True)

    gym = db.relationship('Gym', back_populates='users')

    __table_args__ = (
        Index('idx_user_gym_role', 'gym_id', 'role'),
    )

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    @property
    def is_superadmin(self):
        return self.role == RoleType.SUPERADMIN

    def has_any_role(self, roles):
        return self.role in roles

    @property
    def full_name(self):
        parts = [self.first_name, self.last_name]
        return ' '.join(p for p in parts if p) or self.email

    def to_dict(self):
        result = super().to_dict()
        result.pop('password_hash', None)
        return result

    def __repr__(self):
        return f'<User {self.email} ({self.role})>'
