# models/member.py
from sqlalchemy import Index

from gym_scheduler.extensions import db
from .base import BaseModel


class MembershipStatus:
    """Membership status constants."""
    ACTIVE = 'active'
    INACTIVE = 'inactive'
    FROZEN = 'frozen'
    EXPIRED = 'expired'

    ALL = (ACTIVE, INACTIVE, FROZEN, EXPIRED)


class Member(BaseModel):
    __tablename__ = 'member'

    gym_id = db.Column(db.String(36), db.ForeignKey('gym.id'), nullable=False, index=True)
    first_name = db.Column(db.String(80), nullable=False)
    last_name = db.Column(db.String(80), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    phone = db.Column(db.String(20), nullable=True)
    membership_status = db.Column(db.String(20), default=MembershipStatus.ACTIVE, nullable=False)

    enrollments = db.relationship('SessionEnrollment', back_populates='member', lazy='dynamic')
    attendances = db.relationship('Attendance', back_populates='member', lazy='dynamic')

    __table_args__ = (
        Index('idx_member_gym_status', 'gym_id', 'membership_status'),
        Index('idx_member_names', 'last_name', 'first_name'),
    )

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    @property
    def has_active_membership(self):
        return self.membership_status == MembershipStatus.ACTIVE

    def __repr__(self):
        return f'<Member {self.full_name}>'
