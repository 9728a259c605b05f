# models/attendance.py
from sqlalchemy import Index

from gym_scheduler.extensions import db
from .base import BaseModel, utcnow


class AttendanceType:
    GYM = 'gym'
    CLASS = 'class'
    PERSONAL_TRAINING = 'personal_training'

    ALL = (GYM, CLASS, PERSONAL_TRAINING)


class Attendance(BaseModel):
    """Check-in ledger entry. Class check-ins also flip the enrollment's attended flag."""

    __tablename__ = 'attendance'

    gym_id = db.Column(db.String(36), db.ForeignKey('gym.id'), nullable=False, index=True)
    member_id = db.Column(db.String(36), db.ForeignKey('member.id'), nullable=False, index=True)
    class_session_id = db.Column(db.String(36), db.ForeignKey('class_session.id', ondelete='SET NULL'),
                                 nullable=True, index=True)
    check_in_time = db.Column(db.DateTime, default=utcnow, nullable=False)
    check_out_time = db.Column(db.DateTime, nullable=True)
    duration = db.Column(db.Integer, nullable=True)  # minutes, set on check-out
    attendance_type = db.Column(db.String(20), default=AttendanceType.GYM, nullable=False)
    notes = db.Column(db.Text, nullable=True)
    created_by = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=True)

    # Relationships
    member = db.relationship('Member', back_populates='attendances')
    class_session = db.relationship('ClassSession')

    __table_args__ = (
        Index('idx_attendance_gym_member_open', 'gym_id', 'member_id', 'check_out_time'),
        Index('idx_attendance_member_check_in', 'member_id', 'check_in_time'),
    )

    @property
    def is_open(self):
        return self.check_out_time is None

    def __repr__(self):
        return f'<Attendance {self.member_id} {self.attendance_type} {self.check_in_time}>'
