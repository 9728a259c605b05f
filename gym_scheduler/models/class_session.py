# models/class_session.py
from sqlalchemy import Index, CheckConstraint, UniqueConstraint, DDL, event

from gym_scheduler.extensions import db
from .base import BaseModel, utcnow


class SessionStatus:
    """Class session status constants."""
    SCHEDULED = 'scheduled'
    IN_PROGRESS = 'in_progress'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

    ALL = (SCHEDULED, IN_PROGRESS, COMPLETED, CANCELLED)

    # Allowed manual transitions; completed and cancelled are terminal
    TRANSITIONS = {
        SCHEDULED: (IN_PROGRESS, CANCELLED),
        IN_PROGRESS: (COMPLETED, CANCELLED),
        COMPLETED: (),
        CANCELLED: (),
    }

    @classmethod
    def can_transition(cls, current, new):
        """Setting the current status again is always allowed."""
        return current == new or new in cls.TRANSITIONS.get(current, ())


class ClassSession(BaseModel):
    """One scheduled occurrence of a class in a room with an instructor."""

    __tablename__ = 'class_session'

    gym_id = db.Column(db.String(36), db.ForeignKey('gym.id'), nullable=False, index=True)
    class_id = db.Column(db.String(36), db.ForeignKey('fitness_class.id'), nullable=False, index=True)
    instructor_id = db.Column(db.String(36), db.ForeignKey('staff.id'), nullable=False, index=True)
    start_time = db.Column(db.DateTime, nullable=False)
    end_time = db.Column(db.DateTime, nullable=False)
    room = db.Column(db.String(50), nullable=False)
    max_capacity = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(20), default=SessionStatus.SCHEDULED, nullable=False)
    notes = db.Column(db.Text, nullable=True)

    # Relationships
    fitness_class = db.relationship('FitnessClass', back_populates='sessions')
    instructor = db.relationship('Staff')
    enrollments = db.relationship(
        'SessionEnrollment',
        back_populates='session',
        order_by='SessionEnrollment.enrollment_date',
        cascade='all, delete-orphan'
    )

    __table_args__ = (
        # Conflict lookups: same gym, same room or instructor, time range
        Index('idx_session_gym_room_time', 'gym_id', 'room', 'start_time', 'end_time'),
        Index('idx_session_gym_instructor_time', 'gym_id', 'instructor_id', 'start_time', 'end_time'),

        # Day listings
        Index('idx_session_gym_start', 'gym_id', 'start_time'),

        CheckConstraint('end_time > start_time', name='ck_session_time_order'),
        CheckConstraint('max_capacity > 0', name='ck_session_capacity_positive'),
    )

    @property
    def effective_capacity(self):
        """Session capacity, falling back to the class definition's capacity."""
        if self.max_capacity:
            return self.max_capacity
        return self.fitness_class.capacity if self.fitness_class else 0

    @property
    def enrolled_count(self):
        return len(self.enrollments)

    def is_full(self):
        """Check if session is at capacity"""
        return self.enrolled_count >= self.effective_capacity

    def is_past(self, now=None):
        return self.start_time < (now or utcnow())

    def find_enrollment(self, member_id):
        """Return the enrollment for member_id, or None."""
        for enrollment in self.enrollments:
            if enrollment.member_id == member_id:
                return enrollment
        return None

    def attendance_stats(self):
        total = len(self.enrollments)
        attended = sum(1 for enrollment in self.enrollments if enrollment.attended)
        percentage = round(attended / total * 100) if total > 0 else 0
        return {'attended': attended, 'total': total, 'percentage': percentage}

    def __repr__(self):
        return f'<ClassSession {self.room} {self.start_time:%Y-%m-%d %H:%M}-{self.end_time:%H:%M}>'


class SessionEnrollment(BaseModel):
    """A member's place in a class session, with its attendance flag."""

    __tablename__ = 'session_enrollment'

    session_id = db.Column(db.String(36), db.ForeignKey('class_session.id', ondelete='CASCADE'),
                           nullable=False, index=True)
    member_id = db.Column(db.String(36), db.ForeignKey('member.id'), nullable=False, index=True)
    enrollment_date = db.Column(db.DateTime, default=utcnow, nullable=False)
    attended = db.Column(db.Boolean, default=False, nullable=False)

    session = db.relationship('ClassSession', back_populates='enrollments')
    member = db.relationship('Member', back_populates='enrollments')

    __table_args__ = (
        # A member holds at most one place per session
        UniqueConstraint('session_id', 'member_id', name='uq_enrollment_session_member'),
        Index('idx_enrollment_session_attended', 'session_id', 'attended'),
    )

    def __repr__(self):
        return f'<SessionEnrollment member={self.member_id} attended={self.attended}>'


# PostgreSQL enforces the room and instructor no-overlap rules in the store.
OVERLAP_GUARD_STATEMENTS = (
    ('btree_gist', "CREATE EXTENSION IF NOT EXISTS btree_gist"),
    ('excl_session_room_overlap',
     "ALTER TABLE class_session ADD CONSTRAINT excl_session_room_overlap "
     "EXCLUDE USING gist (gym_id WITH =, room WITH =, "
     "tsrange(start_time, end_time, '[)') WITH &&)"),
    ('excl_session_instructor_overlap',
     "ALTER TABLE class_session ADD CONSTRAINT excl_session_instructor_overlap "
     "EXCLUDE USING gist (gym_id WITH =, instructor_id WITH =, "
     "tsrange(start_time, end_time, '[)') WITH &&)"),
)

for _name, _statement in OVERLAP_GUARD_STATEMENTS:
    event.listen(
        ClassSession.__table__,
        'after_create',
        DDL(_statement).execute_if(dialect='postgresql')
    )
