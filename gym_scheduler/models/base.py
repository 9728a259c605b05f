# models/base.py
from datetime import datetime, timezone
import uuid

from gym_scheduler.extensions import db


def utcnow():
    """Naive UTC timestamp, the representation every datetime column uses."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BaseModel(db.Model):
    """Base model class with common functionality."""

    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Columns never copied from client payloads
    PROTECTED_FIELDS = ('id', 'created_at', 'updated_at')

    def to_dict(self):
        """Convert model instance to dictionary."""
        result = {}

        for column in self.__table__.columns:
            value = getattr(self, column.name)
            if isinstance(value, datetime):
                result[column.name] = value.isoformat()
            else:
                result[column.name] = value

        return result

    def from_dict(self, data):
        """Update model instance from dictionary."""
        for field, value in data.items():
            if hasattr(self, field) and field not in self.PROTECTED_FIELDS:
                setattr(self, field, value)
