from .base import BaseModel, utcnow
from .gym import Gym
from .user import User, RoleType
from .fitness_class import FitnessClass, ClassCategory, ClassDifficulty
from .staff import Staff, StaffPosition
from .member import Member, MembershipStatus
from .class_session import ClassSession, SessionEnrollment, SessionStatus, OVERLAP_GUARD_STATEMENTS
from .attendance import Attendance, AttendanceType

__all__ = [
    'BaseModel',
    'utcnow',
    'Gym',
    'User',
    'RoleType',
    'FitnessClass',
    'ClassCategory',
    'ClassDifficulty',
    'Staff',
    'StaffPosition',
    'Member',
    'MembershipStatus',
    'ClassSession',
    'SessionEnrollment',
    'SessionStatus',
    'OVERLAP_GUARD_STATEMENTS',
    'Attendance',
    'AttendanceType'
]
