# services/catalog_service.py
"""
Class catalog management plus the staff and member lookups the scheduler relies on.
All lookups are scoped to one gym unless the caller is platform-wide (gym_id None).
"""

import logging

from gym_scheduler.extensions import db
from gym_scheduler.models import (
    FitnessClass, ClassCategory, ClassDifficulty, ClassSession, Staff, Member
)
from .errors import (
    NotFoundError, InvalidArgumentError, ConflictError, SchedulingErrorCode
)
from .transaction import atomic, scoped
from .validation import positive_int, required_text

logger = logging.getLogger('catalog_service')

CLASS_FIELDS = ('name', 'description', 'category', 'duration', 'capacity', 'difficulty', 'is_active')


def _duplicate_class_name(error):
    return ConflictError('Class with this name already exists',
                         SchedulingErrorCode.DUPLICATE_CLASS_NAME)


class CatalogService:
    """Class definitions (ClassCatalog) and read-only staff/member directories."""

    # ===============================
    # LOOKUPS
    # ===============================

    @staticmethod
    def get_class(gym_id, class_id):
        fitness_class = scoped(FitnessClass.query, FitnessClass, gym_id).filter(
            FitnessClass.id == class_id
        ).first()
        if fitness_class is None:
            raise NotFoundError('Class not found', SchedulingErrorCode.CLASS_NOT_FOUND)
        return fitness_class

    @staticmethod
    def get_instructor(gym_id, staff_id):
        """Look up a staff member; the trainer check is left to the scheduler."""
        staff = scoped(Staff.query, Staff, gym_id).filter(Staff.id == staff_id).first()
        if staff is None:
            raise NotFoundError('Instructor not found', SchedulingErrorCode.INSTRUCTOR_NOT_FOUND)
        return staff

    @staticmethod
    def get_member(gym_id, member_id):
        member = scoped(Member.query, Member, gym_id).filter(Member.id == member_id).first()
        if member is None:
            raise NotFoundError('Member not found', SchedulingErrorCode.MEMBER_NOT_FOUND)
        return member

    @staticmethod
    def list_classes(gym_id):
        return scoped(FitnessClass.query, FitnessClass, gym_id).order_by(FitnessClass.name).all()

    @staticmethod
    def list_classes_by_category(gym_id, category):
        return (
            scoped(FitnessClass.query, FitnessClass, gym_id)
            .filter(FitnessClass.category == category, FitnessClass.is_active.is_(True))
            .order_by(FitnessClass.name)
            .all()
        )

    # ===============================
    # CLASS CATALOG WRITES
    # ===============================

    @staticmethod
    def _clean_class_data(data, partial=False):
        """Validate class fields; with partial=True only the supplied fields are checked."""
        unknown = set(data) - set(CLASS_FIELDS)
        if unknown:
            raise InvalidArgumentError(f"Unknown class fields: {', '.join(sorted(unknown))}")

        cleaned = {}
        for field in ('name', 'category', 'duration', 'capacity'):
            if field not in data:
                if not partial:
                    raise InvalidArgumentError(f'{field.capitalize()} is required')
                continue
            cleaned[field] = data[field]

        if 'name' in cleaned:
            cleaned['name'] = required_text(cleaned['name'], 'Name')

        if 'category' in cleaned and cleaned['category'] not in ClassCategory.ALL:
            raise InvalidArgumentError(f"Category must be one of: {', '.join(ClassCategory.ALL)}")

        if 'duration' in cleaned:
            cleaned['duration'] = positive_int(cleaned['duration'], 'Duration')
        if 'capacity' in cleaned:
            cleaned['capacity'] = positive_int(cleaned['capacity'], 'Capacity',
                                              SchedulingErrorCode.INVALID_CAPACITY)

        if 'difficulty' in data and data['difficulty'] is not None:
            if data['difficulty'] not in ClassDifficulty.ALL:
                raise InvalidArgumentError(f"Difficulty must be one of: {', '.join(ClassDifficulty.ALL)}")
            cleaned['difficulty'] = data['difficulty']

        if 'description' in data:
            cleaned['description'] = data['description'] or ''
        if 'is_active' in data and data['is_active'] is not None:
            cleaned['is_active'] = bool(data['is_active'])

        return cleaned

    @staticmethod
    def _ensure_unique_name(gym_id, name, exclude_id=None):
        query = FitnessClass.query.filter(FitnessClass.gym_id == gym_id, FitnessClass.name == name)
        if exclude_id:
            query = query.filter(FitnessClass.id != exclude_id)
        if db.session.query(query.exists()).scalar():
            raise ConflictError('Class with this name already exists',
                                SchedulingErrorCode.DUPLICATE_CLASS_NAME)

    @staticmethod
    def create_class(gym_id, data):
        """
        Add a class definition to a gym's catalog.

        Args:
            gym_id: Owning gym
            data: name, category, duration, capacity and optional description,
                  difficulty, is_active

        Returns:
            FitnessClass: The persisted class
        """
        if not gym_id:
            raise InvalidArgumentError('A gym is required to create a class')

        with atomic(logger, 'Create class', on_integrity_error=_duplicate_class_name):
            cleaned = CatalogService._clean_class_data(data)
            CatalogService._ensure_unique_name(gym_id, cleaned['name'])

            fitness_class = FitnessClass(gym_id=gym_id, **cleaned)
            db.session.add(fitness_class)

        logger.info(f"Class created: {fitness_class.name} ({fitness_class.id}) in gym {gym_id}")
        return fitness_class

    @staticmethod
    def update_class(gym_id, class_id, data):
        with atomic(logger, 'Update class', on_integrity_error=_duplicate_class_name):
            fitness_class = CatalogService.get_class(gym_id, class_id)
            cleaned = CatalogService._clean_class_data(data, partial=True)

            if 'name' in cleaned and cleaned['name'] != fitness_class.name:
                CatalogService._ensure_unique_name(fitness_class.gym_id, cleaned['name'],
                                                   exclude_id=fitness_class.id)

            fitness_class.from_dict(cleaned)

        logger.info(f"Class updated: {fitness_class.id}")
        return fitness_class

    @staticmethod
    def delete_class(gym_id, class_id):
        with atomic(logger, 'Delete class'):
            fitness_class = CatalogService.get_class(gym_id, class_id)

            has_sessions = db.session.query(
                ClassSession.query.filter(ClassSession.class_id == fitness_class.id).exists()
            ).scalar()
            if has_sessions:
                raise ConflictError('Cannot delete class with existing sessions. Deactivate it instead.',
                                    SchedulingErrorCode.CLASS_HAS_SESSIONS)

            db.session.delete(fitness_class)

        logger.info(f"Class deleted: {class_id}")
        return True
