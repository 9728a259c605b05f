# services/transaction.py
"""
Transaction handling shared by the write paths of every service.
Either all checks pass and one commit happens, or the session is rolled back.
"""

from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError

from gym_scheduler.extensions import db
from gym_scheduler.models import Gym
from .errors import SchedulingError, ConflictError, NotFoundError, SchedulingErrorCode


@contextmanager
def atomic(logger, action, on_integrity_error=None):
    """
    Run the body of a write operation and commit it.

    Args:
        logger: service logger
        action: short description used in log lines
        on_integrity_error: callable mapping an IntegrityError to a ConflictError

    Raises:
        SchedulingError: domain rejection, after rollback
        ConflictError: a store constraint fired, after rollback
    """
    try:
        yield
        db.session.commit()
    except SchedulingError as e:
        db.session.rollback()
        logger.warning(f"{action} rejected: {e.message}")
        raise
    except IntegrityError as e:
        db.session.rollback()
        logger.warning(f"{action} violated a store constraint: {e.orig}")
        if on_integrity_error is not None:
            raise on_integrity_error(e) from e
        raise ConflictError('Operation conflicts with existing data',
                            SchedulingErrorCode.SCHEDULE_CONFLICT) from e
    except Exception:
        db.session.rollback()
        logger.error(f"{action} failed", exc_info=True)
        raise


def lock_tenant(gym_id):
    """
    Take a row lock on the gym so scheduling writes of one tenant run one at a time.

    SQLite ignores FOR UPDATE; it only ever has a single writer anyway.
    """
    gym = (
        db.session.query(Gym)
        .filter(Gym.id == gym_id)
        .with_for_update()
        .first()
    )
    if gym is None:
        raise NotFoundError('Gym not found', SchedulingErrorCode.TENANT_NOT_FOUND)
    return gym


def scoped(query, model, gym_id):
    """Restrict a query to one gym; gym_id None means platform-wide access."""
    if gym_id is not None:
        query = query.filter(model.gym_id == gym_id)
    return query
