"""Tests for class catalog rules."""

import pytest

from gym_scheduler.models import FitnessClass
from gym_scheduler.services import (
    CatalogService, SessionSchedulerService,
    InvalidArgumentError, ConflictError, NotFoundError, SchedulingErrorCode
)
from tests.conftest import at


def yoga_data(**overrides):
    data = {'name': 'Yoga', 'category': 'yoga', 'duration': 60, 'capacity': 10}
    data.update(overrides)
    return data


def test_create_class(gym):
    fitness_class = CatalogService.create_class(gym.id, yoga_data(description='Slow flow'))

    assert fitness_class.gym_id == gym.id
    assert fitness_class.capacity == 10
    assert fitness_class.is_active is True
    assert fitness_class.difficulty == 'all_levels'


@pytest.mark.parametrize("missing", ['name', 'category', 'duration', 'capacity'])
def test_create_class_requires_core_fields(gym, missing):
    data = yoga_data()
    del data[missing]

    with pytest.raises(InvalidArgumentError, match='is required'):
        CatalogService.create_class(gym.id, data)


@pytest.mark.parametrize("overrides", [
    {'capacity': 0},
    {'duration': -5},
    {'category': 'knitting'},
    {'difficulty': 'legendary'},
    {'colour': 'blue'},
])
def test_create_class_rejects_invalid_values(gym, overrides):
    with pytest.raises(InvalidArgumentError):
        CatalogService.create_class(gym.id, yoga_data(**overrides))
    assert FitnessClass.query.count() == 0


def test_class_name_unique_per_gym(gym, other_gym):
    CatalogService.create_class(gym.id, yoga_data())

    with pytest.raises(ConflictError) as excinfo:
        CatalogService.create_class(gym.id, yoga_data(capacity=5))
    assert excinfo.value.message == 'Class with this name already exists'

    CatalogService.create_class(other_gym.id, yoga_data())
    assert FitnessClass.query.count() == 2


def test_update_class(gym):
    fitness_class = CatalogService.create_class(gym.id, yoga_data())
    CatalogService.create_class(gym.id, yoga_data(name='Spin', category='cardio'))

    updated = CatalogService.update_class(gym.id, fitness_class.id, {'capacity': 12, 'is_active': False})
    assert updated.capacity == 12
    assert updated.is_active is False

    with pytest.raises(ConflictError):
        CatalogService.update_class(gym.id, fitness_class.id, {'name': 'Spin'})


def test_list_and_category_listing(gym):
    CatalogService.create_class(gym.id, yoga_data(name='Vinyasa'))
    CatalogService.create_class(gym.id, yoga_data(name='Ashtanga'))
    CatalogService.create_class(gym.id, yoga_data(name='Yin', is_active=False))
    CatalogService.create_class(gym.id, yoga_data(name='Spin', category='cardio'))

    assert [c.name for c in CatalogService.list_classes(gym.id)] == ['Ashtanga', 'Spin', 'Vinyasa', 'Yin']
    assert [c.name for c in CatalogService.list_classes_by_category(gym.id, 'yoga')] == ['Ashtanga', 'Vinyasa']


def test_delete_class_with_sessions_is_refused(gym, trainer):
    fitness_class = CatalogService.create_class(gym.id, yoga_data())
    SessionSchedulerService.create_session(gym.id, fitness_class.id, trainer.id, at(9), at(10), 'Room A')

    with pytest.raises(ConflictError) as excinfo:
        CatalogService.delete_class(gym.id, fitness_class.id)
    assert excinfo.value.error_code == SchedulingErrorCode.CLASS_HAS_SESSIONS


def test_delete_class(gym, other_gym):
    fitness_class = CatalogService.create_class(gym.id, yoga_data())

    with pytest.raises(NotFoundError):
        CatalogService.delete_class(other_gym.id, fitness_class.id)

    assert CatalogService.delete_class(gym.id, fitness_class.id) is True
    assert FitnessClass.query.count() == 0
