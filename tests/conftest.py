"""Pytest fixtures: a testing app on in-memory SQLite plus model factories."""

from datetime import datetime, timedelta

import pytest

from gym_scheduler import create_app
from gym_scheduler.extensions import db
from gym_scheduler.models import (
    Gym, User, RoleType, FitnessClass, Staff, StaffPosition, Member, MembershipStatus
)

DAY = datetime(2024, 1, 1)


def at(hour, minute=0, day=DAY):
    """Naive UTC instant on the fixture day."""
    return day + timedelta(hours=hour, minutes=minute)


@pytest.fixture
def app():
    """Application with a fresh schema for every test."""
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def gym(app):
    gym = Gym(name='Downtown Fitness')
    db.session.add(gym)
    db.session.commit()
    return gym


@pytest.fixture
def other_gym(app):
    gym = Gym(name='Uptown Fitness')
    db.session.add(gym)
    db.session.commit()
    return gym


@pytest.fixture
def make_class(gym):
    def _make(name='Yoga', capacity=10, duration=60, category='yoga', gym_id=None, **extra):
        fitness_class = FitnessClass(
            gym_id=gym_id or gym.id, name=name, category=category,
            duration=duration, capacity=capacity, **extra
        )
        db.session.add(fitness_class)
        db.session.commit()
        return fitness_class
    return _make


@pytest.fixture
def make_staff(gym):
    def _make(first_name='Jane', position=StaffPosition.TRAINER, gym_id=None):
        staff = Staff(
            gym_id=gym_id or gym.id, first_name=first_name, last_name='Doe',
            email=f'{first_name.lower()}@gym.test', position=position
        )
        db.session.add(staff)
        db.session.commit()
        return staff
    return _make


@pytest.fixture
def make_member(gym):
    def _make(first_name='Maya', status=MembershipStatus.ACTIVE, gym_id=None):
        member = Member(
            gym_id=gym_id or gym.id, first_name=first_name, last_name='Smith',
            email=f'{first_name.lower()}@member.test', membership_status=status
        )
        db.session.add(member)
        db.session.commit()
        return member
    return _make


@pytest.fixture
def yoga(make_class):
    return make_class()


@pytest.fixture
def trainer(make_staff):
    return make_staff()


@pytest.fixture
def member(make_member):
    return make_member()


@pytest.fixture
def make_user(gym):
    def _make(email='admin@example.com', role=RoleType.ADMIN, password='secret-pass', gym_id=None):
        user = User(
            email=email, role=role,
            gym_id=None if role == RoleType.SUPERADMIN else (gym_id or gym.id)
        )
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user
    return _make


@pytest.fixture
def login(client):
    def _login(email, password='secret-pass'):
        return client.post('/auth/login', json={'email': email, 'password': password})
    return _login


@pytest.fixture
def admin_client(client, make_user, login):
    """Test client logged in as an admin of the fixture gym."""
    make_user()
    response = login('admin@example.com')
    assert response.status_code == 200
    return client
