"""HTTP tests: status mapping, payload validation, auth and the full booking flow."""

import pytest

from gym_scheduler.models import RoleType, StaffPosition


@pytest.fixture
def session_payload(yoga, trainer):
    return {
        'class_id': yoga.id,
        'instructor_id': trainer.id,
        'start_time': '2024-01-01T09:00:00Z',
        'end_time': '2024-01-01T10:00:00Z',
        'room': 'Room A'
    }


def create_session(client, payload, **overrides):
    return client.post('/api/classes/sessions', json={**payload, **overrides})


# ===============================
# HEALTH AND AUTH
# ===============================

def test_health(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert response.get_json()['status'] == 'ok'


def test_database_health(client):
    response = client.get('/health/database')
    assert response.status_code == 200
    assert response.get_json()['status'] == 'healthy'


def test_requires_login(client, gym):
    response = client.get('/api/classes/sessions/all')
    assert response.status_code == 401
    assert response.get_json()['error_code'] == 'authentication_required'


def test_login_failure(client, make_user, login):
    make_user()
    response = login('admin@example.com', password='wrong')
    assert response.status_code == 401
    assert response.get_json()['success'] is False


def test_login_validation_error(client):
    response = client.post('/auth/login', json={'email': 'not-an-email'})
    assert response.status_code == 400
    body = response.get_json()
    assert body['error_code'] == 'validation_error'
    assert 'password' in body['errors']


def test_me_and_logout(admin_client):
    me = admin_client.get('/auth/me').get_json()
    assert me['user']['email'] == 'admin@example.com'
    assert 'password_hash' not in me['user']

    assert admin_client.post('/auth/logout').status_code == 200
    assert admin_client.get('/auth/me').status_code == 401


def test_staff_role_cannot_schedule(client, make_user, login, session_payload):
    make_user(email='desk@example.com', role=RoleType.STAFF)
    login('desk@example.com')

    response = create_session(client, session_payload)
    assert response.status_code == 403


# ===============================
# ERROR MAPPING
# ===============================

def test_create_session_returns_201_with_display_data(admin_client, session_payload, yoga, trainer):
    response = create_session(admin_client, session_payload)

    assert response.status_code == 201
    session = response.get_json()['session']
    assert session['status'] == 'scheduled'
    assert session['class']['name'] == yoga.name
    assert session['instructor']['name'] == trainer.full_name
    assert session['effective_capacity'] == yoga.capacity
    assert session['enrollments'] == []
    assert session['is_full'] is False


def test_conflict_maps_to_409(admin_client, session_payload):
    create_session(admin_client, session_payload)

    response = create_session(admin_client, session_payload,
                              start_time='2024-01-01T09:30:00Z', end_time='2024-01-01T10:30:00Z')

    assert response.status_code == 409
    body = response.get_json()
    assert body == {
        'success': False,
        'message': 'Room is already booked for this time slot',
        'error_code': 'room_conflict'
    }


def test_not_found_maps_to_404(admin_client, session_payload):
    response = create_session(admin_client, session_payload, class_id='missing')
    assert response.status_code == 404
    assert response.get_json()['message'] == 'Class not found'


def test_non_trainer_maps_to_400(admin_client, session_payload, make_staff):
    manager = make_staff('Max', position=StaffPosition.MANAGER)

    response = create_session(admin_client, session_payload, instructor_id=manager.id)

    assert response.status_code == 400
    assert response.get_json()['error_code'] == 'not_a_trainer'


def test_bad_interval_maps_to_400(admin_client, session_payload):
    response = create_session(admin_client, session_payload, end_time='2024-01-01T08:00:00Z')

    assert response.status_code == 400
    assert response.get_json()['error_code'] == 'invalid_interval'


def test_malformed_payload_is_validation_error(admin_client, session_payload):
    response = create_session(admin_client, session_payload, start_time='9am', room='')

    assert response.status_code == 400
    errors = response.get_json()['errors']
    assert set(errors) == {'start_time', 'room'}


@pytest.mark.parametrize("overrides", [
    {'room': True},
    {'max_capacity': True},
    {'room': ['Room A']},
    {'max_capacity': {'places': 5}},
])
def test_session_fields_reject_json_booleans_and_objects(admin_client, session_payload, overrides):
    response = create_session(admin_client, session_payload, **overrides)

    assert response.status_code == 400
    body = response.get_json()
    assert body['error_code'] == 'validation_error'
    assert set(body['errors']) == set(overrides)


def test_session_update_rejects_json_boolean(admin_client, session_payload):
    session_id = create_session(admin_client, session_payload).get_json()['session']['id']

    response = admin_client.put(f'/api/classes/sessions/{session_id}', json={'room': False})

    assert response.status_code == 400
    assert response.get_json()['error_code'] == 'validation_error'


def test_class_fields_reject_json_booleans(admin_client):
    response = admin_client.post('/api/classes', json={
        'name': True, 'category': 'yoga', 'duration': 60, 'capacity': 10
    })
    assert response.status_code == 400
    body = response.get_json()
    assert body['error_code'] == 'validation_error'
    assert 'name' in body['errors']

    response = admin_client.post('/api/classes', json={
        'name': 'Spin', 'category': 'cardio', 'duration': 45, 'capacity': 20, 'is_active': False
    })
    assert response.status_code == 201
    assert response.get_json()['class']['is_active'] is False


def test_login_rejects_json_boolean_email(client):
    response = client.post('/auth/login', json={'email': True, 'password': 'secret-pass'})
    assert response.status_code == 400
    assert 'email' in response.get_json()['errors']


def test_unknown_route_is_json_404(admin_client):
    response = admin_client.get('/api/nothing-here')
    assert response.status_code == 404
    assert response.get_json()['success'] is False


def test_update_session_partial(admin_client, session_payload):
    session_id = create_session(admin_client, session_payload).get_json()['session']['id']

    response = admin_client.put(f'/api/classes/sessions/{session_id}', json={'notes': 'Mats provided'})
    assert response.status_code == 200
    session = response.get_json()['session']
    assert session['notes'] == 'Mats provided'
    assert session['room'] == 'Room A'

    response = admin_client.put(f'/api/classes/sessions/{session_id}', json={'status': 'completed'})
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Cannot change status from scheduled to completed'


def test_sessions_by_date_and_delete(admin_client, session_payload):
    session_id = create_session(admin_client, session_payload).get_json()['session']['id']

    listed = admin_client.get('/api/classes/sessions/date/2024-01-01').get_json()['sessions']
    assert [s['id'] for s in listed] == [session_id]
    assert admin_client.get('/api/classes/sessions/date/2024-01-02').get_json()['sessions'] == []
    assert admin_client.get('/api/classes/sessions/date/someday').status_code == 400
    assert admin_client.get('/api/classes/sessions/date/2024-01-01garbage').status_code == 400

    assert admin_client.delete(f'/api/classes/sessions/{session_id}').status_code == 200
    assert admin_client.get(f'/api/classes/sessions/{session_id}').status_code == 404


def test_class_crud(admin_client):
    response = admin_client.post('/api/classes', json={
        'name': 'Spin', 'category': 'cardio', 'duration': 45, 'capacity': 20
    })
    assert response.status_code == 201
    class_id = response.get_json()['class']['id']

    assert admin_client.post('/api/classes', json={
        'name': 'Spin', 'category': 'cardio', 'duration': 45, 'capacity': 20
    }).status_code == 409

    assert admin_client.post('/api/classes', json={'name': 'Broken', 'capacity': 0}).status_code == 400

    response = admin_client.put(f'/api/classes/{class_id}', json={'capacity': 25})
    assert response.get_json()['class']['capacity'] == 25

    cardio = admin_client.get('/api/classes/category/cardio').get_json()['classes']
    assert [c['name'] for c in cardio] == ['Spin']

    assert admin_client.delete(f'/api/classes/{class_id}').status_code == 200
    assert admin_client.get(f'/api/classes/{class_id}').status_code == 404


def test_other_gym_cannot_see_session(client, admin_client, session_payload, other_gym, make_user, login):
    session_id = create_session(admin_client, session_payload).get_json()['session']['id']
    admin_client.post('/auth/logout')

    make_user(email='rival@example.com', gym_id=other_gym.id)
    login('rival@example.com')

    assert client.get(f'/api/classes/sessions/{session_id}').status_code == 404


# ===============================
# ENROLLMENT AND CHECK-IN
# ===============================

def test_enrollment_endpoints(admin_client, session_payload, member):
    session_id = create_session(admin_client, session_payload).get_json()['session']['id']
    enroll_url = f'/api/classes/sessions/{session_id}/enroll'

    assert admin_client.post(enroll_url, json={}).status_code == 400

    response = admin_client.post(enroll_url, json={'member_id': member.id})
    assert response.status_code == 200
    assert [e['member_id'] for e in response.get_json()['session']['enrollments']] == [member.id]

    response = admin_client.post(enroll_url, json={'member_id': member.id})
    assert response.status_code == 409
    assert response.get_json()['error_code'] == 'already_enrolled'

    attendance_url = f'/api/classes/sessions/{session_id}/attendance/{member.id}'
    assert admin_client.put(attendance_url, json={'attended': 'yes'}).status_code == 400

    response = admin_client.delete(f'{enroll_url}/{member.id}')
    assert response.status_code == 200
    assert response.get_json()['session']['enrollments'] == []

    assert admin_client.delete(f'{enroll_url}/{member.id}').status_code == 404


def test_check_in_endpoints(admin_client, session_payload, member):
    session_id = create_session(admin_client, session_payload).get_json()['session']['id']
    admin_client.post(f'/api/classes/sessions/{session_id}/enroll', json={'member_id': member.id})

    response = admin_client.post('/api/attendance/', json={'member_id': member.id, 'session_id': session_id})
    assert response.status_code == 201
    attendance_id = response.get_json()['attendance']['id']

    assert admin_client.post('/api/attendance/', json={
        'member_id': member.id, 'session_id': session_id
    }).status_code == 409

    session = admin_client.get(f'/api/classes/sessions/{session_id}').get_json()['session']
    assert session['attendance_stats'] == {'attended': 1, 'total': 1, 'percentage': 100}

    response = admin_client.put(f'/api/attendance/checkout/{attendance_id}')
    assert response.status_code == 200
    assert response.get_json()['attendance']['check_out_time'] is not None

    history = admin_client.get(f'/api/attendance/member/{member.id}').get_json()['attendance']
    assert [a['id'] for a in history] == [attendance_id]

    assert admin_client.delete(f'/api/attendance/{attendance_id}').status_code == 200
    session = admin_client.get(f'/api/classes/sessions/{session_id}').get_json()['session']
    assert session['attendance_stats']['attended'] == 0


def test_end_to_end_booking_flow(admin_client, make_staff, make_member):
    """Yoga with Jane in Room A: book, reject the overlap, enroll, mark attended."""
    response = admin_client.post('/api/classes', json={
        'name': 'Yoga', 'category': 'yoga', 'duration': 60, 'capacity': 10
    })
    class_id = response.get_json()['class']['id']
    jane = make_staff('Jane', position=StaffPosition.TRAINER)
    m1 = make_member('M1')

    response = admin_client.post('/api/classes/sessions', json={
        'class_id': class_id, 'instructor_id': jane.id, 'room': 'Room A',
        'start_time': '2024-01-01T09:00:00Z', 'end_time': '2024-01-01T10:00:00Z'
    })
    assert response.status_code == 201
    session_id = response.get_json()['session']['id']

    response = admin_client.post('/api/classes/sessions', json={
        'class_id': class_id, 'instructor_id': jane.id, 'room': 'Room A',
        'start_time': '2024-01-01T09:30:00Z', 'end_time': '2024-01-01T10:30:00Z'
    })
    assert response.status_code == 409

    response = admin_client.post(f'/api/classes/sessions/{session_id}/enroll', json={'member_id': m1.id})
    assert [e['member_id'] for e in response.get_json()['session']['enrollments']] == [m1.id]

    response = admin_client.put(f'/api/classes/sessions/{session_id}/attendance/{m1.id}',
                                json={'attended': True})
    assert response.status_code == 200
    assert response.get_json()['session']['attendance_stats'] == {
        'attended': 1, 'total': 1, 'percentage': 100
    }
