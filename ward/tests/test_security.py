import os
import subprocess
import sys

import pytest
from django.conf import settings
from django.core.management import call_command
from django.contrib.sessions.models import Session
from django.urls import reverse
from rest_framework.test import APIClient

from ward.authentication import SESSION_KEY
from ward.models import DEPARTMENTS, DepartmentBeds, StaffAccount
from ward.throttling import LoginRateThrottle

pytestmark = pytest.mark.django_db

PASSWORD = 'Scalpel#2024'


def register(client, email='nour@ward.test', password=PASSWORD, **extra):
    body = {'email': email, 'password': password, 'name': 'Nour'}
    body.update(extra)
    return client.post(reverse('register_view'), body, format='json')


def login(client, email, password=PASSWORD):
    return client.post(reverse('login_view'), {'email': email, 'password': password}, format='json')


def test_register_defaults_to_surgeon_and_starts_session():
    client = APIClient()
    r = register(client)
    assert r.status_code == 201
    assert r.data['role'] == 'surgeon'
    assert 'password' not in r.data
    me = client.get(reverse('me_view'))
    assert me.status_code == 200
    assert me.data['email'] == 'nour@ward.test'


def test_register_stores_only_a_hash():
    register(APIClient())
    staff = StaffAccount.objects.get(email='nour@ward.test')
    assert staff.password != PASSWORD
    assert staff.password.startswith('bcrypt')
    assert staff.check_password(PASSWORD)


def test_register_accepts_requested_role():
    r = register(APIClient(), role='resident')
    assert r.status_code == 201
    assert r.data['role'] == 'resident'


def test_register_duplicate_email_is_400():
    register(APIClient())
    r = register(APIClient(), email='NOUR@ward.test')
    assert r.status_code == 400
    assert r.data['field'] == 'email'
    assert StaffAccount.objects.count() == 1


def test_register_rejects_weak_password():
    r = register(APIClient(), password='12345678')
    assert r.status_code == 400
    assert r.data['field'] == 'password'
    assert not StaffAccount.objects.exists()


def test_login_failures_look_the_same(make_staff):
    make_staff('samir@ward.test')
    wrong_password = login(APIClient(), 'samir@ward.test', 'not-the-password')
    unknown_email = login(APIClient(), 'ghost@ward.test')
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.data['message'] == unknown_email.data['message']


def test_login_ignores_role_in_payload(make_staff):
    staff = make_staff('samir@ward.test', role='surgeon')
    client = APIClient()
    r = client.post(reverse('login_view'),
                    {'email': 'samir@ward.test', 'password': PASSWORD, 'role': 'head_of_department'}, format='json')
    assert r.status_code == 200
    assert r.data['user']['role'] == 'surgeon'
    staff.refresh_from_db()
    assert staff.role == 'surgeon'


def test_session_holds_identity_without_password(make_staff):
    staff = make_staff('huda@ward.test', role='head_of_department')
    client = APIClient()
    assert login(client, 'huda@ward.test').status_code == 200
    session = Session.objects.get(session_key=client.cookies['sessionid'].value)
    data = session.get_decoded()[SESSION_KEY]
    assert data == {'staffId': staff.id, 'displayName': staff.name, 'role': 'head_of_department'}


def test_logout_ends_session(make_staff):
    make_staff('rania@ward.test', role='resident')
    client = APIClient()
    login(client, 'rania@ward.test')
    r = client.post(reverse('logout_view'))
    assert r.status_code == 200
    assert 'message' in r.data
    assert client.get(reverse('me_view')).status_code == 401


def test_me_requires_session():
    r = APIClient().get(reverse('me_view'))
    assert r.status_code == 401
    assert r.data['ok'] is False


def test_role_change_is_seen_by_own_session(make_staff):
    head = make_staff('huda@ward.test', role='head_of_department')
    client = APIClient()
    login(client, 'huda@ward.test')
    r = client.put(reverse('change_user_role', args=[head.id]), {'role': 'surgeon'}, format='json')
    assert r.status_code == 200
    assert client.get(reverse('me_view')).data['role'] == 'surgeon'
    # the demoted session no longer passes head-only checks
    r = client.put(reverse('change_user_role', args=[head.id]), {'role': 'head_of_department'}, format='json')
    assert r.status_code == 403


def test_unsafe_requests_need_csrf_token(make_staff):
    make_staff('samir@ward.test')
    client = APIClient(enforce_csrf_checks=True)
    assert login(client, 'samir@ward.test').status_code == 200
    r = client.post(reverse('news'), {'title': 'x', 'content': 'y'}, format='json')
    assert r.status_code == 403
    token = client.cookies['csrftoken'].value
    r = client.post(reverse('news'), {'title': 'x', 'content': 'y'}, format='json', HTTP_X_CSRFTOKEN=token)
    assert r.status_code == 201


def test_users_list_hides_passwords(make_staff):
    make_staff('samir@ward.test')
    client = APIClient()
    login(client, 'samir@ward.test')
    users = client.get(reverse('list_users')).data
    assert users and all('password' not in u for u in users)


def test_healthz():
    r = APIClient().get(reverse('healthz'))
    assert r.status_code == 200
    assert r.json()['ok'] is True


def test_signup_does_not_spend_login_budget(monkeypatch):
    monkeypatch.setitem(LoginRateThrottle.THROTTLE_RATES, 'login', '1/min')
    client = APIClient()
    assert register(client).status_code == 201
    assert login(client, 'nour@ward.test').status_code == 200
    assert login(client, 'nour@ward.test').status_code == 429


def test_system_check_passes():
    call_command('check')


def test_exception_module_imports_first_in_fresh_interpreter():
    code = (
        'import django; django.setup(); '
        'import ward.exceptions, rest_framework.views; '
        'from django.core.management import call_command; call_command("check")'
    )
    env = dict(os.environ, DJANGO_SETTINGS_MODULE='surgiward.settings')
    result = subprocess.run([sys.executable, '-c', code], cwd=settings.BASE_DIR, env=env,
                            capture_output=True, text=True)
    assert result.returncode == 0, result.stderr


def test_seed_departments_creates_every_counter():
    DepartmentBeds.objects.create(department='orthopedics', total_beds=4, occupied_beds=3)
    call_command('seed_departments', total_beds=12)
    beds = {b.department: b for b in DepartmentBeds.objects.all()}
    assert set(beds) == set(DEPARTMENTS)
    assert (beds['orthopedics'].total_beds, beds['orthopedics'].occupied_beds) == (4, 3)
    assert beds['cardiology'].total_beds == 12
