import pytest
from django.urls import reverse
from rest_framework.test import APIClient

from registrations.models import Registration
from ward.throttling import RegistrationRateThrottle

pytestmark = pytest.mark.django_db


def submission(**overrides):
    body = {
        'fullName': 'Mariam Khalil',
        'gender': 'female',
        'idNumber': '402118833',
        'dateOfBirth': '1988-03-14',
        'phone': '+970599000111',
        'email': 'mariam@example.org',
        'passportStatus': 'expired',
    }
    body.update(overrides)
    return body


def staff_client(make_staff):
    make_staff('samir@ward.test')
    client = APIClient()
    r = client.post(reverse('login_view'), {'email': 'samir@ward.test', 'password': 'Scalpel#2024'}, format='json')
    assert r.status_code == 200
    return client


def test_public_submission_is_accepted():
    r = APIClient().post(reverse('registrations'), submission(), format='json')
    assert r.status_code == 201
    assert r.data['fullName'] == 'Mariam Khalil'
    assert r.data['passportStatus'] == 'expired'
    assert r.data['photoUrl'] == ''
    reg = Registration.objects.get()
    assert str(reg.date_of_birth) == '1988-03-14'


@pytest.mark.parametrize('field,value', [
    ('passportStatus', 'lost'),
    ('gender', 'x'),
    ('email', 'not-an-email'),
    ('dateOfBirth', '2999-01-01'),
    ('fullName', ''),
])
def test_invalid_submission_names_the_field(field, value):
    r = APIClient().post(reverse('registrations'), submission(**{field: value}), format='json')
    assert r.status_code == 400
    assert r.data['field'] == field
    assert not Registration.objects.exists()


def test_listing_requires_staff_session(make_staff):
    APIClient().post(reverse('registrations'), submission(), format='json')
    assert APIClient().get(reverse('registrations')).status_code == 401
    assert APIClient().get(reverse('registration_stats')).status_code == 401

    client = staff_client(make_staff)
    listed = client.get(reverse('registrations')).data
    assert [r['email'] for r in listed] == ['mariam@example.org']


def test_stats_count_by_passport_status(make_staff):
    anon = APIClient()
    anon.post(reverse('registrations'), submission(), format='json')
    anon.post(reverse('registrations'), submission(fullName='Ahmad Khalil', passportStatus='yes'), format='json')
    anon.post(reverse('registrations'), submission(fullName='Sara Khalil', passportStatus='yes'), format='json')

    stats = staff_client(make_staff).get(reverse('registration_stats')).data
    assert stats['total'] == 3
    assert stats['byPassportStatus'] == {'yes': 2, 'expired': 1, 'no': 0}


def test_submissions_are_rate_limited(monkeypatch):
    monkeypatch.setitem(RegistrationRateThrottle.THROTTLE_RATES, 'registration', '2/min')
    client = APIClient()
    codes = [client.post(reverse('registrations'), submission(), format='json').status_code for _ in range(3)]
    assert codes == [201, 201, 429]
