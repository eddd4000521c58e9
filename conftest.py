import pytest
from django.core.cache import cache

from ward.authentication import SessionIdentity
from ward.models import Role, StaffAccount
from ward.services.stores import InMemoryRecordStore

PASSWORD = 'Scalpel#2024'


@pytest.fixture(autouse=True)
def _clear_throttle_cache():
    # throttle counters live in the cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def resident():
    return SessionIdentity(staff_id=1, display_name='Rania Resident', role=Role.RESIDENT.value)


@pytest.fixture
def surgeon():
    return SessionIdentity(staff_id=2, display_name='Samir Surgeon', role=Role.SURGEON.value)


@pytest.fixture
def head():
    return SessionIdentity(staff_id=3, display_name='Huda Head', role=Role.HEAD_OF_DEPARTMENT.value)


@pytest.fixture
def make_staff(db):
    def _make(email, role=Role.SURGEON.value, name=None, password=PASSWORD):
        staff = StaffAccount(email=email, name=name or email.split('@')[0], role=role)
        staff.set_password(password)
        staff.save()
        return staff
    return _make
