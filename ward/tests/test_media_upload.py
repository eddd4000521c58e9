import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from django.utils import timezone
from rest_framework.test import APIClient

from ward.models import MediaReference, PatientRecord
from ward.services.stores import DjangoRecordStore

pytestmark = pytest.mark.django_db


@pytest.fixture
def resident_client(make_staff, settings, tmp_path):
    settings.MEDIA_ROOT = str(tmp_path)
    make_staff('rania@ward.test', role='resident')
    client = APIClient()
    client.post(reverse('login_view'), {'email': 'rania@ward.test', 'password': 'Scalpel#2024'}, format='json')
    return client


@pytest.fixture
def patient():
    return DjangoRecordStore().create_patient(
        full_name='Amina Haddad', age=42, gender='female', department='general_surgery',
        status=PatientRecord.STATUS_ACTIVE, admission_date=timezone.now(),
    )


def test_multipart_upload_is_stored(resident_client, patient, tmp_path):
    upload = SimpleUploadedFile('wound.png', b'\x89PNG\r\n\x1a\n' + b'0' * 64, content_type='image/png')
    r = resident_client.post(reverse('upload_media'),
                             {'patientId': patient.pk, 'file': upload, 'description': 'Day 2'},
                             format='multipart')
    assert r.status_code == 201, r.data
    assert r.data['fileName'] == 'wound.png'
    assert r.data['contentType'] == 'image/png'
    assert r.data['fileUrl'].startswith('/media/')
    media = MediaReference.objects.get()
    assert (tmp_path / media.file.name).exists()


def test_upload_rejects_disallowed_type(resident_client, patient):
    upload = SimpleUploadedFile('run.sh', b'#!/bin/sh\n', content_type='application/x-sh')
    r = resident_client.post(reverse('upload_media'), {'patientId': patient.pk, 'file': upload}, format='multipart')
    assert r.status_code == 400
    assert r.data['field'] == 'file'
    assert not MediaReference.objects.exists()


def test_upload_rejects_oversized_file(resident_client, patient, settings):
    settings.UPLOAD_MAX_MB = 0
    upload = SimpleUploadedFile('scan.png', b'x' * 10, content_type='image/png')
    r = resident_client.post(reverse('upload_media'), {'patientId': patient.pk, 'file': upload}, format='multipart')
    assert r.status_code == 400
    assert 'exceeds' in r.data['message']
