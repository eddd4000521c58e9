"""
Database models for the surgical ward backend.

These models capture the core concepts of the system: staff accounts,
patient records and their archive snapshots, per-department bed
counters, follow-up notes, media references and the staff bulletin
board.  Child records of a patient (notes, media, archive) reference the
patient by id without a database constraint so that deleting a patient
leaves its history in place.
"""
from __future__ import annotations

import uuid

from django.contrib.auth.hashers import check_password, make_password
from django.db import models


class Role(models.TextChoices):
    RESIDENT = 'resident', 'Resident'
    SURGEON = 'surgeon', 'Surgeon'
    HEAD_OF_DEPARTMENT = 'head_of_department', 'Head of department'


class StaffAccount(models.Model):
    """A member of the surgical staff able to log into the ward system.

    The password column only ever holds a hash produced by Django's
    configured password hashers (bcrypt first).
    """
    email = models.EmailField(unique=True)
    password = models.CharField(max_length=255)
    name = models.CharField(max_length=255)
    role = models.CharField(max_length=32, choices=Role.choices, default=Role.SURGEON, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['id']

    def set_password(self, raw_password: str) -> None:
        self.password = make_password(raw_password)

    def check_password(self, raw_password: str) -> bool:
        def setter(raw):
            self.set_password(raw)
            self.save(update_fields=['password'])
        return check_password(raw_password, self.password, setter)

    def __str__(self) -> str:
        return f"{self.name} <{self.email}> ({self.role})"


class PatientRecord(models.Model):
    STATUS_ACTIVE = 'active'
    STATUS_ARCHIVED = 'archived'
    STATUS_CHOICES = ((STATUS_ACTIVE, 'active'), (STATUS_ARCHIVED, 'archived'))

    GENDER_CHOICES = (('male', 'male'), ('female', 'female'))
    ADMISSION_CHOICES = (('emergency', 'emergency'), ('operation', 'operation'))

    full_name = models.CharField(max_length=255)
    age = models.PositiveIntegerField()
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES)
    id_number = models.CharField(max_length=64, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    address = models.TextField(blank=True)
    emergency_contact = models.CharField(max_length=255, blank=True)
    admission_type = models.CharField(max_length=16, choices=ADMISSION_CHOICES, default='emergency', db_index=True)
    diagnosis = models.CharField(max_length=255, blank=True)
    operation = models.CharField(max_length=255, blank=True)
    surgeon = models.CharField(max_length=255, blank=True)
    department = models.CharField(max_length=64, db_index=True)
    bed_number = models.CharField(max_length=32, blank=True)
    notes = models.TextField(blank=True)
    admission_date = models.DateTimeField()
    # Only the discharge operation moves a record to 'archived'.
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True)
    created_by = models.ForeignKey(
        StaffAccount, null=True, on_delete=models.SET_NULL, related_name='admitted_patients'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-admission_date', '-id']

    @property
    def is_archived(self) -> bool:
        return self.status == self.STATUS_ARCHIVED

    def __str__(self) -> str:
        return f"{self.full_name} ({self.department}, {self.status})"


class ArchiveRecord(models.Model):
    """Snapshot of a patient taken at discharge time.  Never modified."""
    REASON_CHOICES = (
        ('improved', 'improved'),
        ('by_request', 'by_request'),
        ('escaped', 'escaped'),
        ('died', 'died'),
    )

    patient = models.ForeignKey(
        PatientRecord, on_delete=models.DO_NOTHING, db_constraint=False, related_name='archive_records'
    )
    full_name = models.CharField(max_length=255)
    age = models.PositiveIntegerField(null=True, blank=True)
    gender = models.CharField(max_length=10, blank=True)
    diagnosis = models.CharField(max_length=255, blank=True)
    operation = models.CharField(max_length=255, blank=True)
    surgeon = models.CharField(max_length=255, blank=True)
    department = models.CharField(max_length=64, blank=True)
    admission_date = models.DateTimeField(null=True, blank=True)
    discharge_reason = models.CharField(max_length=16, choices=REASON_CHOICES, db_index=True)
    notes = models.TextField(blank=True)
    discharged_by = models.ForeignKey(
        StaffAccount, null=True, on_delete=models.SET_NULL, related_name='discharges'
    )
    discharge_date = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-discharge_date', '-id']

    def __str__(self) -> str:
        return f"{self.full_name} discharged ({self.discharge_reason})"


# surgical departments seeded with bed counters
DEPARTMENTS = ('general_surgery', 'orthopedics', 'neurosurgery', 'cardiology', 'pediatrics', 'emergency')


class DepartmentBeds(models.Model):
    """Running bed occupancy of one department.

    ``occupied_beds`` may exceed ``total_beds``; over-capacity is reported,
    not rejected.
    """
    department = models.CharField(max_length=64, unique=True)
    total_beds = models.PositiveIntegerField(default=0)
    occupied_beds = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = 'department beds'

    @property
    def available_beds(self) -> int:
        return max(self.total_beds - self.occupied_beds, 0)

    @property
    def over_capacity(self) -> bool:
        return self.occupied_beds > self.total_beds

    def __str__(self) -> str:
        return f"{self.department}: {self.occupied_beds}/{self.total_beds}"


class FollowupNote(models.Model):
    patient = models.ForeignKey(
        PatientRecord, on_delete=models.DO_NOTHING, db_constraint=False, related_name='followups'
    )
    note = models.TextField()
    created_by = models.ForeignKey(StaffAccount, null=True, on_delete=models.SET_NULL, related_name='followups')
    created_by_name = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [models.Index(fields=['patient', 'created_at'], name='ward_followup_patient_idx')]

    def __str__(self) -> str:
        return f"Note {self.id} on patient {self.patient_id}"


def _media_upload(instance, filename: str) -> str:
    import datetime, os
    ext = os.path.splitext(filename)[1]
    return f"media/{datetime.date.today().strftime('%Y/%m')}/{uuid.uuid4().hex}{ext}"


class MediaReference(models.Model):
    FILE_TYPE_CHOICES = (
        ('image', 'image'),
        ('video', 'video'),
        ('document', 'document'),
        ('lab_result', 'lab_result'),
        ('other', 'other'),
    )

    patient = models.ForeignKey(
        PatientRecord, on_delete=models.DO_NOTHING, db_constraint=False, related_name='media'
    )
    file_name = models.CharField(max_length=255)
    file_url = models.CharField(max_length=1024, blank=True)
    file = models.FileField(upload_to=_media_upload, max_length=512, blank=True)
    file_type = models.CharField(max_length=16, choices=FILE_TYPE_CHOICES, default='image')
    content_type = models.CharField(max_length=128, blank=True)
    size = models.PositiveIntegerField(default=0)
    description = models.TextField(blank=True)
    uploaded_by = models.ForeignKey(StaffAccount, null=True, on_delete=models.SET_NULL, related_name='uploads')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [models.Index(fields=['patient', 'created_at'], name='ward_media_patient_idx')]

    def __str__(self) -> str:
        return f"{self.file_name} (patient {self.patient_id})"


class Announcement(models.Model):
    title = models.CharField(max_length=255)
    content = models.TextField()
    author = models.ForeignKey(StaffAccount, null=True, on_delete=models.SET_NULL, related_name='announcements')
    author_name = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self) -> str:
        return self.title[:30]


class Comment(models.Model):
    news = models.ForeignKey(Announcement, on_delete=models.CASCADE, related_name='comments')
    content = models.TextField()
    author = models.ForeignKey(StaffAccount, null=True, on_delete=models.SET_NULL, related_name='comments')
    author_name = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at', 'id']
        indexes = [models.Index(fields=['news', 'created_at'], name='ward_comment_news_idx')]

    def __str__(self) -> str:
        return f"Comment {self.id} on {self.news_id}"


class AuditEvent(models.Model):
    actor = models.ForeignKey(StaffAccount, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.IntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='ward_audit_action_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='ward_audit_object_idx'),
        ]

    def __str__(self):
        return f"{self.action}:{self.actor_id}@{self.created_at:%F %T}"
