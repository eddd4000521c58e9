from django.conf import settings
from rest_framework import serializers

from ward.models import MediaReference
from ward.serializers.fields import CleanCharField, iso

FILE_TYPES = [c for c, _ in MediaReference.FILE_TYPE_CHOICES]


class FollowupCreateSerializer(serializers.Serializer):
    patientId = serializers.IntegerField(min_value=1)
    note = CleanCharField()

    def validate_note(self, v):
        if not v:
            raise serializers.ValidationError('Note must not be empty')
        return v


class MediaReferenceSerializer(serializers.Serializer):
    """Media described by an external URL."""
    patientId = serializers.IntegerField(min_value=1)
    fileName = CleanCharField(max_length=255)
    fileUrl = serializers.CharField(max_length=1024)
    fileType = serializers.ChoiceField(choices=FILE_TYPES, required=False, default='image')
    description = CleanCharField(required=False, allow_blank=True)


class MediaUploadSerializer(serializers.Serializer):
    """Media uploaded as a multipart ``file``."""
    patientId = serializers.IntegerField(min_value=1)
    file = serializers.FileField()
    fileType = serializers.ChoiceField(choices=FILE_TYPES, required=False, default='image')
    description = CleanCharField(required=False, allow_blank=True)

    def validate_file(self, f):
        limit = settings.UPLOAD_MAX_MB * 1024 * 1024
        if f.size > limit:
            raise serializers.ValidationError(f'File exceeds {settings.UPLOAD_MAX_MB} MB')
        content_type = getattr(f, 'content_type', '') or ''
        if not any(content_type.startswith(t) for t in settings.ALLOWED_UPLOAD_TYPES):
            raise serializers.ValidationError(f'Unsupported file type: {content_type or "unknown"}')
        return f


def format_followup(n) -> dict:
    return {
        'id': n.pk,
        'patientId': n.patient_id,
        'note': n.note,
        'createdBy': n.created_by_id,
        'createdByName': n.created_by_name,
        'createdAt': iso(n.created_at),
    }


def format_media(m) -> dict:
    return {
        'id': m.pk,
        'patientId': m.patient_id,
        'fileName': m.file_name,
        'fileUrl': m.file_url or (m.file.url if m.file else ''),
        'fileType': m.file_type,
        'contentType': m.content_type,
        'size': m.size,
        'description': m.description,
        'uploadedBy': m.uploaded_by_id,
        'createdAt': iso(m.created_at),
    }
