from django.utils import timezone
from rest_framework import serializers

from ward.serializers.fields import CleanCharField, iso

from .models import Registration


class RegistrationSerializer(serializers.Serializer):
    fullName = CleanCharField(source='full_name', max_length=255)
    gender = serializers.ChoiceField(choices=[c for c, _ in Registration.GENDER_CHOICES])
    idNumber = CleanCharField(source='id_number', max_length=64)
    dateOfBirth = serializers.DateField(source='date_of_birth')
    phone = CleanCharField(max_length=32)
    email = serializers.EmailField()
    passportStatus = serializers.ChoiceField(
        source='passport_status', choices=[c for c, _ in Registration.PASSPORT_CHOICES]
    )
    photoUrl = serializers.CharField(source='photo_url', max_length=1024, required=False, allow_blank=True)

    def validate_fullName(self, v):
        if len(v) < 2:
            raise serializers.ValidationError('Full name must be at least 2 characters')
        return v

    def validate_dateOfBirth(self, v):
        if v > timezone.localdate():
            raise serializers.ValidationError('Date of birth cannot be in the future')
        return v

    def create(self, validated_data):
        return Registration.objects.create(**validated_data)


def format_registration(r: Registration) -> dict:
    return {
        'id': r.pk,
        'fullName': r.full_name,
        'gender': r.gender,
        'idNumber': r.id_number,
        'dateOfBirth': r.date_of_birth.isoformat() if r.date_of_birth else None,
        'phone': r.phone,
        'email': r.email,
        'passportStatus': r.passport_status,
        'photoUrl': r.photo_url,
        'createdAt': iso(r.created_at),
    }
