from rest_framework import serializers

from ward.models import Role
from ward.serializers.fields import CleanCharField, iso


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField(max_length=254)
    password = serializers.CharField(min_length=1, max_length=128, write_only=True, trim_whitespace=False)
    name = CleanCharField(max_length=255)
    role = serializers.ChoiceField(choices=Role.values, required=False, default=Role.SURGEON.value)

    def validate_name(self, v):
        if not v:
            raise serializers.ValidationError('Name must not be empty')
        return v


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField(trim_whitespace=False)

    def validate_email(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('Email must not be empty')
        return v

    def validate_password(self, v):
        if not v:
            raise serializers.ValidationError('Password must not be empty')
        return v


class RoleChangeSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=Role.values)


def format_staff(staff) -> dict:
    return {
        'id': staff.id,
        'email': staff.email,
        'name': staff.name,
        'role': staff.role,
        'createdAt': iso(staff.created_at),
    }


def format_identity(identity) -> dict:
    return {'id': identity.staff_id, 'name': identity.display_name, 'role': identity.role}
