import bleach
from rest_framework import serializers


def clean_text(value):
    return bleach.clean((value or '').strip(), tags=[], strip=True)


class CleanCharField(serializers.CharField):
    """CharField that strips any markup from the submitted text."""

    def to_internal_value(self, data):
        return clean_text(super().to_internal_value(data))


def iso(value):
    return value.isoformat() if value else None
