from django.db import models


class Registration(models.Model):
    """A request submitted through the public evacuation landing page."""
    GENDER_CHOICES = (('male', 'male'), ('female', 'female'))
    PASSPORT_CHOICES = (('yes', 'yes'), ('expired', 'expired'), ('no', 'no'))

    full_name = models.CharField(max_length=255)
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES)
    id_number = models.CharField(max_length=64)
    date_of_birth = models.DateField()
    phone = models.CharField(max_length=32)
    email = models.EmailField()
    passport_status = models.CharField(max_length=10, choices=PASSPORT_CHOICES, db_index=True)
    photo_url = models.CharField(max_length=1024, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self) -> str:
        return f"{self.full_name} ({self.passport_status})"
