from django.contrib import admin

from .models import Registration


@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = ('id', 'full_name', 'gender', 'passport_status', 'phone', 'created_at')
    list_filter = ('passport_status', 'gender')
    search_fields = ('full_name', 'id_number', 'email', 'phone')
