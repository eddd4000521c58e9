"""
Django admin registrations for the ward models.

Staff passwords are hashes; the admin shows them read-only.  Accounts
are created through the API or the ``ensure_demo_staff`` command.
"""

from django.contrib import admin

from .models import (
    StaffAccount,
    PatientRecord,
    ArchiveRecord,
    DepartmentBeds,
    FollowupNote,
    MediaReference,
    Announcement,
    Comment,
    AuditEvent,
)


@admin.register(StaffAccount)
class StaffAccountAdmin(admin.ModelAdmin):
    list_display = ('id', 'email', 'name', 'role', 'created_at')
    list_filter = ('role',)
    search_fields = ('email', 'name')
    readonly_fields = ('password', 'created_at')


@admin.register(PatientRecord)
class PatientRecordAdmin(admin.ModelAdmin):
    list_display = ('id', 'full_name', 'department', 'admission_type', 'status', 'admission_date')
    list_filter = ('status', 'department', 'admission_type')
    search_fields = ('full_name', 'id_number', 'diagnosis')
    readonly_fields = ('status', 'created_by', 'created_at', 'updated_at')


@admin.register(ArchiveRecord)
class ArchiveRecordAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient_id', 'full_name', 'department', 'discharge_reason', 'discharge_date')
    list_filter = ('discharge_reason', 'department')
    search_fields = ('full_name',)

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(DepartmentBeds)
class DepartmentBedsAdmin(admin.ModelAdmin):
    list_display = ('department', 'total_beds', 'occupied_beds', 'updated_at')


@admin.register(FollowupNote)
class FollowupNoteAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient_id', 'created_by_name', 'created_at')
    search_fields = ('note',)


@admin.register(MediaReference)
class MediaReferenceAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient_id', 'file_name', 'file_type', 'size', 'created_at')
    list_filter = ('file_type',)


class CommentInline(admin.TabularInline):
    model = Comment
    extra = 0
    fields = ('author_name', 'content', 'created_at')
    readonly_fields = ('created_at',)


@admin.register(Announcement)
class AnnouncementAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'author_name', 'created_at')
    search_fields = ('title', 'content')
    inlines = [CommentInline]


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ('id', 'news', 'author_name', 'created_at')


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('id', 'action', 'actor', 'object_type', 'object_id', 'created_at')
    list_filter = ('action', 'object_type')
