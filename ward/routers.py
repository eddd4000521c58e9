"""
URL mappings for the surgical ward API.

Paths carry no trailing slash.  Route names are used by the tests
through ``reverse``.
"""
from django.urls import path, include

from .views import archive, beds, comments, followups, health, media, news, patients, statistics, users
from .views.auth import login_view, logout_view, me_view, register_view

urlpatterns = [
    # Authentication
    path('api/auth/register', register_view, name='register_view'),
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/me', me_view, name='me_view'),
    path('api/auth/logout', logout_view, name='logout_view'),

    # Staff
    path('api/users', users.list_users, name='list_users'),
    path('api/users/<int:staff_id>/role', users.change_user_role, name='change_user_role'),

    # Patients
    path('api/patients', patients.patients, name='patients'),
    path('api/patients/active', patients.active_patients, name='active_patients'),
    path('api/patients/<int:patient_id>', patients.patient_detail, name='patient_detail'),
    path('api/patients/<int:patient_id>/discharge', patients.discharge_patient, name='discharge_patient'),

    # Follow-up notes and media
    path('api/followups', followups.create_followup, name='create_followup'),
    path('api/followups/patient/<int:patient_id>', followups.patient_followups, name='patient_followups'),
    path('api/followups/<int:note_id>', followups.delete_followup, name='delete_followup'),
    path('api/media', media.upload_media, name='upload_media'),
    path('api/media/patient/<int:patient_id>', media.patient_media, name='patient_media'),
    path('api/media/<int:media_id>', media.delete_media, name='delete_media'),

    # Archive and beds
    path('api/archive', archive.archive_list, name='archive_list'),
    path('api/beds/<str:department>', beds.department_beds, name='department_beds'),

    # Bulletin board
    path('api/news', news.news, name='news'),
    path('api/news/<int:news_id>', news.news_detail, name='news_detail'),
    path('api/comments', comments.create_comment, name='create_comment'),
    path('api/comments/news/<int:news_id>', comments.news_comments, name='news_comments'),
    path('api/comments/<int:comment_id>', comments.delete_comment, name='delete_comment'),

    # Statistics
    path('api/statistics/dashboard', statistics.dashboard_view, name='dashboard'),

    # Operations
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),
]
