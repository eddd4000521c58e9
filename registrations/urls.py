from django.urls import path

from . import views

urlpatterns = [
    path('api/registrations', views.registrations, name='registrations'),
    path('api/registrations/stats', views.registration_stats, name='registration_stats'),
]
