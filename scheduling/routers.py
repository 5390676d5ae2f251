"""
URL mappings for the scheduling API.

Trailing slashes are omitted, matching ``APPEND_SLASH = False``.
"""
from django.urls import include, path

from .views import appointments, doctor, health, hospitals, search

urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),
    # Hospitals & departments
    path('api/hospitals', hospitals.hospitals, name='hospitals'),
    path('api/hospitals/<int:hospital_id>/departments', hospitals.departments, name='hospital-departments'),
    path('api/hospitals/<int:hospital_id>/dashboard', hospitals.dashboard, name='hospital-dashboard'),
    # Doctor self-service
    path('api/doctor/profile', doctor.profile, name='doctor-profile'),
    path('api/doctor/affiliations', doctor.affiliations, name='doctor-affiliations'),
    path('api/doctor/availability', doctor.availability, name='doctor-availability'),
    path('api/doctor/dashboard', doctor.dashboard, name='doctor-dashboard'),
    # Patient search & booking
    path('api/search', search.search_doctors, name='search'),
    path('api/specializations', search.specializations, name='specializations'),
    path('api/appointments/book', appointments.book, name='book'),
    path('api/appointments/mine', appointments.mine, name='my-appointments'),
]
