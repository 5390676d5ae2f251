from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from scheduling.models import Affiliation, AvailabilitySlot, Department, DoctorProfile, Hospital

User = get_user_model()


@pytest.fixture
def make_doctor(db):
    def _make(username, name='Doctor', specializations=('Cardiology',), years=5):
        user = User.objects.create_user(username=username, password='P@ssw0rd1')
        return DoctorProfile.objects.create(
            user=user, name=name, qualifications='MBBS',
            specializations=list(specializations), years_of_experience=years,
        )
    return _make


@pytest.fixture
def make_hospital(db):
    def _make(name='City General', departments=('Cardiology',)):
        hospital = Hospital.objects.create(name=name, location='Downtown')
        for dept in departments:
            Department.objects.create(hospital=hospital, name=dept)
        return hospital
    return _make


@pytest.fixture
def affiliate(db):
    def _make(doctor, hospital, department_name='Cardiology', fee='50.00'):
        department = hospital.departments.get(name=department_name)
        return Affiliation.objects.create(
            doctor=doctor, hospital=hospital, department=department, consultation_fee=Decimal(fee)
        )
    return _make


@pytest.fixture
def make_slot(db):
    def _make(doctor, hospital, start, end, is_booked=False):
        return AvailabilitySlot.objects.create(
            doctor=doctor, hospital=hospital, start_at=start, end_at=end, is_booked=is_booked
        )
    return _make


@pytest.fixture
def patient(db):
    return User.objects.create_user(username='patient1', password='P@ssw0rd1')


@pytest.fixture(autouse=True)
def _plain_staticfiles_storage(settings):
    settings.STORAGES = {
        **settings.STORAGES,
        'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
    }
