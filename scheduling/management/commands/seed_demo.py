"""
Management command to populate the database with demo scheduling data.

Safe to run repeatedly: existing rows are looked up by name and reused,
and a slot is only added when it does not collide with the doctor's
free slots.
"""
from datetime import datetime, time, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.utils import timezone

from scheduling.exceptions import OverlapError
from scheduling.models import Affiliation, Department, DoctorProfile, Hospital
from scheduling.services.availability import add_availability

User = get_user_model()

HOSPITALS = [
    ('City General Hospital', 'Downtown', ['Cardiology', 'Neurology', 'Pediatrics']),
    ('Riverside Medical Center', 'Riverside', ['Cardiology', 'Dermatology']),
]

DOCTORS = [
    # username, name, qualifications, specializations, years
    ('dr_smith', 'Alice Smith', 'MBBS, MD', ['Cardiology'], 12),
    ('dr_jones', 'Brian Jones', 'MBBS, DM', ['Neurology', 'Pediatrics'], 8),
    ('dr_patel', 'Chitra Patel', 'MBBS, DNB', ['Dermatology', 'Cardiology'], 5),
]

FEES = {'Cardiology': Decimal('50.00'), 'Neurology': Decimal('75.50'),
        'Pediatrics': Decimal('40.00'), 'Dermatology': Decimal('35.00')}


class Command(BaseCommand):
    help = 'Populate database with demo hospitals, doctors and availability'

    def add_arguments(self, parser):
        parser.add_argument('--days', type=int, default=3, help='Days of availability to create, starting tomorrow')
        parser.add_argument('--password', default='Demo@12345', help='Password for created demo users')

    def handle(self, *args, **options):
        self.stdout.write('Creating demo data...')
        hospitals = self.create_hospitals()
        doctors = self.create_doctors(options['password'])
        affiliations = self.create_affiliations(hospitals, doctors)
        slots = self.create_slots(affiliations, options['days'])
        self.create_patient(options['password'])
        self.stdout.write(self.style.SUCCESS(
            f'Demo data ready: {len(hospitals)} hospitals, {len(doctors)} doctors, '
            f'{len(affiliations)} affiliations, {slots} new slots'
        ))

    def create_hospitals(self):
        out = []
        for name, location, departments in HOSPITALS:
            hospital, _ = Hospital.objects.get_or_create(name=name, defaults={'location': location})
            for dept in departments:
                Department.objects.get_or_create(hospital=hospital, name=dept)
            out.append(hospital)
        return out

    def create_doctors(self, password):
        out = []
        for username, name, qualifications, specializations, years in DOCTORS:
            user, created = User.objects.get_or_create(username=username)
            if created:
                user.set_password(password)
                user.save()
            profile, _ = DoctorProfile.objects.update_or_create(user=user, defaults={
                'name': name,
                'qualifications': qualifications,
                'specializations': specializations,
                'years_of_experience': years,
            })
            out.append(profile)
        return out

    def create_affiliations(self, hospitals, doctors):
        out = []
        for doctor in doctors:
            for hospital in hospitals:
                for dept in hospital.departments.filter(name__in=doctor.specializations):
                    a, _ = Affiliation.objects.get_or_create(
                        doctor=doctor, hospital=hospital, department=dept,
                        defaults={'consultation_fee': FEES.get(dept.name, Decimal('30.00'))},
                    )
                    out.append(a)
        return out

    def create_slots(self, affiliations, days):
        created = 0
        tz = timezone.get_current_timezone()
        today = timezone.localdate()
        hours_by_hospital = {}
        for a in affiliations:
            # each hospital of a doctor gets its own block of the day
            key = (a.doctor_id, a.hospital_id)
            if key not in hours_by_hospital:
                hours_by_hospital[key] = 9 + 4 * sum(1 for d, _ in hours_by_hospital if d == a.doctor_id)
            hours = hours_by_hospital[key]
            for offset in range(1, days + 1):
                day = today + timedelta(days=offset)
                for i in range(4):
                    start = timezone.make_aware(datetime.combine(day, time(hours)) + timedelta(minutes=30 * i), tz)
                    try:
                        add_availability(a.doctor, a.hospital_id, start, start + timedelta(minutes=30))
                    except OverlapError:
                        continue
                    created += 1
        return created

    def create_patient(self, password):
        user, created = User.objects.get_or_create(username='patient_demo')
        if created:
            user.set_password(password)
            user.save()
        return user
