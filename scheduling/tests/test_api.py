"""
Integration tests for the scheduling API.

These walk the whole flow the way a client does: staff register a
hospital and its departments, a doctor fills in a profile, affiliates
and publishes slots, a patient searches and books.
"""
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from scheduling.models import Appointment, AvailabilitySlot, Department, DoctorProfile, Hospital

User = get_user_model()


class SchedulingAPITests(APITestCase):
    def setUp(self) -> None:
        # throttling counters live in the cache
        cache.clear()
        self.staff = User.objects.create_user(username='staff1', password='P@ssw0rd1', is_staff=True)
        self.doctor_user = User.objects.create_user(username='doc1', password='P@ssw0rd1')
        self.patient = User.objects.create_user(username='patient1', password='P@ssw0rd1')
        self.other_patient = User.objects.create_user(username='patient2', password='P@ssw0rd1')

        self.hospital = Hospital.objects.create(name='City General', location='Downtown')
        self.cardiology = Department.objects.create(hospital=self.hospital, name='Cardiology')
        self.neurology = Department.objects.create(hospital=self.hospital, name='Neurology')

    def authenticate(self, user) -> APIClient:
        """Return an authenticated APIClient for the given user."""
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    def create_profile(self, specializations='Cardiology'):
        client = self.authenticate(self.doctor_user)
        return client.post('/api/doctor/profile', {
            'name': 'Alice Smith',
            'qualifications': 'MBBS, MD',
            'specializations': specializations,
            'yearsOfExperience': 12,
        }, format='json')

    def publish_slot(self, start='2025-03-10T09:00:00Z', end='2025-03-10T09:30:00Z'):
        client = self.authenticate(self.doctor_user)
        return client.post('/api/doctor/availability',
                           {'hospitalId': self.hospital.id, 'startAt': start, 'endAt': end}, format='json')

    def test_requires_authentication(self):
        response = APIClient().get('/api/search')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data['ok'])
        self.assertEqual(response.data['error']['code'], 'not_authenticated')

    def test_healthz(self):
        response = self.client.get('/healthz')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'ok': True, 'db': True})

    def test_only_staff_register_hospitals(self):
        response = self.authenticate(self.patient).post('/api/hospitals', {'name': 'Nope'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        client = self.authenticate(self.staff)
        response = client.post('/api/hospitals', {'name': '<b>Riverside</b>', 'location': 'East'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['data']['name'], 'Riverside')

        hospital_id = response.data['data']['id']
        response = client.post(f'/api/hospitals/{hospital_id}/departments', {'name': 'Dermatology'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        response = self.authenticate(self.patient).get(f'/api/hospitals/{hospital_id}/departments')
        self.assertEqual([d['name'] for d in response.data['data']], ['Dermatology'])
        response = self.authenticate(self.patient).get('/api/hospitals')
        self.assertEqual(len(response.data['data']), 2)

    def test_profile_accepts_comma_separated_specializations(self):
        response = self.create_profile(' Cardiology , Neurology,, ')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['data']['specializations'], ['Cardiology', 'Neurology'])

        response = self.create_profile(['Cardiology'])
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(DoctorProfile.objects.get(user=self.doctor_user).specializations, ['Cardiology'])

        response = self.authenticate(self.doctor_user).get('/api/doctor/profile')
        self.assertEqual(response.data['data']['yearsOfExperience'], 12)

    def test_doctor_endpoints_need_profile(self):
        response = self.authenticate(self.doctor_user).get('/api/doctor/affiliations')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        response = self.authenticate(self.doctor_user).get('/api/doctor/profile')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error']['code'], 'not_found')

    def test_affiliation_validation(self):
        self.create_profile('Cardiology')
        client = self.authenticate(self.doctor_user)

        response = client.post('/api/doctor/affiliations',
                               {'departmentId': self.neurology.id, 'consultationFee': '50.00'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error']['code'], 'validation')

        response = client.post('/api/doctor/affiliations',
                               {'departmentId': self.cardiology.id, 'consultationFee': '0'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = client.post('/api/doctor/affiliations',
                               {'departmentId': self.cardiology.id, 'consultationFee': '75.50'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['data']['consultationFee'], '75.50')
        self.assertEqual(len(client.get('/api/doctor/affiliations').data['data']), 1)

    def test_availability_errors(self):
        self.create_profile('Cardiology')
        response = self.publish_slot()
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        self.authenticate(self.doctor_user).post(
            '/api/doctor/affiliations', {'departmentId': self.cardiology.id, 'consultationFee': '50.00'}, format='json')
        self.assertEqual(self.publish_slot().status_code, status.HTTP_201_CREATED)

        response = self.publish_slot('2025-03-10T09:15:00Z', '2025-03-10T09:45:00Z')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['error']['code'], 'overlap')

        response = self.publish_slot('2025-03-10T11:00:00Z', '2025-03-10T10:00:00Z')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error']['code'], 'ordering')

        self.assertEqual(self.publish_slot('2025-03-10T09:30:00Z', '2025-03-10T10:00:00Z').status_code, 201)
        listed = self.authenticate(self.doctor_user).get('/api/doctor/availability').data['data']
        self.assertEqual(len(listed), 2)

    def test_search_and_book_flow(self):
        self.create_profile('Cardiology')
        doctor_client = self.authenticate(self.doctor_user)
        doctor_client.post('/api/doctor/affiliations',
                           {'departmentId': self.cardiology.id, 'consultationFee': '50.00'}, format='json')
        self.publish_slot()

        patient_client = self.authenticate(self.patient)
        response = patient_client.get('/api/search', {'specialization': 'Cardiology', 'date': '2025-03-10'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total'], 1)
        offering = response.data['data'][0]
        self.assertEqual(offering['hospitalName'], 'City General')
        self.assertEqual(offering['consultationFee'], '50.00')

        body = {'slotId': offering['slots'][0]['id'], 'affiliationId': offering['affiliationId']}
        response = patient_client.post('/api/appointments/book', body, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['data']['doctorRevenue'], '30.00')
        self.assertEqual(response.data['data']['hospitalRevenue'], '20.00')
        self.assertEqual(response.data['data']['status'], 'Booked')

        response = self.authenticate(self.other_patient).post('/api/appointments/book', body, format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['error']['code'], 'slot_unavailable')
        self.assertEqual(Appointment.objects.count(), 1)

        response = patient_client.get('/api/search', {'specialization': 'Cardiology'})
        self.assertEqual(response.data['data'], [])

        mine = patient_client.get('/api/appointments/mine').data['data']
        self.assertEqual(len(mine), 1)
        self.assertEqual(mine[0]['doctorName'], 'Alice Smith')
        self.assertEqual(self.authenticate(self.other_patient).get('/api/appointments/mine').data['data'], [])

    def test_book_unknown_slot(self):
        response = self.authenticate(self.patient).post(
            '/api/appointments/book', {'slotId': 999, 'affiliationId': 1}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_search_rejects_bad_date(self):
        response = self.authenticate(self.patient).get('/api/search', {'date': '10/03/2025'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data['ok'])

    def test_specializations_catalogue(self):
        self.create_profile('Neurology, Cardiology')
        response = self.authenticate(self.patient).get('/api/specializations')
        self.assertEqual(response.data['data'], ['Cardiology', 'Neurology'])

    def test_dashboards(self):
        self.create_profile('Cardiology')
        self.authenticate(self.doctor_user).post(
            '/api/doctor/affiliations', {'departmentId': self.cardiology.id, 'consultationFee': '50.00'}, format='json')
        self.publish_slot()
        slot = AvailabilitySlot.objects.get()
        affiliation_id = self.authenticate(self.doctor_user).get('/api/doctor/affiliations').data['data'][0]['id']
        self.authenticate(self.patient).post(
            '/api/appointments/book', {'slotId': slot.id, 'affiliationId': affiliation_id}, format='json')
        Appointment.objects.update(status=Appointment.STATUS_COMPLETED)

        response = self.authenticate(self.doctor_user).get('/api/doctor/dashboard')
        self.assertEqual(response.data['data']['totalEarnings'], '30.00')

        url = f'/api/hospitals/{self.hospital.id}/dashboard'
        self.assertEqual(self.authenticate(self.patient).get(url).status_code, status.HTTP_403_FORBIDDEN)
        response = self.authenticate(self.staff).get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['totalRevenue'], '20.00')
        self.assertEqual(response.data['data']['revenueByDepartment'][0]['departmentName'], 'Cardiology')

        response = self.authenticate(self.staff).get('/api/hospitals/999999/dashboard')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_token_auth(self):
        response = self.client.post('/api-token-auth', {'username': 'patient1', 'password': 'P@ssw0rd1'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Token {response.data['token']}")
        self.assertEqual(client.get('/api/appointments/mine').status_code, status.HTTP_200_OK)

    def test_metrics_exposes_booking_counters(self):
        response = self.client.get('/metrics')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn(b'scheduling_bookings_total', response.content)

    def test_ampersand_specialization_is_searchable(self):
        ent = Department.objects.create(hospital=self.hospital, name='Ear & Throat')
        self.create_profile('Ear & Throat')
        self.assertEqual(DoctorProfile.objects.get(user=self.doctor_user).specializations, ['Ear & Throat'])
        response = self.authenticate(self.doctor_user).post(
            '/api/doctor/affiliations', {'departmentId': ent.id, 'consultationFee': '40.00'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.publish_slot()

        response = self.authenticate(self.patient).get('/api/search', {'q': 'ear & throat'})
        self.assertEqual(response.data['total'], 1)
        self.assertEqual(response.data['data'][0]['departmentName'], 'Ear & Throat')
