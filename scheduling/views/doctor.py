"""
Endpoints a doctor uses to maintain a profile, affiliations and slots.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from scheduling.exceptions import NotFoundError
from scheduling.models import DoctorProfile
from scheduling.permissions import IsDoctor
from scheduling.realtime.notify import broadcast_slots_changed
from scheduling.serializers.doctor import AffiliationCreateSerializer, DoctorProfileSerializer, SlotCreateSerializer
from scheduling.services.affiliations import affiliate_doctor, format_affiliation, list_doctor_affiliations
from scheduling.services.availability import add_availability, format_slot, list_doctor_availability
from scheduling.services.revenue import doctor_dashboard


def _profile(p: DoctorProfile) -> dict:
    return {
        'id': p.id,
        'userId': p.user_id,
        'name': p.name,
        'qualifications': p.qualifications,
        'specializations': list(p.specializations or []),
        'yearsOfExperience': p.years_of_experience,
    }


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def profile(request):
    """GET returns the caller's doctor profile; POST creates or updates it."""
    if request.method == 'GET':
        p = DoctorProfile.objects.filter(user=request.user).first()
        if p is None:
            raise NotFoundError('Doctor profile not found')
        return Response({'ok': True, 'data': _profile(p)})

    s = DoctorProfileSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    p, created = DoctorProfile.objects.update_or_create(user=request.user, defaults=s.validated_data)
    return Response({'ok': True, 'data': _profile(p)}, status=201 if created else 200)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsDoctor])
def affiliations(request):
    doctor = request.user.doctor_profile
    if request.method == 'GET':
        return Response({'ok': True, 'data': list_doctor_affiliations(doctor.id)})
    s = AffiliationCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    a = affiliate_doctor(doctor, s.validated_data['departmentId'], s.validated_data['consultationFee'])
    return Response({'ok': True, 'data': format_affiliation(a)}, status=201)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsDoctor])
def availability(request):
    doctor = request.user.doctor_profile
    if request.method == 'GET':
        return Response({'ok': True, 'data': list_doctor_availability(doctor.id)})
    s = SlotCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    slot = add_availability(doctor, v['hospitalId'], v['startAt'], v['endAt'])
    broadcast_slots_changed(slot.doctor_id, slot.hospital_id)
    return Response({'ok': True, 'data': format_slot(slot)}, status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsDoctor])
def dashboard(request):
    return Response({'ok': True, 'data': doctor_dashboard(request.user.doctor_profile.id)})
