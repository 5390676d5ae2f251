"""
Hospital and department registration plus the hospital revenue dashboard.

Reads are open to any authenticated user so patients can pick a
hospital; writes and the dashboard are restricted to staff.
"""
from django.shortcuts import get_object_or_404
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from scheduling.models import Department, Hospital
from scheduling.permissions import IsHospitalAdmin, IsHospitalAdminOrReadOnly
from scheduling.serializers.hospital import DepartmentCreateSerializer, HospitalCreateSerializer
from scheduling.services.revenue import hospital_dashboard


def _hospital(h: Hospital) -> dict:
    return {'id': h.id, 'name': h.name, 'location': h.location}


def _department(d: Department) -> dict:
    return {'id': d.id, 'hospitalId': d.hospital_id, 'name': d.name}


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsHospitalAdminOrReadOnly])
def hospitals(request):
    if request.method == 'GET':
        return Response({'ok': True, 'data': [_hospital(h) for h in Hospital.objects.order_by('name', 'id')]})
    s = HospitalCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    h = Hospital.objects.create(**s.validated_data)
    return Response({'ok': True, 'data': _hospital(h)}, status=201)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsHospitalAdminOrReadOnly])
def departments(request, hospital_id: int):
    hospital = get_object_or_404(Hospital, pk=hospital_id)
    if request.method == 'GET':
        return Response({'ok': True, 'data': [_department(d) for d in hospital.departments.order_by('name', 'id')]})
    s = DepartmentCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    d = Department.objects.create(hospital=hospital, **s.validated_data)
    return Response({'ok': True, 'data': _department(d)}, status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsHospitalAdmin])
def dashboard(request, hospital_id: int):
    return Response({'ok': True, 'data': hospital_dashboard(hospital_id)})
