from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import UserRateThrottle

from scheduling.realtime.notify import broadcast_slots_changed
from scheduling.serializers.booking import BookingSerializer
from scheduling.services.booking import book_offering_slot, format_appointment, list_patient_appointments


class BookingRateThrottle(UserRateThrottle):
    scope = 'booking'


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@throttle_classes([BookingRateThrottle])
def book(request):
    """Book a free slot at the fee of the offering's affiliation."""
    s = BookingSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    appointment = book_offering_slot(s.validated_data['slotId'], request.user.id, s.validated_data['affiliationId'])
    broadcast_slots_changed(appointment.doctor_id, appointment.hospital_id)
    return Response({'ok': True, 'data': format_appointment(appointment)}, status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def mine(request):
    return Response({'ok': True, 'data': list_patient_appointments(request.user.id)})
