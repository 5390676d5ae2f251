"""
Booking Protocol.

A booking is one transaction: a conditional UPDATE claims the slot
(``is_booked`` False -> True), then the appointment is created with the
revenue split.  If anything after the claim fails, the transaction rolls
the claim back, so a slot is never left booked without its appointment.
"""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from django.db import transaction

from scheduling.exceptions import NotFoundError, SlotUnavailableError, ValidationError
from scheduling.metrics import BOOKINGS
from scheduling.models import Affiliation, Appointment
from scheduling.services import store

logger = logging.getLogger(__name__)

DOCTOR_SHARE = Decimal('0.60')
HOSPITAL_SHARE = Decimal('0.40')

CENT = Decimal('0.01')


def split_fee(fee) -> tuple[Decimal, Decimal]:
    """Return ``(doctor_revenue, hospital_revenue)`` summing exactly to ``fee``."""
    fee = Decimal(str(fee))
    doctor = (fee * DOCTOR_SHARE).quantize(CENT, rounding=ROUND_HALF_UP)
    return doctor, fee - doctor


def book_slot(slot_id: int, patient_id: int, fee) -> Appointment:
    """Claim ``slot_id`` for ``patient_id`` and create its appointment.

    Raises ``NotFoundError`` when the slot does not exist and
    ``SlotUnavailableError`` when another booking got there first.  No
    retries are attempted.
    """
    fee = Decimal(str(fee)).quantize(CENT, rounding=ROUND_HALF_UP)
    if fee <= 0:
        raise ValidationError('Consultation fee must be greater than zero')

    with transaction.atomic():
        if not store.compare_and_set_booked(slot_id, patient_id):
            if store.get_slot(slot_id) is None:
                BOOKINGS.labels(outcome='not_found').inc()
                raise NotFoundError('Availability slot not found')
            BOOKINGS.labels(outcome='unavailable').inc()
            logger.info('booking lost slot=%s patient=%s: already booked', slot_id, patient_id)
            raise SlotUnavailableError('Slot already booked')

        slot = store.get_slot(slot_id)
        doctor_revenue, hospital_revenue = split_fee(fee)
        appointment = store.create_appointment(
            patient_id=patient_id,
            doctor_id=slot.doctor_id,
            hospital_id=slot.hospital_id,
            slot=slot,
            scheduled_at=slot.start_at,
            fee_paid=fee,
            doctor_revenue=doctor_revenue,
            hospital_revenue=hospital_revenue,
            status=Appointment.STATUS_BOOKED,
        )

    BOOKINGS.labels(outcome='booked').inc()
    logger.info('appointment %s booked slot=%s patient=%s fee=%s', appointment.id, slot_id, patient_id, fee)
    return appointment


def book_offering_slot(slot_id: int, patient_id: int, affiliation_id: int) -> Appointment:
    """Book a slot at the fee of the affiliation the patient searched with."""
    slot = store.get_slot(slot_id)
    if slot is None:
        BOOKINGS.labels(outcome='not_found').inc()
        raise NotFoundError('Availability slot not found')
    affiliation = Affiliation.objects.filter(
        pk=affiliation_id, doctor_id=slot.doctor_id, hospital_id=slot.hospital_id
    ).first()
    if affiliation is None:
        BOOKINGS.labels(outcome='not_found').inc()
        raise NotFoundError('Affiliation not found for this slot')
    return book_slot(slot_id, patient_id, affiliation.consultation_fee)


def format_appointment(a: Appointment) -> dict:
    return {
        'id': a.id,
        'slotId': a.slot_id,
        'patientId': a.patient_id,
        'doctorId': a.doctor_id,
        'doctorName': a.doctor.name,
        'hospitalId': a.hospital_id,
        'hospitalName': a.hospital.name,
        'scheduledAt': a.scheduled_at.isoformat(),
        'feePaid': str(a.fee_paid),
        'doctorRevenue': str(a.doctor_revenue),
        'hospitalRevenue': str(a.hospital_revenue),
        'status': a.status,
    }


def list_patient_appointments(patient_id: int) -> list[dict]:
    qs = (Appointment.objects.filter(patient_id=patient_id)
          .select_related('doctor', 'hospital')
          .order_by('-scheduled_at', '-id'))
    return [format_appointment(a) for a in qs]
