"""
Availability Manager.

``register_slot`` is the pure validation step: it never touches the
database and only returns an unsaved slot.  ``add_availability`` wraps
it with the locking and persistence the API needs.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable

from django.db import transaction

from scheduling.exceptions import NotFoundError, OrderingError, OverlapError
from scheduling.metrics import SLOT_REGISTRATIONS
from scheduling.models import AvailabilitySlot, DoctorProfile, Hospital
from scheduling.services import store

logger = logging.getLogger(__name__)


def register_slot(doctor_id: int, hospital_id: int, start: datetime, end: datetime,
                  existing_unbooked_slots: Iterable[AvailabilitySlot]) -> AvailabilitySlot:
    """Validate a new interval against a doctor's unbooked slots.

    Slots of every hospital count; booked slots are ignored even if the
    caller passes them in.  Intervals are half-open, so a slot ending at
    09:30 and one starting at 09:30 do not overlap.
    """
    if start >= end:
        raise OrderingError('Start time must be before end time')
    for other in existing_unbooked_slots:
        if other.is_booked or other.doctor_id != doctor_id:
            continue
        if other.overlaps(start, end):
            raise OverlapError(
                f'Slot overlaps existing availability {other.start_at.isoformat()} - {other.end_at.isoformat()}'
            )
    return AvailabilitySlot(doctor_id=doctor_id, hospital_id=hospital_id, start_at=start, end_at=end, is_booked=False)


def add_availability(doctor: DoctorProfile, hospital_id: int, start: datetime, end: datetime) -> AvailabilitySlot:
    if not Hospital.objects.filter(pk=hospital_id).exists():
        raise NotFoundError('Hospital not found')
    if not store.list_affiliations(hospital_id=hospital_id, doctor_id=doctor.id):
        raise NotFoundError('Doctor is not affiliated with this hospital')

    try:
        with transaction.atomic():
            # serialize registrations of one doctor
            DoctorProfile.objects.select_for_update().filter(pk=doctor.id).first()
            existing = store.list_unbooked_slots_for_doctor(doctor.id)
            slot = register_slot(doctor.id, hospital_id, start, end, existing)
            slot.save()
    except (OrderingError, OverlapError) as e:
        SLOT_REGISTRATIONS.labels(outcome=e.code).inc()
        logger.info('slot rejected doctor=%s hospital=%s: %s', doctor.id, hospital_id, e.message)
        raise
    SLOT_REGISTRATIONS.labels(outcome='created').inc()
    logger.info('slot %s registered doctor=%s hospital=%s %s-%s', slot.id, doctor.id, hospital_id,
                start.isoformat(), end.isoformat())
    return slot


def list_doctor_availability(doctor_id: int) -> list[dict]:
    qs = AvailabilitySlot.objects.filter(doctor_id=doctor_id).select_related('hospital').order_by('start_at', 'id')
    return [format_slot(s, hospital_name=s.hospital.name) for s in qs]


def format_slot(slot: AvailabilitySlot, hospital_name: str | None = None) -> dict:
    data = {
        'id': slot.id,
        'doctorId': slot.doctor_id,
        'hospitalId': slot.hospital_id,
        'startAt': slot.start_at.isoformat(),
        'endAt': slot.end_at.isoformat(),
        'isBooked': slot.is_booked,
    }
    if hospital_name is not None:
        data['hospitalName'] = hospital_name
    return data
