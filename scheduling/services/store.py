"""
Slot Store and Affiliation Index.

Thin ORM accessors the booking engine reads and writes through.  The
only mutating primitive on slots is ``compare_and_set_booked``, a
single conditional UPDATE, so two callers can never both claim the
same slot regardless of which process or thread they run in.
"""
from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from django.utils import timezone

from scheduling.models import Affiliation, Appointment, AvailabilitySlot, DoctorProfile, Hospital

DAY_END = time(23, 59, 59, 999000)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Local calendar day as an inclusive ``[00:00:00.000, 23:59:59.999]`` range."""
    tz = timezone.get_current_timezone()
    start = timezone.make_aware(datetime.combine(day, time.min), tz)
    end = timezone.make_aware(datetime.combine(day, DAY_END), tz)
    return start, end


def get_slot(slot_id: int) -> Optional[AvailabilitySlot]:
    return AvailabilitySlot.objects.filter(pk=slot_id).first()


def compare_and_set_booked(slot_id: int, patient_id: int) -> bool:
    """Flip ``is_booked`` False -> True atomically; True iff this caller won."""
    updated = AvailabilitySlot.objects.filter(pk=slot_id, is_booked=False).update(
        is_booked=True, booked_by_id=patient_id, updated_at=timezone.now()
    )
    return updated == 1


def list_unbooked_slots_for_doctor(doctor_id: int, hospital_id: Optional[int] = None,
                                   day: Optional[date] = None) -> list[AvailabilitySlot]:
    qs = AvailabilitySlot.objects.filter(doctor_id=doctor_id, is_booked=False)
    if hospital_id is not None:
        qs = qs.filter(hospital_id=hospital_id)
    if day is not None:
        start, end = day_bounds(day)
        qs = qs.filter(start_at__gte=start, start_at__lte=end)
    return list(qs.order_by('start_at', 'id'))


def list_affiliations(hospital_id: Optional[int] = None, doctor_id: Optional[int] = None) -> list[Affiliation]:
    qs = Affiliation.objects.select_related('hospital', 'department')
    if hospital_id is not None:
        qs = qs.filter(hospital_id=hospital_id)
    if doctor_id is not None:
        qs = qs.filter(doctor_id=doctor_id)
    return list(qs.order_by('id'))


def get_doctor_profile(doctor_id: int) -> Optional[DoctorProfile]:
    return DoctorProfile.objects.filter(pk=doctor_id).first()


def get_hospital_name(hospital_id: int) -> Optional[str]:
    return Hospital.objects.filter(pk=hospital_id).values_list('name', flat=True).first()


def create_appointment(**record) -> Appointment:
    return Appointment.objects.create(**record)


def list_appointments(**filters) -> list[Appointment]:
    return list(Appointment.objects.filter(**filters).order_by('id'))
