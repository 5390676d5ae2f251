"""
Search Engine.

Turns patient criteria into doctor offerings: one per (doctor,
affiliation) pair that still has at least one free slot.  Nothing is
cached; every call reads the current state of the Slot Store so a slot
booked a moment ago is already gone from the next result.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterator, Optional

from scheduling.models import AvailabilitySlot, DoctorProfile
from scheduling.services import store
from scheduling.services.availability import format_slot


@dataclass(frozen=True)
class SearchCriteria:
    hospital_id: Optional[int] = None
    specialization: Optional[str] = None
    term: Optional[str] = None
    target_date: Optional[date] = None


@dataclass
class DoctorOffering:
    doctor_id: int
    doctor_name: str
    qualifications: str
    specializations: list[str]
    years_of_experience: int
    hospital_id: int
    hospital_name: str
    affiliation_id: int
    department_id: int
    department_name: str
    consultation_fee: Decimal
    slots: list[AvailabilitySlot] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            'doctorId': self.doctor_id,
            'doctorName': self.doctor_name,
            'qualifications': self.qualifications,
            'specializations': list(self.specializations),
            'yearsOfExperience': self.years_of_experience,
            'hospitalId': self.hospital_id,
            'hospitalName': self.hospital_name,
            'affiliationId': self.affiliation_id,
            'departmentId': self.department_id,
            'departmentName': self.department_name,
            'consultationFee': str(self.consultation_fee),
            'slots': [format_slot(s) for s in self.slots],
        }


def _matches(profile: DoctorProfile, criteria: SearchCriteria) -> bool:
    specializations = profile.specializations or []
    if criteria.specialization and criteria.specialization not in specializations:
        return False
    if criteria.term:
        needle = criteria.term.lower()
        if needle not in (profile.name or '').lower() and not any(needle in s.lower() for s in specializations):
            return False
    return True


def search(criteria: SearchCriteria) -> Iterator[DoctorOffering]:
    """Yield offerings matching ``criteria``; order is not significant."""
    affiliations = store.list_affiliations(hospital_id=criteria.hospital_id)

    profiles: dict[int, Optional[DoctorProfile]] = {}
    for affiliation in affiliations:
        if affiliation.doctor_id not in profiles:
            profile = store.get_doctor_profile(affiliation.doctor_id)
            profiles[affiliation.doctor_id] = profile if profile and _matches(profile, criteria) else None
        profile = profiles[affiliation.doctor_id]
        if profile is None:
            continue

        slots = store.list_unbooked_slots_for_doctor(
            profile.id, hospital_id=affiliation.hospital_id, day=criteria.target_date
        )
        if not slots:
            continue
        yield DoctorOffering(
            doctor_id=profile.id,
            doctor_name=profile.name,
            qualifications=profile.qualifications,
            specializations=list(profile.specializations or []),
            years_of_experience=profile.years_of_experience,
            hospital_id=affiliation.hospital_id,
            hospital_name=affiliation.hospital.name,
            affiliation_id=affiliation.id,
            department_id=affiliation.department_id,
            department_name=affiliation.department.name,
            consultation_fee=affiliation.consultation_fee,
            slots=slots,
        )


def list_specializations() -> list[str]:
    seen = set()
    for specs in DoctorProfile.objects.values_list('specializations', flat=True):
        seen.update(s for s in (specs or []) if isinstance(s, str) and s)
    return sorted(seen)
