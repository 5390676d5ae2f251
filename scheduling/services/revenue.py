"""
Revenue Aggregator.

``aggregate`` is a pure function over appointments: it reads nothing
from the database and never raises on a missing join.  Only Completed
appointments count.  Amounts are summed as exact decimals and rounded
once, half-up to cents, when the summary is built.
"""
from __future__ import annotations

import enum
from collections import defaultdict
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from scheduling.exceptions import NotFoundError
from scheduling.models import Affiliation, Appointment, DoctorProfile, Hospital
from scheduling.services import store

CENT = Decimal('0.01')


class RevenueScope(enum.Enum):
    DOCTOR = 'doctor'          # doctor share, keyed by doctor id
    DEPARTMENT = 'department'  # hospital share, keyed by department id
    HOSPITAL = 'hospital'      # doctor share, keyed by hospital id


@dataclass
class RevenueSummary:
    total_consultations: int = 0
    total_revenue: Decimal = Decimal('0.00')
    breakdown: dict = field(default_factory=dict)


def _round(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def _department_index(affiliations: Iterable[Affiliation]) -> dict:
    """(doctor_id, hospital_id) -> department id of the lowest-id matching affiliation."""
    index: dict = {}
    for a in sorted(affiliations, key=lambda a: a.id):
        index.setdefault((a.doctor_id, a.hospital_id), a.department_id)
    return index


def aggregate(appointments: Iterable[Appointment], scope: RevenueScope,
              affiliations: Iterable[Affiliation] = ()) -> RevenueSummary:
    departments = _department_index(affiliations) if scope is RevenueScope.DEPARTMENT else {}

    count = 0
    total = Decimal('0')
    breakdown: dict = defaultdict(Decimal)
    for a in appointments:
        if a.status != Appointment.STATUS_COMPLETED:
            continue
        count += 1
        if scope is RevenueScope.DEPARTMENT:
            amount = Decimal(a.hospital_revenue)
            total += amount
            key = departments.get((a.doctor_id, a.hospital_id))
            # unmatched appointments still count towards the totals
            if key is not None:
                breakdown[key] += amount
        else:
            amount = Decimal(a.doctor_revenue)
            total += amount
            key = a.doctor_id if scope is RevenueScope.DOCTOR else a.hospital_id
            breakdown[key] += amount

    return RevenueSummary(
        total_consultations=count,
        total_revenue=_round(total),
        breakdown={k: _round(v) for k, v in breakdown.items()},
    )


def doctor_dashboard(doctor_id: int) -> dict:
    appointments = store.list_appointments(doctor_id=doctor_id, status=Appointment.STATUS_COMPLETED)
    summary = aggregate(appointments, RevenueScope.HOSPITAL)
    names = dict(Hospital.objects.filter(pk__in=summary.breakdown.keys()).values_list('id', 'name'))
    return {
        'totalEarnings': str(summary.total_revenue),
        'totalConsultations': summary.total_consultations,
        'earningsByHospital': [
            {'hospitalId': hid, 'hospitalName': names.get(hid), 'earnings': str(amount)}
            for hid, amount in sorted(summary.breakdown.items())
        ],
    }


def hospital_dashboard(hospital_id: int) -> dict:
    hospital_name = store.get_hospital_name(hospital_id)
    if hospital_name is None:
        raise NotFoundError('Hospital not found')

    appointments = store.list_appointments(hospital_id=hospital_id, status=Appointment.STATUS_COMPLETED)
    affiliations = store.list_affiliations(hospital_id=hospital_id)
    by_department = aggregate(appointments, RevenueScope.DEPARTMENT, affiliations)
    by_doctor = aggregate(appointments, RevenueScope.DOCTOR)

    department_names = {a.department_id: a.department.name for a in affiliations}
    doctor_ids = sorted({a.doctor_id for a in affiliations} | set(by_doctor.breakdown))
    doctor_names = dict(DoctorProfile.objects.filter(pk__in=doctor_ids).values_list('id', 'name'))
    return {
        'hospitalId': hospital_id,
        'hospitalName': hospital_name,
        'totalConsultations': by_department.total_consultations,
        'totalRevenue': str(by_department.total_revenue),
        'revenueByDepartment': [
            {'departmentId': did, 'departmentName': department_names.get(did), 'revenue': str(amount)}
            for did, amount in sorted(by_department.breakdown.items())
        ],
        'revenueByDoctor': [
            {'doctorId': did, 'doctorName': doctor_names.get(did), 'revenue': str(amount)}
            for did, amount in sorted(by_doctor.breakdown.items())
        ],
        'doctors': [{'doctorId': did, 'doctorName': doctor_names.get(did)} for did in doctor_ids],
    }
