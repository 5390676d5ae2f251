"""
Affiliation Manager: doctor-to-department registrations and their fees.
"""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable

from scheduling.exceptions import NotFoundError, ValidationError
from scheduling.models import Affiliation, Department, DoctorProfile

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')
# Affiliation.consultation_fee holds 10 digits, 2 of them decimals
MAX_FEE = Decimal('100000000')


def create_affiliation(doctor_id: int, hospital_id: int, department_id: int, fee,
                       doctor_specializations: Iterable[str], department_name: str) -> Affiliation:
    """Validate and build an unsaved affiliation.

    The department name must equal one of the doctor's specializations
    exactly (case and whitespace included) and the fee must be positive.
    """
    try:
        fee = Decimal(str(fee))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError('Consultation fee must be a number')
    if not fee.is_finite():
        raise ValidationError('Consultation fee must be a number')
    if fee >= MAX_FEE:
        raise ValidationError('Consultation fee is too large')
    fee = fee.quantize(CENT, rounding=ROUND_HALF_UP)
    if fee <= 0:
        raise ValidationError('Consultation fee must be greater than zero')
    if department_name not in list(doctor_specializations or ()):
        raise ValidationError(f'Department "{department_name}" does not match any of your specializations')
    return Affiliation(
        doctor_id=doctor_id,
        hospital_id=hospital_id,
        department_id=department_id,
        consultation_fee=fee,
    )


def affiliate_doctor(doctor: DoctorProfile, department_id: int, fee) -> Affiliation:
    department = Department.objects.select_related('hospital').filter(pk=department_id).first()
    if department is None:
        raise NotFoundError('Department not found')
    try:
        affiliation = create_affiliation(
            doctor.id, department.hospital_id, department.id, fee, doctor.specializations, department.name
        )
    except ValidationError as e:
        logger.info('affiliation rejected doctor=%s department=%s: %s', doctor.id, department.id, e.message)
        raise
    affiliation.save()
    logger.info('doctor %s affiliated with hospital %s department %s fee=%s',
                doctor.id, department.hospital_id, department.id, affiliation.consultation_fee)
    return affiliation


def format_affiliation(a: Affiliation) -> dict:
    return {
        'id': a.id,
        'doctorId': a.doctor_id,
        'hospitalId': a.hospital_id,
        'hospitalName': a.hospital.name,
        'departmentId': a.department_id,
        'departmentName': a.department.name,
        'consultationFee': str(a.consultation_fee),
    }


def list_doctor_affiliations(doctor_id: int) -> list[dict]:
    qs = Affiliation.objects.filter(doctor_id=doctor_id).select_related('hospital', 'department').order_by('id')
    return [format_affiliation(a) for a in qs]
