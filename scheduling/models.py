"""
Database models for the scheduling backend.

Hospitals, departments and doctor profiles are plain reference data
maintained by the host application.  Affiliations, availability slots
and appointments carry the booking engine's invariants; the ones the
database can check on its own are declared as constraints here so a
stray write path cannot break them either.
"""
from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import F, Q


class Hospital(models.Model):
    name = models.CharField(max_length=255)
    location = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"


class Department(models.Model):
    """A department registered under one hospital.

    Its ``name`` is what a doctor's specializations are matched against
    when the doctor affiliates with it.
    """
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='departments')
    name = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.name} @ {self.hospital_id}"


class DoctorProfile(models.Model):
    """Public profile of a doctor, owned by one auth user."""
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='doctor_profile'
    )
    name = models.CharField(max_length=255)
    qualifications = models.CharField(max_length=255, blank=True)
    specializations = models.JSONField(default=list, blank=True)
    years_of_experience = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"Dr. {self.name} ({self.id})"


class Affiliation(models.Model):
    """A doctor's registration with a hospital department and its fee.

    Affiliations are never edited after creation.  Duplicate
    (doctor, hospital, department) rows are allowed.
    """
    doctor = models.ForeignKey(DoctorProfile, on_delete=models.CASCADE, related_name='affiliations')
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='affiliations')
    department = models.ForeignKey(Department, on_delete=models.CASCADE, related_name='affiliations')
    consultation_fee = models.DecimalField(max_digits=10, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['hospital', 'doctor'], name='affil_hospital_doctor_idx'),
            models.Index(fields=['doctor', 'hospital'], name='affil_doctor_hospital_idx'),
        ]
        constraints = [
            models.CheckConstraint(condition=Q(consultation_fee__gt=0), name='affiliation_fee_positive'),
        ]

    def __str__(self) -> str:
        return f"Affiliation(d={self.doctor_id}, h={self.hospital_id}, dept={self.department_id}, fee={self.consultation_fee})"


class AvailabilitySlot(models.Model):
    """A bookable interval ``[start_at, end_at)`` for one doctor at one hospital."""
    doctor = models.ForeignKey(DoctorProfile, on_delete=models.CASCADE, related_name='slots')
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='slots')
    start_at = models.DateTimeField()
    end_at = models.DateTimeField()
    # Flipped to True exactly once, by the booking claim
    is_booked = models.BooleanField(default=False, db_index=True)
    booked_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name='booked_slots'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['doctor', 'is_booked', 'start_at'], name='slot_doctor_free_start_idx'),
            models.Index(fields=['doctor', 'hospital', 'is_booked', 'start_at'], name='slot_doc_hosp_free_idx'),
        ]
        constraints = [
            models.CheckConstraint(condition=Q(start_at__lt=F('end_at')), name='slot_start_before_end'),
        ]

    def overlaps(self, start, end) -> bool:
        """Half-open interval intersection; touching endpoints do not overlap."""
        return start < self.end_at and end > self.start_at

    def __str__(self) -> str:
        state = 'booked' if self.is_booked else 'free'
        return f"Slot(d={self.doctor_id}, h={self.hospital_id}, {self.start_at:%F %H:%M}~{self.end_at:%H:%M}, {state})"


class Appointment(models.Model):
    STATUS_BOOKED = 'Booked'
    STATUS_COMPLETED = 'Completed'
    STATUS_CANCELLED = 'Cancelled'
    STATUS_CHOICES = (
        (STATUS_BOOKED, 'Booked'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_CANCELLED, 'Cancelled'),
    )

    patient = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='appointments')
    doctor = models.ForeignKey(DoctorProfile, on_delete=models.CASCADE, related_name='appointments')
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='appointments')
    # One appointment per slot, enforced by the unique column
    slot = models.OneToOneField(AvailabilitySlot, on_delete=models.PROTECT, related_name='appointment')
    scheduled_at = models.DateTimeField()
    fee_paid = models.DecimalField(max_digits=10, decimal_places=2)
    doctor_revenue = models.DecimalField(max_digits=10, decimal_places=2)
    hospital_revenue = models.DecimalField(max_digits=10, decimal_places=2)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_BOOKED, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['hospital', 'status'], name='appt_hospital_status_idx'),
            models.Index(fields=['doctor', 'status'], name='appt_doctor_status_idx'),
            models.Index(fields=['patient', 'scheduled_at'], name='appt_patient_sched_idx'),
        ]

    def __str__(self) -> str:
        return f"Appointment(p={self.patient_id}, d={self.doctor_id}, slot={self.slot_id}, {self.status})"
