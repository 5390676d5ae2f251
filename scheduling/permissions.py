"""
Permission classes for the scheduling API.

Hospital administration is granted to Django staff users; doctor
endpoints require the caller to own a ``DoctorProfile``.
"""
from rest_framework.permissions import SAFE_METHODS, BasePermission


class IsDoctor(BasePermission):
    """Allow access only to users with a doctor profile."""
    message = 'Doctor profile required'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and hasattr(user, "doctor_profile"))


class IsHospitalAdmin(BasePermission):
    """Staff users manage hospitals, departments and dashboards."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and user.is_staff)


class IsHospitalAdminOrReadOnly(BasePermission):
    """Any authenticated user may read; writes need staff."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        if not (user and user.is_authenticated):
            return False
        return request.method in SAFE_METHODS or user.is_staff
