"""
Django admin registrations for the scheduling models.

Staff mark appointments Completed from the changelist; only Completed
appointments feed the revenue dashboards.
"""
from django.contrib import admin

from .models import Affiliation, Appointment, AvailabilitySlot, Department, DoctorProfile, Hospital


@admin.register(Hospital)
class HospitalAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'location', 'created_at')
    search_fields = ('name', 'location')


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'hospital')
    list_filter = ('hospital',)
    search_fields = ('name',)


@admin.register(DoctorProfile)
class DoctorProfileAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'user', 'years_of_experience', 'updated_at')
    search_fields = ('name', 'user__username')


@admin.register(Affiliation)
class AffiliationAdmin(admin.ModelAdmin):
    list_display = ('id', 'doctor', 'hospital', 'department', 'consultation_fee', 'created_at')
    list_filter = ('hospital',)

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(AvailabilitySlot)
class AvailabilitySlotAdmin(admin.ModelAdmin):
    """Read-only: slots are created through the availability API and never deleted."""
    list_display = ('id', 'doctor', 'hospital', 'start_at', 'end_at', 'is_booked', 'booked_by')
    list_filter = ('is_booked', 'hospital')

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'doctor', 'hospital', 'scheduled_at', 'fee_paid',
                    'doctor_revenue', 'hospital_revenue', 'status')
    list_editable = ('status',)
    list_filter = ('status', 'hospital')
    readonly_fields = ('patient', 'doctor', 'hospital', 'slot', 'scheduled_at', 'fee_paid',
                       'doctor_revenue', 'hospital_revenue')
