"""Prometheus counters for booking engine outcomes, exported on ``/metrics``."""
from prometheus_client import Counter

BOOKINGS = Counter(
    'scheduling_bookings_total',
    'Booking attempts by outcome',
    ['outcome'],
)

SLOT_REGISTRATIONS = Counter(
    'scheduling_slot_registrations_total',
    'Availability slot registrations by outcome',
    ['outcome'],
)
