"""
Error taxonomy of the booking engine and the DRF exception handler.

Service functions raise ``SchedulingError`` subclasses; views let them
propagate and ``api_exception_handler`` renders every failure, ours or
DRF's, as ``{"ok": false, "error": {"code", "message"}}``.
"""
import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class SchedulingError(Exception):
    code = 'scheduling_error'
    status_code = 400

    def __init__(self, message: str = ''):
        super().__init__(message or self.code)
        self.message = message or self.code


class OrderingError(SchedulingError):
    """Slot start is not strictly before its end."""
    code = 'ordering'
    status_code = 400


class OverlapError(SchedulingError):
    """Slot intersects an existing unbooked slot of the same doctor."""
    code = 'overlap'
    status_code = 409


class ValidationError(SchedulingError):
    code = 'validation'
    status_code = 400


class NotFoundError(SchedulingError):
    code = 'not_found'
    status_code = 404


class SlotUnavailableError(SchedulingError):
    """Slot was already booked by someone else."""
    code = 'slot_unavailable'
    status_code = 409


def api_exception_handler(exc, context):
    if isinstance(exc, SchedulingError):
        return Response({'ok': False, 'error': {'code': exc.code, 'message': exc.message}}, status=exc.status_code)

    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception('unhandled error in %s', context.get('view'))
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)
    # normalize response
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = resp.data
    code = getattr(exc, 'default_code', None) or ('not_found' if resp.status_code == 404 else 'api_error')
    out = Response({'ok': False, 'error': {'code': code, 'message': detail}}, status=resp.status_code)
    # keep throttling and auth challenge headers
    for name in ('Retry-After', 'WWW-Authenticate'):
        if name in resp:
            out[name] = resp[name]
    return out
