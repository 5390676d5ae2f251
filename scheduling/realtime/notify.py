import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

logger = logging.getLogger(__name__)

GROUP = "updates"


def broadcast_slots_changed(doctor_id: int, hospital_id: int) -> None:
    """Tell connected clients that a doctor's free slots at a hospital changed."""
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    event = {"type": "slots.changed", "doctorId": doctor_id, "hospitalId": hospital_id}
    try:
        async_to_sync(channel_layer.group_send)(GROUP, event)
    except Exception:
        # the write already committed; a lost hint only delays a client refresh
        logger.warning("slots.changed broadcast failed doctor=%s hospital=%s", doctor_id, hospital_id, exc_info=True)
