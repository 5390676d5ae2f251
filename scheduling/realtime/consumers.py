import json

from channels.generic.websocket import AsyncWebsocketConsumer

from scheduling.realtime.notify import GROUP


class UpdatesConsumer(AsyncWebsocketConsumer):
    """Pushes slot change hints; clients re-run their search on receipt."""
    GROUP = GROUP

    async def connect(self):
        await self.channel_layer.group_add(self.GROUP, self.channel_name)
        await self.accept()
        await self.send(json.dumps({"type": "welcome", "message": "connected"}))

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(self.GROUP, self.channel_name)

    async def slots_changed(self, event):
        # event: {"type": "slots.changed", "doctorId": int, "hospitalId": int}
        await self.send(json.dumps(event))
