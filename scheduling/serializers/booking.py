from rest_framework import serializers


class SearchQuerySerializer(serializers.Serializer):
    hospitalId = serializers.IntegerField(required=False, min_value=1)
    specialization = serializers.CharField(required=False, allow_blank=True, max_length=255)
    q = serializers.CharField(required=False, allow_blank=True, max_length=255)
    date = serializers.DateField(required=False)


class BookingSerializer(serializers.Serializer):
    slotId = serializers.IntegerField(min_value=1)
    affiliationId = serializers.IntegerField(min_value=1)
