from rest_framework import serializers

from scheduling.serializers import clean_text


class HospitalCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    location = serializers.CharField(required=False, allow_blank=True, max_length=255)

    def validate_name(self, v):
        v = clean_text(v)
        if len(v) < 2:
            raise serializers.ValidationError('Hospital name must be at least 2 characters')
        return v

    def validate_location(self, v):
        return clean_text(v)


class DepartmentCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)

    def validate_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Department name is required')
        return v
