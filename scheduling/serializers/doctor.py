from rest_framework import serializers

from scheduling.serializers import clean_text


class SpecializationsField(serializers.Field):
    """Accepts a list of strings or one comma separated string."""
    default_error_messages = {'invalid': 'Expected a list of strings or a comma separated string.'}

    def to_internal_value(self, data):
        if isinstance(data, str):
            items = data.split(',')
        elif isinstance(data, (list, tuple)) and all(isinstance(x, str) for x in data):
            items = data
        else:
            self.fail('invalid')
        out = []
        for item in items:
            item = clean_text(item)
            if item and item not in out:
                out.append(item)
        return out

    def to_representation(self, value):
        return list(value or [])


class DoctorProfileSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    qualifications = serializers.CharField(required=False, allow_blank=True, max_length=255)
    specializations = SpecializationsField()
    yearsOfExperience = serializers.IntegerField(source='years_of_experience', required=False, min_value=0, max_value=80)

    def validate_name(self, v):
        v = clean_text(v)
        if len(v) < 2:
            raise serializers.ValidationError('Name must be at least 2 characters')
        return v

    def validate_qualifications(self, v):
        return clean_text(v)


class AffiliationCreateSerializer(serializers.Serializer):
    departmentId = serializers.IntegerField(min_value=1)
    # range checks live in the affiliation service
    consultationFee = serializers.DecimalField(max_digits=20, decimal_places=4)


class SlotCreateSerializer(serializers.Serializer):
    hospitalId = serializers.IntegerField(min_value=1)
    startAt = serializers.DateTimeField()
    endAt = serializers.DateTimeField()
