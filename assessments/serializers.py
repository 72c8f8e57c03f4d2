from rest_framework import serializers
from .phases import next_phase


class PhaseSerializer(serializers.Serializer):
    """Read-only view of a PhaseSpec for the phase router."""
    number = serializers.IntegerField()
    title = serializers.CharField()
    kind = serializers.CharField()
    total_questions = serializers.IntegerField()
    allowed_types = serializers.ListField(child=serializers.CharField())
    next_phase = serializers.SerializerMethodField()

    def get_next_phase(self, obj):
        upcoming = next_phase(obj.number)
        return upcoming.number if upcoming else None


class DeadlineSerializer(serializers.Serializer):
    examination_id = serializers.CharField()
    phase = serializers.IntegerField()
    duration_seconds = serializers.IntegerField()
    remaining_seconds = serializers.IntegerField()
    expired = serializers.BooleanField()
    started_at = serializers.FloatField()


class PhaseProgressSerializer(serializers.Serializer):
    phase = serializers.IntegerField()
    state = serializers.CharField()
    submitted_at = serializers.DateTimeField(allow_null=True)
