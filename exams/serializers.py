# examphase_platform/exams/serializers.py
from rest_framework import serializers
from .models import ExaminationRecord


class ExaminationRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = ExaminationRecord
        fields = ['id', 'examination_id', 'description', 'status', 'created_at', 'updated_at']
        read_only_fields = fields


class ValidateIdentifierSerializer(serializers.Serializer):
    # No trimming: identifiers must match exactly as issued
    examination_id = serializers.CharField(max_length=50, trim_whitespace=False)
