from django.contrib import admin

from .models import ExaminationRecord


@admin.register(ExaminationRecord)
class ExaminationRecordAdmin(admin.ModelAdmin):
    list_display = ('examination_id', 'status', 'created_at', 'updated_at')
    search_fields = ('examination_id', 'description')
    list_filter = ('status',)
