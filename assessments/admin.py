from django.contrib import admin

# Read-only views of candidate submissions
from .models import AnswerPhaseResult, UploadPhaseResult


@admin.register(AnswerPhaseResult)
class AnswerPhaseResultAdmin(admin.ModelAdmin):
    list_display = ('examination_id', 'phase', 'score', 'total_questions', 'percentage', 'is_passed', 'created_at')
    list_filter = ('phase', 'is_passed')
    search_fields = ('examination_id',)
    readonly_fields = [f.name for f in AnswerPhaseResult._meta.fields]


@admin.register(UploadPhaseResult)
class UploadPhaseResultAdmin(admin.ModelAdmin):
    list_display = ('examination_id', 'phase', 'file_name', 'status', 'created_at')
    list_filter = ('phase', 'status')
    search_fields = ('examination_id', 'file_name')
    readonly_fields = [f.name for f in UploadPhaseResult._meta.fields]
