from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError

from exams.models import ExaminationRecord


class Command(BaseCommand):
    help = 'Registers an examination ID so a candidate can sit the exam'

    def add_arguments(self, parser):
        parser.add_argument('examination_id', type=str, help='The externally issued examination ID')
        parser.add_argument('--description', type=str, default='', help='Free-text notes about this exam instance')
        parser.add_argument('--status', type=str, default='pending', help='Lifecycle status label')

    def handle(self, *args, **options):
        examination_id = options['examination_id']
        if not examination_id or len(examination_id) > 50:
            raise CommandError("Examination ID must be between 1 and 50 characters")

        try:
            record, created = ExaminationRecord.objects.get_or_create(
                examination_id=examination_id,
                defaults={
                    'description': options['description'],
                    'status': options['status'],
                },
            )
        except DatabaseError as e:
            raise CommandError(f"Provisioning failed: {e}")

        if not created:
            self.stdout.write(self.style.WARNING(f"Examination {record.examination_id} already exists (status: {record.status})"))
            return

        self.stdout.write(self.style.SUCCESS(f"Provisioned examination {record.examination_id}"))
