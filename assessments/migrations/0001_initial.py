from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='AnswerPhaseResult',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('examination_id', models.CharField(db_index=True, max_length=50)),
                ('phase', models.PositiveSmallIntegerField()),
                ('user_answers', models.JSONField(blank=True, default=dict)),
                ('score', models.PositiveIntegerField()),
                ('total_questions', models.PositiveIntegerField()),
                ('percentage', models.DecimalField(decimal_places=2, max_digits=5)),
                ('is_passed', models.BooleanField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'constraints': [models.UniqueConstraint(fields=('examination_id', 'phase'), name='unique_answer_result_per_phase')],
            },
        ),
        migrations.CreateModel(
            name='UploadPhaseResult',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('examination_id', models.CharField(db_index=True, max_length=50)),
                ('phase', models.PositiveSmallIntegerField()),
                ('file_name', models.CharField(max_length=255)),
                ('file_url', models.CharField(blank=True, max_length=500)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('stored', 'Stored')], default='pending', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'constraints': [models.UniqueConstraint(fields=('examination_id', 'phase'), name='unique_upload_result_per_phase')],
            },
        ),
    ]
