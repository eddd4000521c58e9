import django.db.models.deletion
from django.db import migrations, models

import ward.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='StaffAccount',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('email', models.EmailField(max_length=254, unique=True)),
                ('password', models.CharField(max_length=255)),
                ('name', models.CharField(max_length=255)),
                ('role', models.CharField(choices=[('resident', 'Resident'), ('surgeon', 'Surgeon'), ('head_of_department', 'Head of department')], db_index=True, default='surgeon', max_length=32)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='DepartmentBeds',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('department', models.CharField(max_length=64, unique=True)),
                ('total_beds', models.PositiveIntegerField(default=0)),
                ('occupied_beds', models.PositiveIntegerField(default=0)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name_plural': 'department beds',
            },
        ),
        migrations.CreateModel(
            name='PatientRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('full_name', models.CharField(max_length=255)),
                ('age', models.PositiveIntegerField()),
                ('gender', models.CharField(choices=[('male', 'male'), ('female', 'female')], max_length=10)),
                ('id_number', models.CharField(blank=True, max_length=64)),
                ('phone', models.CharField(blank=True, max_length=32)),
                ('address', models.TextField(blank=True)),
                ('emergency_contact', models.CharField(blank=True, max_length=255)),
                ('admission_type', models.CharField(choices=[('emergency', 'emergency'), ('operation', 'operation')], db_index=True, default='emergency', max_length=16)),
                ('diagnosis', models.CharField(blank=True, max_length=255)),
                ('operation', models.CharField(blank=True, max_length=255)),
                ('surgeon', models.CharField(blank=True, max_length=255)),
                ('department', models.CharField(db_index=True, max_length=64)),
                ('bed_number', models.CharField(blank=True, max_length=32)),
                ('notes', models.TextField(blank=True)),
                ('admission_date', models.DateTimeField()),
                ('status', models.CharField(choices=[('active', 'active'), ('archived', 'archived')], db_index=True, default='active', max_length=16)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='admitted_patients', to='ward.staffaccount')),
            ],
            options={
                'ordering': ['-admission_date', '-id'],
            },
        ),
        migrations.CreateModel(
            name='Announcement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('content', models.TextField()),
                ('author_name', models.CharField(blank=True, max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('author', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='announcements', to='ward.staffaccount')),
            ],
            options={
                'ordering': ['-created_at', '-id'],
            },
        ),
        migrations.CreateModel(
            name='ArchiveRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('full_name', models.CharField(max_length=255)),
                ('age', models.PositiveIntegerField(blank=True, null=True)),
                ('gender', models.CharField(blank=True, max_length=10)),
                ('diagnosis', models.CharField(blank=True, max_length=255)),
                ('operation', models.CharField(blank=True, max_length=255)),
                ('surgeon', models.CharField(blank=True, max_length=255)),
                ('department', models.CharField(blank=True, max_length=64)),
                ('admission_date', models.DateTimeField(blank=True, null=True)),
                ('discharge_reason', models.CharField(choices=[('improved', 'improved'), ('by_request', 'by_request'), ('escaped', 'escaped'), ('died', 'died')], db_index=True, max_length=16)),
                ('notes', models.TextField(blank=True)),
                ('discharge_date', models.DateTimeField(auto_now_add=True)),
                ('discharged_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='discharges', to='ward.staffaccount')),
                ('patient', models.ForeignKey(db_constraint=False, on_delete=django.db.models.deletion.DO_NOTHING, related_name='archive_records', to='ward.patientrecord')),
            ],
            options={
                'ordering': ['-discharge_date', '-id'],
            },
        ),
        migrations.CreateModel(
            name='AuditEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(max_length=64)),
                ('object_type', models.CharField(blank=True, max_length=64, null=True)),
                ('object_id', models.IntegerField(blank=True, null=True)),
                ('detail', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('actor', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to='ward.staffaccount')),
            ],
            options={
                'indexes': [
                    models.Index(fields=['action', 'created_at'], name='ward_audit_action_idx'),
                    models.Index(fields=['object_type', 'object_id', 'created_at'], name='ward_audit_object_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Comment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('content', models.TextField()),
                ('author_name', models.CharField(blank=True, max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('author', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='comments', to='ward.staffaccount')),
                ('news', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='comments', to='ward.announcement')),
            ],
            options={
                'ordering': ['created_at', 'id'],
                'indexes': [models.Index(fields=['news', 'created_at'], name='ward_comment_news_idx')],
            },
        ),
        migrations.CreateModel(
            name='FollowupNote',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('note', models.TextField()),
                ('created_by_name', models.CharField(blank=True, max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='followups', to='ward.staffaccount')),
                ('patient', models.ForeignKey(db_constraint=False, on_delete=django.db.models.deletion.DO_NOTHING, related_name='followups', to='ward.patientrecord')),
            ],
            options={
                'ordering': ['-created_at', '-id'],
                'indexes': [models.Index(fields=['patient', 'created_at'], name='ward_followup_patient_idx')],
            },
        ),
        migrations.CreateModel(
            name='MediaReference',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('file_name', models.CharField(max_length=255)),
                ('file_url', models.CharField(blank=True, max_length=1024)),
                ('file', models.FileField(blank=True, max_length=512, upload_to=ward.models._media_upload)),
                ('file_type', models.CharField(choices=[('image', 'image'), ('video', 'video'), ('document', 'document'), ('lab_result', 'lab_result'), ('other', 'other')], default='image', max_length=16)),
                ('content_type', models.CharField(blank=True, max_length=128)),
                ('size', models.PositiveIntegerField(default=0)),
                ('description', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('patient', models.ForeignKey(db_constraint=False, on_delete=django.db.models.deletion.DO_NOTHING, related_name='media', to='ward.patientrecord')),
                ('uploaded_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='uploads', to='ward.staffaccount')),
            ],
            options={
                'ordering': ['-created_at', '-id'],
                'indexes': [models.Index(fields=['patient', 'created_at'], name='ward_media_patient_idx')],
            },
        ),
    ]
