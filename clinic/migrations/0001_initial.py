import uuid

import django.db.models.deletion
from django.db import migrations, models


def regimen_item_fields():
    return [
        ('name', models.CharField(max_length=255)),
        ('type', models.CharField(choices=[('supplement', 'Supplement'), ('drug', 'Drug'), ('lifestyle', 'Lifestyle'), ('therapy', 'Therapy')], max_length=20)),
        ('category', models.CharField(max_length=64)),
        ('priority', models.CharField(choices=[('core', 'Core'), ('additional', 'Additional'), ('optional', 'Optional')], default='core', max_length=20)),
        ('dosage', models.TextField(blank=True, null=True)),
        ('frequency', models.TextField(blank=True, null=True)),
        ('timing', models.TextField(blank=True, null=True)),
        ('duration', models.TextField(blank=True, null=True)),
        ('rationale', models.TextField(blank=True, null=True)),
        ('cautions', models.TextField(blank=True, null=True)),
        ('instructions', models.TextField(blank=True, null=True)),
        ('food_requirement', models.TextField(blank=True, null=True)),
        ('order', models.IntegerField(default=0)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Patient',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(db_index=True, max_length=255)),
                ('email', models.CharField(blank=True, max_length=255, null=True)),
                ('phone', models.CharField(blank=True, max_length=64, null=True)),
                ('date_of_birth', models.DateField()),
                ('sex', models.CharField(choices=[('male', 'Male'), ('female', 'Female'), ('other', 'Other')], max_length=10)),
                ('height', models.DecimalField(blank=True, decimal_places=2, help_text='cm', max_digits=5, null=True)),
                ('weight', models.DecimalField(blank=True, decimal_places=2, help_text='kg', max_digits=5, null=True)),
                ('cancer_type', models.CharField(max_length=255)),
                ('cancer_stage', models.CharField(max_length=64)),
                ('diagnosis_date', models.DateField()),
                ('metastasis_locations', models.JSONField(blank=True, default=list)),
                ('notes', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
        ),
        migrations.CreateModel(
            name='ProtocolTemplate',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, null=True)),
                ('cancer_type', models.CharField(blank=True, max_length=255, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
        ),
        migrations.CreateModel(
            name='ProtocolItem',
            fields=regimen_item_fields() + [
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('template', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='items', to='clinic.protocoltemplate')),
            ],
            options={
                'ordering': ['order'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='PatientProtocol',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=255)),
                ('status', models.CharField(choices=[('active', 'Active'), ('paused', 'Paused'), ('completed', 'Completed')], db_index=True, default='active', max_length=20)),
                ('start_date', models.DateField()),
                ('end_date', models.DateField(blank=True, null=True)),
                ('assigned_at', models.DateTimeField(auto_now_add=True)),
                ('patient', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='protocols', to='clinic.patient')),
                ('template', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='patient_protocols', to='clinic.protocoltemplate')),
            ],
        ),
        migrations.CreateModel(
            name='PatientProtocolItem',
            fields=regimen_item_fields() + [
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('is_active', models.BooleanField(default=True)),
                ('patient_protocol', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='clinic.patientprotocol')),
            ],
            options={
                'ordering': ['order'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='AdherenceRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField(db_index=True)),
                ('status', models.CharField(choices=[('done', 'Done'), ('skipped', 'Skipped'), ('missed', 'Missed')], max_length=10)),
                ('notes', models.TextField(blank=True, null=True)),
                ('recorded_at', models.DateTimeField(auto_now_add=True)),
                ('patient_protocol_item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='adherence_records', to='clinic.patientprotocolitem')),
            ],
            options={
                'constraints': [models.UniqueConstraint(fields=('patient_protocol_item', 'date'), name='uniq_adherence_item_date')],
            },
        ),
        migrations.CreateModel(
            name='LabTest',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('test_name', models.CharField(max_length=255)),
                ('test_date', models.DateField(db_index=True)),
                ('value', models.DecimalField(blank=True, decimal_places=4, max_digits=12, null=True)),
                ('unit', models.CharField(blank=True, max_length=64, null=True)),
                ('reference_range_min', models.DecimalField(blank=True, decimal_places=4, max_digits=12, null=True)),
                ('reference_range_max', models.DecimalField(blank=True, decimal_places=4, max_digits=12, null=True)),
                ('status', models.CharField(blank=True, choices=[('normal', 'Normal'), ('low', 'Low'), ('high', 'High'), ('critical', 'Critical'), ('not-specified', 'Not specified')], max_length=20, null=True)),
                ('notes', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('patient', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='lab_tests', to='clinic.patient')),
            ],
            options={
                'indexes': [models.Index(fields=['patient', 'test_name', 'test_date'], name='clinic_labt_patient_5b0e2c_idx')],
            },
        ),
        migrations.CreateModel(
            name='TimelineEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('type', models.CharField(choices=[('protocol_change', 'Protocol change'), ('lab_result', 'Lab result'), ('note', 'Note'), ('observation', 'Observation')], max_length=20)),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, null=True)),
                ('date', models.DateField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('patient', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='timeline_entries', to='clinic.patient')),
            ],
            options={
                'ordering': ['-date', '-created_at'],
                'indexes': [models.Index(fields=['patient', 'date'], name='clinic_time_patient_8c41d7_idx')],
            },
        ),
    ]
