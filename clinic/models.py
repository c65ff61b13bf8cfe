"""
Database models for the OncoManager backend.

These models capture the clinical concepts of the system: patients,
reusable protocol templates and their items, protocols assigned to a
patient (with their own copied items), daily adherence records, lab
results and the per-patient timeline.  Every table uses a UUID primary
key so identifiers can be handed to the front-end as opaque strings.
"""
from __future__ import annotations

import uuid

from django.db import models

from clinic import lookups  # noqa: F401  registers the `like` lookup


class Sex(models.TextChoices):
    MALE = 'male', 'Male'
    FEMALE = 'female', 'Female'
    OTHER = 'other', 'Other'


class ItemType(models.TextChoices):
    """Kind of prescribed item.

    Only used for display and for the medication vs overall adherence
    split on the dashboard (``drug`` and ``supplement`` count as
    medication).
    """
    SUPPLEMENT = 'supplement', 'Supplement'
    DRUG = 'drug', 'Drug'
    LIFESTYLE = 'lifestyle', 'Lifestyle'
    THERAPY = 'therapy', 'Therapy'


MEDICATION_TYPES = (ItemType.DRUG, ItemType.SUPPLEMENT)


class Priority(models.TextChoices):
    CORE = 'core', 'Core'
    ADDITIONAL = 'additional', 'Additional'
    OPTIONAL = 'optional', 'Optional'


class ProtocolStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    PAUSED = 'paused', 'Paused'
    COMPLETED = 'completed', 'Completed'


class AdherenceStatus(models.TextChoices):
    DONE = 'done', 'Done'
    SKIPPED = 'skipped', 'Skipped'
    MISSED = 'missed', 'Missed'


class LabStatus(models.TextChoices):
    NORMAL = 'normal', 'Normal'
    LOW = 'low', 'Low'
    HIGH = 'high', 'High'
    CRITICAL = 'critical', 'Critical'
    NOT_SPECIFIED = 'not-specified', 'Not specified'


class TimelineType(models.TextChoices):
    PROTOCOL_CHANGE = 'protocol_change', 'Protocol change'
    LAB_RESULT = 'lab_result', 'Lab result'
    NOTE = 'note', 'Note'
    OBSERVATION = 'observation', 'Observation'


class Patient(models.Model):
    """An oncology patient with demographic and diagnosis details."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    # Searched with a substring match from the patient list
    name = models.CharField(max_length=255, db_index=True)
    email = models.CharField(max_length=255, blank=True, null=True)
    phone = models.CharField(max_length=64, blank=True, null=True)
    date_of_birth = models.DateField()
    sex = models.CharField(max_length=10, choices=Sex.choices)
    height = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True, help_text="cm")
    weight = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True, help_text="kg")
    cancer_type = models.CharField(max_length=255)
    cancer_stage = models.CharField(max_length=64)
    diagnosis_date = models.DateField()
    metastasis_locations = models.JSONField(default=list, blank=True)
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.cancer_type})"


class ProtocolTemplate(models.Model):
    """A named, reusable regimen that can be assigned to many patients."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    cancer_type = models.CharField(max_length=255, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.name


class RegimenItem(models.Model):
    """Fields shared by template items and the copies made for patients.

    Assigning a template copies every one of these fields, so adding a
    field here keeps the snapshot complete.
    """
    name = models.CharField(max_length=255)
    type = models.CharField(max_length=20, choices=ItemType.choices)
    category = models.CharField(max_length=64)
    priority = models.CharField(max_length=20, choices=Priority.choices, default=Priority.CORE)
    dosage = models.TextField(blank=True, null=True)
    frequency = models.TextField(blank=True, null=True)
    timing = models.TextField(blank=True, null=True)
    duration = models.TextField(blank=True, null=True)
    rationale = models.TextField(blank=True, null=True)
    cautions = models.TextField(blank=True, null=True)
    instructions = models.TextField(blank=True, null=True)
    food_requirement = models.TextField(blank=True, null=True)
    order = models.IntegerField(default=0)

    COPIED_FIELDS = (
        'name', 'type', 'category', 'priority', 'dosage', 'frequency', 'timing',
        'duration', 'rationale', 'cautions', 'instructions', 'food_requirement', 'order',
    )

    class Meta:
        abstract = True
        ordering = ['order']

    def snapshot(self) -> dict:
        return {field: getattr(self, field) for field in self.COPIED_FIELDS}

    def __str__(self) -> str:
        return f"{self.name} [{self.type}]"


class ProtocolItem(RegimenItem):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    template = models.ForeignKey(
        ProtocolTemplate, null=True, blank=True, on_delete=models.CASCADE, related_name='items'
    )


class PatientProtocol(models.Model):
    """A template (or custom) regimen assigned to one patient."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='protocols')
    # Copies are independent of the template, which may be deleted later
    template = models.ForeignKey(
        ProtocolTemplate, null=True, blank=True, on_delete=models.SET_NULL, related_name='patient_protocols'
    )
    name = models.CharField(max_length=255)
    status = models.CharField(
        max_length=20, choices=ProtocolStatus.choices, default=ProtocolStatus.ACTIVE, db_index=True
    )
    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)
    assigned_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.status})"


class PatientProtocolItem(RegimenItem):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient_protocol = models.ForeignKey(PatientProtocol, on_delete=models.CASCADE, related_name='items')
    is_active = models.BooleanField(default=True)


class AdherenceRecord(models.Model):
    """Compliance status of one prescribed item on one calendar day."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient_protocol_item = models.ForeignKey(
        PatientProtocolItem, on_delete=models.CASCADE, related_name='adherence_records'
    )
    date = models.DateField(db_index=True)
    status = models.CharField(max_length=10, choices=AdherenceStatus.choices)
    notes = models.TextField(blank=True, null=True)
    recorded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=['patient_protocol_item', 'date'], name='uniq_adherence_item_date'
            ),
        ]

    def __str__(self) -> str:
        return f"{self.patient_protocol_item_id} {self.date}: {self.status}"


class LabTest(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='lab_tests')
    test_name = models.CharField(max_length=255)
    test_date = models.DateField(db_index=True)
    value = models.DecimalField(max_digits=12, decimal_places=4, null=True, blank=True)
    unit = models.CharField(max_length=64, blank=True, null=True)
    reference_range_min = models.DecimalField(max_digits=12, decimal_places=4, null=True, blank=True)
    reference_range_max = models.DecimalField(max_digits=12, decimal_places=4, null=True, blank=True)
    status = models.CharField(max_length=20, choices=LabStatus.choices, blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['patient', 'test_name', 'test_date'], name='clinic_labt_patient_5b0e2c_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.test_name} {self.test_date}"


class TimelineEntry(models.Model):
    """Narrative history line of a patient.

    Most entries are written by the service layer as a side effect of
    patient, protocol and lab changes; clinicians may add notes too.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='timeline_entries')
    type = models.CharField(max_length=20, choices=TimelineType.choices)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    date = models.DateField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['patient', 'date'], name='clinic_time_patient_8c41d7_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.title} ({self.date})"
