from typing import Optional

from django.utils import timezone

from clinic.models import Patient, TimelineEntry, TimelineType


def list_timeline(patient_id) -> list[TimelineEntry]:
    return list(TimelineEntry.objects.filter(patient_id=patient_id).order_by('-date', '-created_at'))


def create_timeline_entry(data: dict) -> TimelineEntry:
    return TimelineEntry.objects.create(**data)


def log_event(patient: Patient, *, type: str, title: str, description: Optional[str] = None, date=None) -> TimelineEntry:
    """Append a system generated entry to a patient's timeline."""
    return TimelineEntry.objects.create(
        patient=patient,
        type=type,
        title=title,
        description=description,
        date=date or timezone.localdate(),
    )


def log_note(patient: Patient, title: str, description: str) -> TimelineEntry:
    return log_event(patient, type=TimelineType.NOTE, title=title, description=description)
