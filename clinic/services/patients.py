import logging
from typing import Optional

from django.db import transaction

from clinic.models import Patient
from clinic.services.timeline import log_note

logger = logging.getLogger(__name__)


def list_patients() -> list[Patient]:
    return list(Patient.objects.order_by('-created_at'))


def search_patients(query: str) -> list[Patient]:
    # % and _ in the query stay wildcards
    return list(Patient.objects.filter(name__like=f'%{query}%').order_by('-created_at'))


def get_patient(patient_id) -> Optional[Patient]:
    return Patient.objects.filter(pk=patient_id).first()


def create_patient(data: dict) -> Patient:
    with transaction.atomic():
        patient = Patient.objects.create(**data)
        log_note(patient, 'Patient Created', f'Patient {patient.name} was added to the system')
    logger.info('patient %s created', patient.pk)
    return patient


def update_patient(patient_id, data: dict) -> Optional[Patient]:
    with transaction.atomic():
        patient = Patient.objects.select_for_update().filter(pk=patient_id).first()
        if not patient:
            return None
        for field, value in data.items():
            setattr(patient, field, value)
        patient.save()
        log_note(patient, 'Patient Updated', 'Patient information was updated')
    return patient


def delete_patient(patient_id) -> bool:
    deleted, _ = Patient.objects.filter(pk=patient_id).delete()
    if deleted:
        logger.info('patient %s deleted', patient_id)
    return deleted > 0
