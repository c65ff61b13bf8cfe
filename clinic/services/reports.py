from typing import Optional

from django.utils import timezone

from clinic.services import adherence, labs, protocols
from clinic.services.patients import get_patient


def patient_report(patient_id, days: int = 30) -> Optional[dict]:
    """Everything the report screen shows for one patient, or None if unknown."""
    patient = get_patient(patient_id)
    if not patient:
        return None
    return {
        'patient': patient,
        'generatedOn': timezone.localdate(),
        'days': days,
        'protocols': [
            protocols.get_patient_protocol_details(p.pk)
            for p in protocols.list_patient_protocols(patient.pk)
        ],
        'labs': labs.list_labs(patient.pk),
        'labSeries': labs.lab_series(patient.pk),
        'adherence': adherence.get_patient_adherence_stats(patient.pk, days),
    }
