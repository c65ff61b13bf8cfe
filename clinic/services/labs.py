import logging
from collections import OrderedDict
from decimal import Decimal
from typing import Optional

from django.db import transaction

from clinic.models import LabTest, TimelineType
from clinic.services.timeline import log_event

logger = logging.getLogger(__name__)


def format_decimal(value: Optional[Decimal]) -> str:
    if value is None:
        return ''
    return format(value.normalize(), 'f')


def list_labs(patient_id=None) -> list[LabTest]:
    qs = LabTest.objects.all()
    if patient_id:
        qs = qs.filter(patient_id=patient_id)
    return list(qs.order_by('-test_date', '-created_at'))


def get_lab(lab_id) -> Optional[LabTest]:
    return LabTest.objects.filter(pk=lab_id).first()


def create_lab(data: dict) -> LabTest:
    with transaction.atomic():
        lab = LabTest.objects.create(**data)
        summary = ' '.join(part for part in (format_decimal(lab.value), lab.unit or '') if part)
        log_event(
            lab.patient,
            type=TimelineType.LAB_RESULT,
            title='Lab Results Added',
            description=f'{lab.test_name}: {summary}' if summary else lab.test_name,
            date=lab.test_date,
        )
    logger.info('lab %s (%s) added for patient %s', lab.pk, lab.test_name, lab.patient_id)
    return lab


def update_lab(lab_id, data: dict) -> Optional[LabTest]:
    lab = get_lab(lab_id)
    if not lab:
        return None
    for field, value in data.items():
        setattr(lab, field, value)
    lab.save()
    return lab


def delete_lab(lab_id) -> bool:
    deleted, _ = LabTest.objects.filter(pk=lab_id).delete()
    return deleted > 0


def lab_series(patient_id) -> list[dict]:
    """Numeric lab values of a patient grouped per test name, oldest point first."""
    series: 'OrderedDict[str, dict]' = OrderedDict()
    qs = (
        LabTest.objects.filter(patient_id=patient_id, value__isnull=False)
        .order_by('test_name', 'test_date', 'created_at')
    )
    for lab in qs:
        entry = series.setdefault(lab.test_name, {
            'testName': lab.test_name,
            'unit': lab.unit,
            'referenceRangeMin': format_decimal(lab.reference_range_min) or None,
            'referenceRangeMax': format_decimal(lab.reference_range_max) or None,
            'points': [],
        })
        # latest non-empty unit and range win
        if lab.unit:
            entry['unit'] = lab.unit
        if lab.reference_range_min is not None:
            entry['referenceRangeMin'] = format_decimal(lab.reference_range_min)
        if lab.reference_range_max is not None:
            entry['referenceRangeMax'] = format_decimal(lab.reference_range_max)
        entry['points'].append({
            'date': lab.test_date.isoformat(),
            'value': format_decimal(lab.value),
            'status': lab.status,
        })
    return list(series.values())
