"""Adherence records and the statistics derived from them."""
import logging
from datetime import date, timedelta
from typing import Optional

from django.db import IntegrityError, transaction
from django.db.models import Count, Q, QuerySet
from django.utils import timezone

from clinic.models import AdherenceRecord, AdherenceStatus

logger = logging.getLogger(__name__)


def percentage(done: int, total: int) -> int:
    """``done / total`` as a whole percent, halves rounded up; 0 when empty."""
    if not total:
        return 0
    return (200 * done + total) // (2 * total)


def _in_range(qs: QuerySet, start_date: Optional[date], end_date: Optional[date]) -> QuerySet:
    if start_date:
        qs = qs.filter(date__gte=start_date)
    if end_date:
        qs = qs.filter(date__lte=end_date)
    return qs


def list_adherence_records(item_id, start_date: Optional[date] = None, end_date: Optional[date] = None):
    qs = AdherenceRecord.objects.filter(patient_protocol_item_id=item_id)
    return list(_in_range(qs, start_date, end_date).order_by('-date'))


def search_adherence_records(filters: dict) -> list[AdherenceRecord]:
    qs = AdherenceRecord.objects.all()
    if filters.get('date'):
        qs = qs.filter(date=filters['date'])
    qs = _in_range(qs, filters.get('start_date'), filters.get('end_date'))
    if filters.get('patient_protocol_id'):
        qs = qs.filter(patient_protocol_item__patient_protocol_id=filters['patient_protocol_id'])
    if filters.get('patient_id'):
        qs = qs.filter(patient_protocol_item__patient_protocol__patient_id=filters['patient_id'])
    return list(qs.order_by('-date', '-recorded_at'))


def _upsert(data: dict) -> tuple[AdherenceRecord, bool]:
    lookup = {'patient_protocol_item': data['patient_protocol_item'], 'date': data['date']}
    defaults = {k: v for k, v in data.items() if k not in lookup}
    with transaction.atomic():
        return AdherenceRecord.objects.update_or_create(defaults=defaults, **lookup)


def record_adherence(data: dict) -> tuple[AdherenceRecord, bool]:
    """Store the status of an item on a day, replacing any earlier record.

    Returns ``(record, created)``.
    """
    try:
        record, created = _upsert(data)
    except IntegrityError:
        # Lost a concurrent insert for the same item and day; the row exists now.
        record, created = _upsert(data)
    logger.debug(
        'adherence %s for item %s on %s: %s',
        'recorded' if created else 'updated', record.patient_protocol_item_id, record.date, record.status,
    )
    return record, created


def get_adherence_record(record_id) -> Optional[AdherenceRecord]:
    return AdherenceRecord.objects.filter(pk=record_id).first()


def update_adherence_record(record_id, data: dict) -> Optional[AdherenceRecord]:
    record = get_adherence_record(record_id)
    if not record:
        return None
    for field, value in data.items():
        setattr(record, field, value)
    record.save()
    return record


def patient_records(patient_id) -> QuerySet:
    return AdherenceRecord.objects.filter(
        patient_protocol_item__patient_protocol__patient_id=patient_id
    )


def get_patient_adherence_stats(patient_id, days: int = 30) -> dict:
    today = timezone.localdate()
    qs = _in_range(patient_records(patient_id), today - timedelta(days=days), today)
    counts = qs.aggregate(
        total=Count('id'),
        done=Count('id', filter=Q(status=AdherenceStatus.DONE)),
    )
    return {
        'totalItems': counts['total'],
        'completedItems': counts['done'],
        'percentage': percentage(counts['done'], counts['total']),
    }
