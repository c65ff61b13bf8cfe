"""
Practice-wide figures for the dashboard.

All windows are computed against :func:`django.utils.timezone.localdate`,
so "today" follows ``settings.TIME_ZONE``.
"""
from __future__ import annotations

from datetime import timedelta

from django.db.models import Count, Q
from django.utils import timezone

from clinic.models import (
    MEDICATION_TYPES,
    AdherenceRecord,
    AdherenceStatus,
    LabTest,
    Patient,
    PatientProtocol,
    ProtocolStatus,
)
from clinic.services.adherence import percentage

WEEKS = 6
STATS_WINDOW_DAYS = 30
RECENT_LAB_DAYS = 7

DONE = Q(status=AdherenceStatus.DONE)
MEDICATION = Q(patient_protocol_item__type__in=MEDICATION_TYPES)


def get_dashboard_stats() -> dict:
    today = timezone.localdate()
    per_patient = (
        AdherenceRecord.objects
        .filter(date__gte=today - timedelta(days=STATS_WINDOW_DAYS), date__lte=today)
        .values('patient_protocol_item__patient_protocol__patient_id')
        .annotate(total=Count('id'), done=Count('id', filter=DONE))
    )
    percentages = [percentage(row['done'], row['total']) for row in per_patient]
    return {
        'totalPatients': Patient.objects.count(),
        'activeProtocols': PatientProtocol.objects.filter(status=ProtocolStatus.ACTIVE).count(),
        'recentLabs': LabTest.objects.filter(test_date__gte=today - timedelta(days=RECENT_LAB_DAYS)).count(),
        # mean of whole percents, rounded half up
        'averageAdherence': percentage(sum(percentages), 100 * len(percentages)),
    }


def get_dashboard_adherence_data() -> list[dict]:
    """Weekly done percentages over active protocols, oldest week first."""
    today = timezone.localdate()
    active = AdherenceRecord.objects.filter(
        patient_protocol_item__patient_protocol__status=ProtocolStatus.ACTIVE
    )
    weeks = []
    for i in range(WEEKS - 1, -1, -1):
        week_start = today - timedelta(days=7 * i)
        week_end = week_start + timedelta(days=6)
        counts = active.filter(date__gte=week_start, date__lte=week_end).aggregate(
            total=Count('id'),
            done=Count('id', filter=DONE),
            med_total=Count('id', filter=MEDICATION),
            med_done=Count('id', filter=MEDICATION & DONE),
        )
        weeks.append({
            'week': f'Week {WEEKS - i}',
            'overall': percentage(counts['done'], counts['total']),
            'medication': percentage(counts['med_done'], counts['med_total']),
        })
    return weeks
