from datetime import timedelta

import pytest
from django.utils import timezone

from clinic.models import LabTest, ProtocolStatus
from clinic.services import adherence, protocols
from clinic.tests.conftest import make_patient

pytestmark = pytest.mark.django_db


def log(item, status, days_ago):
    adherence.record_adherence({
        'patient_protocol_item': item,
        'date': timezone.localdate() - timedelta(days=days_ago),
        'status': status,
    })


def test_adherence_has_six_weeks_oldest_first(api_client):
    r = api_client.get('/api/dashboard/adherence')
    assert r.status_code == 200
    assert [w['week'] for w in r.data] == [f'Week {n}' for n in range(1, 7)]
    assert all(w['overall'] == 0 and w['medication'] == 0 for w in r.data)


def test_adherence_buckets_and_medication_split(api_client, template, patient):
    protocol = protocols.assign_template(template, patient)
    drug, supplement, lifestyle = protocols.list_patient_protocol_items(protocol.pk)
    # current bucket starts today
    log(drug, 'done', 0)
    log(lifestyle, 'missed', 0)
    # previous bucket covers the six days before today and one more
    log(drug, 'done', 1)
    log(supplement, 'missed', 7)
    log(lifestyle, 'done', 3)

    weeks = api_client.get('/api/dashboard/adherence').data
    assert weeks[5] == {'week': 'Week 6', 'overall': 50, 'medication': 100}
    assert weeks[4] == {'week': 'Week 5', 'overall': 67, 'medication': 50}
    for week in weeks:
        assert 0 <= week['overall'] <= 100
        assert 0 <= week['medication'] <= 100


def test_adherence_ignores_inactive_protocols(api_client, template, patient):
    protocol = protocols.assign_template(template, patient)
    item = protocols.list_patient_protocol_items(protocol.pk)[0]
    log(item, 'done', 0)
    protocols.update_patient_protocol(protocol.pk, {'status': ProtocolStatus.PAUSED})
    assert api_client.get('/api/dashboard/adherence').data[5]['overall'] == 0


def test_stats(api_client, template):
    first, second = make_patient('A'), make_patient('B')
    make_patient('No records')
    items_a = protocols.list_patient_protocol_items(protocols.assign_template(template, first).pk)
    items_b = protocols.list_patient_protocol_items(protocols.assign_template(template, second).pk)
    protocols.assign_template(template, second, {'status': ProtocolStatus.COMPLETED})
    # A: 2 of 3 -> 67, B: 1 of 2 -> 50, mean 58.5 -> 59
    log(items_a[0], 'done', 0)
    log(items_a[1], 'done', 1)
    log(items_a[2], 'missed', 2)
    log(items_b[0], 'done', 0)
    log(items_b[1], 'skipped', 0)
    log(items_b[2], 'done', 40)

    today = timezone.localdate()
    LabTest.objects.create(patient=first, test_name='CEA', test_date=today - timedelta(days=7))
    LabTest.objects.create(patient=first, test_name='CEA', test_date=today - timedelta(days=8))

    r = api_client.get('/api/dashboard/stats')
    assert r.data == {'totalPatients': 3, 'activeProtocols': 2, 'recentLabs': 1, 'averageAdherence': 59}


def test_stats_empty(api_client):
    r = api_client.get('/api/dashboard/stats')
    assert r.data == {'totalPatients': 0, 'activeProtocols': 0, 'recentLabs': 0, 'averageAdherence': 0}
