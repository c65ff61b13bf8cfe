from datetime import timedelta

import pytest
from django.utils import timezone

from clinic.models import AdherenceRecord
from clinic.services import adherence, protocols
from clinic.services.adherence import percentage

pytestmark = pytest.mark.django_db


@pytest.fixture
def items(template, patient):
    protocol = protocols.assign_template(template, patient)
    return protocols.list_patient_protocol_items(protocol.pk)


def record(item, status, days_ago=0):
    return adherence.record_adherence({
        'patient_protocol_item': item,
        'date': timezone.localdate() - timedelta(days=days_ago),
        'status': status,
    })[0]


@pytest.mark.parametrize('done,total,expected', [(0, 0, 0), (2, 3, 67), (1, 3, 33), (1, 2, 50), (1, 8, 13), (3, 3, 100)])
def test_percentage_rounds_half_up(done, total, expected):
    assert percentage(done, total) == expected


def test_stats_without_records(api_client, patient):
    r = api_client.get(f'/api/patients/{patient.pk}/adherence-stats')
    assert r.status_code == 200
    assert r.data == {'totalItems': 0, 'completedItems': 0, 'percentage': 0}


def test_stats_two_of_three_done(api_client, patient, items):
    record(items[0], 'done')
    record(items[1], 'done')
    record(items[2], 'missed')
    r = api_client.get(f'/api/patients/{patient.pk}/adherence-stats')
    assert r.data == {'totalItems': 3, 'completedItems': 2, 'percentage': 67}


def test_stats_count_records_not_items(patient, items):
    for days_ago in range(4):
        record(items[0], 'done', days_ago)
    stats = adherence.get_patient_adherence_stats(patient.pk, 30)
    assert stats['totalItems'] == 4
    assert stats['percentage'] == 100


def test_stats_window_honours_days(api_client, patient, items):
    record(items[0], 'done', days_ago=2)
    record(items[0], 'missed', days_ago=10)
    r = api_client.get(f'/api/patients/{patient.pk}/adherence-stats', {'days': 5})
    assert r.data['totalItems'] == 1
    assert r.data['percentage'] == 100
    r = api_client.get(f'/api/patients/{patient.pk}/adherence-stats', {'days': 'many'})
    assert r.status_code == 400


def test_post_upserts_on_item_and_date(api_client, items):
    body = {
        'patientProtocolItemId': str(items[0].pk),
        'date': timezone.localdate().isoformat(),
        'status': 'missed',
    }
    first = api_client.post('/api/adherence', body, format='json')
    assert first.status_code == 201
    second = api_client.post('/api/adherence', {**body, 'status': 'done', 'notes': 'late'}, format='json')
    assert second.status_code == 200
    assert second.data['id'] == first.data['id']
    assert second.data['status'] == 'done'
    assert AdherenceRecord.objects.count() == 1


def test_post_rejects_unknown_status(api_client, items):
    body = {'patientProtocolItemId': str(items[0].pk), 'date': '2025-01-01', 'status': 'maybe'}
    r = api_client.post('/api/adherence', body, format='json')
    assert r.status_code == 400
    assert r.data['message'] == 'Invalid adherence data'
    assert 'status' in r.data['errors']


def test_item_history_with_range(api_client, items):
    for days_ago in (0, 3, 9):
        record(items[0], 'done', days_ago)
    today = timezone.localdate()
    r = api_client.get(f'/api/adherence/{items[0].pk}')
    assert len(r.data) == 3
    r = api_client.get(
        f'/api/adherence/{items[0].pk}',
        {'startDate': (today - timedelta(days=5)).isoformat(), 'endDate': today.isoformat()},
    )
    assert [x['date'] for x in r.data] == [today.isoformat(), (today - timedelta(days=3)).isoformat()]


def test_search_filters(api_client, patient, items, template):
    other = protocols.assign_template(template, patient, {'name': 'Second'})
    other_item = protocols.list_patient_protocol_items(other.pk)[0]
    record(items[0], 'done')
    record(items[1], 'skipped', days_ago=1)
    record(other_item, 'done')
    today = timezone.localdate().isoformat()

    assert len(api_client.get('/api/adherence', {'date': today}).data) == 2
    assert len(api_client.get('/api/adherence', {'patientId': str(patient.pk)}).data) == 3
    r = api_client.get('/api/adherence', {'patientProtocolId': str(other.pk)})
    assert [x['patientProtocolItemId'] for x in r.data] == [str(other_item.pk)]
    r = api_client.get('/api/adherence', {'startDate': today, 'endDate': '2000-01-01'})
    assert r.status_code == 400


def test_patch_record(api_client, items):
    rec = record(items[0], 'missed')
    r = api_client.patch(f'/api/adherence-records/{rec.pk}', {'status': 'done', 'notes': 'took it'}, format='json')
    assert r.status_code == 200
    assert r.data['status'] == 'done'
    missing = api_client.patch(
        '/api/adherence-records/00000000-0000-0000-0000-000000000000', {'status': 'done'}, format='json'
    )
    assert missing.status_code == 404
    assert missing.data == {'message': 'Adherence record not found'}


def test_patch_cannot_move_onto_an_existing_day(api_client, items):
    record(items[0], 'done', days_ago=0)
    yesterday = record(items[0], 'missed', days_ago=1)
    r = api_client.patch(
        f'/api/adherence-records/{yesterday.pk}', {'date': timezone.localdate().isoformat()}, format='json'
    )
    assert r.status_code == 400
    assert r.data['message'] == 'Invalid adherence data'
    assert 'date' in r.data['errors']
    yesterday.refresh_from_db()
    assert yesterday.date == timezone.localdate() - timedelta(days=1)


def test_patch_may_keep_its_own_day(api_client, items):
    rec = record(items[0], 'missed')
    r = api_client.patch(
        f'/api/adherence-records/{rec.pk}',
        {'date': rec.date.isoformat(), 'patientProtocolItemId': str(items[0].pk), 'status': 'done'},
        format='json',
    )
    assert r.status_code == 200
    assert r.data['status'] == 'done'
