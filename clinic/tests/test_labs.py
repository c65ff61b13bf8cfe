from datetime import timedelta

import pytest
from django.utils import timezone

from clinic.models import LabTest, TimelineEntry, TimelineType
from clinic.tests.conftest import make_patient

pytestmark = pytest.mark.django_db


def lab_payload(patient, **overrides):
    data = {
        'patientId': str(patient.pk),
        'testName': 'Hemoglobin',
        'testDate': timezone.localdate().isoformat(),
        'value': '5.5',
        'unit': 'g/dL',
        'referenceRangeMin': '12',
        'referenceRangeMax': '16',
        'status': 'low',
    }
    data.update(overrides)
    return data


def test_value_round_trips_and_timeline_entry(api_client, patient):
    r = api_client.post('/api/labs', lab_payload(patient), format='json')
    assert r.status_code == 201
    assert r.data['value'] == '5.5'
    assert r.data['referenceRangeMin'] == '12'

    fetched = api_client.get(f'/api/labs/{r.data["id"]}')
    assert fetched.data['value'] == '5.5'

    entry = TimelineEntry.objects.get(patient=patient, type=TimelineType.LAB_RESULT)
    assert entry.title == 'Lab Results Added'
    assert entry.description == 'Hemoglobin: 5.5 g/dL'
    assert entry.date == timezone.localdate()


def test_lab_without_value(api_client, patient):
    r = api_client.post('/api/labs', lab_payload(patient, value=None, unit=None), format='json')
    assert r.status_code == 201
    assert r.data['value'] is None
    entry = TimelineEntry.objects.get(patient=patient, type=TimelineType.LAB_RESULT)
    assert entry.description == 'Hemoglobin'


def test_invalid_lab(api_client, patient):
    r = api_client.post('/api/labs', lab_payload(patient, status='odd', referenceRangeMax='1'), format='json')
    assert r.status_code == 400
    assert r.data['message'] == 'Invalid lab test data'
    assert 'status' in r.data['errors']
    r = api_client.post('/api/labs', lab_payload(patient, referenceRangeMax='1'), format='json')
    assert 'referenceRangeMax' in r.data['errors']
    assert not LabTest.objects.exists()


def test_list_filters_by_patient(api_client, patient):
    other = make_patient('Someone Else')
    api_client.post('/api/labs', lab_payload(patient), format='json')
    api_client.post('/api/labs', lab_payload(other, testName='CEA'), format='json')
    assert len(api_client.get('/api/labs').data) == 2
    r = api_client.get('/api/labs', {'patientId': str(other.pk)})
    assert [lab['testName'] for lab in r.data] == ['CEA']
    assert [lab['testName'] for lab in api_client.get(f'/api/patients/{patient.pk}/labs').data] == ['Hemoglobin']


def test_patch_and_delete(api_client, patient):
    lab_id = api_client.post('/api/labs', lab_payload(patient), format='json').data['id']
    r = api_client.patch(f'/api/labs/{lab_id}', {'value': '13.25', 'status': 'normal'}, format='json')
    assert r.data['value'] == '13.25'
    assert r.data['status'] == 'normal'
    assert api_client.delete(f'/api/labs/{lab_id}').data == {'message': 'Lab test deleted successfully'}
    assert api_client.get(f'/api/labs/{lab_id}').data == {'message': 'Lab test not found'}


def test_lab_series_groups_by_test_name(api_client, patient):
    today = timezone.localdate()
    for weeks_ago, value in ((4, '3.1'), (0, '2.4'), (2, '2.9')):
        day = (today - timedelta(weeks=weeks_ago)).isoformat()
        api_client.post('/api/labs', lab_payload(patient, testName='CEA', value=value, testDate=day), format='json')
    api_client.post('/api/labs', lab_payload(patient), format='json')
    api_client.post('/api/labs', lab_payload(patient, testName='Note only', value=None), format='json')

    series = api_client.get(f'/api/patients/{patient.pk}/lab-series').data
    assert [s['testName'] for s in series] == ['CEA', 'Hemoglobin']
    cea = series[0]
    assert [p['value'] for p in cea['points']] == ['3.1', '2.9', '2.4']
    assert cea['points'][0]['date'] == (today - timedelta(weeks=4)).isoformat()
    assert cea['unit'] == 'g/dL'
    assert cea['referenceRangeMax'] == '16'


def test_extra_decimal_places_are_rounded(api_client, patient):
    r = api_client.post('/api/labs', lab_payload(patient, value='5.12345', referenceRangeMin='0.00004'), format='json')
    assert r.status_code == 201
    assert r.data['value'] == '5.1235'
    assert r.data['referenceRangeMin'] == '0'
