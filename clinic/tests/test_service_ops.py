import io
import logging

import pytest
from django.test import override_settings
from django.utils import timezone

from clinic.services import patients as patient_services
from clinic.tests.conftest import make_patient

pytestmark = pytest.mark.django_db


@pytest.fixture
def clinic_logs(caplog):
    # the clinic logger does not propagate to the root handler
    logger = logging.getLogger('clinic')
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.INFO, logger='clinic')
    yield caplog
    logger.removeHandler(caplog.handler)


def test_unhandled_error_returns_failure_message(api_client, monkeypatch, clinic_logs):
    def boom():
        raise RuntimeError('database exploded')

    monkeypatch.setattr(patient_services, 'list_patients', boom)
    r = api_client.get('/api/patients')
    assert r.status_code == 500
    assert r.data == {'message': 'Failed to fetch patients'}
    assert 'database exploded' not in r.content.decode()
    assert any(rec.levelno == logging.ERROR and rec.exc_info for rec in clinic_logs.records)


def test_request_log_line(api_client, clinic_logs):
    api_client.get('/api/patients')
    lines = [rec.getMessage() for rec in clinic_logs.records if rec.name == 'clinic.middleware']
    assert len(lines) == 1
    assert lines[0].startswith('GET /api/patients 200 in ')


@override_settings(API_LOG_REQUESTS=False)
def test_request_log_can_be_disabled(api_client, clinic_logs):
    api_client.get('/api/patients')
    assert not [rec for rec in clinic_logs.records if rec.name == 'clinic.middleware']


def test_healthz(api_client):
    r = api_client.get('/healthz')
    assert r.status_code == 200
    assert r.json() == {'ok': True, 'db': True}


def test_non_uuid_id_is_not_routed(api_client):
    assert api_client.get('/api/patients/42').status_code == 404


def test_timeline_endpoints(api_client):
    patient = make_patient()
    today = timezone.localdate().isoformat()
    r = api_client.post(
        f'/api/patients/{patient.pk}/timeline',
        {'type': 'observation', 'title': 'Feels better', 'date': '2030-01-01', 'description': '<i>slept well</i>'},
        format='json',
    )
    assert r.status_code == 201
    assert r.data['patientId'] == str(patient.pk)
    assert r.data['description'] == 'slept well'

    r = api_client.post(
        '/api/timeline',
        {'patientId': str(patient.pk), 'type': 'note', 'title': 'Call back', 'date': today},
        format='json',
    )
    assert r.status_code == 201

    titles = [e['title'] for e in api_client.get(f'/api/timeline/{patient.pk}').data]
    assert titles == ['Feels better', 'Call back', 'Patient Created']
    assert len(api_client.get(f'/api/patients/{patient.pk}/timeline').data) == 3

    r = api_client.post('/api/timeline', {'patientId': str(patient.pk), 'type': 'gossip', 'title': 'x'}, format='json')
    assert r.status_code == 400
    assert r.data['message'] == 'Invalid timeline entry data'
    assert set(r.data['errors']) == {'type', 'date'}


def test_report_for_unknown_patient(api_client):
    r = api_client.get('/api/patients/00000000-0000-0000-0000-000000000000/report')
    assert r.status_code == 404
    assert r.data == {'message': 'Patient not found'}


def test_populate_data_seeds_demo_rows():
    from django.core.management import call_command
    from clinic.models import AdherenceRecord, LabTest, Patient, ProtocolTemplate

    call_command('populate_data', days=3, seed=1, stdout=io.StringIO())
    assert ProtocolTemplate.objects.count() == 2
    assert Patient.objects.count() == 3
    assert AdherenceRecord.objects.count() == 3 * (5 + 3 + 5)
    assert LabTest.objects.count() == 12
