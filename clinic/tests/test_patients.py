"""
API tests for patient management.

These tests use Django REST Framework's APIClient within the
APITestCase base class, like the rest of the endpoint suites.
"""
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from clinic.models import LabTest, Patient, PatientProtocol, TimelineEntry, TimelineType
from clinic.tests.conftest import make_patient, patient_payload


class PatientAPITests(APITestCase):
    def test_create_returns_camel_case_patient(self):
        resp = self.client.post('/api/patients', patient_payload(height='165.5'), format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data['name'], 'Jane Roe')
        self.assertEqual(resp.data['dateOfBirth'], '1970-05-01')
        self.assertEqual(resp.data['cancerType'], 'Breast')
        self.assertEqual(resp.data['metastasisLocations'], ['liver'])
        self.assertEqual(resp.data['height'], '165.5')
        self.assertIn('createdAt', resp.data)
        self.assertTrue(Patient.objects.filter(pk=resp.data['id']).exists())

    def test_create_writes_one_note_dated_today(self):
        resp = self.client.post('/api/patients', patient_payload(), format='json')
        entries = TimelineEntry.objects.filter(patient_id=resp.data['id'])
        self.assertEqual(entries.count(), 1)
        entry = entries.get()
        self.assertEqual(entry.type, TimelineType.NOTE)
        self.assertEqual(entry.title, 'Patient Created')
        self.assertEqual(entry.date, timezone.localdate())
        self.assertEqual(entry.description, 'Patient Jane Roe was added to the system')

    def test_metastasis_locations_default_to_empty_list(self):
        payload = patient_payload()
        del payload['metastasisLocations']
        resp = self.client.post('/api/patients', payload, format='json')
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data['metastasisLocations'], [])

    def test_invalid_payload_reports_field_errors(self):
        payload = patient_payload(sex='unknown')
        del payload['name']
        resp = self.client.post('/api/patients', payload, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data['message'], 'Invalid patient data')
        self.assertIn('name', resp.data['errors'])
        self.assertIn('sex', resp.data['errors'])
        self.assertEqual(Patient.objects.count(), 0)

    def test_diagnosis_before_birth_is_rejected(self):
        resp = self.client.post('/api/patients', patient_payload(diagnosisDate='1960-01-01'), format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('diagnosisDate', resp.data['errors'])

    def test_notes_are_stripped_of_markup(self):
        resp = self.client.post('/api/patients', patient_payload(notes='  <b>likes</b> mornings '), format='json')
        self.assertEqual(resp.data['notes'], 'likes mornings')

    def test_search_matches_name_substring(self):
        make_patient('Alice Martin')
        make_patient('Brian Okafor')
        make_patient('Martina Lopez')
        resp = self.client.get('/api/patients', {'search': 'Martin'})
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(sorted(p['name'] for p in resp.data), ['Alice Martin', 'Martina Lopez'])

    def test_search_is_case_sensitive(self):
        make_patient('Jane Roe')
        self.assertEqual(self.client.get('/api/patients', {'search': 'jane'}).data, [])
        resp = self.client.get('/api/patients', {'search': 'Jane'})
        self.assertEqual([p['name'] for p in resp.data], ['Jane Roe'])

    def test_search_wildcards_are_live(self):
        make_patient('Jane Roe')
        make_patient('Brian Okafor')
        resp = self.client.get('/api/patients', {'search': 'J_ne'})
        self.assertEqual([p['name'] for p in resp.data], ['Jane Roe'])
        resp = self.client.get('/api/patients', {'search': 'J%Roe'})
        self.assertEqual([p['name'] for p in resp.data], ['Jane Roe'])

    def test_search_treats_glob_characters_literally(self):
        make_patient('Jane Roe')
        make_patient('Star * Patient')
        resp = self.client.get('/api/patients', {'search': '*'})
        self.assertEqual([p['name'] for p in resp.data], ['Star * Patient'])

    def test_list_without_search_returns_all(self):
        make_patient('Alice Martin')
        make_patient('Brian Okafor')
        resp = self.client.get('/api/patients')
        self.assertEqual(len(resp.data), 2)

    def test_get_missing_patient(self):
        resp = self.client.get('/api/patients/00000000-0000-0000-0000-000000000000')
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data, {'message': 'Patient not found'})

    def test_patch_updates_fields_and_timeline(self):
        patient = make_patient()
        resp = self.client.patch(f'/api/patients/{patient.pk}', {'cancerStage': 'III'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data['cancerStage'], 'III')
        self.assertEqual(resp.data['name'], 'Jane Roe')
        titles = list(TimelineEntry.objects.filter(patient=patient).values_list('title', flat=True))
        self.assertIn('Patient Updated', titles)

    def test_put_requires_full_payload(self):
        patient = make_patient()
        resp = self.client.put(f'/api/patients/{patient.pk}', {'cancerStage': 'III'}, format='json')
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        resp = self.client.put(f'/api/patients/{patient.pk}', patient_payload(name='Jane Doe'), format='json')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data['name'], 'Jane Doe')

    def test_delete_cascades_to_related_rows(self):
        patient = make_patient()
        PatientProtocol.objects.create(patient=patient, name='P', start_date=timezone.localdate())
        LabTest.objects.create(patient=patient, test_name='CEA', test_date=timezone.localdate())
        resp = self.client.delete(f'/api/patients/{patient.pk}')
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data, {'message': 'Patient deleted successfully'})

        self.assertEqual(self.client.get(f'/api/patients/{patient.pk}/protocols').data, [])
        self.assertEqual(self.client.get(f'/api/patients/{patient.pk}/labs').data, [])
        self.assertEqual(self.client.get(f'/api/timeline/{patient.pk}').data, [])

    def test_delete_missing_patient(self):
        resp = self.client.delete('/api/patients/00000000-0000-0000-0000-000000000000')
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
