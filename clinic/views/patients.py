"""
Patient management views.

Clinicians list, search, register, edit and remove patients.  Creating
or editing a patient also writes a line to the patient's timeline; that
side effect lives in :mod:`clinic.services.patients`.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from clinic.exceptions import error_messages
from clinic.serializers.patient import PatientSearchQuerySerializer, PatientSerializer
from clinic.services import patients as svc


@error_messages('Invalid patient data', get='Failed to fetch patients', post='Failed to create patient')
@api_view(['GET', 'POST'])
def patients(request):
    if request.method == 'POST':
        ser = PatientSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        patient = svc.create_patient(ser.validated_data)
        return Response(PatientSerializer(patient).data, status=status.HTTP_201_CREATED)

    q = PatientSearchQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    search = (q.validated_data.get('search') or '').strip()
    rows = svc.search_patients(search) if search else svc.list_patients()
    return Response(PatientSerializer(rows, many=True).data)


@error_messages(
    'Invalid patient data',
    get='Failed to fetch patient',
    put='Failed to update patient',
    patch='Failed to update patient',
    delete='Failed to delete patient',
)
@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
def patient_detail(request, patient_id):
    if request.method == 'DELETE':
        if not svc.delete_patient(patient_id):
            raise NotFound('Patient not found')
        return Response({'message': 'Patient deleted successfully'})

    patient = svc.get_patient(patient_id)
    if not patient:
        raise NotFound('Patient not found')
    if request.method == 'GET':
        return Response(PatientSerializer(patient).data)

    # PUT replaces every writable field, PATCH only those sent
    ser = PatientSerializer(patient, data=request.data, partial=request.method == 'PATCH')
    ser.is_valid(raise_exception=True)
    patient = svc.update_patient(patient_id, ser.validated_data)
    if not patient:
        raise NotFound('Patient not found')
    return Response(PatientSerializer(patient).data)
