"""Lab result endpoints.

Values are decimals serialised as strings with trailing zeros dropped,
so ``"5.5"`` posted comes back as ``"5.5"``.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from clinic.exceptions import error_messages
from clinic.serializers.lab import LabListQuerySerializer, LabTestSerializer
from clinic.services import labs as svc


@error_messages('Invalid lab test data', get='Failed to fetch lab tests', post='Failed to create lab test')
@api_view(['GET', 'POST'])
def labs(request):
    if request.method == 'POST':
        ser = LabTestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        lab = svc.create_lab(ser.validated_data)
        return Response(LabTestSerializer(lab).data, status=status.HTTP_201_CREATED)

    q = LabListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return Response(LabTestSerializer(svc.list_labs(q.validated_data.get('patientId')), many=True).data)


@error_messages(
    'Invalid lab test data',
    get='Failed to fetch lab test',
    patch='Failed to update lab test',
    delete='Failed to delete lab test',
)
@api_view(['GET', 'PATCH', 'DELETE'])
def lab_detail(request, lab_id):
    if request.method == 'DELETE':
        if not svc.delete_lab(lab_id):
            raise NotFound('Lab test not found')
        return Response({'message': 'Lab test deleted successfully'})

    lab = svc.get_lab(lab_id)
    if not lab:
        raise NotFound('Lab test not found')
    if request.method == 'PATCH':
        ser = LabTestSerializer(lab, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        lab = svc.update_lab(lab_id, ser.validated_data)
    return Response(LabTestSerializer(lab).data)


@error_messages(get='Failed to fetch lab tests')
@api_view(['GET'])
def patient_labs(request, patient_id):
    return Response(LabTestSerializer(svc.list_labs(patient_id), many=True).data)


@error_messages(get='Failed to fetch lab series')
@api_view(['GET'])
def patient_lab_series(request, patient_id):
    return Response(svc.lab_series(patient_id))
