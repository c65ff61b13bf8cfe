from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from clinic.exceptions import error_messages
from clinic.serializers.adherence import (
    AdherenceRangeQuerySerializer,
    AdherenceRecordSerializer,
    AdherenceSearchQuerySerializer,
    AdherenceStatsQuerySerializer,
)
from clinic.services import adherence as svc


@error_messages('Invalid adherence data', get='Failed to fetch adherence records', post='Failed to record adherence')
@api_view(['GET', 'POST'])
def adherence(request):
    if request.method == 'POST':
        ser = AdherenceRecordSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        record, created = svc.record_adherence(ser.validated_data)
        return Response(
            AdherenceRecordSerializer(record).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    q = AdherenceSearchQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    v = q.validated_data
    records = svc.search_adherence_records({
        'date': v.get('date'),
        'start_date': v.get('startDate'),
        'end_date': v.get('endDate'),
        'patient_protocol_id': v.get('patientProtocolId'),
        'patient_id': v.get('patientId'),
    })
    return Response(AdherenceRecordSerializer(records, many=True).data)


@error_messages('Invalid adherence query', get='Failed to fetch adherence records')
@api_view(['GET'])
def adherence_for_item(request, item_id):
    q = AdherenceRangeQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    records = svc.list_adherence_records(
        item_id, q.validated_data.get('startDate'), q.validated_data.get('endDate')
    )
    return Response(AdherenceRecordSerializer(records, many=True).data)


@error_messages('Invalid adherence data', patch='Failed to update adherence record')
@api_view(['PATCH'])
def adherence_record_detail(request, record_id):
    record = svc.get_adherence_record(record_id)
    if not record:
        raise NotFound('Adherence record not found')
    ser = AdherenceRecordSerializer(record, data=request.data, partial=True)
    ser.is_valid(raise_exception=True)
    record = svc.update_adherence_record(record_id, ser.validated_data)
    return Response(AdherenceRecordSerializer(record).data)


@error_messages('Invalid adherence query', get='Failed to fetch adherence stats')
@api_view(['GET'])
def patient_adherence_stats(request, patient_id):
    q = AdherenceStatsQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return Response(svc.get_patient_adherence_stats(patient_id, q.validated_data['days']))
