from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from clinic.exceptions import error_messages
from clinic.serializers.timeline import TimelineEntrySerializer
from clinic.services import timeline as svc


def _create(data):
    ser = TimelineEntrySerializer(data=data)
    ser.is_valid(raise_exception=True)
    entry = svc.create_timeline_entry(ser.validated_data)
    return Response(TimelineEntrySerializer(entry).data, status=status.HTTP_201_CREATED)


@error_messages('Invalid timeline entry data', get='Failed to fetch timeline', post='Failed to create timeline entry')
@api_view(['GET', 'POST'])
def patient_timeline(request, patient_id):
    if request.method == 'POST':
        # the path names the patient; a body patientId is ignored
        data = dict(request.data) if isinstance(request.data, dict) else {}
        data['patientId'] = str(patient_id)
        return _create(data)
    return Response(TimelineEntrySerializer(svc.list_timeline(patient_id), many=True).data)


@error_messages('Invalid timeline entry data', post='Failed to create timeline entry')
@api_view(['POST'])
def timeline(request):
    return _create(request.data)


@error_messages(get='Failed to fetch timeline')
@api_view(['GET'])
def timeline_for_patient(request, patient_id):
    return Response(TimelineEntrySerializer(svc.list_timeline(patient_id), many=True).data)
