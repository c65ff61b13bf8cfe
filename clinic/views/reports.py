from __future__ import annotations

from rest_framework.decorators import api_view
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from clinic.exceptions import error_messages
from clinic.serializers.adherence import AdherenceStatsQuerySerializer
from clinic.serializers.lab import LabTestSerializer
from clinic.serializers.patient import PatientSerializer
from clinic.serializers.protocol import PatientProtocolItemSerializer, PatientProtocolSerializer
from clinic.services.reports import patient_report as build_report


@error_messages('Invalid report query', get='Failed to generate patient report')
@api_view(['GET'])
def patient_report(request, patient_id):
    """Patient summary for the printable report.

    Query params:
      - days: adherence window, default 30
    """
    q = AdherenceStatsQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    report = build_report(patient_id, q.validated_data['days'])
    if not report:
        raise NotFound('Patient not found')
    return Response({
        'patient': PatientSerializer(report['patient']).data,
        'generatedOn': report['generatedOn'].isoformat(),
        'days': report['days'],
        'protocols': [
            {
                'protocol': PatientProtocolSerializer(p['protocol']).data,
                'items': PatientProtocolItemSerializer(p['items'], many=True).data,
            }
            for p in report['protocols']
        ],
        'labs': LabTestSerializer(report['labs'], many=True).data,
        'labSeries': report['labSeries'],
        'adherence': report['adherence'],
    })
