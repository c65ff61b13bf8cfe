"""
Protocols assigned to patients and their items.

``POST /api/patient-protocols`` accepts two payloads: a ``templateId``
plus overrides, which snapshots the template's items, or a complete
custom protocol with an optional inline ``items`` list.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from clinic.exceptions import error_messages
from clinic.serializers.protocol import (
    CustomProtocolSerializer,
    PatientProtocolItemSerializer,
    PatientProtocolSerializer,
    PatientProtocolWithItemsSerializer,
    TemplateAssignmentSerializer,
)
from clinic.services import protocols as svc


@error_messages(get='Failed to fetch patient protocols')
@api_view(['GET'])
def patient_protocols_for_patient(request, patient_id):
    return Response(PatientProtocolSerializer(svc.list_patient_protocols(patient_id), many=True).data)


@error_messages('Invalid patient protocol data', post='Failed to create patient protocol')
@api_view(['POST'])
def patient_protocols(request):
    if isinstance(request.data, dict) and request.data.get('templateId'):
        ser = TemplateAssignmentSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = dict(ser.validated_data)
        template = svc.get_template(data.pop('templateId'))
        if not template:
            raise NotFound('Protocol template not found')
        protocol = svc.assign_template(template, data.pop('patient'), data)
    else:
        ser = CustomProtocolSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = dict(ser.validated_data)
        items = data.pop('items', [])
        protocol = svc.create_patient_protocol(data, items)
    return Response(PatientProtocolWithItemsSerializer(protocol).data, status=status.HTTP_201_CREATED)


@error_messages(
    'Invalid patient protocol data',
    get='Failed to fetch patient protocol',
    patch='Failed to update patient protocol',
    delete='Failed to delete patient protocol',
)
@api_view(['GET', 'PATCH', 'DELETE'])
def patient_protocol_detail(request, protocol_id):
    if request.method == 'DELETE':
        if not svc.delete_patient_protocol(protocol_id):
            raise NotFound('Patient protocol not found')
        return Response({'message': 'Patient protocol deleted successfully'})

    protocol = svc.get_patient_protocol(protocol_id)
    if request.method == 'GET':
        if protocol:
            return Response(PatientProtocolSerializer(protocol).data)
        # the id may name a patient: list that patient's protocols
        return Response(PatientProtocolSerializer(svc.list_patient_protocols(protocol_id), many=True).data)

    if not protocol:
        raise NotFound('Patient protocol not found')
    ser = PatientProtocolSerializer(protocol, data=request.data, partial=True)
    ser.is_valid(raise_exception=True)
    protocol = svc.update_patient_protocol(protocol_id, ser.validated_data)
    if not protocol:
        raise NotFound('Patient protocol not found')
    return Response(PatientProtocolSerializer(protocol).data)


@error_messages(get='Failed to fetch patient protocol items')
@api_view(['GET'])
def patient_protocol_items_for_protocol(request, protocol_id):
    items = svc.list_patient_protocol_items(protocol_id)
    return Response(PatientProtocolItemSerializer(items, many=True).data)


@error_messages(get='Failed to fetch patient protocol details')
@api_view(['GET'])
def patient_protocol_details(request, protocol_id):
    details = svc.get_patient_protocol_details(protocol_id)
    if not details:
        raise NotFound('Patient protocol not found')
    return Response({
        'protocol': PatientProtocolSerializer(details['protocol']).data,
        'items': PatientProtocolItemSerializer(details['items'], many=True).data,
    })


@error_messages('Invalid patient protocol item data', post='Failed to create patient protocol item')
@api_view(['POST'])
def patient_protocol_items(request):
    ser = PatientProtocolItemSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    item = svc.create_patient_protocol_item(ser.validated_data)
    return Response(PatientProtocolItemSerializer(item).data, status=status.HTTP_201_CREATED)


@error_messages(
    'Invalid patient protocol item data',
    get='Failed to fetch patient protocol item',
    put='Failed to update patient protocol item',
    patch='Failed to update patient protocol item',
    delete='Failed to delete patient protocol item',
)
@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
def patient_protocol_item_detail(request, item_id):
    if request.method == 'DELETE':
        if not svc.delete_patient_protocol_item(item_id):
            raise NotFound('Patient protocol item not found')
        return Response({'message': 'Patient protocol item deleted successfully'})

    item = svc.get_patient_protocol_item(item_id)
    if not item:
        raise NotFound('Patient protocol item not found')
    if request.method != 'GET':
        ser = PatientProtocolItemSerializer(item, data=request.data, partial=request.method == 'PATCH')
        ser.is_valid(raise_exception=True)
        item = svc.update_patient_protocol_item(item_id, ser.validated_data)
    return Response(PatientProtocolItemSerializer(item).data)
