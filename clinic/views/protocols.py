"""Protocol template and template item endpoints."""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from clinic.exceptions import error_messages
from clinic.serializers.protocol import ProtocolItemSerializer, ProtocolTemplateSerializer
from clinic.services import protocols as svc


@error_messages(
    'Invalid protocol template data',
    get='Failed to fetch protocol templates',
    post='Failed to create protocol template',
)
@api_view(['GET', 'POST'])
def protocol_templates(request):
    if request.method == 'POST':
        ser = ProtocolTemplateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        template = svc.create_template(ser.validated_data)
        return Response(ProtocolTemplateSerializer(template).data, status=status.HTTP_201_CREATED)
    return Response(ProtocolTemplateSerializer(svc.list_templates(), many=True).data)


@error_messages(
    'Invalid protocol template data',
    get='Failed to fetch protocol template',
    patch='Failed to update protocol template',
    delete='Failed to delete protocol template',
)
@api_view(['GET', 'PATCH', 'DELETE'])
def protocol_template_detail(request, template_id):
    if request.method == 'DELETE':
        if not svc.delete_template(template_id):
            raise NotFound('Protocol template not found')
        return Response({'message': 'Protocol template deleted successfully'})

    template = svc.get_template(template_id)
    if not template:
        raise NotFound('Protocol template not found')
    if request.method == 'PATCH':
        ser = ProtocolTemplateSerializer(template, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        template = svc.update_template(template_id, ser.validated_data)
    return Response(ProtocolTemplateSerializer(template).data)


@error_messages(get='Failed to fetch protocol items')
@api_view(['GET'])
def protocol_template_items(request, template_id):
    return Response(ProtocolItemSerializer(svc.list_template_items(template_id), many=True).data)


@error_messages('Invalid protocol item data', post='Failed to create protocol item')
@api_view(['POST'])
def protocol_items(request):
    ser = ProtocolItemSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    item = svc.create_template_item(ser.validated_data)
    return Response(ProtocolItemSerializer(item).data, status=status.HTTP_201_CREATED)


@error_messages(
    'Invalid protocol item data',
    get='Failed to fetch protocol item',
    patch='Failed to update protocol item',
    delete='Failed to delete protocol item',
)
@api_view(['GET', 'PATCH', 'DELETE'])
def protocol_item_detail(request, item_id):
    if request.method == 'DELETE':
        if not svc.delete_template_item(item_id):
            raise NotFound('Protocol item not found')
        return Response({'message': 'Protocol item deleted successfully'})

    item = svc.get_template_item(item_id)
    if not item:
        raise NotFound('Protocol item not found')
    if request.method == 'PATCH':
        ser = ProtocolItemSerializer(item, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        item = svc.update_template_item(item_id, ser.validated_data)
    return Response(ProtocolItemSerializer(item).data)
