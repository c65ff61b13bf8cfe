"""
Protocol templates and the protocols assigned to patients.

Assigning a protocol copies item rows into the patient's own
:class:`PatientProtocolItem` table.  The copy is a snapshot: editing or
deleting the template afterwards leaves already assigned items alone.
"""
import logging
from typing import Iterable, Optional

from django.db import transaction
from django.utils import timezone

from clinic.models import (
    Patient,
    PatientProtocol,
    PatientProtocolItem,
    ProtocolItem,
    ProtocolStatus,
    ProtocolTemplate,
    TimelineType,
)
from clinic.services.timeline import log_event

logger = logging.getLogger(__name__)


def _apply(obj, data: dict):
    for field, value in data.items():
        setattr(obj, field, value)
    obj.save()
    return obj


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

def list_templates() -> list[ProtocolTemplate]:
    return list(ProtocolTemplate.objects.order_by('name'))


def get_template(template_id) -> Optional[ProtocolTemplate]:
    return ProtocolTemplate.objects.filter(pk=template_id).first()


def create_template(data: dict) -> ProtocolTemplate:
    return ProtocolTemplate.objects.create(**data)


def update_template(template_id, data: dict) -> Optional[ProtocolTemplate]:
    template = get_template(template_id)
    return _apply(template, data) if template else None


def delete_template(template_id) -> bool:
    deleted, _ = ProtocolTemplate.objects.filter(pk=template_id).delete()
    return deleted > 0


def list_template_items(template_id) -> list[ProtocolItem]:
    return list(ProtocolItem.objects.filter(template_id=template_id).order_by('order', 'name'))


def get_template_item(item_id) -> Optional[ProtocolItem]:
    return ProtocolItem.objects.filter(pk=item_id).first()


def create_template_item(data: dict) -> ProtocolItem:
    return ProtocolItem.objects.create(**data)


def update_template_item(item_id, data: dict) -> Optional[ProtocolItem]:
    item = get_template_item(item_id)
    return _apply(item, data) if item else None


def delete_template_item(item_id) -> bool:
    deleted, _ = ProtocolItem.objects.filter(pk=item_id).delete()
    return deleted > 0


# ---------------------------------------------------------------------------
# Patient protocols
# ---------------------------------------------------------------------------

def list_patient_protocols(patient_id) -> list[PatientProtocol]:
    return list(PatientProtocol.objects.filter(patient_id=patient_id).order_by('-assigned_at'))


def get_patient_protocol(protocol_id) -> Optional[PatientProtocol]:
    return PatientProtocol.objects.filter(pk=protocol_id).first()


def create_patient_protocol(data: dict, items: Iterable[dict] = ()) -> PatientProtocol:
    """Create a protocol, its items and the "Protocol Assigned" entry in one transaction."""
    with transaction.atomic():
        protocol = PatientProtocol.objects.create(**data)
        created = PatientProtocolItem.objects.bulk_create(
            [PatientProtocolItem(patient_protocol=protocol, **item) for item in items]
        )
        log_event(
            protocol.patient,
            type=TimelineType.PROTOCOL_CHANGE,
            title='Protocol Assigned',
            description=f'Protocol "{protocol.name}" was assigned',
            date=protocol.start_date,
        )
    logger.info('protocol %s assigned to patient %s with %d items', protocol.pk, protocol.patient_id, len(created))
    return protocol


def assign_template(template: ProtocolTemplate, patient: Patient, overrides: Optional[dict] = None) -> PatientProtocol:
    """Instantiate ``template`` for ``patient``, snapshotting every template item."""
    overrides = overrides or {}
    data = {
        'patient': patient,
        'template': template,
        'name': overrides.get('name') or template.name,
        'status': overrides.get('status') or ProtocolStatus.ACTIVE,
        'start_date': overrides.get('start_date') or timezone.localdate(),
        'end_date': overrides.get('end_date'),
    }
    with transaction.atomic():
        items = [item.snapshot() for item in list_template_items(template.pk)]
        return create_patient_protocol(data, items)


def update_patient_protocol(protocol_id, data: dict) -> Optional[PatientProtocol]:
    with transaction.atomic():
        protocol = PatientProtocol.objects.select_for_update().filter(pk=protocol_id).first()
        if not protocol:
            return None
        _apply(protocol, data)
        if data.get('status'):
            log_event(
                protocol.patient,
                type=TimelineType.PROTOCOL_CHANGE,
                title='Protocol Status Changed',
                description=f'Protocol "{protocol.name}" status changed to {data["status"]}',
            )
            logger.info('protocol %s status -> %s', protocol.pk, data['status'])
    return protocol


def delete_patient_protocol(protocol_id) -> bool:
    deleted, _ = PatientProtocol.objects.filter(pk=protocol_id).delete()
    return deleted > 0


def get_patient_protocol_details(protocol_id) -> Optional[dict]:
    protocol = get_patient_protocol(protocol_id)
    if not protocol:
        return None
    return {'protocol': protocol, 'items': list_patient_protocol_items(protocol.pk)}


# ---------------------------------------------------------------------------
# Patient protocol items
# ---------------------------------------------------------------------------

def list_patient_protocol_items(protocol_id) -> list[PatientProtocolItem]:
    return list(PatientProtocolItem.objects.filter(patient_protocol_id=protocol_id).order_by('order', 'name'))


def get_patient_protocol_item(item_id) -> Optional[PatientProtocolItem]:
    return PatientProtocolItem.objects.filter(pk=item_id).first()


def create_patient_protocol_item(data: dict) -> PatientProtocolItem:
    return PatientProtocolItem.objects.create(**data)


def update_patient_protocol_item(item_id, data: dict) -> Optional[PatientProtocolItem]:
    item = get_patient_protocol_item(item_id)
    return _apply(item, data) if item else None


def delete_patient_protocol_item(item_id) -> bool:
    deleted, _ = PatientProtocolItem.objects.filter(pk=item_id).delete()
    return deleted > 0
