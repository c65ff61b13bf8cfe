"""
``requests`` based client for the OncoManager REST API.

Reads are served from a :class:`~clinic.client.cache.QueryCache`; every
mutation invalidates the keys whose data it may have changed, so the next
read goes back to the server.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from .cache import QueryCache

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response. ``payload`` is the decoded JSON body when there is one."""

    def __init__(self, status: int, payload: Any = None):
        self.status = status
        self.payload = payload
        message = payload.get('message') if isinstance(payload, dict) else None
        super().__init__(f'{status}: {message or payload}')

    @property
    def errors(self) -> dict:
        if isinstance(self.payload, dict):
            return self.payload.get('errors') or {}
        return {}


class OncoManagerClient:
    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: float = 10.0):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout
        self.cache = QueryCache()

    # -- transport ---------------------------------------------------------

    def _request(self, method: str, path: str, *, json=None, params=None):
        resp = self.session.request(
            method,
            f'{self.base_url}{path}',
            json=json,
            params={k: v for k, v in (params or {}).items() if v is not None} or None,
            headers={'Accept': 'application/json'},
            timeout=self.timeout,
        )
        try:
            payload = resp.json() if resp.content else None
        except ValueError:
            payload = resp.text
        if not 200 <= resp.status_code < 300:
            logger.warning('%s %s failed with %s', method, path, resp.status_code)
            raise ApiError(resp.status_code, payload)
        return payload

    def _query(self, key: tuple, path: str, params: Optional[dict] = None):
        return self.cache.fetch(key, lambda: self._request('GET', path, params=params))

    def _mutate(self, method: str, path: str, body=None, *, invalidate=()):
        result = self._request(method, path, json=body)
        self.cache.invalidate(*invalidate)
        return result

    # -- patients ----------------------------------------------------------

    def list_patients(self, search: Optional[str] = None):
        if search:
            return self._query(('patients', 'search', search), '/api/patients', {'search': search})
        return self._query(('patients',), '/api/patients')

    def get_patient(self, patient_id: str):
        return self._query(('patients', patient_id), f'/api/patients/{patient_id}')

    def create_patient(self, data: dict):
        return self._mutate('POST', '/api/patients', data, invalidate=[('patients',), ('dashboard',)])

    def update_patient(self, patient_id: str, data: dict):
        return self._mutate(
            'PATCH', f'/api/patients/{patient_id}', data,
            invalidate=[('patients',), ('timeline', patient_id)],
        )

    def delete_patient(self, patient_id: str):
        return self._mutate(
            'DELETE', f'/api/patients/{patient_id}',
            invalidate=[
                ('patients',), ('patient-protocols',), ('adherence',), ('adherence-stats',), ('labs',),
                ('timeline', patient_id), ('dashboard',),
            ],
        )

    # -- protocol templates ------------------------------------------------

    def list_templates(self):
        return self._query(('protocol-templates',), '/api/protocol-templates')

    def get_template(self, template_id: str):
        return self._query(('protocol-templates', template_id), f'/api/protocol-templates/{template_id}')

    def list_template_items(self, template_id: str):
        return self._query(
            ('protocol-templates', template_id, 'items'), f'/api/protocol-templates/{template_id}/items'
        )

    def create_template(self, data: dict):
        return self._mutate('POST', '/api/protocol-templates', data, invalidate=[('protocol-templates',)])

    def update_template(self, template_id: str, data: dict):
        return self._mutate(
            'PATCH', f'/api/protocol-templates/{template_id}', data, invalidate=[('protocol-templates',)]
        )

    def delete_template(self, template_id: str):
        return self._mutate(
            'DELETE', f'/api/protocol-templates/{template_id}', invalidate=[('protocol-templates',)]
        )

    def create_template_item(self, data: dict):
        return self._mutate('POST', '/api/protocol-items', data, invalidate=[('protocol-templates',)])

    def update_template_item(self, item_id: str, data: dict):
        return self._mutate('PATCH', f'/api/protocol-items/{item_id}', data, invalidate=[('protocol-templates',)])

    def delete_template_item(self, item_id: str):
        return self._mutate('DELETE', f'/api/protocol-items/{item_id}', invalidate=[('protocol-templates',)])

    # -- patient protocols -------------------------------------------------

    def list_patient_protocols(self, patient_id: str):
        return self._query(('patient-protocols', 'patient', patient_id), f'/api/patients/{patient_id}/protocols')

    def get_protocol_details(self, protocol_id: str):
        return self._query(
            ('patient-protocols', protocol_id, 'details'), f'/api/patient-protocols/{protocol_id}/details'
        )

    def assign_protocol(self, data: dict):
        """Create a protocol from ``templateId`` or from a custom payload with ``items``."""
        patient_id = data.get('patientId')
        return self._mutate(
            'POST', '/api/patient-protocols', data,
            invalidate=[('patient-protocols',), ('timeline', patient_id), ('dashboard',)],
        )

    def update_protocol(self, protocol_id: str, data: dict, patient_id: Optional[str] = None):
        invalidate = [('patient-protocols',), ('dashboard',)]
        invalidate.append(('timeline', patient_id) if patient_id else ('timeline',))
        return self._mutate('PATCH', f'/api/patient-protocols/{protocol_id}', data, invalidate=invalidate)

    def delete_protocol(self, protocol_id: str):
        return self._mutate(
            'DELETE', f'/api/patient-protocols/{protocol_id}',
            invalidate=[('patient-protocols',), ('adherence',), ('adherence-stats',), ('dashboard',)],
        )

    def create_protocol_item(self, data: dict):
        return self._mutate('POST', '/api/patient-protocol-items', data, invalidate=[('patient-protocols',)])

    def update_protocol_item(self, item_id: str, data: dict):
        return self._mutate(
            'PATCH', f'/api/patient-protocol-items/{item_id}', data, invalidate=[('patient-protocols',)]
        )

    def delete_protocol_item(self, item_id: str):
        return self._mutate(
            'DELETE', f'/api/patient-protocol-items/{item_id}',
            invalidate=[('patient-protocols',), ('adherence',), ('adherence-stats',), ('dashboard',)],
        )

    # -- adherence ---------------------------------------------------------

    def list_adherence(self, **filters):
        """Filters: date, startDate, endDate, patientProtocolId, patientId."""
        key = ('adherence',) + tuple(sorted((k, str(v)) for k, v in filters.items() if v is not None))
        return self._query(key, '/api/adherence', filters)

    def item_adherence(self, item_id: str, start_date: Optional[str] = None, end_date: Optional[str] = None):
        return self._query(
            ('adherence', 'item', item_id, start_date, end_date),
            f'/api/adherence/{item_id}',
            {'startDate': start_date, 'endDate': end_date},
        )

    def record_adherence(self, data: dict):
        return self._mutate(
            'POST', '/api/adherence', data, invalidate=[('adherence',), ('adherence-stats',), ('dashboard',)]
        )

    def update_adherence_record(self, record_id: str, data: dict):
        return self._mutate(
            'PATCH', f'/api/adherence-records/{record_id}', data,
            invalidate=[('adherence',), ('adherence-stats',), ('dashboard',)],
        )

    def adherence_stats(self, patient_id: str, days: int = 30):
        return self._query(
            ('adherence-stats', patient_id, days), f'/api/patients/{patient_id}/adherence-stats', {'days': days}
        )

    # -- labs --------------------------------------------------------------

    def list_labs(self, patient_id: Optional[str] = None):
        if patient_id:
            return self._query(('patients', patient_id, 'labs'), f'/api/patients/{patient_id}/labs')
        return self._query(('labs',), '/api/labs')

    def lab_series(self, patient_id: str):
        return self._query(('patients', patient_id, 'lab-series'), f'/api/patients/{patient_id}/lab-series')

    def _lab_keys(self, patient_id: Optional[str]):
        if not patient_id:
            return [('labs',), ('patients',), ('timeline',), ('dashboard',)]
        return [
            ('labs',), ('patients', patient_id, 'labs'), ('patients', patient_id, 'lab-series'),
            ('timeline', patient_id), ('dashboard',),
        ]

    def create_lab(self, data: dict):
        return self._mutate('POST', '/api/labs', data, invalidate=self._lab_keys(data.get('patientId')))

    def update_lab(self, lab_id: str, data: dict, patient_id: Optional[str] = None):
        return self._mutate('PATCH', f'/api/labs/{lab_id}', data, invalidate=self._lab_keys(patient_id))

    def delete_lab(self, lab_id: str, patient_id: Optional[str] = None):
        return self._mutate('DELETE', f'/api/labs/{lab_id}', invalidate=self._lab_keys(patient_id))

    # -- timeline, reports, dashboard -------------------------------------

    def timeline(self, patient_id: str):
        return self._query(('timeline', patient_id), f'/api/timeline/{patient_id}')

    def add_timeline_entry(self, data: dict):
        return self._mutate('POST', '/api/timeline', data, invalidate=[('timeline', data.get('patientId'))])

    def patient_report(self, patient_id: str, days: int = 30):
        # reports are always fetched fresh
        return self._request('GET', f'/api/patients/{patient_id}/report', params={'days': days})

    def dashboard_stats(self):
        return self._query(('dashboard', 'stats'), '/api/dashboard/stats')

    def dashboard_adherence(self):
        return self._query(('dashboard', 'adherence'), '/api/dashboard/adherence')
