"""
URL mappings for the OncoManager API.

Paths carry no trailing slash, matching what the front-end requests.
Identifiers are UUIDs; anything else in an id position is a 404.
"""
from django.urls import include, path

from .views import adherence, dashboard, health, labs, patient_protocols, patients, protocols, reports, timeline

urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz),

    # Patients
    path('api/patients', patients.patients),
    path('api/patients/<uuid:patient_id>', patients.patient_detail),
    path('api/patients/<uuid:patient_id>/protocols', patient_protocols.patient_protocols_for_patient),
    path('api/patients/<uuid:patient_id>/labs', labs.patient_labs),
    path('api/patients/<uuid:patient_id>/lab-series', labs.patient_lab_series),
    path('api/patients/<uuid:patient_id>/adherence-stats', adherence.patient_adherence_stats),
    path('api/patients/<uuid:patient_id>/timeline', timeline.patient_timeline),
    path('api/patients/<uuid:patient_id>/report', reports.patient_report),

    # Protocol templates
    path('api/protocol-templates', protocols.protocol_templates),
    path('api/protocol-templates/<uuid:template_id>', protocols.protocol_template_detail),
    path('api/protocol-templates/<uuid:template_id>/items', protocols.protocol_template_items),
    path('api/protocol-items', protocols.protocol_items),
    path('api/protocol-items/<uuid:item_id>', protocols.protocol_item_detail),

    # Patient protocols
    path('api/patient-protocols', patient_protocols.patient_protocols),
    path('api/patient-protocols/<uuid:protocol_id>', patient_protocols.patient_protocol_detail),
    path('api/patient-protocols/<uuid:protocol_id>/items', patient_protocols.patient_protocol_items_for_protocol),
    path('api/patient-protocols/<uuid:protocol_id>/details', patient_protocols.patient_protocol_details),
    path('api/patient-protocol-items', patient_protocols.patient_protocol_items),
    path('api/patient-protocol-items/<uuid:item_id>', patient_protocols.patient_protocol_item_detail),

    # Adherence
    path('api/adherence', adherence.adherence),
    path('api/adherence/<uuid:item_id>', adherence.adherence_for_item),
    path('api/adherence-records/<uuid:record_id>', adherence.adherence_record_detail),

    # Labs
    path('api/labs', labs.labs),
    path('api/labs/<uuid:lab_id>', labs.lab_detail),

    # Timeline
    path('api/timeline', timeline.timeline),
    path('api/timeline/<uuid:patient_id>', timeline.timeline_for_patient),

    # Dashboard
    path('api/dashboard/stats', dashboard.dashboard_stats),
    path('api/dashboard/adherence', dashboard.dashboard_adherence),
]
