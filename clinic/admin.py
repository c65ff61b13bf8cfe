"""
Django admin registrations for the clinic models.

Superusers can inspect and correct data through ``/admin/``.  Protocol
items are edited inline under their template or patient protocol.
"""

from django.contrib import admin

from .models import (
    AdherenceRecord,
    LabTest,
    Patient,
    PatientProtocol,
    PatientProtocolItem,
    ProtocolItem,
    ProtocolTemplate,
    TimelineEntry,
)


class ProtocolItemInline(admin.TabularInline):
    model = ProtocolItem
    extra = 0
    fields = ('order', 'name', 'type', 'category', 'priority', 'dosage', 'frequency')


class PatientProtocolItemInline(admin.TabularInline):
    model = PatientProtocolItem
    extra = 0
    fields = ('order', 'name', 'type', 'category', 'priority', 'dosage', 'frequency', 'is_active')


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('name', 'sex', 'date_of_birth', 'cancer_type', 'cancer_stage', 'diagnosis_date', 'created_at')
    list_filter = ('sex', 'cancer_type', 'cancer_stage')
    search_fields = ('name', 'email', 'phone', 'cancer_type')


@admin.register(ProtocolTemplate)
class ProtocolTemplateAdmin(admin.ModelAdmin):
    list_display = ('name', 'cancer_type', 'created_at')
    search_fields = ('name', 'cancer_type')
    inlines = [ProtocolItemInline]


@admin.register(ProtocolItem)
class ProtocolItemAdmin(admin.ModelAdmin):
    list_display = ('name', 'template', 'type', 'category', 'priority', 'order')
    list_filter = ('type', 'priority', 'category')
    search_fields = ('name', 'template__name')


@admin.register(PatientProtocol)
class PatientProtocolAdmin(admin.ModelAdmin):
    list_display = ('name', 'patient', 'template', 'status', 'start_date', 'end_date', 'assigned_at')
    list_filter = ('status',)
    search_fields = ('name', 'patient__name')
    inlines = [PatientProtocolItemInline]


@admin.register(PatientProtocolItem)
class PatientProtocolItemAdmin(admin.ModelAdmin):
    list_display = ('name', 'patient_protocol', 'type', 'priority', 'is_active')
    list_filter = ('type', 'priority', 'is_active')
    search_fields = ('name', 'patient_protocol__name', 'patient_protocol__patient__name')


@admin.register(AdherenceRecord)
class AdherenceRecordAdmin(admin.ModelAdmin):
    list_display = ('patient_protocol_item', 'date', 'status', 'recorded_at')
    list_filter = ('status', 'date')
    search_fields = ('patient_protocol_item__name', 'patient_protocol_item__patient_protocol__patient__name')


@admin.register(LabTest)
class LabTestAdmin(admin.ModelAdmin):
    list_display = ('test_name', 'patient', 'test_date', 'value', 'unit', 'status')
    list_filter = ('status', 'test_name')
    search_fields = ('test_name', 'patient__name')


@admin.register(TimelineEntry)
class TimelineEntryAdmin(admin.ModelAdmin):
    list_display = ('title', 'patient', 'type', 'date', 'created_at')
    list_filter = ('type',)
    search_fields = ('title', 'description', 'patient__name')
