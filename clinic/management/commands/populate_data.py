"""
Management command to populate the database with demo data.
"""
from datetime import date, timedelta
from decimal import Decimal
import random

from django.core.management.base import BaseCommand
from django.utils import timezone

from clinic.models import AdherenceStatus, ProtocolTemplate
from clinic.services import adherence, labs, patients, protocols


TEMPLATES = [
    {
        'name': 'Metabolic Support Protocol',
        'description': 'Repurposed drugs and nutraceuticals alongside standard of care',
        'cancer_type': None,
        'items': [
            {'name': 'Metformin', 'type': 'drug', 'category': 'repurposed_drugs', 'priority': 'core',
             'dosage': '500 mg', 'frequency': 'twice daily', 'food_requirement': 'with_food'},
            {'name': 'Vitamin D3', 'type': 'supplement', 'category': 'nutraceuticals', 'priority': 'core',
             'dosage': '5000 IU', 'frequency': 'daily', 'food_requirement': 'with_food'},
            {'name': 'Curcumin', 'type': 'supplement', 'category': 'nutraceuticals', 'priority': 'additional',
             'dosage': '1 g', 'frequency': 'daily'},
            {'name': 'Time-restricted eating', 'type': 'lifestyle', 'category': 'diet_fasting', 'priority': 'core',
             'instructions': '16:8 eating window'},
            {'name': 'Brisk walk', 'type': 'lifestyle', 'category': 'exercise', 'priority': 'additional',
             'duration': '30 minutes', 'frequency': 'daily'},
        ],
    },
    {
        'name': 'Breast Cancer Adjunct',
        'description': 'Supportive regimen for hormone receptor positive disease',
        'cancer_type': 'Breast',
        'items': [
            {'name': 'Melatonin', 'type': 'supplement', 'category': 'sleep', 'priority': 'core',
             'dosage': '20 mg', 'timing': 'bedtime'},
            {'name': 'Omega-3', 'type': 'supplement', 'category': 'nutraceuticals', 'priority': 'additional',
             'dosage': '2 g', 'frequency': 'daily'},
            {'name': 'Mindfulness practice', 'type': 'therapy', 'category': 'stress', 'priority': 'optional',
             'duration': '15 minutes'},
        ],
    },
]

PATIENTS = [
    {'name': 'Alice Martin', 'sex': 'female', 'date_of_birth': date(1968, 4, 2), 'cancer_type': 'Breast',
     'cancer_stage': 'II', 'diagnosis_date': date(2024, 11, 5), 'metastasis_locations': []},
    {'name': 'Brian Okafor', 'sex': 'male', 'date_of_birth': date(1955, 9, 17), 'cancer_type': 'Prostate',
     'cancer_stage': 'IV', 'diagnosis_date': date(2023, 6, 20), 'metastasis_locations': ['bone']},
    {'name': 'Chen Wei', 'sex': 'other', 'date_of_birth': date(1979, 1, 30), 'cancer_type': 'Colorectal',
     'cancer_stage': 'III', 'diagnosis_date': date(2025, 2, 14), 'metastasis_locations': ['liver']},
]


class Command(BaseCommand):
    help = 'Populate database with demo patients, protocol templates, adherence and labs'

    def add_arguments(self, parser):
        parser.add_argument('--days', type=int, default=42, help='days of adherence history to generate')
        parser.add_argument('--seed', type=int, default=None, help='random seed for repeatable data')

    def handle(self, *args, **options):
        rng = random.Random(options['seed'])
        self.stdout.write('Creating demo data...')

        templates = self.create_templates()
        created = self.create_patients()
        for patient, template in zip(created, templates * len(created)):
            protocol = protocols.assign_template(
                template, patient, {'start_date': timezone.localdate() - timedelta(days=options['days'])}
            )
            self.create_adherence(protocol, options['days'], rng)
            self.create_labs(patient, rng)

        self.stdout.write(self.style.SUCCESS(
            f'Done: {len(templates)} templates, {len(created)} patients.'
        ))

    def create_templates(self):
        result = []
        for entry in TEMPLATES:
            data = {k: v for k, v in entry.items() if k != 'items'}
            template = ProtocolTemplate.objects.filter(name=data['name']).first()
            if template:
                result.append(template)
                continue
            template = protocols.create_template(data)
            for order, item in enumerate(entry['items']):
                protocols.create_template_item({**item, 'template': template, 'order': order})
            result.append(template)
        return result

    def create_patients(self):
        return [patients.create_patient(dict(data)) for data in PATIENTS]

    def create_adherence(self, protocol, days, rng):
        today = timezone.localdate()
        statuses = [AdherenceStatus.DONE] * 7 + [AdherenceStatus.SKIPPED, AdherenceStatus.MISSED]
        for item in protocols.list_patient_protocol_items(protocol.pk):
            for offset in range(days):
                adherence.record_adherence({
                    'patient_protocol_item': item,
                    'date': today - timedelta(days=offset),
                    'status': rng.choice(statuses),
                })

    def create_labs(self, patient, rng):
        today = timezone.localdate()
        for weeks_ago in (6, 4, 2, 0):
            labs.create_lab({
                'patient': patient,
                'test_name': 'CEA',
                'test_date': today - timedelta(weeks=weeks_ago),
                'value': Decimal(str(round(rng.uniform(1.0, 8.0), 1))),
                'unit': 'ng/mL',
                'reference_range_min': Decimal('0'),
                'reference_range_max': Decimal('5'),
            })
