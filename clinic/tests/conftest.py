from datetime import date

import pytest
from rest_framework.test import APIClient

from clinic.services import patients, protocols


@pytest.fixture
def api_client():
    return APIClient()


def patient_payload(**overrides):
    data = {
        'name': 'Jane Roe',
        'email': 'jane@example.com',
        'dateOfBirth': '1970-05-01',
        'sex': 'female',
        'cancerType': 'Breast',
        'cancerStage': 'II',
        'diagnosisDate': '2024-03-15',
        'metastasisLocations': ['liver'],
    }
    data.update(overrides)
    return data


def make_patient(name='Jane Roe', **extra):
    data = {
        'name': name,
        'date_of_birth': date(1970, 5, 1),
        'sex': 'female',
        'cancer_type': 'Breast',
        'cancer_stage': 'II',
        'diagnosis_date': date(2024, 3, 15),
    }
    data.update(extra)
    return patients.create_patient(data)


def make_template(name='Metabolic', items=(('Metformin', 'drug'), ('Vitamin D3', 'supplement'), ('Walking', 'lifestyle'))):
    template = protocols.create_template({'name': name, 'description': 'demo'})
    for order, (item_name, item_type) in enumerate(items):
        protocols.create_template_item({
            'template': template,
            'name': item_name,
            'type': item_type,
            'category': 'nutraceuticals',
            'dosage': f'{order + 1} unit',
            'frequency': 'daily',
            'order': order,
        })
    return template


@pytest.fixture
def patient(db):
    return make_patient()


@pytest.fixture
def template(db):
    return make_template()
