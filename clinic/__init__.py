"""Clinic application for the OncoManager backend.

This package contains the models, serializers, services, views and route
registrations behind the oncology patient management API, plus a small
Python client for it.
"""
