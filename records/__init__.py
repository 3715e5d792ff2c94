"""Records application for the clinic backend.

This package contains models, serializers, services, views and route
registrations for patients, doctors and patient-doctor mappings.
"""
