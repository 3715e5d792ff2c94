"""
URL mappings for the clinic records API.

Every API path lives under ``/api``.  Paths carry no trailing slash
(``APPEND_SLASH = False``).
"""
from django.urls import path

from .auth_views import login_view, logout_view, refresh_view, register_view
from .views import health
from .views.doctors import doctor_detail, doctors_collection
from .views.mappings import mapping_by_id, mappings_collection
from .views.patients import patient_detail, patients_collection


urlpatterns = [
    path('healthz', health.healthz),
    # Authentication
    path('api/auth/register', register_view, name='register_view'),
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/refresh', refresh_view, name='refresh_view'),
    path('api/auth/logout', logout_view, name='logout_view'),
    # Patients
    path('api/patients', patients_collection, name='patients'),
    path('api/patients/<int:pk>', patient_detail, name='patient_detail'),
    # Doctors
    path('api/doctors', doctors_collection, name='doctors'),
    path('api/doctors/<int:pk>', doctor_detail, name='doctor_detail'),
    # Mappings
    path('api/mappings', mappings_collection, name='mappings'),
    path('api/mappings/<int:pk>', mapping_by_id, name='mapping_by_id'),
]
