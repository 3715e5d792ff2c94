# records/management/commands/seed_demo.py
from datetime import date

from django.core.management.base import BaseCommand
from django.db import transaction

from records.models import Doctor, Mapping, Patient, User

DEMO_PASSWORD = "DemoPass!2024"


class Command(BaseCommand):
    help = "Ensure a demo user with one patient, one doctor and an active mapping exists (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--username", default="demo")
        parser.add_argument("--password", default=DEMO_PASSWORD)

    @transaction.atomic
    def handle(self, *args, **opts):
        user, created = User.objects.get_or_create(username=opts["username"], defaults={"is_active": True})
        if created or not user.check_password(opts["password"]):
            user.set_password(opts["password"])
            user.is_active = True
            user.save(update_fields=["password", "is_active"])
        self.stdout.write(self.style.SUCCESS(f"ok: user {user.username}"))

        patient, _ = Patient.objects.get_or_create(
            owner=user,
            first_name="Jane",
            last_name="Doe",
            defaults={
                "date_of_birth": date(1990, 1, 1),
                "gender": Patient.GENDER_FEMALE,
                "contact_number": "555-1234",
                "address": "1 Main St",
            },
        )
        doctor, _ = Doctor.objects.get_or_create(
            created_by=user,
            license_number="LIC1",
            defaults={
                "first_name": "John",
                "last_name": "Smith",
                "specialization": "Cardiology",
                "contact_number": "555-9999",
                "email": "smith@x.com",
            },
        )
        Mapping.objects.get_or_create(patient=patient, doctor=doctor, status=Mapping.STATUS_ACTIVE)
        self.stdout.write(self.style.SUCCESS(f"ok: patient #{patient.id} -> doctor #{doctor.id}"))
        self.stdout.write(self.style.SUCCESS("Demo data ensured."))
