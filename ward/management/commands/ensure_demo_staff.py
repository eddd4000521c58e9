# ward/management/commands/ensure_demo_staff.py
import os

from django.core.management.base import BaseCommand

from ward.models import Role, StaffAccount

DEMO_STAFF = [
    ("resident@ward.local", "Demo Resident", Role.RESIDENT),
    ("surgeon@ward.local", "Demo Surgeon", Role.SURGEON),
    ("head@ward.local", "Demo Head of Department", Role.HEAD_OF_DEPARTMENT),
]


class Command(BaseCommand):
    help = "Ensure one demo account per role exists with a known password (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--password",
            default=os.getenv("DEMO_STAFF_PASSWORD", "Scalpel#2024"),
            help="Password set on every demo account.",
        )

    def handle(self, *args, **opts):
        password = opts["password"]
        for email, name, role in DEMO_STAFF:
            staff, created = StaffAccount.objects.get_or_create(
                email=email, defaults={"name": name, "role": role}
            )
            staff.name = name
            staff.role = role
            staff.set_password(password)
            staff.save()
            verb = "created" if created else "reset"
            self.stdout.write(self.style.SUCCESS(f"{verb}: {email} ({role})"))
        self.stdout.write(self.style.SUCCESS("All demo staff ensured."))
