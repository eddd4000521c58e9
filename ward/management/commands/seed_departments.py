from django.conf import settings
from django.core.management.base import BaseCommand

from ward.models import DEPARTMENTS, DepartmentBeds


class Command(BaseCommand):
    help = "Create bed counters for the surgical departments. Existing counters keep their values."

    def add_arguments(self, parser):
        parser.add_argument("--total-beds", type=int, default=settings.WARD_DEFAULT_TOTAL_BEDS)
        parser.add_argument("--reset", action="store_true", help="Also overwrite total beds of existing counters.")

    def handle(self, *args, **opts):
        total = opts["total_beds"]
        for department in DEPARTMENTS:
            beds, created = DepartmentBeds.objects.get_or_create(
                department=department, defaults={"total_beds": total, "occupied_beds": 0}
            )
            if not created and opts["reset"]:
                beds.total_beds = total
                beds.save(update_fields=["total_beds", "updated_at"])
            self.stdout.write(f"{department}: {beds.occupied_beds}/{beds.total_beds}")
        self.stdout.write(self.style.SUCCESS(f"{len(DEPARTMENTS)} departments seeded."))
