import random

from django.core.management.base import BaseCommand
from django.utils import timezone

from apps.tracker.models import Student

FIRST_NAMES = ["Ahmad", "Muhammad", "Ali", "Khalid", "Yusuf", "Abdullah", "Umar",
               "Fatimah", "Layla", "Sarah", "Maryam", "Zaynab", "Hind", "Aishah"]
FAMILY_NAMES = ["Rahman", "Siddiqui", "Hassan", "Karim", "Nasser", "Aziz", "Farouk"]


class Command(BaseCommand):
    help = "Create demo students for a fresh Dhor Book."

    def add_arguments(self, parser):
        parser.add_argument("--count", type=int, default=20)
        parser.add_argument("--seed", type=int, help="Random seed, for repeatable names.")

    def handle(self, *args, **options):
        rng = random.Random(options["seed"])
        count = options["count"]
        start = Student.objects.count()
        created = 0

        self.stdout.write(f"Creating {count} demo students...")
        for i in range(count):
            student_no = f"S{start + i + 1:04d}"
            name = f"{rng.choice(FIRST_NAMES)} {rng.choice(FAMILY_NAMES)}"
            student, was_created = Student.objects.get_or_create(
                student_no=student_no,
                defaults={"name": name, "joined_at": timezone.localdate()},
            )
            if was_created:
                created += 1
                self.stdout.write(self.style.SUCCESS(f"Created {student.name} ({student_no})"))
            else:
                self.stdout.write(self.style.WARNING(f"{student_no} already exists, skipped"))

        self.stdout.write(self.style.SUCCESS(f"Done. Created {created} students."))
