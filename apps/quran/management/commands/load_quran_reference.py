from django.core.management.base import BaseCommand

from apps.quran.data import JUZ_SURAH_LISTS, SURAHS
from apps.quran.models import Juz, Surah
from apps.quran.reference import clear_reference_cache


class Command(BaseCommand):
    help = "Load or update the juz and surah reference tables from the bundled data."

    def add_arguments(self, parser):
        parser.add_argument(
            "--surahs-only", action="store_true",
            help="Leave the juz surah lists as they are (keeps hand edits made in the admin).",
        )

    def handle(self, *args, **options):
        created = updated = 0

        for number, name, total in SURAHS:
            obj, was_created = Surah.objects.update_or_create(
                surah_number=number,
                defaults={"name": name, "total_ayat": total},
            )
            created += int(was_created)
            updated += int(not was_created)

        if not options["surahs_only"]:
            for number, surah_list in JUZ_SURAH_LISTS.items():
                _, was_created = Juz.objects.update_or_create(
                    juz_number=number,
                    defaults={"surah_list": surah_list},
                )
                created += int(was_created)
                updated += int(not was_created)

        clear_reference_cache()
        self.stdout.write(self.style.SUCCESS(f"Done. Created {created}, Updated {updated}."))
