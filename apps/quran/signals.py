# apps/quran/signals.py
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver

from .models import Juz, Surah
from .reference import clear_reference_cache


@receiver(post_save, sender=Juz)
@receiver(post_save, sender=Surah)
@receiver(post_delete, sender=Juz)
@receiver(post_delete, sender=Surah)
def drop_cached_reference(sender, **kwargs):
    """
    The reference snapshot is cached forever, so any edit to the seed
    tables (admin or load_quran_reference) has to evict it.
    """
    clear_reference_cache()
