from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from core.navigation import clear_navigation_cache
from .models import BusinessUnit


@receiver(post_save, sender=BusinessUnit)
@receiver(post_delete, sender=BusinessUnit)
def invalidate_navigation_cache(sender, instance, **kwargs):
    clear_navigation_cache()
