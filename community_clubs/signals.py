from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from core.navigation import clear_navigation_cache
from .models import CommunityClub


@receiver(post_save, sender=CommunityClub)
@receiver(post_delete, sender=CommunityClub)
def invalidate_navigation_cache(sender, instance, **kwargs):
    clear_navigation_cache()
