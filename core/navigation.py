"""Cached data for the site navigation menus."""
import logging

from django.core.cache import cache

logger = logging.getLogger(__name__)

NAVIGATION_CACHE_KEY = 'navigation_data'
NAVIGATION_CACHE_TIMEOUT = 300
NAVIGATION_UNIT_LIMIT = 6
NAVIGATION_CLUB_LIMIT = 8


def build_navigation_data():
    from business_units.models import BusinessUnit
    from community_clubs.models import CommunityClub

    units = BusinessUnit.objects.active().ordered()[:NAVIGATION_UNIT_LIMIT]
    clubs = CommunityClub.objects.active().ordered()[:NAVIGATION_CLUB_LIMIT]
    return {
        'business_units': [unit.to_navigation_dict() for unit in units],
        'community_clubs': [club.to_navigation_dict() for club in clubs],
        'club_types': CommunityClub.types(),
    }


def get_navigation_data():
    return cache.get_or_set(NAVIGATION_CACHE_KEY, build_navigation_data, NAVIGATION_CACHE_TIMEOUT)


def clear_navigation_cache():
    cache.delete(NAVIGATION_CACHE_KEY)
    logger.info("Navigation cache cleared.")
