from django.contrib.sitemaps import Sitemap
from django.urls import reverse

from business_units.models import BusinessUnit
from community_clubs.models import CommunityClub


class StaticViewSitemap(Sitemap):
    changefreq = "monthly"
    priority = 0.5

    def items(self):
        return ['core:home', 'core:about', 'core:contact', 'business_units:list', 'community_clubs:list']

    def location(self, item):
        return reverse(item)


class BusinessUnitSitemap(Sitemap):
    changefreq = "weekly"
    priority = 0.8

    def items(self):
        return BusinessUnit.objects.active().ordered()

    def lastmod(self, obj):
        return obj.updated_at


class CommunityClubSitemap(Sitemap):
    changefreq = "weekly"
    priority = 0.7

    def items(self):
        return CommunityClub.objects.active().ordered()

    def lastmod(self, obj):
        return obj.updated_at


sitemaps = {
    'static': StaticViewSitemap,
    'business_units': BusinessUnitSitemap,
    'community_clubs': CommunityClubSitemap,
}
