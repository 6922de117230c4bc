"""
URL configuration for the cigi_global project.

Public pages live under Indonesian paths, staff content management under
``staff/`` and the unfold-themed Django admin under ``admin/``.
"""
from django.contrib import admin
from django.contrib.sitemaps.views import sitemap
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

from .sitemaps import sitemaps


urlpatterns = [
    # Core Django Admin
    path('admin/', admin.site.urls),

    # Staff login / logout
    path('accounts/', include('django.contrib.auth.urls')),

    path('', include('core.urls', namespace='core')),
    path('', include('business_units.urls', namespace='business_units')),
    path('', include('community_clubs.urls', namespace='community_clubs')),

    path('sitemap.xml', sitemap, {'sitemaps': sitemaps}, name='django.contrib.sitemaps.views.sitemap'),
]

if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
