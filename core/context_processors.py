from django.conf import settings

from .models import GlobalVariable


def site_settings(request):
    """Public global variables and the site name for every template."""
    return {
        'site_name': settings.SITE_NAME,
        'site_settings': GlobalVariable.public_values(),
    }
