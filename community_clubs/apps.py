from django.apps import AppConfig


class CommunityClubsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'community_clubs'
    verbose_name = 'Komunitas'

    def ready(self):
        from . import signals  # noqa: F401
