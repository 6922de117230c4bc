import logging

from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import ContactMessage
from .tasks import notify_staff_of_contact_message

logger = logging.getLogger(__name__)


@receiver(post_save, sender=ContactMessage)
def queue_contact_message_notification(sender, instance, created, **kwargs):
    """Emails staff about a new contact message once it is committed."""
    if not created:
        return
    message_id = instance.pk
    transaction.on_commit(lambda: notify_staff_of_contact_message.delay(message_id))
