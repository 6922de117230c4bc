import logging

from celery import shared_task
from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.urls import reverse
from django.utils.html import strip_tags

from .models import ContactMessage

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3, default_retry_delay=300)
def notify_staff_of_contact_message(self, message_id):
    """
    Celery task: emails the staff inbox about a new contact form message.

    Replies go straight to the sender through ``reply_to``.
    """
    try:
        contact_message = ContactMessage.objects.get(pk=message_id)
    except ContactMessage.DoesNotExist:
        logger.warning(f"Contact message {message_id} not found for notification.")
        return False

    recipient = settings.CONTACT_NOTIFICATION_EMAIL
    if not recipient:
        logger.info("CONTACT_NOTIFICATION_EMAIL is empty; skipping contact notification.")
        return False

    context = {
        'contact_message': contact_message,
        'site_name': settings.SITE_NAME,
        'staff_url': f"{settings.SITE_URL.rstrip('/')}{reverse('core:staff_contact_message_detail', args=[contact_message.pk])}",
    }

    try:
        html_content = render_to_string('emails/contact_message_notification.html', context)
        email = EmailMultiAlternatives(
            subject=f"[{settings.SITE_NAME}] Pesan baru: {contact_message.subject}",
            body=strip_tags(html_content),
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=[recipient],
            reply_to=[contact_message.email],
        )
        email.attach_alternative(html_content, "text/html")
        email.send(fail_silently=False)
    except Exception as exc:
        logger.error(f"Attempt {self.request.retries + 1} failed for contact message {message_id}. Error: {exc}", exc_info=True)
        raise self.retry(exc=exc)

    logger.info(f"Sent contact notification for message {message_id} to {recipient}")
    return True
