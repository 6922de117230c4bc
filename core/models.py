import json
import logging
from datetime import timedelta

from django.db import models
from django.utils import timezone
from django.utils.text import Truncator

logger = logging.getLogger(__name__)


class GlobalVariable(models.Model):
    """A site-wide setting editable by staff (company name, phone, social links, ...)."""

    TYPE_TEXT = 'text'
    TYPE_TEXTAREA = 'textarea'
    TYPE_NUMBER = 'number'
    TYPE_EMAIL = 'email'
    TYPE_URL = 'url'
    TYPE_JSON = 'json'
    TYPE_BOOLEAN = 'boolean'

    TYPE_CHOICES = [
        (TYPE_TEXT, 'Text'),
        (TYPE_TEXTAREA, 'Textarea'),
        (TYPE_NUMBER, 'Number'),
        (TYPE_EMAIL, 'Email'),
        (TYPE_URL, 'URL'),
        (TYPE_JSON, 'JSON'),
        (TYPE_BOOLEAN, 'Boolean'),
    ]

    FALSE_VALUES = ('', '0', 'false', 'off', 'no')

    key = models.CharField(max_length=255, unique=True, help_text="Lookup key, e.g. 'company_phone'.")
    value = models.TextField(blank=True, null=True)
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default=TYPE_TEXT)
    category = models.CharField(max_length=255, default='general')
    description = models.TextField(blank=True, null=True)
    is_public = models.BooleanField(default=True, help_text="Public variables are available to page templates.")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['category', 'key']
        verbose_name = "Global Variable"
        verbose_name_plural = "Global Variables"

    def __str__(self):
        return self.key

    @property
    def typed_value(self):
        if self.type == self.TYPE_JSON:
            if not self.value:
                return None
            try:
                return json.loads(self.value)
            except ValueError:
                logger.warning(f"Global variable '{self.key}' holds invalid JSON.")
                return None
        if self.type == self.TYPE_NUMBER:
            try:
                return float(self.value)
            except (TypeError, ValueError):
                return 0.0
        if self.type == self.TYPE_BOOLEAN:
            return (self.value or '').strip().lower() not in self.FALSE_VALUES
        return self.value

    @classmethod
    def get_value(cls, key, default=None):
        variable = cls.objects.filter(key=key).first()
        if variable is None:
            return default
        return variable.typed_value

    @classmethod
    def set_value(cls, key, value, type=TYPE_TEXT, category='general'):
        if type == cls.TYPE_JSON:
            stored = json.dumps(value, ensure_ascii=False)
        elif type == cls.TYPE_BOOLEAN:
            stored = '1' if value else '0'
        else:
            stored = '' if value is None else str(value)

        variable, _ = cls.objects.update_or_create(
            key=key,
            defaults={'value': stored, 'type': type, 'category': category},
        )
        return variable

    @classmethod
    def public_values(cls, keys=None):
        """``{key: typed value}`` for public variables, optionally limited to ``keys``."""
        variables = cls.objects.filter(is_public=True)
        if keys is not None:
            variables = variables.filter(key__in=keys)
        return {variable.key: variable.typed_value for variable in variables}

    @classmethod
    def grouped_by_category(cls):
        grouped = {}
        for variable in cls.objects.order_by('category', 'key'):
            grouped.setdefault(variable.category, []).append(variable)
        return grouped


class ContactMessageQuerySet(models.QuerySet):

    def unread(self):
        return self.filter(status=ContactMessage.STATUS_UNREAD)

    def read(self):
        return self.filter(status=ContactMessage.STATUS_READ)

    def archived(self):
        return self.filter(status=ContactMessage.STATUS_ARCHIVED)

    def recent(self, days=7):
        return self.filter(created_at__gte=timezone.now() - timedelta(days=days))

    def search(self, query):
        return self.filter(
            models.Q(name__icontains=query)
            | models.Q(email__icontains=query)
            | models.Q(subject__icontains=query)
            | models.Q(message__icontains=query)
        )


class ContactMessage(models.Model):
    """A message sent through the public contact form."""

    STATUS_UNREAD = 'unread'
    STATUS_READ = 'read'
    STATUS_ARCHIVED = 'archived'

    STATUS_CHOICES = [
        (STATUS_UNREAD, 'Belum Dibaca'),
        (STATUS_READ, 'Sudah Dibaca'),
        (STATUS_ARCHIVED, 'Diarsipkan'),
    ]

    STATUS_COLORS = {
        STATUS_UNREAD: 'red',
        STATUS_READ: 'green',
        STATUS_ARCHIVED: 'gray',
    }

    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=255)
    phone = models.CharField(max_length=20, blank=True, null=True)
    subject = models.CharField(max_length=255)
    message = models.TextField()
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_UNREAD, db_index=True)
    read_at = models.DateTimeField(null=True, blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ContactMessageQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Contact Message"
        verbose_name_plural = "Contact Messages"

    def __str__(self):
        return f"{self.subject} ({self.email})"

    @property
    def is_unread(self):
        return self.status == self.STATUS_UNREAD

    @property
    def status_color(self):
        return self.STATUS_COLORS.get(self.status, 'gray')

    @property
    def excerpt(self):
        return Truncator(self.message).chars(100)

    def set_status(self, status):
        """Moves the message to ``status``, keeping ``read_at`` in step."""
        self.status = status
        if status == self.STATUS_READ and self.read_at is None:
            self.read_at = timezone.now()
        elif status == self.STATUS_UNREAD:
            self.read_at = None
        self.save(update_fields=['status', 'read_at', 'updated_at'])

    def mark_as_read(self):
        self.set_status(self.STATUS_READ)

    def mark_as_unread(self):
        self.set_status(self.STATUS_UNREAD)

    def mark_as_archived(self):
        self.set_status(self.STATUS_ARCHIVED)

    @classmethod
    def stats(cls):
        return {
            'total': cls.objects.count(),
            'unread': cls.objects.unread().count(),
            'read': cls.objects.read().count(),
            'archived': cls.objects.archived().count(),
            'recent': cls.objects.recent().count(),
        }
