from datetime import date

from django.core.validators import MinValueValidator
from django.db import models
from django.templatetags.static import static
from django.urls import reverse
from django.utils.text import Truncator

from core.transforms import parse_activities, record_titles
from core.utils import unique_slugify

DEFAULT_IMAGE = 'images/default-community-club.jpg'


class CommunityClubQuerySet(models.QuerySet):

    def active(self):
        return self.filter(is_active=True)

    def ordered(self):
        return self.order_by('sort_order', 'name')

    def by_type(self, club_type):
        return self.filter(type=club_type)

    def with_activities(self):
        return self.exclude(activities__isnull=True).exclude(activities='')

    def with_contact(self):
        return self.filter(
            (models.Q(contact_phone__isnull=False) & ~models.Q(contact_phone=''))
            | (models.Q(contact_email__isnull=False) & ~models.Q(contact_email=''))
        )

    def with_meeting_info(self):
        return self.filter(
            (models.Q(meeting_schedule__isnull=False) & ~models.Q(meeting_schedule=''))
            | (models.Q(location__isnull=False) & ~models.Q(location=''))
        )

    def by_activity(self, activity):
        return self.filter(activities__icontains=activity)

    def search(self, query):
        return self.filter(
            models.Q(name__icontains=query)
            | models.Q(description__icontains=query)
            | models.Q(type__icontains=query)
            | models.Q(activities__icontains=query)
        )

    def featured(self, limit=4):
        return self.active().ordered()[:limit]


class CommunityClub(models.Model):
    """A community club and the content of its public page."""

    TYPE_CHOICES = [
        ('Olahraga', 'Olahraga'),
        ('Keagamaan', 'Keagamaan'),
        ('Lingkungan', 'Lingkungan'),
        ('Sosial', 'Sosial'),
        ('Budaya', 'Budaya'),
        ('Pendidikan', 'Pendidikan'),
        ('Kesehatan', 'Kesehatan'),
    ]

    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True, blank=True, help_text="Auto-generated from the name if left blank.")
    description = models.TextField(blank=True, null=True)
    # Free text so older types keep working; the form suggests TYPE_CHOICES.
    type = models.CharField(max_length=255)
    activities = models.TextField(blank=True, null=True, help_text="JSON array of activity records, or legacy line/comma separated text.")
    image = models.CharField(max_length=500, blank=True, null=True)
    contact_person = models.CharField(max_length=255, blank=True, null=True)
    contact_phone = models.CharField(max_length=20, blank=True, null=True)
    contact_email = models.EmailField(max_length=255, blank=True, null=True)
    meeting_schedule = models.TextField(blank=True, null=True)
    location = models.CharField(max_length=255, blank=True, null=True)
    is_active = models.BooleanField(default=True)
    sort_order = models.PositiveIntegerField(default=0, validators=[MinValueValidator(0)])

    # Structured page content
    gallery_images = models.JSONField(default=list, blank=True)
    testimonials = models.JSONField(default=list, blank=True)
    social_media_links = models.JSONField(default=list, blank=True, help_text="Links of {platform, url}.")
    upcoming_events = models.JSONField(default=list, blank=True)
    achievements = models.JSONField(default=list, blank=True)
    more_about = models.JSONField(default=list, blank=True)
    founded_year = models.PositiveIntegerField(blank=True, null=True)
    member_count = models.PositiveIntegerField(blank=True, null=True)

    # Hero
    hero_subtitle = models.CharField(max_length=500, blank=True, null=True)
    hero_cta_text = models.CharField(max_length=100, blank=True, null=True)
    hero_cta_link = models.CharField(max_length=500, blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CommunityClubQuerySet.as_manager()

    class Meta:
        ordering = ['sort_order', 'name']
        verbose_name = "Community Club"
        verbose_name_plural = "Community Clubs"

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = unique_slugify(self, self.name)
        super().save(*args, **kwargs)

    def get_absolute_url(self):
        return reverse('community_clubs:detail', args=[self.slug])

    @property
    def activity_records(self):
        return parse_activities(self.activities)

    @property
    def activities_list(self):
        return record_titles(self.activity_records)

    @property
    def activities_count(self):
        return len(self.activities_list)

    def has_activity(self, activity):
        return activity.strip() in self.activities_list

    @property
    def has_contact(self):
        return bool(self.contact_phone or self.contact_email)

    @property
    def has_meeting_info(self):
        return bool(self.meeting_schedule or self.location)

    @property
    def display_image(self):
        return self.image or static(DEFAULT_IMAGE)

    @property
    def years_active(self):
        if not self.founded_year:
            return 0
        return max(date.today().year - self.founded_year, 0)

    def contact_methods(self):
        methods = []
        if self.contact_phone:
            methods.append({'type': 'phone', 'value': self.contact_phone, 'label': 'Telepon'})
        if self.contact_email:
            methods.append({'type': 'email', 'value': self.contact_email, 'label': 'Email'})
        if self.contact_person:
            methods.append({'type': 'person', 'value': self.contact_person, 'label': 'Kontak Person'})
        return methods

    def related_clubs(self, limit=3):
        return CommunityClub.objects.active().by_type(self.type).exclude(pk=self.pk).ordered()[:limit]

    def to_navigation_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'slug': self.slug,
            'description': Truncator(self.description or '').chars(100),
            'image': self.display_image,
            'type': self.type,
            'activities_count': self.activities_count,
        }

    @classmethod
    def types(cls):
        return list(
            cls.objects.active().exclude(type='').order_by('type').values_list('type', flat=True).distinct()
        )

    @classmethod
    def grouped_by_type(cls):
        grouped = {}
        for club in cls.objects.active().ordered():
            grouped.setdefault(club.type, []).append(club)
        return grouped


class CommunityClubActivityQuerySet(models.QuerySet):

    def search(self, query):
        return self.filter(
            models.Q(title__icontains=query)
            | models.Q(description__icontains=query)
            | models.Q(short_description__icontains=query)
            | models.Q(duration__icontains=query)
            | models.Q(community_club__name__icontains=query)
        )


class CommunityClubActivity(models.Model):
    """An activity a club runs, managed as its own row."""

    STATUS_CHOICES = [
        ('active', 'Aktif'),
        ('inactive', 'Tidak Aktif'),
        ('completed', 'Selesai'),
    ]

    community_club = models.ForeignKey(CommunityClub, on_delete=models.CASCADE, related_name='club_activities')
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    short_description = models.CharField(max_length=500, blank=True, null=True)
    image = models.CharField(max_length=500, blank=True, null=True)
    duration = models.CharField(max_length=255, blank=True, null=True)
    max_participants = models.PositiveIntegerField(blank=True, null=True, validators=[MinValueValidator(1)])
    requirements = models.TextField(blank=True, null=True)
    benefits = models.JSONField(default=list, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active')
    featured = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    schedule = models.CharField(max_length=255, blank=True, null=True)
    location = models.CharField(max_length=255, blank=True, null=True)
    contact_info = models.CharField(max_length=255, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CommunityClubActivityQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Community Club Activity"
        verbose_name_plural = "Community Club Activities"

    def __str__(self):
        return f"{self.title} ({self.community_club.name})"
