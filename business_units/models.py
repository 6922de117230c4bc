from django.core.validators import MinValueValidator
from django.db import models
from django.templatetags.static import static
from django.urls import reverse
from django.utils.text import Truncator

from core.transforms import parse_services, record_titles, split_list
from core.utils import unique_slugify

DEFAULT_IMAGE = 'images/default-business-unit.jpg'


class BusinessUnitQuerySet(models.QuerySet):

    def active(self):
        return self.filter(is_active=True)

    def ordered(self):
        return self.order_by('sort_order', 'name')

    def with_media(self):
        return self.exclude(image__isnull=True).exclude(image='')

    def with_contact(self):
        return self.filter(
            (models.Q(contact_phone__isnull=False) & ~models.Q(contact_phone=''))
            | (models.Q(contact_email__isnull=False) & ~models.Q(contact_email=''))
        )

    def by_service(self, service):
        return self.filter(services__icontains=service)

    def search(self, query):
        return self.filter(
            models.Q(name__icontains=query)
            | models.Q(description__icontains=query)
            | models.Q(services__icontains=query)
        )

    def featured(self, limit=4):
        return self.active().ordered().with_media()[:limit]


class BusinessUnit(models.Model):
    """One of the organisation's business units, with the content of its public page."""

    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True, blank=True, help_text="Auto-generated from the name if left blank.")
    description = models.TextField(blank=True, null=True)
    more_about = models.JSONField(default=list, blank=True, help_text="Cards of {title, description}.")
    services = models.TextField(blank=True, null=True, help_text="JSON array of service records, or one service per line.")
    image = models.CharField(max_length=500, blank=True, null=True)
    contact_phone = models.CharField(max_length=20, blank=True, null=True)
    contact_email = models.EmailField(max_length=255, blank=True, null=True)
    address = models.TextField(blank=True, null=True)
    website_url = models.URLField(max_length=500, blank=True, null=True)
    operating_hours = models.TextField(blank=True, null=True, help_text="Comma separated, e.g. 'Mon-Fri 08:00-17:00, Sat 08:00-12:00'.")
    is_active = models.BooleanField(default=True)
    sort_order = models.PositiveIntegerField(default=0, validators=[MinValueValidator(0)], help_text="Manual ordering for display on the site.")

    # Structured page content
    team_members = models.JSONField(default=list, blank=True)
    client_testimonials = models.JSONField(default=list, blank=True)
    portfolio_items = models.JSONField(default=list, blank=True)
    certifications = models.JSONField(default=list, blank=True)
    company_stats = models.JSONField(default=list, blank=True)
    gallery_images = models.JSONField(default=list, blank=True)
    achievements = models.JSONField(default=list, blank=True)
    core_values = models.JSONField(default=list, blank=True)

    # Hero
    hero_subtitle = models.CharField(max_length=500, blank=True, null=True)
    hero_cta_text = models.CharField(max_length=100, blank=True, null=True)
    hero_cta_link = models.CharField(max_length=500, blank=True, null=True)

    # Section visibility
    portfolio_is_show = models.BooleanField(default=False)
    certifications_is_show = models.BooleanField(default=False)
    company_stats_is_show = models.BooleanField(default=False)
    core_values_is_show = models.BooleanField(default=False)
    achievements_is_show = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BusinessUnitQuerySet.as_manager()

    # toggle name -> JSON field it controls
    TOGGLED_SECTIONS = {
        'portfolio': 'portfolio_items',
        'certifications': 'certifications',
        'company_stats': 'company_stats',
        'core_values': 'core_values',
        'achievements': 'achievements',
    }

    class Meta:
        ordering = ['sort_order', 'name']
        verbose_name = "Business Unit"
        verbose_name_plural = "Business Units"

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = unique_slugify(self, self.name)
        super().save(*args, **kwargs)

    def get_absolute_url(self):
        return reverse('business_units:detail', args=[self.slug])

    @property
    def services_list(self):
        return parse_services(self.services)

    @property
    def service_titles(self):
        return record_titles(self.services_list)

    @property
    def services_count(self):
        return len(self.services_list)

    def has_service(self, service):
        return service.strip() in self.service_titles

    @property
    def operating_hours_list(self):
        return split_list(self.operating_hours, ',')

    @property
    def has_contact(self):
        return bool(self.contact_phone or self.contact_email)

    @property
    def display_image(self):
        return self.image or static(DEFAULT_IMAGE)

    def contact_methods(self):
        methods = []
        if self.contact_phone:
            methods.append({'type': 'phone', 'value': self.contact_phone, 'label': 'Telepon'})
        if self.contact_email:
            methods.append({'type': 'email', 'value': self.contact_email, 'label': 'Email'})
        if self.website_url:
            methods.append({'type': 'website', 'value': self.website_url, 'label': 'Website'})
        return methods

    def section_visible(self, section):
        """True when a toggled section is switched on and has content."""
        return bool(getattr(self, f'{section}_is_show') and getattr(self, self.TOGGLED_SECTIONS[section]))

    def related_units(self, limit=3):
        return BusinessUnit.objects.active().exclude(pk=self.pk).ordered()[:limit]

    def to_navigation_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'slug': self.slug,
            'description': Truncator(self.description or '').chars(100),
            'image': self.display_image,
            'services_count': self.services_count,
        }

    @classmethod
    def all_services(cls):
        """Distinct service titles offered across active units, in unit order."""
        titles = []
        for unit in cls.objects.active().ordered():
            for title in unit.service_titles:
                if title not in titles:
                    titles.append(title)
        return titles


class BusinessUnitServiceQuerySet(models.QuerySet):

    def search(self, query):
        return self.filter(
            models.Q(title__icontains=query)
            | models.Q(description__icontains=query)
            | models.Q(price_range__icontains=query)
            | models.Q(duration__icontains=query)
            | models.Q(business_unit__name__icontains=query)
        )


class BusinessUnitService(models.Model):
    """A service a business unit offers, managed as its own row."""

    business_unit = models.ForeignKey(BusinessUnit, on_delete=models.CASCADE, related_name='unit_services')
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    image = models.CharField(max_length=500, blank=True, null=True)
    price_range = models.CharField(max_length=255, blank=True, null=True)
    duration = models.CharField(max_length=255, blank=True, null=True)
    features = models.JSONField(default=list, blank=True)
    technologies = models.JSONField(default=list, blank=True)
    process_steps = models.JSONField(default=list, blank=True, help_text="Steps of {step, description, order}.")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BusinessUnitServiceQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Business Unit Service"
        verbose_name_plural = "Business Unit Services"

    def __str__(self):
        return f"{self.title} ({self.business_unit.name})"

    @property
    def ordered_process_steps(self):
        steps = [step for step in self.process_steps or [] if isinstance(step, dict)]
        return sorted(steps, key=lambda step: step.get('order') or 0)
