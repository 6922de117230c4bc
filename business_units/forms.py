from django import forms

from core.record_forms import (
    AchievementFormSet,
    GalleryImageFormSet,
    MoreAboutFormSet,
    TestimonialFormSet,
)
from core.records import RecordEditor, RecordForm, StringListField, record_formset
from core.transforms import (
    COMPANY_STATS,
    decode_company_stats,
    decode_social_links,
    dump_records,
    encode_company_stats,
    encode_social_links,
    normalize_team_members,
    parse_services,
)
from .models import BusinessUnit, BusinessUnitService

TEXTAREA = forms.Textarea(attrs={'rows': 3})


class TeamMemberForm(RecordForm):
    """A team member. Social links are edited as three flat url fields."""
    id_prefix = 'member'

    name = forms.CharField(max_length=255)
    role = forms.CharField(max_length=255)
    bio = forms.CharField(widget=TEXTAREA, required=False)
    image = forms.CharField(max_length=500, required=False, label="Photo URL")
    social_links_linkedin = forms.URLField(max_length=500, required=False, label="LinkedIn")
    social_links_twitter = forms.URLField(max_length=500, required=False, label="Twitter")
    social_links_github = forms.URLField(max_length=500, required=False, label="GitHub")

    SOCIAL_FIELDS = ('social_links_linkedin', 'social_links_twitter', 'social_links_github')

    @classmethod
    def initial_from_record(cls, record):
        member = normalize_team_members([record])[0]
        initial = {
            'id': str(record.get('id') or ''),
            'name': member['name'],
            'role': member['role'],
            'bio': member['bio'],
            'image': member['image'],
        }
        initial.update(decode_social_links(record.get('social_links'), fallback=record))
        return initial

    def to_record(self):
        record = super().to_record()
        for name in self.SOCIAL_FIELDS:
            record.pop(name)
        record['social_links'] = encode_social_links(self.cleaned_data)
        return record


class PortfolioItemForm(RecordForm):
    id_prefix = 'portfolio'

    title = forms.CharField(max_length=255)
    description = forms.CharField(widget=TEXTAREA, required=False)
    image = forms.CharField(max_length=500, required=False, label="Image URL")
    technologies = StringListField(separator=',', widget=forms.TextInput, help_text="Comma separated.")
    client = forms.CharField(max_length=255, required=False)


class CertificationForm(RecordForm):
    id_prefix = 'cert'

    name = forms.CharField(max_length=255)
    issuer = forms.CharField(max_length=255)
    date = forms.DateField(required=False, widget=forms.DateInput(attrs={'type': 'date'}))
    image = forms.CharField(max_length=500, required=False, label="Image URL")
    description = forms.CharField(widget=TEXTAREA, required=False)


class CoreValueForm(RecordForm):
    id_prefix = 'value'

    title = forms.CharField(max_length=255)
    description = forms.CharField(widget=TEXTAREA, required=False)
    icon = forms.CharField(max_length=100, required=False, help_text="An emoji or icon name.")


def process_steps_to_lines(steps):
    lines = []
    for step in sorted((s for s in steps or [] if isinstance(s, dict)), key=lambda s: s.get('order') or 0):
        title = step.get('step') or ''
        lines.append(f"{title}: {step['description']}" if step.get('description') else title)
    return lines


def lines_to_process_steps(lines):
    steps = []
    for order, line in enumerate(lines, start=1):
        title, _, description = line.partition(':')
        steps.append({'step': title.strip(), 'description': description.strip(), 'order': order})
    return steps


class ServiceRecordForm(RecordForm):
    """A service stored in the business unit's ``services`` text column."""
    id_prefix = 'service'

    title = forms.CharField(max_length=255)
    description = forms.CharField(widget=TEXTAREA, required=False)
    image = forms.CharField(max_length=500, required=False, label="Image URL")
    price_range = forms.CharField(max_length=255, required=False)
    duration = forms.CharField(max_length=255, required=False)
    features = StringListField(help_text="One feature per line.")
    technologies = StringListField(separator=',', widget=forms.TextInput, help_text="Comma separated.")
    process_steps = StringListField(help_text="One step per line, as 'Step: description'.")
    featured = forms.BooleanField(required=False)
    is_hidden = forms.BooleanField(required=False, label="Hide on site")

    @classmethod
    def initial_from_record(cls, record):
        initial = super().initial_from_record(record)
        initial['process_steps'] = process_steps_to_lines(record.get('process_steps'))
        initial['is_hidden'] = not record.get('active', True)
        return initial

    def to_record(self):
        record = super().to_record()
        record['process_steps'] = lines_to_process_steps(record['process_steps'])
        record['active'] = not record.pop('is_hidden')
        return record


ServiceFormSet = record_formset(ServiceRecordForm, max_num=15)
TeamMemberFormSet = record_formset(TeamMemberForm, max_num=20)
PortfolioItemFormSet = record_formset(PortfolioItemForm, max_num=20)
CertificationFormSet = record_formset(CertificationForm, max_num=20)
CoreValueFormSet = record_formset(CoreValueForm, max_num=20)


class BusinessUnitForm(forms.ModelForm):
    """The unit's own fields plus the four company stats, edited flat."""
    years_in_business = forms.CharField(max_length=100, required=False, label="Years in Business")
    projects_completed = forms.CharField(max_length=100, required=False, label="Projects Completed")
    clients_served = forms.CharField(max_length=100, required=False, label="Clients Served")
    team_size = forms.CharField(max_length=100, required=False, label="Team Size")

    STAT_FIELDS = [key for key, _, _ in COMPANY_STATS]

    FIELD_GROUPS = (
        ("Informasi Dasar", ['name', 'slug', 'description', 'image', 'is_active', 'sort_order']),
        ("Kontak", ['contact_phone', 'contact_email', 'address', 'website_url', 'operating_hours']),
        ("Hero", ['hero_subtitle', 'hero_cta_text', 'hero_cta_link']),
        ("Statistik Perusahaan", STAT_FIELDS),
        ("Tampilkan Bagian", [
            'portfolio_is_show', 'certifications_is_show', 'company_stats_is_show',
            'core_values_is_show', 'achievements_is_show',
        ]),
    )

    class Meta:
        model = BusinessUnit
        fields = [
            'name', 'slug', 'description', 'image', 'contact_phone', 'contact_email', 'address',
            'website_url', 'operating_hours', 'is_active', 'sort_order',
            'hero_subtitle', 'hero_cta_text', 'hero_cta_link',
            'portfolio_is_show', 'certifications_is_show', 'company_stats_is_show',
            'core_values_is_show', 'achievements_is_show',
        ]
        widgets = {
            'description': forms.Textarea(attrs={'rows': 5}),
            'address': forms.Textarea(attrs={'rows': 2}),
            'operating_hours': forms.TextInput(attrs={'placeholder': 'Senin-Jumat 08:00-17:00, Sabtu 08:00-12:00'}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance.pk:
            for key, value in decode_company_stats(self.instance.company_stats).items():
                self.initial.setdefault(key, value)

    def field_groups(self):
        return [(title, [self[name] for name in names]) for title, names in self.FIELD_GROUPS]

    def save(self, commit=True):
        self.instance.company_stats = encode_company_stats(self.cleaned_data)
        return super().save(commit)


class BusinessUnitEditor(RecordEditor):
    form_class = BusinessUnitForm
    sections = (
        ('services', "Layanan", ServiceFormSet),
        ('more_about', "Tentang Kami", MoreAboutFormSet),
        ('team_members', "Tim", TeamMemberFormSet),
        ('client_testimonials', "Testimoni Klien", TestimonialFormSet),
        ('portfolio_items', "Portofolio", PortfolioItemFormSet),
        ('certifications', "Sertifikasi", CertificationFormSet),
        ('achievements', "Pencapaian", AchievementFormSet),
        ('core_values', "Nilai Inti", CoreValueFormSet),
        ('gallery_images', "Galeri", GalleryImageFormSet),
    )

    def load_records(self, name):
        if name == 'services':
            return parse_services(self.instance.services) if self.instance is not None else []
        return super().load_records(name)

    def store_records(self, obj, name, records):
        if name == 'services':
            obj.services = dump_records(records)
        else:
            super().store_records(obj, name, records)


class ProcessStepForm(RecordForm):
    id_prefix = 'step'

    step = forms.CharField(max_length=255)
    description = forms.CharField(widget=TEXTAREA, required=False)

    def to_record(self):
        record = super().to_record()
        # Steps are stored without ids; their position is kept in ``order``.
        record.pop('id')
        return record


class ProcessStepFormSet(record_formset(ProcessStepForm, max_num=20)):

    def to_records(self):
        steps = super().to_records()
        for order, step in enumerate(steps, start=1):
            step['order'] = order
        return steps


class BusinessUnitServiceForm(forms.ModelForm):
    features = StringListField(help_text="One feature per line.")
    technologies = StringListField(separator=',', widget=forms.TextInput, help_text="Comma separated.")

    class Meta:
        model = BusinessUnitService
        fields = ['business_unit', 'title', 'description', 'image', 'price_range', 'duration', 'features', 'technologies']
        widgets = {
            'description': forms.Textarea(attrs={'rows': 4}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        units = BusinessUnit.objects.active().ordered()
        if self.instance.pk:
            # Keep the current parent selectable even if it was deactivated.
            units = BusinessUnit.objects.filter(
                pk__in=list(units.values_list('pk', flat=True)) + [self.instance.business_unit_id]
            ).order_by('sort_order', 'name')
        self.fields['business_unit'].queryset = units


class BusinessUnitServiceEditor(RecordEditor):
    form_class = BusinessUnitServiceForm
    sections = (
        ('process_steps', "Langkah Proses", ProcessStepFormSet),
    )

    def load_records(self, name):
        records = super().load_records(name)
        return sorted((r for r in records if isinstance(r, dict)), key=lambda r: r.get('order') or 0)
