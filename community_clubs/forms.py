from django import forms

from core.record_forms import (
    AchievementForm,
    EventForm,
    GalleryImageFormSet,
    MoreAboutFormSet,
    SocialMediaLinkFormSet,
    TestimonialFormSet,
)
from core.records import RecordEditor, RecordForm, StringListField, record_formset
from core.transforms import dump_records, parse_activities
from .models import CommunityClub, CommunityClubActivity

TEXTAREA = forms.Textarea(attrs={'rows': 3})


class ActivityRecordForm(RecordForm):
    """An activity stored in the club's ``activities`` text column."""
    id_prefix = 'activity'

    title = forms.CharField(max_length=255)
    description = forms.CharField(widget=TEXTAREA, required=False)
    image = forms.CharField(max_length=500, required=False, label="Image URL")
    duration = forms.CharField(max_length=255, required=False)
    max_participants = forms.IntegerField(min_value=1, required=False)
    requirements = forms.CharField(widget=TEXTAREA, required=False)
    benefits = StringListField(help_text="One benefit per line.")
    featured = forms.BooleanField(required=False)
    is_hidden = forms.BooleanField(required=False, label="Hide on site")

    @classmethod
    def initial_from_record(cls, record):
        initial = super().initial_from_record(record)
        initial['is_hidden'] = not record.get('active', True)
        return initial

    def to_record(self):
        record = super().to_record()
        record['active'] = not record.pop('is_hidden')
        return record


ActivityFormSet = record_formset(ActivityRecordForm, max_num=15)
UpcomingEventFormSet = record_formset(EventForm, max_num=3)
ClubAchievementFormSet = record_formset(AchievementForm, max_num=3)


class CommunityClubForm(forms.ModelForm):
    FIELD_GROUPS = (
        ("Informasi Dasar", ['name', 'slug', 'type', 'description', 'image', 'is_active', 'sort_order']),
        ("Kontak & Pertemuan", ['contact_person', 'contact_phone', 'contact_email', 'meeting_schedule', 'location']),
        ("Profil", ['founded_year', 'member_count']),
        ("Hero", ['hero_subtitle', 'hero_cta_text', 'hero_cta_link']),
    )

    class Meta:
        model = CommunityClub
        fields = [
            'name', 'slug', 'type', 'description', 'image', 'contact_person', 'contact_phone',
            'contact_email', 'meeting_schedule', 'location', 'is_active', 'sort_order',
            'founded_year', 'member_count', 'hero_subtitle', 'hero_cta_text', 'hero_cta_link',
        ]
        widgets = {
            'description': forms.Textarea(attrs={'rows': 5}),
            'meeting_schedule': forms.Textarea(attrs={'rows': 2}),
            'type': forms.TextInput(attrs={'list': 'club-types'}),
        }

    def field_groups(self):
        return [(title, [self[name] for name in names]) for title, names in self.FIELD_GROUPS]

    @property
    def type_choices(self):
        return [value for value, _ in CommunityClub.TYPE_CHOICES]


class CommunityClubEditor(RecordEditor):
    form_class = CommunityClubForm
    sections = (
        ('activities', "Kegiatan", ActivityFormSet),
        ('more_about', "Tentang Kami", MoreAboutFormSet),
        ('upcoming_events', "Acara Mendatang", UpcomingEventFormSet),
        ('achievements', "Pencapaian", ClubAchievementFormSet),
        ('testimonials', "Testimoni", TestimonialFormSet),
        ('social_media_links', "Media Sosial", SocialMediaLinkFormSet),
        ('gallery_images', "Galeri", GalleryImageFormSet),
    )

    def load_records(self, name):
        if name == 'activities':
            return parse_activities(self.instance.activities) if self.instance is not None else []
        return super().load_records(name)

    def store_records(self, obj, name, records):
        if name == 'activities':
            obj.activities = dump_records(records)
        else:
            super().store_records(obj, name, records)


class CommunityClubActivityForm(forms.ModelForm):
    benefits = StringListField(help_text="One benefit per line.")

    class Meta:
        model = CommunityClubActivity
        fields = [
            'community_club', 'title', 'short_description', 'description', 'image', 'duration',
            'max_participants', 'requirements', 'benefits', 'status', 'featured', 'is_active',
            'schedule', 'location', 'contact_info',
        ]
        widgets = {
            'description': forms.Textarea(attrs={'rows': 4}),
            'requirements': forms.Textarea(attrs={'rows': 3}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        clubs = CommunityClub.objects.active().ordered()
        if self.instance.pk:
            clubs = CommunityClub.objects.filter(
                pk__in=list(clubs.values_list('pk', flat=True)) + [self.instance.community_club_id]
            ).order_by('sort_order', 'name')
        self.fields['community_club'].queryset = clubs

    def clean_image(self):
        image = self.cleaned_data.get('image')
        if not image and self.instance.pk:
            # An empty image on update keeps the current one.
            return self.instance.image
        return image
