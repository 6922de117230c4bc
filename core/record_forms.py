"""Record forms shared by the business unit and community club editors."""
from django import forms

from .records import RecordForm, record_formset
from .transforms import coerce_rating, normalize_gallery_images, normalize_testimonials, social_links_as_list

TEXTAREA = forms.Textarea(attrs={'rows': 3})


class MoreAboutForm(RecordForm):
    id_prefix = 'about'

    title = forms.CharField(max_length=255)
    description = forms.CharField(widget=TEXTAREA)


class GalleryImageForm(RecordForm):
    id_prefix = 'img'

    url = forms.CharField(max_length=500, label="Image URL")
    alt = forms.CharField(max_length=255, required=False, label="Alt text")
    caption = forms.CharField(max_length=500, required=False)
    media_id = forms.IntegerField(required=False, widget=forms.HiddenInput)

    @classmethod
    def normalize_records(cls, records):
        return normalize_gallery_images(records)


class TestimonialForm(RecordForm):
    id_prefix = 'testimonial'

    name = forms.CharField(max_length=255)
    role = forms.CharField(max_length=255, required=False)
    company = forms.CharField(max_length=255, required=False)
    content = forms.CharField(widget=TEXTAREA)
    image = forms.CharField(max_length=500, required=False, label="Photo URL")
    rating = forms.IntegerField(min_value=1, max_value=5, required=False, help_text="1-5, defaults to 5.")
    featured = forms.BooleanField(required=False)

    @classmethod
    def normalize_records(cls, records):
        return normalize_testimonials(records)

    def to_record(self):
        record = super().to_record()
        record['rating'] = coerce_rating(record['rating'])
        return record


class AchievementForm(RecordForm):
    id_prefix = 'achievement'

    title = forms.CharField(max_length=255)
    description = forms.CharField(widget=TEXTAREA, required=False)
    date = forms.DateField(required=False, widget=forms.DateInput(attrs={'type': 'date'}))
    image = forms.CharField(max_length=500, required=False, label="Image URL")


class EventForm(RecordForm):
    id_prefix = 'event'

    title = forms.CharField(max_length=255)
    date = forms.DateField(required=False, widget=forms.DateInput(attrs={'type': 'date'}))
    description = forms.CharField(widget=TEXTAREA, required=False)
    image = forms.CharField(max_length=500, required=False, label="Image URL")


class SocialMediaLinkForm(RecordForm):
    id_prefix = 'social'

    PLATFORM_CHOICES = [
        ('', '---------'),
        ('facebook', 'Facebook'),
        ('instagram', 'Instagram'),
        ('twitter', 'Twitter / X'),
        ('youtube', 'YouTube'),
        ('tiktok', 'TikTok'),
        ('linkedin', 'LinkedIn'),
        ('whatsapp', 'WhatsApp'),
        ('website', 'Website'),
    ]

    platform = forms.ChoiceField(choices=PLATFORM_CHOICES)
    url = forms.URLField(max_length=500)

    @classmethod
    def normalize_records(cls, records):
        if isinstance(records, dict):
            # Older rows map platform -> url.
            return social_links_as_list(records)
        return [
            {**record, 'platform': str(record.get('platform') or '').strip().lower()}
            for record in super().normalize_records(records)
        ]


MoreAboutFormSet = record_formset(MoreAboutForm, max_num=6)
GalleryImageFormSet = record_formset(GalleryImageForm, max_num=10)
TestimonialFormSet = record_formset(TestimonialForm, max_num=10)
AchievementFormSet = record_formset(AchievementForm, max_num=20)
SocialMediaLinkFormSet = record_formset(SocialMediaLinkForm, max_num=20)
