import json

from django import forms
from django.core.validators import validate_email, URLValidator

from .models import ContactMessage, GlobalVariable


class ContactMessageForm(forms.ModelForm):
    # Honeypot field to catch bots
    nickname = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'tabindex': '-1', 'autocomplete': 'off'})
    )
    message = forms.CharField(max_length=5000, widget=forms.Textarea(attrs={'rows': 6}))

    class Meta:
        model = ContactMessage
        fields = ['name', 'email', 'phone', 'subject', 'message']
        widgets = {
            'name': forms.TextInput(attrs={'placeholder': 'Nama lengkap'}),
            'email': forms.EmailInput(attrs={'placeholder': 'nama@email.com'}),
            'phone': forms.TextInput(attrs={'placeholder': '08xx-xxxx-xxxx'}),
            'subject': forms.TextInput(attrs={'placeholder': 'Subjek pesan'}),
        }

    def clean(self):
        cleaned_data = super().clean()
        if cleaned_data.get('nickname'):
            raise forms.ValidationError("Spam detected.")
        return cleaned_data


class ContactMessageStatusForm(forms.Form):
    status = forms.ChoiceField(choices=ContactMessage.STATUS_CHOICES)


class ContactMessageBulkForm(forms.Form):
    ACTION_CHOICES = [
        ('mark_read', 'Tandai sudah dibaca'),
        ('archive', 'Arsipkan'),
        ('delete', 'Hapus'),
    ]

    action = forms.ChoiceField(choices=ACTION_CHOICES)
    ids = forms.ModelMultipleChoiceField(queryset=ContactMessage.objects.all())


class GlobalVariableForm(forms.ModelForm):
    class Meta:
        model = GlobalVariable
        fields = ['key', 'value', 'type', 'category', 'description', 'is_public']
        widgets = {
            'value': forms.Textarea(attrs={'rows': 4}),
            'description': forms.Textarea(attrs={'rows': 2}),
        }

    def clean(self):
        cleaned_data = super().clean()
        value = cleaned_data.get('value') or ''
        value_type = cleaned_data.get('type')

        if not value:
            return cleaned_data

        try:
            if value_type == GlobalVariable.TYPE_JSON:
                json.loads(value)
            elif value_type == GlobalVariable.TYPE_NUMBER:
                float(value)
            elif value_type == GlobalVariable.TYPE_EMAIL:
                validate_email(value)
            elif value_type == GlobalVariable.TYPE_URL:
                URLValidator()(value)
        except (ValueError, forms.ValidationError):
            self.add_error('value', f"Nilai tidak valid untuk tipe {value_type}.")
        return cleaned_data
