import logging

from django.contrib import messages
from django.contrib.admin.views.decorators import staff_member_required
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse, reverse_lazy
from django.views import View
from django.views.decorators.http import require_POST
from django.views.generic import CreateView, DeleteView, DetailView, ListView, TemplateView, UpdateView

from business_units.models import BusinessUnit
from community_clubs.models import CommunityClub
from .forms import ContactMessageBulkForm, ContactMessageForm, ContactMessageStatusForm, GlobalVariableForm
from .mixins import FilteredListMixin, StaffRequiredMixin, SuccessMessageDeleteMixin
from .models import ContactMessage, GlobalVariable
from .navigation import clear_navigation_cache, get_navigation_data
from .utils import client_ip

logger = logging.getLogger(__name__)

HOME_VARIABLES = ['site_title', 'site_description', 'hero_title', 'hero_subtitle', 'company_tagline']
ABOUT_VARIABLES = ['company_name', 'company_description', 'company_vision', 'company_mission', 'company_values', 'company_history']
CONTACT_VARIABLES = ['company_address', 'company_phone', 'company_email', 'company_whatsapp', 'office_hours', 'social_facebook', 'social_instagram', 'social_linkedin', 'social_twitter']

CONTACT_SUCCESS_MESSAGE = "Pesan Anda telah berhasil dikirim. Kami akan segera menghubungi Anda."


# --- Public pages -----------------------------------------------------------

def home(request):
    context = {
        'business_units': BusinessUnit.objects.featured(limit=6),
        'community_clubs': CommunityClub.objects.featured(limit=8),
        'global_vars': GlobalVariable.public_values(HOME_VARIABLES),
    }
    return render(request, 'core/home.html', context)


def about_page(request):
    context = {
        'global_vars': GlobalVariable.public_values(ABOUT_VARIABLES),
        'business_units_count': BusinessUnit.objects.active().count(),
        'community_clubs_count': CommunityClub.objects.active().count(),
    }
    return render(request, 'core/about.html', context)


def contact_page(request):
    """Shows the contact form and stores submitted messages."""
    if request.method == 'POST':
        form = ContactMessageForm(request.POST)
        if form.is_valid():
            contact_message = form.save(commit=False)
            contact_message.ip_address = client_ip(request)
            contact_message.user_agent = request.META.get('HTTP_USER_AGENT', '')
            contact_message.save()
            logger.info(f"Contact message {contact_message.pk} received from {contact_message.email}")
            messages.success(request, CONTACT_SUCCESS_MESSAGE)
            return redirect('core:contact')
        logger.info(f"Contact form rejected: {form.errors.as_json()}")
    else:
        form = ContactMessageForm()

    context = {
        'form': form,
        'global_vars': GlobalVariable.public_values(CONTACT_VARIABLES),
    }
    return render(request, 'core/contact.html', context)


def navigation_data(request):
    return JsonResponse(get_navigation_data())


@require_POST
@staff_member_required
def navigation_cache_clear(request):
    clear_navigation_cache()
    return JsonResponse({'message': 'Navigation cache cleared successfully'})


# --- Staff ------------------------------------------------------------------

class StaffDashboardView(StaffRequiredMixin, TemplateView):
    template_name = 'core/staff/dashboard.html'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['stats'] = {
            'business_units': BusinessUnit.objects.count(),
            'active_business_units': BusinessUnit.objects.active().count(),
            'community_clubs': CommunityClub.objects.count(),
            'active_community_clubs': CommunityClub.objects.active().count(),
            'unread_messages': ContactMessage.objects.unread().count(),
        }
        context['recent_messages'] = ContactMessage.objects.all()[:5]
        return context


class ContactMessageListView(StaffRequiredMixin, FilteredListMixin, ListView):
    model = ContactMessage
    template_name = 'core/staff/contact_message_list.html'
    context_object_name = 'contact_messages'
    sort_fields = ('created_at', 'name', 'subject', 'status')

    def filter_queryset(self, queryset):
        queryset = super().filter_queryset(queryset)
        status = self.request.GET.get('status')
        if status in dict(ContactMessage.STATUS_CHOICES):
            queryset = queryset.filter(status=status)
        return queryset

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['stats'] = ContactMessage.stats()
        context['status_choices'] = ContactMessage.STATUS_CHOICES
        context['bulk_actions'] = ContactMessageBulkForm.ACTION_CHOICES
        return context


class ContactMessageDetailView(StaffRequiredMixin, DetailView):
    model = ContactMessage
    template_name = 'core/staff/contact_message_detail.html'
    context_object_name = 'contact_message'

    def get_object(self, queryset=None):
        contact_message = super().get_object(queryset)
        if contact_message.is_unread:
            contact_message.mark_as_read()
        return contact_message

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['status_form'] = ContactMessageStatusForm(initial={'status': self.object.status})
        return context


class ContactMessageStatusView(StaffRequiredMixin, View):

    def post(self, request, pk):
        contact_message = get_object_or_404(ContactMessage, pk=pk)
        form = ContactMessageStatusForm(request.POST)
        if form.is_valid():
            contact_message.set_status(form.cleaned_data['status'])
            logger.info(f"Contact message {pk} set to {contact_message.status} by {request.user}")
            messages.success(request, "Status pesan berhasil diperbarui.")
        else:
            messages.error(request, "Status tidak valid.")
        return redirect('core:staff_contact_message_detail', pk=pk)


class ContactMessageDeleteView(StaffRequiredMixin, SuccessMessageDeleteMixin, DeleteView):
    model = ContactMessage
    template_name = 'staff/confirm_delete.html'
    success_url = reverse_lazy('core:staff_contact_message_list')
    success_message = "Pesan berhasil dihapus."


class ContactMessageBulkActionView(StaffRequiredMixin, View):

    def post(self, request):
        form = ContactMessageBulkForm(request.POST)
        if not form.is_valid():
            messages.error(request, "Pilih pesan dan aksi yang valid.")
            return redirect('core:staff_contact_message_list')

        selected = form.cleaned_data['ids']
        action = form.cleaned_data['action']
        count = len(selected)

        if action == 'delete':
            ContactMessage.objects.filter(pk__in=[m.pk for m in selected]).delete()
            messages.success(request, f"{count} pesan berhasil dihapus.")
        else:
            for contact_message in selected:
                if action == 'mark_read':
                    contact_message.mark_as_read()
                else:
                    contact_message.mark_as_archived()
            label = "ditandai sudah dibaca" if action == 'mark_read' else "diarsipkan"
            messages.success(request, f"{count} pesan berhasil {label}.")

        logger.info(f"Bulk '{action}' on {count} contact messages by {request.user}")
        return redirect('core:staff_contact_message_list')


class GlobalVariableListView(StaffRequiredMixin, ListView):
    model = GlobalVariable
    template_name = 'core/staff/global_variable_list.html'
    context_object_name = 'variables'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['grouped_variables'] = GlobalVariable.grouped_by_category()
        return context


class GlobalVariableDetailView(StaffRequiredMixin, DetailView):
    model = GlobalVariable
    template_name = 'core/staff/global_variable_detail.html'
    context_object_name = 'variable'


class GlobalVariableCreateView(StaffRequiredMixin, CreateView):
    model = GlobalVariable
    form_class = GlobalVariableForm
    template_name = 'core/staff/global_variable_form.html'
    success_url = reverse_lazy('core:staff_global_variable_list')

    def form_valid(self, form):
        response = super().form_valid(form)
        logger.info(f"Global variable '{self.object.key}' created by {self.request.user}")
        messages.success(self.request, "Variabel global berhasil ditambahkan.")
        return response


class GlobalVariableUpdateView(StaffRequiredMixin, UpdateView):
    model = GlobalVariable
    form_class = GlobalVariableForm
    template_name = 'core/staff/global_variable_form.html'
    success_url = reverse_lazy('core:staff_global_variable_list')

    def form_valid(self, form):
        response = super().form_valid(form)
        logger.info(f"Global variable '{self.object.key}' updated by {self.request.user}")
        messages.success(self.request, "Variabel global berhasil diperbarui.")
        return response


class GlobalVariableDeleteView(StaffRequiredMixin, SuccessMessageDeleteMixin, DeleteView):
    model = GlobalVariable
    template_name = 'staff/confirm_delete.html'
    success_url = reverse_lazy('core:staff_global_variable_list')
    success_message = "Variabel global berhasil dihapus."

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['cancel_url'] = reverse('core:staff_global_variable_list')
        return context
