import logging

from django.contrib import messages
from django.http import Http404
from django.shortcuts import get_object_or_404, render
from django.urls import reverse, reverse_lazy
from django.views.generic import CreateView, DeleteView, DetailView, ListView, UpdateView

from core.mixins import FilteredListMixin, RecordEditorView, StaffRequiredMixin, SuccessMessageDeleteMixin
from .forms import CommunityClubActivityForm, CommunityClubEditor
from .models import CommunityClub, CommunityClubActivity
from .presenters import DETAIL_TABS, detail_context

logger = logging.getLogger(__name__)


# --- Public pages -----------------------------------------------------------

def community_club_list(request):
    clubs = CommunityClub.objects.active().ordered()
    club_type = request.GET.get('type', '').strip()
    if club_type:
        clubs = clubs.by_type(club_type)

    grouped = {}
    for club in clubs:
        grouped.setdefault(club.type, []).append(club)

    context = {
        'community_clubs': clubs,
        'grouped_clubs': grouped,
        'club_types': CommunityClub.types(),
        'selected_type': club_type,
    }
    return render(request, 'community_clubs/list.html', context)


def render_tab(request, club, context, tab):
    """One tab panel plus the out-of-band tab nav, for HTMX swaps."""
    context.update({
        'active_tab': tab,
        'tab_template': f'community_clubs/partials/tab_{tab}.html',
        'tab_url_name': 'community_clubs:tab',
        'slug': club.slug,
    })
    return render(request, 'partials/tab_swap.html', context)


def community_club_detail(request, slug):
    club = get_object_or_404(CommunityClub, slug=slug, is_active=True)
    active_tab = request.GET.get('tab', 'overview')
    if active_tab not in DETAIL_TABS:
        active_tab = 'overview'

    context = detail_context(club)

    # A history restore needs the whole page, not a panel
    if request.htmx and not request.htmx.history_restore_request:
        return render_tab(request, club, context, active_tab)

    context['active_tab'] = active_tab
    context['related_clubs'] = club.related_clubs()
    return render(request, 'community_clubs/detail.html', context)


def community_club_tab(request, slug, tab):
    """
    HTMX view to render one tab panel of a community club page.
    """
    if tab not in DETAIL_TABS:
        raise Http404("Unknown tab")
    club = get_object_or_404(CommunityClub, slug=slug, is_active=True)
    return render_tab(request, club, detail_context(club), tab)


# --- Staff: community clubs -------------------------------------------------

class CommunityClubStaffListView(StaffRequiredMixin, ListView):
    model = CommunityClub
    template_name = 'community_clubs/staff/list.html'
    context_object_name = 'community_clubs'

    def get_queryset(self):
        return CommunityClub.objects.ordered()


class CommunityClubStaffDetailView(StaffRequiredMixin, DetailView):
    model = CommunityClub
    template_name = 'community_clubs/staff/detail.html'
    context_object_name = 'club'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update(detail_context(self.object))
        return context


class CommunityClubCreateView(RecordEditorView):
    editor_class = CommunityClubEditor
    template_name = 'community_clubs/staff/form.html'
    success_message = "Komunitas berhasil ditambahkan."

    def get_success_url(self, obj):
        return reverse('community_clubs:staff_list')


class CommunityClubUpdateView(CommunityClubCreateView):
    success_message = "Komunitas berhasil diperbarui."

    def get_object(self):
        return get_object_or_404(CommunityClub, slug=self.kwargs['slug'])


class CommunityClubDeleteView(StaffRequiredMixin, SuccessMessageDeleteMixin, DeleteView):
    model = CommunityClub
    template_name = 'staff/confirm_delete.html'
    success_url = reverse_lazy('community_clubs:staff_list')
    success_message = "Komunitas berhasil dihapus."


# --- Staff: club activities -------------------------------------------------

class CommunityClubActivityListView(StaffRequiredMixin, FilteredListMixin, ListView):
    model = CommunityClubActivity
    template_name = 'community_clubs/staff/activity_list.html'
    context_object_name = 'activities'
    sort_fields = ('title', 'status', 'duration', 'created_at', 'updated_at')

    def get_queryset(self):
        return super().get_queryset().select_related('community_club')

    def filter_queryset(self, queryset):
        queryset = super().filter_queryset(queryset)
        club = self.request.GET.get('community_club')
        if club and club.isdigit():
            queryset = queryset.filter(community_club_id=club)
        status = self.request.GET.get('status')
        if status == 'active':
            queryset = queryset.filter(is_active=True)
        elif status == 'inactive':
            queryset = queryset.filter(is_active=False)
        return queryset

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['community_clubs'] = CommunityClub.objects.active().ordered()
        context['sort_fields'] = self.sort_fields
        return context


class CommunityClubActivityDetailView(StaffRequiredMixin, DetailView):
    model = CommunityClubActivity
    template_name = 'community_clubs/staff/activity_detail.html'
    context_object_name = 'activity'


class ActivityFormMixin(StaffRequiredMixin):
    model = CommunityClubActivity
    form_class = CommunityClubActivityForm
    template_name = 'community_clubs/staff/activity_form.html'
    success_url = reverse_lazy('community_clubs:staff_activity_list')
    success_message = ''

    def form_valid(self, form):
        response = super().form_valid(form)
        logger.info(f"Club activity '{self.object}' saved by {self.request.user}")
        messages.success(self.request, self.success_message)
        return response


class CommunityClubActivityCreateView(ActivityFormMixin, CreateView):
    success_message = "Kegiatan berhasil ditambahkan."

    def get_initial(self):
        initial = super().get_initial()
        club = self.request.GET.get('community_club')
        if club and club.isdigit():
            initial['community_club'] = int(club)
        return initial


class CommunityClubActivityUpdateView(ActivityFormMixin, UpdateView):
    success_message = "Kegiatan berhasil diperbarui."


class CommunityClubActivityDeleteView(StaffRequiredMixin, SuccessMessageDeleteMixin, DeleteView):
    model = CommunityClubActivity
    template_name = 'staff/confirm_delete.html'
    success_url = reverse_lazy('community_clubs:staff_activity_list')
    success_message = "Kegiatan berhasil dihapus."
