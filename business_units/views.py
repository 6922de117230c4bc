import logging

from django.http import Http404
from django.shortcuts import get_object_or_404, render
from django.urls import reverse, reverse_lazy
from django.views.generic import DeleteView, DetailView, ListView

from core.mixins import FilteredListMixin, RecordEditorView, StaffRequiredMixin, SuccessMessageDeleteMixin
from .forms import BusinessUnitEditor, BusinessUnitServiceEditor
from .models import BusinessUnit, BusinessUnitService
from .presenters import DETAIL_TABS, detail_context

logger = logging.getLogger(__name__)


# --- Public pages -----------------------------------------------------------

def business_unit_list(request):
    business_units = BusinessUnit.objects.active().ordered()
    search = request.GET.get('q', '').strip()
    if search:
        business_units = business_units.search(search)
    return render(request, 'business_units/list.html', {'business_units': business_units, 'search': search})


def render_tab(request, business_unit, context, tab):
    """One tab panel plus the out-of-band tab nav, for HTMX swaps."""
    context.update({
        'active_tab': tab,
        'tab_template': f'business_units/partials/tab_{tab}.html',
        'tab_url_name': 'business_units:tab',
        'slug': business_unit.slug,
    })
    return render(request, 'partials/tab_swap.html', context)


def business_unit_detail(request, slug):
    business_unit = get_object_or_404(BusinessUnit, slug=slug, is_active=True)
    active_tab = request.GET.get('tab', 'overview')
    if active_tab not in DETAIL_TABS:
        active_tab = 'overview'

    context = detail_context(business_unit)

    # A history restore needs the whole page, not a panel
    if request.htmx and not request.htmx.history_restore_request:
        return render_tab(request, business_unit, context, active_tab)

    context['active_tab'] = active_tab
    context['related_units'] = business_unit.related_units()
    return render(request, 'business_units/detail.html', context)


def business_unit_tab(request, slug, tab):
    """
    HTMX view to render one tab panel of a business unit page.
    """
    if tab not in DETAIL_TABS:
        raise Http404("Unknown tab")
    business_unit = get_object_or_404(BusinessUnit, slug=slug, is_active=True)
    return render_tab(request, business_unit, detail_context(business_unit), tab)


# --- Staff: business units --------------------------------------------------

class BusinessUnitStaffListView(StaffRequiredMixin, ListView):
    model = BusinessUnit
    template_name = 'business_units/staff/list.html'
    context_object_name = 'business_units'

    def get_queryset(self):
        return BusinessUnit.objects.ordered()


class BusinessUnitStaffDetailView(StaffRequiredMixin, DetailView):
    model = BusinessUnit
    template_name = 'business_units/staff/detail.html'
    context_object_name = 'business_unit'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update(detail_context(self.object))
        return context


class BusinessUnitCreateView(RecordEditorView):
    editor_class = BusinessUnitEditor
    template_name = 'business_units/staff/form.html'
    success_message = "Unit bisnis berhasil ditambahkan."

    def get_success_url(self, obj):
        return reverse('business_units:staff_list')


class BusinessUnitUpdateView(RecordEditorView):
    editor_class = BusinessUnitEditor
    template_name = 'business_units/staff/form.html'
    success_message = "Unit bisnis berhasil diperbarui."

    def get_object(self):
        return get_object_or_404(BusinessUnit, slug=self.kwargs['slug'])

    def get_success_url(self, obj):
        return reverse('business_units:staff_list')


class BusinessUnitDeleteView(StaffRequiredMixin, SuccessMessageDeleteMixin, DeleteView):
    model = BusinessUnit
    template_name = 'staff/confirm_delete.html'
    success_url = reverse_lazy('business_units:staff_list')
    success_message = "Unit bisnis berhasil dihapus."


# --- Staff: business unit services ------------------------------------------

class BusinessUnitServiceListView(StaffRequiredMixin, FilteredListMixin, ListView):
    model = BusinessUnitService
    template_name = 'business_units/staff/service_list.html'
    context_object_name = 'services'
    sort_fields = ('title', 'price_range', 'duration', 'created_at', 'updated_at')

    def get_queryset(self):
        return super().get_queryset().select_related('business_unit')

    def filter_queryset(self, queryset):
        queryset = super().filter_queryset(queryset)
        business_unit = self.request.GET.get('business_unit')
        if business_unit and business_unit.isdigit():
            queryset = queryset.filter(business_unit_id=business_unit)
        return queryset

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['business_units'] = BusinessUnit.objects.active().ordered()
        context['sort_fields'] = self.sort_fields
        return context


class BusinessUnitServiceDetailView(StaffRequiredMixin, DetailView):
    model = BusinessUnitService
    template_name = 'business_units/staff/service_detail.html'
    context_object_name = 'service'


class BusinessUnitServiceCreateView(RecordEditorView):
    editor_class = BusinessUnitServiceEditor
    template_name = 'business_units/staff/service_form.html'
    success_message = "Layanan berhasil ditambahkan."

    def get_initial(self):
        business_unit = self.request.GET.get('business_unit')
        if business_unit and business_unit.isdigit():
            return {'business_unit': int(business_unit)}
        return None

    def get_success_url(self, obj):
        return reverse('business_units:staff_service_list')


class BusinessUnitServiceUpdateView(RecordEditorView):
    editor_class = BusinessUnitServiceEditor
    template_name = 'business_units/staff/service_form.html'
    success_message = "Layanan berhasil diperbarui."

    def get_object(self):
        return get_object_or_404(BusinessUnitService, pk=self.kwargs['pk'])

    def get_success_url(self, obj):
        return reverse('business_units:staff_service_list')


class BusinessUnitServiceDeleteView(StaffRequiredMixin, SuccessMessageDeleteMixin, DeleteView):
    model = BusinessUnitService
    template_name = 'staff/confirm_delete.html'
    success_url = reverse_lazy('business_units:staff_service_list')
    success_message = "Layanan berhasil dihapus."
