import logging

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin, UserPassesTestMixin
from django.shortcuts import redirect, render
from django.views import View

from .records import EDITOR_ACTION_FIELD

logger = logging.getLogger(__name__)


class StaffRequiredMixin(LoginRequiredMixin, UserPassesTestMixin):
    """Mixin to ensure the user is a logged-in staff member."""
    def test_func(self):
        return self.request.user.is_staff


class SuccessMessageDeleteMixin:
    """Flashes ``success_message`` and logs after a DeleteView removes its object."""
    success_message = ''

    def form_valid(self, form):
        label = str(self.object)
        response = super().form_valid(form)
        logger.info(f"{self.object.__class__.__name__} '{label}' deleted by {self.request.user}.")
        messages.success(self.request, self.success_message)
        return response


class FilteredListMixin:
    """
    Search, sort and ``per_page`` pagination for staff index pages.

    ``sort_fields`` whitelists the sortable columns; anything else falls back to
    ``default_sort``.
    """
    sort_fields = ()
    default_sort = '-created_at'
    paginate_by = 15
    max_per_page = 100

    def get_sort(self):
        sort_by = self.request.GET.get('sort_by', '')
        direction = self.request.GET.get('sort_direction', 'desc')
        if sort_by not in self.sort_fields:
            return self.default_sort
        return sort_by if direction == 'asc' else f'-{sort_by}'

    def get_paginate_by(self, queryset):
        try:
            per_page = int(self.request.GET.get('per_page', self.paginate_by))
        except (TypeError, ValueError):
            return self.paginate_by
        return min(max(per_page, 1), self.max_per_page)

    def filter_queryset(self, queryset):
        search = self.request.GET.get('search', '').strip()
        if search:
            queryset = queryset.search(search)
        return queryset

    def get_queryset(self):
        queryset = self.filter_queryset(super().get_queryset())
        return queryset.order_by(self.get_sort())

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        query = self.request.GET.copy()
        query.pop('page', None)
        context['filters'] = self.request.GET
        context['querystring'] = query.urlencode()
        return context


class RecordEditorView(StaffRequiredMixin, View):
    """
    Create/update view for a ``RecordEditor``.

    Posting ``editor_action`` (add a row, move a row) re-renders the editor with
    the change applied and nothing saved.
    """
    editor_class = None
    template_name = None
    success_message = ''

    def get_object(self):
        return None

    def get_initial(self):
        return None

    def get_success_url(self, obj):
        raise NotImplementedError

    def get_context_data(self, **kwargs):
        kwargs.setdefault('object', self.object)
        return kwargs

    def render_editor(self, editor):
        return render(self.request, self.template_name, self.get_context_data(editor=editor, form=editor.form))

    def get(self, request, *args, **kwargs):
        self.object = self.get_object()
        return self.render_editor(self.editor_class(instance=self.object, initial=self.get_initial()))

    def post(self, request, *args, **kwargs):
        self.object = self.get_object()
        action = request.POST.get(EDITOR_ACTION_FIELD)

        if action:
            try:
                editor = self.editor_class.from_action(request.POST, action, instance=self.object)
            except (ValueError, IndexError) as e:
                logger.warning(f"Rejected editor action '{action}': {e}")
                messages.error(request, "Aksi editor tidak valid.")
                editor = self.editor_class(request.POST, instance=self.object)
            return self.render_editor(editor)

        editor = self.editor_class(request.POST, instance=self.object)
        if not editor.is_valid():
            logger.info(f"{self.editor_class.__name__} rejected a submission: {editor.error_summary}")
            return self.render_editor(editor)

        obj = editor.save()
        logger.info(f"{obj.__class__.__name__} '{obj}' saved by {request.user}.")
        messages.success(request, self.success_message)
        return redirect(self.get_success_url(obj))
