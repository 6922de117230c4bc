"""
Editors for lists of structured records kept in JSON columns.

A record is a plain dict. Each list is edited through a formset whose forms know
how to turn a stored record into flat initial data and back again. Rows can be
added, deleted and reordered; the browser writes drag-and-drop positions into
the formset ORDER fields, and the same moves can be applied server side.
"""
import datetime
import logging
import uuid

from django import forms
from django.forms.formsets import (
    BaseFormSet, formset_factory, DELETION_FIELD_NAME, ORDERING_FIELD_NAME, TOTAL_FORM_COUNT,
)

logger = logging.getLogger(__name__)

EDITOR_ACTION_FIELD = 'editor_action'


def new_record_id(prefix):
    return f'{prefix}_{uuid.uuid4().hex[:9]}'


def move_record(records, from_index, to_index):
    """Returns a new list with the item at ``from_index`` moved to ``to_index``."""
    size = len(records)
    for index in (from_index, to_index):
        if not 0 <= index < size:
            raise IndexError(f"Record index {index} is out of range for {size} records.")

    moved = list(records)
    item = moved.pop(from_index)
    moved.insert(to_index, item)
    return moved


class StringListField(forms.Field):
    """A list of strings edited as text: one item per line, or comma separated."""
    widget = forms.Textarea(attrs={'rows': 3})

    def __init__(self, *, separator='\n', **kwargs):
        self.separator = separator
        kwargs.setdefault('required', False)
        super().__init__(**kwargs)

    def to_python(self, value):
        if value in self.empty_values:
            return []
        items = value if isinstance(value, (list, tuple)) else str(value).split(self.separator)
        return [str(item).strip() for item in items if str(item).strip()]

    def prepare_value(self, value):
        if isinstance(value, (list, tuple)):
            joiner = '\n' if self.separator == '\n' else f'{self.separator} '
            return joiner.join(str(item) for item in value)
        return value

    def has_changed(self, initial, data):
        if self.disabled:
            return False
        return self.to_python(initial) != self.to_python(data)


class RecordForm(forms.Form):
    """
    One record of a JSON list.

    Subclasses declare the record's fields; ``initial_from_record`` and
    ``to_record`` handle the fields that are stored in a different shape.
    """
    id_prefix = 'record'

    id = forms.CharField(required=False, widget=forms.HiddenInput)

    @classmethod
    def record_field_names(cls):
        return [name for name in cls.base_fields if name != 'id']

    @classmethod
    def normalize_records(cls, records):
        """Stored list as dicts; subclasses upgrade older shapes here."""
        if not isinstance(records, list):
            return []
        return [record for record in records if isinstance(record, dict)]

    def has_changed(self):
        # A blank row that was only renumbered or ticked for deletion is still blank.
        return any(name not in (ORDERING_FIELD_NAME, DELETION_FIELD_NAME) for name in self.changed_data)

    @classmethod
    def initial_from_record(cls, record):
        initial = {'id': str(record.get('id') or '')}
        for name in cls.record_field_names():
            value = record.get(name)
            initial[name] = '' if value is None else value
        return initial

    def to_record(self):
        data = self.cleaned_data
        record = {'id': data.get('id') or new_record_id(self.id_prefix)}
        for name in self.record_field_names():
            value = data.get(name)
            if isinstance(value, datetime.date):
                value = value.isoformat()
            record[name] = value
        return record


class RecordFormSet(BaseFormSet):

    def __init__(self, *args, records=None, **kwargs):
        if records is not None and kwargs.get('initial') is None:
            kwargs['initial'] = [self.form.initial_from_record(record) for record in self.form.normalize_records(records)]
        super().__init__(*args, **kwargs)

    @property
    def display_forms(self):
        """Forms in their current on-screen order (by ORDER value, blanks last)."""
        def position(item):
            index, form = item
            try:
                return (0, int(form[ORDERING_FIELD_NAME].value()), index)
            except (TypeError, ValueError):
                return (1, 0, index)
        return [form for _, form in sorted(enumerate(self.forms), key=position)]

    def to_records(self):
        """The submitted records in order, without deleted or untouched blank rows."""
        return [form.to_record() for form in self.ordered_forms]


def record_formset(form_class, max_num=20):
    return formset_factory(
        form_class,
        formset=RecordFormSet,
        extra=0,
        can_order=True,
        can_delete=True,
        max_num=max_num,
        validate_max=True,
    )


def _order_key(data, prefix, index):
    try:
        return (0, int(data.get(f'{prefix}-{index}-{ORDERING_FIELD_NAME}')), index)
    except (TypeError, ValueError):
        return (1, 0, index)


class RecordEditor:
    """
    A model form plus one record formset per JSON list it edits.

    ``sections`` is a sequence of ``(field name, label, formset class)``.
    """
    form_class = None
    sections = ()

    def __init__(self, data=None, instance=None, initial=None):
        self.data = data
        self.instance = instance
        self.show_errors = False
        self.form = self.form_class(data, instance=instance, initial=initial)
        self.formsets = {
            name: formset_class(data, prefix=name, records=self.load_records(name))
            for name, _, formset_class in self.sections
        }

    @property
    def section_list(self):
        return [(name, label, self.formsets[name]) for name, label, _ in self.sections]

    def load_records(self, name):
        if self.instance is None or self.instance.pk is None:
            return []
        return getattr(self.instance, name) or []

    def store_records(self, obj, name, records):
        setattr(obj, name, records)

    def is_valid(self):
        self.show_errors = True
        valid = self.form.is_valid()
        for formset in self.formsets.values():
            valid = formset.is_valid() and valid
        return valid

    @property
    def error_summary(self):
        summary = dict(self.form.errors)
        for name, formset in self.formsets.items():
            if formset.total_error_count():
                summary[name] = [errors for errors in formset.errors if errors] + list(formset.non_form_errors())
        return summary

    def save(self):
        obj = self.form.save(commit=False)
        for name, formset in self.formsets.items():
            self.store_records(obj, name, formset.to_records())
        obj.save()
        self.form.save_m2m()
        return obj

    @classmethod
    def from_action(cls, data, action, instance=None):
        """
        Applies an editor action to the submitted data and rebuilds the editor.

        ``add:<section>`` appends a blank row and ``move:<section>:<from>:<to>``
        moves the row at one on-screen position to another. Unknown sections or
        malformed actions raise ``ValueError``; bad positions raise ``IndexError``.
        """
        formset_classes = {name: formset_class for name, _, formset_class in cls.sections}
        kind, _, argument = action.partition(':')
        data = data.copy()

        if kind == 'add':
            if argument not in formset_classes:
                raise ValueError(f"Unknown record section '{argument}'.")
            total_key = f'{argument}-{TOTAL_FORM_COUNT}'
            total = int(data.get(total_key) or 0)
            if total < formset_classes[argument].max_num:
                data[total_key] = str(total + 1)
        elif kind == 'move':
            try:
                name, from_index, to_index = argument.split(':')
                from_index, to_index = int(from_index), int(to_index)
            except ValueError:
                raise ValueError(f"Malformed move action '{action}'.")
            if name not in formset_classes:
                raise ValueError(f"Unknown record section '{name}'.")
            total = int(data.get(f'{name}-{TOTAL_FORM_COUNT}') or 0)
            positions = sorted(range(total), key=lambda index: _order_key(data, name, index))
            for position, index in enumerate(move_record(positions, from_index, to_index), start=1):
                data[f'{name}-{index}-{ORDERING_FIELD_NAME}'] = str(position)
        else:
            raise ValueError(f"Unknown editor action '{action}'.")

        return cls(data, instance=instance)
