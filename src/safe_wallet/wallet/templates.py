"""Preset entry templates.

A fixed, read-only catalog used to pre-populate an entry's fields. Defined
once at import time; not persisted.
"""

from dataclasses import dataclass
from typing import List, Tuple

from .errors import NotFound
from .models import Entry, EntryField, FieldType


@dataclass(frozen=True)
class EntryTemplate:
    """Template name plus ordered (field name, field type) pairs."""

    name: str
    fields: Tuple[Tuple[str, FieldType], ...]

    def new_entry(self, title: str) -> Entry:
        """Entry with one empty field per template field, in template order."""
        return Entry(
            title=title,
            fields=[EntryField(name=n, value="", type=t) for n, t in self.fields],
        )


ENTRY_TEMPLATES: Tuple[EntryTemplate, ...] = (
    EntryTemplate(
        name="Credit Card",
        fields=(
            ("Cardholder Name", FieldType.GENERAL),
            ("Card Number", FieldType.GENERAL),
            ("Expiration Date", FieldType.GENERAL),
            ("CVV", FieldType.PIN),
            ("PIN", FieldType.PIN),
        ),
    ),
    EntryTemplate(
        name="Password",
        fields=(
            ("Username", FieldType.GENERAL),
            ("Password", FieldType.PASSWORD),
            ("URL", FieldType.GENERAL),
            ("Notes", FieldType.GENERAL),
        ),
    ),
    EntryTemplate(
        name="Note",
        fields=(
            ("Note", FieldType.GENERAL),
        ),
    ),
    EntryTemplate(
        name="Bank Account",
        fields=(
            ("Bank Name", FieldType.GENERAL),
            ("Account Type", FieldType.GENERAL),
            ("Account Holder Name", FieldType.GENERAL),
            ("Account Number", FieldType.GENERAL),
            ("Password", FieldType.PASSWORD),
            ("PIN", FieldType.PIN),
        ),
    ),
)


def get_template(name: str) -> EntryTemplate:
    for template in ENTRY_TEMPLATES:
        if template.name == name:
            return template
    raise NotFound(f"unknown template: {name}")


def template_catalog() -> List[Tuple[str, str, FieldType]]:
    """Flattened (template name, field name, field type) rows, in catalog order."""
    return [
        (template.name, field_name, field_type)
        for template in ENTRY_TEMPLATES
        for field_name, field_type in template.fields
    ]
