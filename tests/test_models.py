"""Tests for the wallet tree model and entry templates."""

import dataclasses

import pytest

from safe_wallet.wallet.errors import NotFound
from safe_wallet.wallet.models import (
    Entry,
    EntryField,
    FieldType,
    Group,
    Path,
    Wallet,
)
from safe_wallet.wallet.templates import (
    ENTRY_TEMPLATES,
    get_template,
    template_catalog,
)


class TestPath:

    def test_root(self):
        root = Path.root()
        assert root.is_root
        assert not root.targets_entry
        assert root.group_ids == ()

    def test_list_group_ids_become_tuple(self):
        path = Path(["a", "b"])
        assert path.group_ids == ("a", "b")
        assert hash(path) == hash(Path(("a", "b")))

    def test_parent_drops_last_group_and_entry(self):
        assert Path(("a", "b"), "e1").parent() == Path(("a",))

    def test_parent_of_root_is_root(self):
        assert Path.root().parent() == Path.root()

    def test_child_and_to_entry(self):
        path = Path.root().child("a").child("b").to_entry("e1")
        assert path == Path(("a", "b"), "e1")
        assert path.targets_entry


class TestEntryField:

    def test_secret_types(self):
        assert EntryField("Password", "x", FieldType.PASSWORD).is_secret
        assert EntryField("PIN", "1", FieldType.PIN).is_secret
        assert not EntryField("User", "x", FieldType.GENERAL).is_secret

    @pytest.mark.parametrize("value,ok", [
        ("1234", True),
        ("", True),
        ("12a4", False),
        ("12 34", False),
        ("-1", False),
        ("١٢٣", False),  # non-ASCII digits
    ])
    def test_pin_must_be_digits(self, value, ok):
        assert EntryField("PIN", value, FieldType.PIN).is_valid() is ok

    def test_general_field_accepts_anything(self):
        assert EntryField("Notes", "anything at all", FieldType.GENERAL).is_valid()

    def test_to_dict_uses_type_string(self):
        d = EntryField("PIN", "42", FieldType.PIN).to_dict()
        assert d == {"name": "PIN", "value": "42", "type": "pin"}


class TestToDict:

    def test_wallet_document_shape(self):
        wallet = Wallet(version=1, groups=[
            Group(id="g1", name="Personal", groups=[
                Group(id="g2", name="Banks"),
            ], entries=[
                Entry(id="e1", title="Bank", fields=[
                    EntryField("Password", "pw", FieldType.PASSWORD),
                ]),
            ]),
        ])
        assert wallet.to_dict() == {
            "version": 1,
            "groups": [{
                "id": "g1",
                "name": "Personal",
                "groups": [{"id": "g2", "name": "Banks", "groups": [], "entries": []}],
                "entries": [{
                    "id": "e1",
                    "title": "Bank",
                    "fields": [{"name": "Password", "value": "pw", "type": "password"}],
                }],
            }],
        }


class TestTemplates:

    def test_catalog_order(self):
        assert [t.name for t in ENTRY_TEMPLATES] == [
            "Credit Card", "Password", "Note", "Bank Account",
        ]

    def test_new_entry_has_template_fields_in_order(self):
        entry = get_template("Password").new_entry("Gmail")
        assert entry.title == "Gmail"
        assert entry.id == ""
        assert [(f.name, f.type) for f in entry.fields] == [
            ("Username", FieldType.GENERAL),
            ("Password", FieldType.PASSWORD),
            ("URL", FieldType.GENERAL),
            ("Notes", FieldType.GENERAL),
        ]
        assert all(f.value == "" for f in entry.fields)

    def test_new_entries_do_not_share_fields(self):
        template = get_template("Note")
        a = template.new_entry("a")
        b = template.new_entry("b")
        a.fields[0].value = "changed"
        assert b.fields[0].value == ""

    def test_unknown_template(self):
        with pytest.raises(NotFound):
            get_template("Passport")

    def test_template_catalog_rows(self):
        rows = template_catalog()
        assert rows[0] == ("Credit Card", "Cardholder Name", FieldType.GENERAL)
        assert ("Credit Card", "CVV", FieldType.PIN) in rows
        assert rows[-1] == ("Bank Account", "PIN", FieldType.PIN)
        assert len(rows) == sum(len(t.fields) for t in ENTRY_TEMPLATES)

    def test_templates_are_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            ENTRY_TEMPLATES[0].name = "Debit Card"
