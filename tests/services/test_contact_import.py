from io import BytesIO
from unittest.mock import patch

import pandas as pd
import pytest
from sqlalchemy.exc import OperationalError

from event_registration.models.contact import Contact
from event_registration.services import contact_import
from event_registration.services.contact_import import (
    UnsupportedFileError,
    import_contacts,
    normalize_row,
    parse_tabular_file,
)
from tests.utils.event import create_test_event


# --- Row normalizer ---

def test_normalize_row_uses_common_headers():
    row = {
        "First Name": "  Ana ",
        "Last Name": "Silva",
        "Email": " Ana@Example.COM ",
        "Phone": "+1 555 0100",
        "Company": "Acme",
        "Title": "CTO",
        "Type": "VIP",
    }

    normalized = normalize_row(row)

    assert normalized.first_name == "Ana"
    assert normalized.last_name == "Silva"
    assert normalized.email == "ana@example.com"
    assert normalized.phone == "+1 555 0100"
    assert normalized.organization == "Acme"
    assert normalized.designation == "CTO"
    assert normalized.category == "VIP"
    assert normalized.is_valid


def test_normalize_row_mapping_takes_precedence():
    row = {"E-mail Address": "mapped@example.com", "email": "other@example.com", "Given": "Ana"}

    normalized = normalize_row(row, mapping={"email": "E-mail Address", "firstName": "Given"})

    assert normalized.email == "mapped@example.com"
    assert normalized.first_name == "Ana"


def test_normalize_row_falls_back_when_mapped_column_is_empty():
    row = {"Mail": "", "Email": "fallback@example.com", "firstName": "Ana"}

    normalized = normalize_row(row, mapping={"email": "Mail"})

    assert normalized.email == "fallback@example.com"


def test_normalize_row_default_category_wins():
    row = {"firstName": "Ana", "email": "ana@example.com", "category": "Speaker"}

    normalized = normalize_row(row, default_category="VIP")

    assert normalized.category == "VIP"


@pytest.mark.parametrize(
    "row",
    [
        {"First Name": "Ana", "Email": ""},
        {"First Name": "   ", "Email": "ana@example.com"},
        {"Company": "Acme"},
    ],
)
def test_normalize_row_marks_incomplete_rows_invalid(row):
    assert not normalize_row(row).is_valid


def test_to_contact_fields_stores_blanks_as_null():
    fields = normalize_row({"firstName": "Ana", "email": "ana@example.com"}).to_contact_fields()

    assert fields["last_name"] == ""
    assert fields["phone"] is None
    assert fields["category"] is None


# --- Tabular parser ---

def test_parse_csv_reads_all_cells_as_strings():
    content = b"First Name,Email,Phone\nAna,ana@example.com,00123\nBen,,\n"

    rows = parse_tabular_file("contacts.CSV", content)

    assert rows == [
        {"First Name": "Ana", "Email": "ana@example.com", "Phone": "00123"},
        {"First Name": "Ben", "Email": "", "Phone": ""},
    ]


def test_parse_excel_reads_first_sheet_only():
    buffer = BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        pd.DataFrame([{"First Name": "Ana", "Email": "ana@example.com"}]).to_excel(
            writer, sheet_name="Contacts", index=False
        )
        pd.DataFrame([{"First Name": "Ignored", "Email": "ignored@example.com"}]).to_excel(
            writer, sheet_name="Other", index=False
        )

    rows = parse_tabular_file("contacts.xlsx", buffer.getvalue())

    assert rows == [{"First Name": "Ana", "Email": "ana@example.com"}]


def test_parse_rejects_unknown_extension():
    with pytest.raises(UnsupportedFileError):
        parse_tabular_file("contacts.pdf", b"%PDF")


# --- Bulk importer ---

ROWS = [
    {"First Name": "Ana", "Last Name": "Silva", "Email": "ana@example.com", "Company": "Acme"},
    {"First Name": "Ben", "Last Name": "Okafor", "Email": "", "Company": "Globex"},
    {"First Name": "Chloe", "Last Name": "Martin", "Email": "Chloe@Example.com", "Company": "Initech"},
]


def test_import_contacts_counts_created_and_skipped(db):
    event = create_test_event(db)

    summary = import_contacts(db, event_id=event.id, rows=ROWS)

    assert summary.total == 3
    assert summary.created == 2
    assert summary.skipped == 1
    assert summary.error_count == 0
    assert summary.errors == []

    contacts = db.query(Contact).filter(Contact.event_id == event.id).all()
    assert {c.email for c in contacts} == {"ana@example.com", "chloe@example.com"}
    assert {c.import_batch for c in contacts} == {summary.import_batch}
    ana = next(c for c in contacts if c.email == "ana@example.com")
    assert ana.organization == "Acme"
    assert ana.row_metadata["Company"] == "Acme"


def test_import_contacts_twice_creates_no_duplicates(db):
    event = create_test_event(db)
    valid_rows = [ROWS[0], ROWS[2]]

    first = import_contacts(db, event_id=event.id, rows=valid_rows)
    second = import_contacts(db, event_id=event.id, rows=valid_rows)

    assert (first.created, first.skipped) == (2, 0)
    assert (second.created, second.skipped) == (0, 2)
    assert db.query(Contact).filter(Contact.event_id == event.id).count() == 2


def test_import_contacts_duplicate_within_file_is_skipped(db):
    event = create_test_event(db)
    rows = [ROWS[0], {**ROWS[0], "Email": "ANA@example.com"}]

    summary = import_contacts(db, event_id=event.id, rows=rows)

    assert summary.created == 1
    assert summary.skipped == 1


def test_import_contacts_same_email_in_other_event_is_created(db):
    event = create_test_event(db)
    other = create_test_event(db, name="Other Summit")
    import_contacts(db, event_id=event.id, rows=[ROWS[0]])

    summary = import_contacts(db, event_id=other.id, rows=[ROWS[0]])

    assert summary.created == 1


def test_import_contacts_applies_default_category(db):
    event = create_test_event(db)

    import_contacts(db, event_id=event.id, rows=[ROWS[0]], default_category="Speaker")

    contact = db.query(Contact).filter(Contact.event_id == event.id).one()
    assert contact.category == "Speaker"


def test_import_contacts_store_errors_are_counted_and_capped(db):
    event = create_test_event(db)
    broken_rows = [
        {"First Name": f"Broken{i}", "Email": f"broken{i}@example.com"} for i in range(12)
    ]
    rows = [ROWS[0], *broken_rows, ROWS[2]]
    create_imported = contact_import.crud_contact.create_imported

    def fail_broken_rows(db, **kwargs):
        if kwargs["fields"]["email"].startswith("broken"):
            raise OperationalError("INSERT INTO contacts", {}, Exception("disk I/O error"))
        return create_imported(db, **kwargs)

    with patch.object(contact_import.crud_contact, "create_imported", side_effect=fail_broken_rows):
        summary = import_contacts(db, event_id=event.id, rows=rows)

    assert summary.total == 14
    assert summary.created == 2
    assert summary.skipped == 0
    assert summary.error_count == 12
    assert len(summary.errors) == 10
    assert summary.errors[0].startswith("Row with email broken0@example.com: ")
    assert "disk I/O error" in summary.errors[0]
    emails = {c.email for c in db.query(Contact).filter(Contact.event_id == event.id)}
    assert emails == {"ana@example.com", "chloe@example.com"}


def test_normalize_row_ignores_non_string_mapping_values():
    row = {"Email": "ana@example.com", "First Name": "Ana"}

    normalized = normalize_row(row, mapping={"email": ["Email"], "firstName": 3})

    assert normalized.email == "ana@example.com"
    assert normalized.first_name == "Ana"
