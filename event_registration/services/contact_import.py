# event_registration/services/contact_import.py
"""
Bulk contact import from CSV or Excel files.

Every row is normalized independently. Invalid rows and rows whose email
already exists in the event are skipped, any other database error is
collected per row, and the import always runs to the end of the file.
"""
import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Any, Mapping, Optional

import pandas as pd
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from event_registration.crud import contact as crud_contact
from event_registration.schemas.contact import ImportSummary
from event_registration.utils.codes import generate_import_batch_id

logger = logging.getLogger(__name__)

MAX_REPORTED_ERRORS = 10

CSV_EXTENSIONS = (".csv",)
EXCEL_EXTENSIONS = (".xlsx",)

# Common header spellings tried, in order, for each target field. A caller
# mapping for the field takes the place of the first entry.
FIELD_HEADERS: dict[str, tuple[str, ...]] = {
    "first_name": ("firstName", "First Name", "first_name"),
    "last_name": ("lastName", "Last Name", "last_name"),
    "email": ("email", "Email"),
    "phone": ("phone", "Phone"),
    "organization": ("organization", "Organization", "Company"),
    "designation": ("designation", "Designation", "Title"),
    "category": ("category", "Category", "Type"),
}

# Keys accepted in a caller mapping, in the camelCase form the dashboard sends
MAPPING_KEYS = {
    "first_name": "firstName",
    "last_name": "lastName",
    "email": "email",
    "phone": "phone",
    "organization": "organization",
    "designation": "designation",
    "category": "category",
}


class UnsupportedFileError(ValueError):
    pass


@dataclass
class NormalizedRow:
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    organization: str = ""
    designation: str = ""
    category: str = ""

    @property
    def is_valid(self) -> bool:
        return bool(self.email and self.first_name)

    def to_contact_fields(self) -> dict:
        """Optional fields are stored as NULL when blank."""
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "phone": self.phone or None,
            "organization": self.organization or None,
            "designation": self.designation or None,
            "category": self.category or None,
        }


def _cell(row: Mapping[str, Any], key: Optional[str]) -> str:
    if not key:
        return ""
    value = row.get(key)
    if value is None:
        return ""
    return str(value).strip()


def _resolve(row: Mapping[str, Any], field: str, mapping: Mapping[str, str]) -> str:
    headers = list(FIELD_HEADERS[field])
    mapped = mapping.get(MAPPING_KEYS[field]) or mapping.get(field)
    if mapped and isinstance(mapped, str):
        headers[0] = mapped
    for header in headers:
        value = _cell(row, header)
        if value:
            return value
    return ""


def normalize_row(
    row: Mapping[str, Any],
    mapping: Optional[Mapping[str, str]] = None,
    default_category: Optional[str] = None,
) -> NormalizedRow:
    """
    Turns one parsed spreadsheet row into a candidate contact.

    Never raises: a row without an email or first name comes back with
    `is_valid` false and is for the caller to skip.
    """
    mapping = mapping or {}
    normalized = NormalizedRow(
        **{field: _resolve(row, field, mapping) for field in FIELD_HEADERS}
    )
    normalized.email = normalized.email.lower()
    if default_category and default_category.strip():
        normalized.category = default_category.strip()
    return normalized


def parse_tabular_file(filename: str, content: bytes) -> list[dict[str, str]]:
    """
    Reads a CSV file or the first sheet of an Excel workbook into
    string-keyed rows. All cells are read as strings, blank cells as "".
    """
    lowered = (filename or "").lower()
    if lowered.endswith(CSV_EXTENSIONS):
        df = pd.read_csv(BytesIO(content), dtype=str, keep_default_na=False)
    elif lowered.endswith(EXCEL_EXTENSIONS):
        df = pd.read_excel(
            BytesIO(content), sheet_name=0, dtype=str, keep_default_na=False
        )
    else:
        raise UnsupportedFileError(
            "Unsupported file type. Upload a .csv or .xlsx file"
        )

    df = df.fillna("")
    df.columns = [str(column).strip() for column in df.columns]
    return df.to_dict(orient="records")


def import_contacts(
    db: Session,
    *,
    event_id: str,
    rows: list[Mapping[str, Any]],
    mapping: Optional[Mapping[str, str]] = None,
    default_category: Optional[str] = None,
) -> ImportSummary:
    import_batch = generate_import_batch_id()
    created = 0
    skipped = 0
    errors: list[str] = []

    for row in rows:
        normalized = normalize_row(row, mapping, default_category)
        if not normalized.is_valid:
            skipped += 1
            continue

        try:
            crud_contact.create_imported(
                db,
                event_id=event_id,
                fields=normalized.to_contact_fields(),
                import_batch=import_batch,
                source_row={str(k): v for k, v in row.items()},
            )
            created += 1
        except IntegrityError:
            # Duplicate email within the event
            db.rollback()
            skipped += 1
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Import {import_batch}: failed to store {normalized.email}: {e}")
            errors.append(f"Row with email {normalized.email}: {e}")

    logger.info(
        f"Import {import_batch} for event {event_id}: "
        f"{created} created, {skipped} skipped, {len(errors)} errors"
    )
    return ImportSummary(
        import_batch=import_batch,
        total=len(rows),
        created=created,
        skipped=skipped,
        error_count=len(errors),
        errors=errors[:MAX_REPORTED_ERRORS],
    )
