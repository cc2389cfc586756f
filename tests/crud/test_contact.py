from unittest.mock import MagicMock

from event_registration.constants.statuses import ContactStatus
from event_registration.crud.crud_contact import CRUDContact
from event_registration.models.contact import Contact
from event_registration.schemas.contact import ContactCreate

# Instantiate the class to test its methods
contact_crud = CRUDContact(Contact)


def test_create_for_event_stores_lowercased_email():
    db_session = MagicMock()
    contact_in = ContactCreate(
        first_name="Ana", last_name="Silva", email="Ana.Silva@Example.com"
    )

    result = contact_crud.create_for_event(db=db_session, obj_in=contact_in, event_id="evt_abc")

    db_session.add.assert_called_once()
    db_session.commit.assert_called_once()
    db_session.refresh.assert_called_once()
    assert result.event_id == "evt_abc"
    assert result.email == "ana.silva@example.com"


def test_create_imported_keeps_source_row_and_batch():
    db_session = MagicMock()
    source_row = {"First Name": "Ana", "Email": "ana@example.com", "Badge Color": "red"}

    result = contact_crud.create_imported(
        db=db_session,
        event_id="evt_abc",
        fields={"first_name": "Ana", "last_name": "", "email": "ana@example.com"},
        import_batch="batch12345",
        source_row=source_row,
    )

    db_session.add.assert_called_once_with(result)
    db_session.commit.assert_called_once()
    assert result.import_batch == "batch12345"
    assert result.row_metadata == source_row
    assert result.status == ContactStatus.IMPORTED.value


def test_mark_status_stores_plain_value():
    db_session = MagicMock()
    contact = Contact(id="con_1", status=ContactStatus.IMPORTED.value)

    contact_crud.mark_status(db=db_session, contact=contact, status=ContactStatus.INVITED)

    assert contact.status == "INVITED"
    db_session.commit.assert_called_once()


def test_remove_missing_contact_returns_none():
    db_session = MagicMock()
    db_session.query.return_value.filter.return_value.first.return_value = None

    assert contact_crud.remove(db=db_session, id="con_missing") is None
    db_session.delete.assert_not_called()
