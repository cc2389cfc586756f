from event_registration.constants.statuses import ContactStatus
from event_registration.services.attendee_query import list_grouped
from tests.utils.event import create_test_contact, create_test_event


def test_list_grouped_by_category(db):
    event = create_test_event(db)
    create_test_contact(db, event.id, "ana@example.com", category="VIP")
    create_test_contact(db, event.id, "ben@example.com", category="Speaker")
    create_test_contact(db, event.id, "carl@example.com")
    create_test_contact(db, event.id, "dana@example.com", category="VIP", status=ContactStatus.INVITED)

    result = list_grouped(db, event_id=event.id)

    assert [(g["category"], g["count"]) for g in result["groups"]] == [
        ("Speaker", 1),
        ("VIP", 2),
        ("Uncategorized", 1),
    ]
    assert result["status_counts"] == {
        "IMPORTED": 3,
        "INVITED": 1,
        "REGISTERED": 0,
        "CANCELLED": 0,
    }
    assert result["total"] == 4


def test_list_grouped_search_is_case_insensitive(db):
    event = create_test_event(db)
    create_test_contact(db, event.id, "ana@example.com", first_name="Ana", organization="Acme Corp")
    create_test_contact(db, event.id, "ben@example.com", first_name="Ben", organization="Globex")

    result = list_grouped(db, event_id=event.id, search="acme")

    assert result["total"] == 1
    assert result["groups"][0]["contacts"][0].email == "ana@example.com"


def test_list_grouped_status_counts_cover_filtered_set(db):
    event = create_test_event(db)
    create_test_contact(db, event.id, "ana@example.com", category="VIP")
    create_test_contact(db, event.id, "ben@example.com", category="Speaker", status=ContactStatus.INVITED)

    result = list_grouped(db, event_id=event.id, category="VIP")

    assert result["total"] == 1
    assert result["status_counts"]["IMPORTED"] == 1
    assert result["status_counts"]["INVITED"] == 0


def test_list_grouped_empty_event(db):
    event = create_test_event(db)

    result = list_grouped(db, event_id=event.id, status="REGISTERED")

    assert result["groups"] == []
    assert result["total"] == 0
