from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from tests.utils.email import FakeEmailTransport
from tests.utils.event import create_test_contact, create_test_event, register_test_contact


def test_badge_template_defaults_and_upsert(client: TestClient, db: Session) -> None:
    event = create_test_event(db)
    url = f"/api/v1/events/{event.id}/badges/template"

    assert client.get(url).json() is None

    response = client.put(url, json={"name": "Conference Badge", "design_json": {"theme": "dark"}})
    assert response.status_code == 200
    content = response.json()
    assert content["name"] == "Conference Badge"
    assert (content["width"], content["height"]) == (400, 600)

    response = client.put(url, json={"width": 300, "height": 500})
    assert response.json()["name"] == "Conference Badge"
    assert response.json()["design_json"] == {"theme": "dark"}
    assert response.json()["width"] == 300


def test_generate_and_send_badges(
    client: TestClient, db: Session, email_transport: FakeEmailTransport
) -> None:
    event = create_test_event(db)
    register_test_contact(db, create_test_contact(db, event.id, "ana@example.com"))
    register_test_contact(db, create_test_contact(db, event.id, "ben@example.com"))
    base = f"/api/v1/events/{event.id}/badges"

    generated = client.post(f"{base}/generate")
    assert generated.status_code == 200
    assert generated.json() == {"generated": 2, "failed": 0, "total": 2}

    sent = client.post(f"{base}/send")
    assert sent.json() == {"sent": 2, "failed": 0, "total": 2}
    assert len(email_transport.sent) == 2

    registrations = client.get(f"/api/v1/events/{event.id}/registrations").json()
    assert all(r["badge_generated"] for r in registrations)
    assert all(r["badge"] is not None for r in registrations)


def test_generate_badges_for_selected_registrations(client: TestClient, db: Session) -> None:
    event = create_test_event(db)
    ana = register_test_contact(db, create_test_contact(db, event.id, "ana@example.com"))
    register_test_contact(db, create_test_contact(db, event.id, "ben@example.com"))

    response = client.post(
        f"/api/v1/events/{event.id}/badges/generate", json={"registration_ids": [ana.id]}
    )

    assert response.json() == {"generated": 1, "failed": 0, "total": 1}


def test_send_badges_counts_failures(client: TestClient, db: Session, email_transport: FakeEmailTransport) -> None:
    event = create_test_event(db)
    register_test_contact(db, create_test_contact(db, event.id, "ana@example.com"))
    register_test_contact(db, create_test_contact(db, event.id, "bounced@example.com"))
    client.post(f"/api/v1/events/{event.id}/badges/generate")
    email_transport.fail_for.add("bounced@example.com")

    response = client.post(f"/api/v1/events/{event.id}/badges/send")

    assert response.json() == {"sent": 1, "failed": 1, "total": 2}
