from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from event_registration.models.email_campaign import EmailCampaign
from tests.utils.email import FakeEmailTransport
from tests.utils.event import create_test_contact, create_test_event, create_test_template

CSV_CONTENT = (
    "First Name,Last Name,Email,Company\n"
    "Ana,Silva,ana@example.com,Acme\n"
    "Ben,Okafor,,Globex\n"
    "Chloe,Martin,Chloe@Example.com,Initech\n"
).encode()


def test_import_group_and_invite_end_to_end(
    client: TestClient, email_transport: FakeEmailTransport
) -> None:
    # 1. Create the event
    response = client.post(
        "/api/v1/events",
        json={
            "name": "Tech Conference 2026",
            "venue": "Convention Center",
            "start_date": "2026-06-15T09:00:00",
            "end_date": "2026-06-17T18:00:00",
        },
    )
    assert response.status_code == 201
    event = response.json()
    assert event["slug"] == "tech-conference-2026"
    base = f"/api/v1/events/{event['id']}"

    # 2. Import three rows, one of them without an email
    response = client.post(
        f"{base}/contacts/import",
        files={"file": ("contacts.csv", CSV_CONTENT, "text/csv")},
    )
    assert response.status_code == 200
    summary = response.json()
    assert (summary["total"], summary["created"], summary["skipped"]) == (3, 2, 1)

    # 3. Everyone lands in the Uncategorized group
    response = client.get(f"{base}/attendees")
    assert response.status_code == 200
    attendees = response.json()
    assert len(attendees["groups"]) == 1
    group = attendees["groups"][0]
    assert (group["category"], group["count"]) == ("Uncategorized", 2)
    assert attendees["status_counts"]["IMPORTED"] == 2
    contact_ids = [c["id"] for c in group["contacts"]]

    # 4. Send an invitation to both
    response = client.post(
        f"{base}/email-templates",
        json={
            "name": "Invitation",
            "type": "INVITATION",
            "subject": "Join us at {{eventName}}",
            "body_html": "<p>Hi {{firstName}}, register at {{registrationLink}}</p>",
        },
    )
    assert response.status_code == 201
    template_id = response.json()["id"]

    response = client.post(
        f"{base}/attendees/send-email",
        json={"contact_ids": contact_ids, "template_id": template_id},
    )
    assert response.status_code == 200
    assert response.json() == {"sent_count": 2, "failed_count": 0, "total": 2}

    # 5. Both contacts are now INVITED
    response = client.get(f"{base}/attendees")
    statuses = {c["status"] for c in response.json()["groups"][0]["contacts"]}
    assert statuses == {"INVITED"}
    assert {email["to"] for email in email_transport.sent} == {
        "ana@example.com",
        "chloe@example.com",
    }
    assert "http://localhost:3000/register/tech-conference-2026" in email_transport.sent[0]["html"]


def test_attendees_include_event_and_templates(client: TestClient, db: Session) -> None:
    event = create_test_event(db, categories=["VIP"])
    template = create_test_template(db, event.id)
    create_test_contact(db, event.id, "ana@example.com", category="VIP")

    response = client.get(f"/api/v1/events/{event.id}/attendees")

    content = response.json()
    assert content["event"] == {
        "id": event.id,
        "name": "Tech Conference 2026",
        "slug": "tech-conference-2026",
        "categories": ["VIP"],
    }
    assert content["templates"][0]["id"] == template.id
    assert content["groups"][0]["category"] == "VIP"


def test_send_email_requires_recipients(client: TestClient, db: Session) -> None:
    event = create_test_event(db)
    template = create_test_template(db, event.id)

    response = client.post(
        f"/api/v1/events/{event.id}/attendees/send-email",
        json={"contact_ids": [], "template_id": template.id},
    )

    assert response.status_code == 400
    assert db.query(EmailCampaign).count() == 0


def test_send_email_unknown_template(client: TestClient, db: Session) -> None:
    event = create_test_event(db)
    contact = create_test_contact(db, event.id, "ana@example.com")

    response = client.post(
        f"/api/v1/events/{event.id}/attendees/send-email",
        json={"contact_ids": [contact.id], "template_id": "tpl_missing"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Template not found"


def test_send_email_unknown_event(client: TestClient) -> None:
    response = client.post(
        "/api/v1/events/evt_missing/attendees/send-email",
        json={"contact_ids": ["con_x"], "template_id": "tpl_x"},
    )

    assert response.status_code == 404
