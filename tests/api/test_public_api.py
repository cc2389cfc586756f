from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from event_registration.constants.statuses import ContactStatus
from event_registration.crud import crud_contact
from event_registration.models.contact import Contact
from event_registration.models.registration import Registration
from tests.utils.event import create_test_contact, create_test_event, register_test_contact

REGISTRATION_DATA = {
    "first_name": "Ana",
    "last_name": "Silva",
    "email": "Ana@Example.com",
    "phone": "+1 555 0100",
    "organization": "Acme",
    "designation": "CTO",
}


def test_walk_in_registration_creates_contact(client: TestClient, db: Session) -> None:
    create_test_event(db)

    response = client.post("/api/v1/public/register/tech-conference-2026", json=REGISTRATION_DATA)

    assert response.status_code == 201
    content = response.json()
    assert content["success"] is True
    assert content["message"] == "Registration successful!"
    contact = db.query(Contact).one()
    assert contact.email == "ana@example.com"
    assert contact.status == ContactStatus.REGISTERED.value
    assert len(contact.invite_token) == 32
    assert contact.registration.confirmation_code == content["confirmation_code"]


def test_registering_twice_returns_original_code(client: TestClient, db: Session) -> None:
    create_test_event(db)
    first = client.post("/api/v1/public/register/tech-conference-2026", json=REGISTRATION_DATA)

    second = client.post(
        "/api/v1/public/register/tech-conference-2026",
        json={**REGISTRATION_DATA, "email": "ana@example.com"},
    )

    assert second.status_code == 409
    assert second.json()["detail"]["confirmation_code"] == first.json()["confirmation_code"]
    assert db.query(Registration).count() == 1


def test_invited_contact_registers_with_token(client: TestClient, db: Session) -> None:
    event = create_test_event(db)
    contact = create_test_contact(db, event.id, "old@example.com", first_name="Ana")
    crud_contact.contact.update(db, db_obj=contact, obj_in={"invite_token": "a" * 32})

    response = client.post(
        "/api/v1/public/register/tech-conference-2026",
        params={"token": "a" * 32},
        json=REGISTRATION_DATA,
    )

    assert response.status_code == 201
    db.refresh(contact)
    # The invited contact is updated, no second contact is created
    assert db.query(Contact).count() == 1
    assert contact.email == "ana@example.com"
    assert contact.organization == "Acme"
    assert contact.status == ContactStatus.REGISTERED.value


def test_imported_contact_matched_by_email(client: TestClient, db: Session) -> None:
    event = create_test_event(db)
    create_test_contact(db, event.id, "ana@example.com", category="VIP")

    response = client.post("/api/v1/public/register/tech-conference-2026", json=REGISTRATION_DATA)

    assert response.status_code == 201
    contact = db.query(Contact).one()
    assert contact.category == "VIP"
    assert contact.status == ContactStatus.REGISTERED.value


def test_reset_contact_can_register_again(client: TestClient, db: Session) -> None:
    event = create_test_event(db)
    contact = create_test_contact(db, event.id, "ana@example.com")
    old_registration = register_test_contact(db, contact)
    old_code = old_registration.confirmation_code
    crud_contact.contact.mark_status(db, contact=contact, status=ContactStatus.INVITED)

    response = client.post("/api/v1/public/register/tech-conference-2026", json=REGISTRATION_DATA)

    assert response.status_code == 201
    assert response.json()["confirmation_code"] != old_code
    assert db.query(Registration).count() == 1


def test_register_for_inactive_event(client: TestClient, db: Session) -> None:
    event = create_test_event(db)
    event.is_active = False
    db.commit()

    response = client.post("/api/v1/public/register/tech-conference-2026", json=REGISTRATION_DATA)

    assert response.status_code == 404


def test_register_requires_every_field(client: TestClient, db: Session) -> None:
    create_test_event(db)
    data = {**REGISTRATION_DATA, "designation": ""}

    response = client.post("/api/v1/public/register/tech-conference-2026", json=data)

    assert response.status_code == 422


def test_prefill_by_invite_token(client: TestClient, db: Session) -> None:
    event = create_test_event(db)
    contact = create_test_contact(db, event.id, "ana@example.com", first_name="Ana")
    crud_contact.contact.update(db, db_obj=contact, obj_in={"invite_token": "b" * 32})

    response = client.get(
        "/api/v1/public/register/tech-conference-2026", params={"token": "b" * 32}
    )

    assert response.status_code == 200
    content = response.json()
    assert content["event_name"] == "Tech Conference 2026"
    assert content["contact"]["email"] == "ana@example.com"


def test_prefill_requires_token(client: TestClient, db: Session) -> None:
    create_test_event(db)

    response = client.get("/api/v1/public/register/tech-conference-2026")

    assert response.status_code == 400


def test_prefill_unknown_token(client: TestClient, db: Session) -> None:
    create_test_event(db)

    response = client.get(
        "/api/v1/public/register/tech-conference-2026", params={"token": "nope"}
    )

    assert response.status_code == 404


def test_public_badge_page(client: TestClient, db: Session) -> None:
    event = create_test_event(db)
    registration = register_test_contact(
        db, create_test_contact(db, event.id, "ana@example.com", first_name="Ana", category="Speaker")
    )

    response = client.get(f"/api/v1/public/badges/{registration.confirmation_code}")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "category-SPEAKER" in response.text
    assert "data:image/png;base64," in response.text


def test_public_badge_page_unknown_code(client: TestClient) -> None:
    response = client.get("/api/v1/public/badges/XXX-XXX-XXX")

    assert response.status_code == 404


def test_public_routes_need_no_token(unauthenticated_client: TestClient, db: Session) -> None:
    create_test_event(db)

    response = unauthenticated_client.post(
        "/api/v1/public/register/tech-conference-2026", json=REGISTRATION_DATA
    )

    assert response.status_code == 201
