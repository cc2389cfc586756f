# event_registration/api/v1/endpoints/public.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from event_registration.core.config import settings
from event_registration.core.limiter import limiter
from event_registration.crud import crud_registration
from event_registration.db.session import get_db
from event_registration.schemas.registration import (
    InvitePrefill,
    PublicRegistrationCreate,
    PublicRegistrationResult,
)
from event_registration.services import badge_generator, registration_service

router = APIRouter(prefix="/public", tags=["Public"])


@router.get("/register/{slug}", response_model=InvitePrefill)
def get_registration_prefill(
    slug: str,
    token: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Look up an invited contact by token to pre-fill the registration form."""
    return registration_service.get_invite_prefill(db, slug=slug, token=token)


@router.post(
    "/register/{slug}",
    response_model=PublicRegistrationResult,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.PUBLIC_REGISTRATION_RATE_LIMIT)
def register_for_event(
    request: Request,
    slug: str,
    registration_in: PublicRegistrationCreate,
    token: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """
    Register for an active event.

    Returns 409 with the existing confirmation code when this person is
    already registered.
    """
    return registration_service.register(
        db, slug=slug, obj_in=registration_in, token=token
    )


@router.get("/badges/{confirmationCode}", response_class=HTMLResponse)
def view_badge(confirmationCode: str, db: Session = Depends(get_db)):
    """The printable badge page of a registration."""
    registration = crud_registration.registration.get_by_confirmation_code(
        db, code=confirmationCode
    )
    if not registration:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Badge not found"
        )
    return HTMLResponse(content=badge_generator.render_badge_page(registration))
