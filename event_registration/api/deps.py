# event_registration/api/deps.py
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from event_registration.core.config import settings
from event_registration.core.email import ResendEmailTransport
from event_registration.crud import crud_event
from event_registration.db.session import get_db
from event_registration.models.event import Event
from event_registration.schemas.token import TokenPayload

# The `tokenUrl` is only used by the OpenAPI docs; tokens are issued by the
# dashboard's auth service.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")


def get_current_user(token: str = Depends(oauth2_scheme)) -> TokenPayload:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(
            token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
        token_data = TokenPayload(**payload)
    except (JWTError, ValueError):
        raise credentials_exception

    return token_data


def get_email_transport() -> ResendEmailTransport:
    return ResendEmailTransport()


def get_event_or_404(eventId: str, db: Session = Depends(get_db)) -> Event:
    event = crud_event.event.get(db, id=eventId)
    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Event not found"
        )
    return event
