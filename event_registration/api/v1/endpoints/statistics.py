# event_registration/api/v1/endpoints/statistics.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from event_registration.api import deps
from event_registration.db.session import get_db
from event_registration.models.event import Event as EventModel
from event_registration.schemas.statistics import EventStatistics
from event_registration.schemas.token import TokenPayload
from event_registration.services import statistics

router = APIRouter(tags=["Statistics"])
logger = logging.getLogger(__name__)


@router.get("/events/{eventId}/statistics", response_model=EventStatistics)
def get_event_statistics(
    event: EventModel = Depends(deps.get_event_or_404),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Contact status counts, per-category breakdown, email delivery totals,
    registration and invite rates, and the 10 most recent campaigns.
    """
    try:
        return statistics.get_event_statistics(db, event=event)
    except SQLAlchemyError as e:
        logger.error(f"Failed to fetch statistics for event {event.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error"
        )
