# event_registration/api/v1/api.py

from fastapi import APIRouter
from event_registration.api.v1.endpoints import (
    attendees,
    badges,
    contacts,
    email_campaigns,
    email_templates,
    events,
    health,
    public,
    registrations,
    statistics,
)

# This is the main router for the v1 API.
api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(public.router)
api_router.include_router(events.router)
api_router.include_router(contacts.router)
api_router.include_router(attendees.router)
api_router.include_router(email_templates.router)
api_router.include_router(email_campaigns.router)
api_router.include_router(registrations.router)
api_router.include_router(badges.router)
api_router.include_router(statistics.router)
