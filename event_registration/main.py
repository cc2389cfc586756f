# event_registration/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from event_registration.api.v1.api import api_router
from event_registration.core.config import settings
from event_registration.core.limiter import limiter
from event_registration.core.logging import setup_logging
from event_registration.db.base_class import Base
from event_registration.db.session import engine
from event_registration import models  # noqa: F401  registers every table on Base

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables checked and created if necessary.")
    yield
    logger.info("Application shutting down...")


app = FastAPI(
    title="Event Registration Service",
    version="1.0.0",
    description="""
        **Event Registration Service**

        Administration backend for event attendee management.

        ## Features

        * **Events**: Create events and manage their attendee categories
        * **Contacts**: Add contacts by hand or bulk import them from CSV/Excel
        * **Attendees**: Category-grouped attendee views with status counts
        * **Email**: Templates with `{{variable}}` placeholders, campaigns and per-recipient delivery logs
        * **Registration**: Public self-service registration with invite links
        * **Badges**: QR-coded printable badges and badge delivery emails

        ## Authentication

        Dashboard endpoints require JWT authentication via the `Authorization: Bearer <token>` header.

        ## Public Endpoints

        Endpoints under `/public/` are accessible without authentication.
        """,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    return {"status": "Event Registration Service is running"}
