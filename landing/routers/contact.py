from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from landing.database import get_db
from landing.schemas.contact import ContactPayload, ContactResponse, ErrorResponse
from landing.security import client_identifier
from landing.services.contact import ContactService, get_contact_service

router = APIRouter(prefix="/api", tags=["contact"])


async def read_contact_payload(request: Request) -> ContactPayload:
    """Parse the JSON body; anything unreadable counts as empty fields."""
    raw = await request.body()
    try:
        return ContactPayload.model_validate_json(raw or b"{}")
    except ValidationError:
        return ContactPayload()


@router.post(
    "/contact",
    response_model=ContactResponse,
    responses={
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def submit_contact(
    request: Request,
    payload: ContactPayload = Depends(read_contact_payload),
    db: Session = Depends(get_db),
    service: ContactService = Depends(get_contact_service),
) -> ContactResponse:
    """Accept a contact form submission."""
    message = service.submit(
        db,
        name=payload.name,
        email=payload.email,
        message=payload.message,
        client_key=client_identifier(request),
    )
    return ContactResponse(message=message)
