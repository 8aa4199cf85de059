import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from config import Settings, get_settings
from database import get_db
from errors import ClientError
from models import Participant
from routes.trips import get_trip_or_404
from schemas import InviteWrite, ParticipantWrite
from services.mail_service import MailSender, get_mail_sender
from services import trip_notifications

logger = logging.getLogger("planner.invitations")

router = APIRouter(prefix="/trips/{trip_id}", tags=["Trip Invitations"])


@router.post("/invites", status_code=status.HTTP_201_CREATED)
def create_invite(
    trip_id: UUID,
    payload: InviteWrite,
    db: Session = Depends(get_db),
    mail: MailSender = Depends(get_mail_sender),
    settings: Settings = Depends(get_settings),
):
    """Invite an email to the trip and send the one-click confirmation link.

    Unlike ``add_participant`` this does not look for an existing participant
    with the same email.
    """
    trip = get_trip_or_404(db, trip_id)

    participant = Participant(email=payload.email, trip_id=trip.id)
    db.add(participant)
    db.commit()
    db.refresh(participant)

    mail.send(trip_notifications.invite_confirmation_message(settings, trip, participant))

    return {"participantId": participant.id}


@router.patch("/participants")
def add_participant(
    trip_id: UUID,
    payload: ParticipantWrite,
    db: Session = Depends(get_db),
    mail: MailSender = Depends(get_mail_sender),
    settings: Settings = Depends(get_settings),
):
    trip = get_trip_or_404(db, trip_id)

    if not trip.owner:
        raise ClientError("Only the trip owner can make changes.", 403)

    if any(p.email == payload.email for p in trip.participants):
        raise ClientError("Email already invited on this trip.", 409)

    participant = Participant(name=payload.name, email=payload.email, trip_id=trip.id)
    db.add(participant)
    db.commit()
    db.refresh(participant)
    logger.info("Participant %s added to trip %s", participant.id, trip.id)

    mail.send(trip_notifications.trip_invitation_message(settings, trip, participant))

    return {
        "message": "Participant added successfully.",
        "participantId": participant.id,
    }
