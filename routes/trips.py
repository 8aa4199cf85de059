import logging
from uuid import UUID

import anyio.from_thread
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from config import Settings, get_settings
from database import get_db
from errors import ClientError
from models import Trip, Participant
from schemas import TripWrite, TripUpdate, TripRead, ParticipantRead
from services.mail_service import MailSender, get_mail_sender
from services import trip_notifications
from utils.dates import as_utc, utc_now

logger = logging.getLogger("planner.trips")

router = APIRouter(prefix="/trips", tags=["Trips"])


def check_trip_dates(starts_at, ends_at):
    if as_utc(starts_at) < utc_now():
        raise ClientError("Invalid trip start date.")
    if as_utc(ends_at) < as_utc(starts_at):
        raise ClientError("Invalid trip end date.")


def get_trip_or_404(db: Session, trip_id: UUID) -> Trip:
    trip = db.get(Trip, trip_id)
    if not trip:
        raise ClientError("Trip not found.", 404)
    return trip


@router.post("", status_code=status.HTTP_201_CREATED)
def create_trip(
    payload: TripWrite,
    db: Session = Depends(get_db),
    mail: MailSender = Depends(get_mail_sender),
    settings: Settings = Depends(get_settings),
):
    check_trip_dates(payload.starts_at, payload.ends_at)

    trip = Trip(
        destination=payload.destination,
        starts_at=as_utc(payload.starts_at),
        ends_at=as_utc(payload.ends_at),
    )
    owner = Participant(
        name=payload.owner_name,
        email=payload.owner_email,
        is_owner=True,
        is_confirmed=True,
    )
    trip.participants.append(owner)
    trip.participants.extend(Participant(email=email) for email in payload.emails_to_invite)

    # trip and every participant row land in a single commit
    db.add(trip)
    db.commit()
    db.refresh(trip)

    logger.info("Trip %s created with %d participants", trip.id, len(trip.participants))

    messages = trip_notifications.trip_created_messages(settings, trip)
    # sync handlers run in a worker thread; hop back to the loop for the fan-out
    failed = anyio.from_thread.run(trip_notifications.dispatch, mail, messages)
    if failed:
        logger.warning("Trip %s: %d of %d mails not delivered", trip.id, len(failed), len(messages))

    return {"tripId": trip.id, "participantId": owner.id}


@router.get("/{trip_id}")
def get_trip_details(trip_id: UUID, db: Session = Depends(get_db)):
    trip = get_trip_or_404(db, trip_id)
    return {"trip": TripRead.model_validate(trip)}


@router.patch("/{trip_id}")
def update_trip(
    trip_id: UUID,
    payload: TripUpdate,
    participant_id: UUID = Query(..., alias="participantId"),
    db: Session = Depends(get_db),
):
    trip = get_trip_or_404(db, trip_id)

    # TODO: also reject owners of other trips (participant.trip_id != trip_id)
    participant = db.get(Participant, participant_id)
    if not participant:
        raise ClientError("Participant not found.", 404)
    if not participant.is_owner:
        raise ClientError("Only the trip owner can change trip details.", 403)

    check_trip_dates(payload.starts_at, payload.ends_at)

    trip.destination = payload.destination
    trip.starts_at = as_utc(payload.starts_at)
    trip.ends_at = as_utc(payload.ends_at)
    db.commit()
    db.refresh(trip)

    return {"tripId": trip.id, "trip": TripRead.model_validate(trip)}


@router.delete("/{trip_id}")
def delete_trip(
    trip_id: UUID,
    participant_id: UUID = Query(..., alias="participantId"),
    db: Session = Depends(get_db),
):
    trip = get_trip_or_404(db, trip_id)

    owner = trip.owner
    if not owner or owner.id != participant_id:
        raise ClientError("Only the trip owner can cancel this trip.", 403)

    # participants, activities and links go with it
    db.delete(trip)
    db.commit()

    logger.info("Trip %s deleted by owner %s", trip_id, participant_id)
    return {"message": "Trip has been canceled successfully."}


@router.get("/{trip_id}/participants")
def list_trip_participants(trip_id: UUID, db: Session = Depends(get_db)):
    trip = get_trip_or_404(db, trip_id)
    participants = (
        db.query(Participant)
        .filter(Participant.trip_id == trip.id)
        .order_by(Participant.is_owner.desc(), Participant.email)
        .all()
    )
    return {"participants": [ParticipantRead.model_validate(p) for p in participants]}
