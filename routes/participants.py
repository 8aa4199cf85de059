import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.orm import Session

from config import Settings, get_settings
from database import get_db
from errors import ClientError
from models import Participant
from schemas import ParticipantConfirm, ParticipantDetail, TripRead
from services.trip_notifications import confirmed_page_link

logger = logging.getLogger("planner.participants")

router = APIRouter(prefix="/participants", tags=["Participants"])


def get_participant_or_404(db: Session, participant_id: UUID) -> Participant:
    participant = db.get(Participant, participant_id)
    if not participant:
        raise ClientError("Participant not found.", 404)
    return participant


@router.get("/{participant_id}/confirm")
def confirm_participant(
    participant_id: UUID,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """One-click confirmation from the invitation mail. Safe to repeat."""
    participant = get_participant_or_404(db, participant_id)
    redirect_to = confirmed_page_link(settings, participant.id, participant.trip_id)

    if participant.is_confirmed:
        return RedirectResponse(redirect_to, status_code=status.HTTP_302_FOUND)

    participant.is_confirmed = True
    db.commit()
    logger.info("Participant %s confirmed (one-click)", participant_id)

    return RedirectResponse(redirect_to, status_code=status.HTTP_302_FOUND)


@router.patch("/{participant_id}/confirm")
def confirm_participant_manually(
    participant_id: UUID,
    payload: ParticipantConfirm,
    db: Session = Depends(get_db),
):
    participant = get_participant_or_404(db, participant_id)

    if participant.is_confirmed:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={
                "message": "The participant is already confirmed on this trip.",
                "tripId": str(participant.trip_id),
            },
        )

    # the invite is only redeemable by its recipient
    if participant.email != payload.email:
        raise ClientError("The email does not match the one this invitation was sent to.")

    participant.name = payload.name
    participant.is_confirmed = True
    db.commit()
    logger.info("Participant %s confirmed as %s", participant_id, payload.name)

    return {"ok": True, "tripId": participant.trip_id}


@router.get("/{participant_id}")
def get_participant(participant_id: UUID, db: Session = Depends(get_db)):
    participant = get_participant_or_404(db, participant_id)
    return {
        "participant": ParticipantDetail.model_validate(participant),
        "trip": TripRead.model_validate(participant.trip),
    }


@router.delete("/{participant_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_participant(participant_id: UUID, db: Session = Depends(get_db)):
    participant = get_participant_or_404(db, participant_id)

    if participant.is_owner:
        raise ClientError("The trip owner cannot be removed from the trip.", 403)

    db.delete(participant)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
