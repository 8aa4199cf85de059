from typing import Iterable, List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from database import get_db
from errors import ClientError
from models import Activity
from routes.trips import get_trip_or_404
from schemas import ActivityWrite, ActivityRead, ActivityDay, ActivityDelete
from utils.dates import as_utc, trip_days

router = APIRouter(prefix="/trips/{trip_id}/activities", tags=["Activities"])


def group_activities_by_day(starts_at, ends_at, activities: Iterable[Activity]) -> List[ActivityDay]:
    """
    One bucket per calendar day of the trip, in order. An activity belongs to
    the day it occurs on; its position within the day follows the input order.
    """
    days = {day: ActivityDay(date=day, activities=[]) for day in trip_days(starts_at, ends_at)}
    for activity in activities:
        day = days.get(as_utc(activity.occurs_at).date())
        if day is not None:
            day.activities.append(ActivityRead.model_validate(activity))
    return list(days.values())


@router.post("", status_code=status.HTTP_201_CREATED)
def create_activity(trip_id: UUID, payload: ActivityWrite, db: Session = Depends(get_db)):
    trip = get_trip_or_404(db, trip_id)

    occurs_at = as_utc(payload.occurs_at)
    if occurs_at < as_utc(trip.starts_at) or occurs_at > as_utc(trip.ends_at):
        raise ClientError("Invalid activity date.")

    activity = Activity(title=payload.title, occurs_at=occurs_at, trip_id=trip.id)
    db.add(activity)
    db.commit()
    db.refresh(activity)

    return {"activityId": activity.id}


@router.get("")
def get_activities(trip_id: UUID, db: Session = Depends(get_db)):
    trip = get_trip_or_404(db, trip_id)

    activities = (
        db.query(Activity)
        .filter(Activity.trip_id == trip.id)
        .order_by(Activity.occurs_at.asc())
        .all()
    )

    return {"activities": group_activities_by_day(trip.starts_at, trip.ends_at, activities)}


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_activity(trip_id: UUID, payload: ActivityDelete, db: Session = Depends(get_db)):
    get_trip_or_404(db, trip_id)

    activity = db.get(Activity, payload.activity_id)
    if not activity:
        raise ClientError("Activity not found.", 404)

    if activity.trip_id != trip_id:
        raise ClientError("This activity does not belong to this trip.", 403)

    db.delete(activity)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
