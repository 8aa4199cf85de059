from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from database import get_db
from errors import ClientError
from models import Link
from routes.trips import get_trip_or_404
from schemas import LinkWrite, LinkRead, LinkDelete

router = APIRouter(prefix="/trips/{trip_id}/links", tags=["Links"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_link(trip_id: UUID, payload: LinkWrite, db: Session = Depends(get_db)):
    trip = get_trip_or_404(db, trip_id)

    link = Link(title=payload.title, url=str(payload.url), trip_id=trip.id)
    db.add(link)
    db.commit()
    db.refresh(link)

    return {"linkId": link.id}


@router.get("")
def get_links(trip_id: UUID, db: Session = Depends(get_db)):
    trip = get_trip_or_404(db, trip_id)
    links = db.query(Link).filter(Link.trip_id == trip.id).all()
    return {"links": [LinkRead.model_validate(link) for link in links]}


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_link(trip_id: UUID, payload: LinkDelete, db: Session = Depends(get_db)):
    get_trip_or_404(db, trip_id)

    link = db.get(Link, payload.link_id)
    if not link:
        raise ClientError("Link not found.", 404)

    if link.trip_id != trip_id:
        raise ClientError("This link does not belong to this trip.", 400)

    db.delete(link)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
