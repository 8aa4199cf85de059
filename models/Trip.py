import uuid

from sqlalchemy import Column, String, DateTime, Uuid, func
from sqlalchemy.orm import relationship
from database import Base

class Trip(Base):
    __tablename__ = "trips"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    destination = Column(String(255), nullable=False)
    starts_at = Column(DateTime(timezone=True), nullable=False)
    ends_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    participants = relationship("Participant", back_populates="trip", cascade="all, delete-orphan")
    activities = relationship(
        "Activity", back_populates="trip", cascade="all, delete-orphan", order_by="Activity.occurs_at"
    )
    links = relationship("Link", back_populates="trip", cascade="all, delete-orphan")

    @property
    def owner(self):
        return next((p for p in self.participants if p.is_owner), None)
