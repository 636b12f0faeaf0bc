from datetime import datetime
from sqlalchemy import String, Text, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base, generate_id, utcnow

class Event(Base):
    """Reunion event"""

    __tablename__ = "events"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)

    event_start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    event_end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    rsvp_deadline: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    venue_name: Mapped[str] = mapped_column(String(200), nullable=False)
    venue_address: Mapped[str | None] = mapped_column(String(500))
    banner_image_url: Mapped[str | None] = mapped_column(String(500))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index('ix_events_start_date', 'event_start_date'),
    )

    def __repr__(self):
        return f"<Event(id={self.id}, title={self.title})>"
