from datetime import datetime
from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base, generate_id, utcnow

class Hotel(Base):
    """Accommodation suggested for the reunion"""

    __tablename__ = "hotels"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    # Creator, weak reference to users.id
    user_id: Mapped[str | None] = mapped_column(String(36))
    hotel_name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text)
    website_url: Mapped[str] = mapped_column(String(500), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Hotel(id={self.id}, name={self.hotel_name})>"
