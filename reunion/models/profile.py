from datetime import datetime
from sqlalchemy import String, Integer, Text, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base, generate_id, utcnow

class AlumniProfile(Base):
    """Alumni directory entry and the RSVP state of its owner"""

    __tablename__ = "alumni_profiles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    user_id: Mapped[str | None] = mapped_column(String(36), unique=True, index=True)

    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    profile_photo_url: Mapped[str | None] = mapped_column(String(500))
    current_designation: Mapped[str | None] = mapped_column(String(200))
    workplace: Mapped[str | None] = mapped_column(String(200))
    country: Mapped[str | None] = mapped_column(String(100))
    state: Mapped[str | None] = mapped_column(String(100))
    city: Mapped[str | None] = mapped_column(String(100))

    # RSVP
    rsvp_adults: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    rsvp_kids: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    hotel_selection_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("hotels.id", ondelete="SET NULL")
    )
    special_reqs: Mapped[str | None] = mapped_column(Text)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False
    )

    __table_args__ = (
        CheckConstraint("rsvp_adults >= 0", name="rsvp_adults_non_negative"),
        CheckConstraint("rsvp_kids >= 0", name="rsvp_kids_non_negative"),
    )

    def __repr__(self):
        return f"<AlumniProfile(id={self.id}, email={self.email})>"
