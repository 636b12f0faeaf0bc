from datetime import datetime
from sqlalchemy import String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base, generate_id, utcnow

class Memory(Base):
    """Photo or video shared on the memories feed"""

    __tablename__ = "memories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    image_title: Mapped[str] = mapped_column(String(200), nullable=False)
    image_description: Mapped[str | None] = mapped_column(Text)
    image_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    upload_photo_url: Mapped[str | None] = mapped_column(String(500))
    upload_video_url: Mapped[str | None] = mapped_column(String(500))
    uploaded_by: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    @property
    def media_urls(self) -> list[str]:
        return [url for url in (self.upload_photo_url, self.upload_video_url) if url]

    def __repr__(self):
        return f"<Memory(id={self.id}, title={self.image_title})>"
