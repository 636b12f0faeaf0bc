from datetime import datetime
from sqlalchemy import String, Enum as SQLAEnum, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base, generate_id, utcnow
from .enums import UserRole

class User(Base):
    """Account used to sign in"""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    role: Mapped[UserRole] = mapped_column(
        SQLAEnum(UserRole, values_callable=lambda roles: [r.value for r in roles], native_enum=False),
        default=UserRole.ALUMNI,
        nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<User {self.email}>"
