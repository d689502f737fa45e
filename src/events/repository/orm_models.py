from datetime import datetime
from uuid import UUID

from sqlalchemy import JSON, Boolean, DateTime, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.config.table_names import TableNames
from src.events.dtos import Privacy
from src.models.base import Base, TimeStamp


class Event(Base, TimeStamp):
    __tablename__ = TableNames.EVENTS.value

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    # IANA zone name, display only; instants are stored in UTC
    timezone: Mapped[str] = mapped_column(String(64), nullable=False)

    # Sub-documents, stored as their camelCase JSON form
    location: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    guests: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    recurring: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    notifications: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    team: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    rsvp_required: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    privacy: Mapped[str] = mapped_column(
        Enum(Privacy, name="event_privacy_enum", values_callable=lambda x: [e.value for e in x]),
        default=Privacy.TEAM,
        nullable=False,
    )

    # Soft delete: deleted_at is set if and only if is_deleted
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None, index=True
    )

    # Recurrence exceptions. No foreign key: an exception outlives a purged series.
    parent_event_id: Mapped[UUID | None] = mapped_column(nullable=True, index=True)
    instance_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    is_exception: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<Event {self.title} at {self.start_date}>"
