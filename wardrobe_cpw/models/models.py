from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Integer, Float, Boolean, ForeignKey, DateTime, Text, Uuid
from sqlalchemy.sql import func
import uuid
from datetime import datetime, date
from wardrobe_cpw.core.db import Base
import sqlalchemy as sa


class WardrobeItem(Base):
    __tablename__ = "wardrobe_item"
    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(String(32), nullable=True)
    brand: Mapped[str | None] = mapped_column(Text, nullable=True)
    purchase_price: Mapped[float] = mapped_column(Float, default=0.0)
    purchase_date: Mapped[date | None] = mapped_column(sa.Date(), nullable=True)
    photo_ref: Mapped[str | None] = mapped_column(Text, nullable=True)
    wear_count: Mapped[int] = mapped_column(Integer, default=0)
    archived: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    wear_logs: Mapped[list["WearLog"]] = relationship(
        back_populates="item", cascade="all, delete-orphan", passive_deletes=True
    )


class WearLog(Base):
    __tablename__ = "wear_log"
    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    item_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), ForeignKey("wardrobe_item.id", ondelete="CASCADE"))
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    item: Mapped[WardrobeItem] = relationship(back_populates="wear_logs")


class SustainabilityGoal(Base):
    __tablename__ = "sustainability_goal"
    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(Text)
    goal_type: Mapped[str] = mapped_column(String(32))
    target_value: Mapped[float] = mapped_column(Float)
    # weak reference, no FK: the item may be deleted out from under the goal
    linked_item_id: Mapped[uuid.UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
