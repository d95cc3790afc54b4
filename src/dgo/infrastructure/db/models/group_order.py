from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dgo.infrastructure.db.models.catalog import Base


class GroupOrderModel(Base):
    __tablename__ = "group_orders"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    restaurant_id: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    restaurant_name: Mapped[str] = mapped_column(String(255), nullable=False)
    menu_id: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("menus.id", ondelete="CASCADE"),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    created_by: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )


class SubmissionModel(Base):
    __tablename__ = "submissions"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    group_order_id: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("group_orders.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_name: Mapped[str] = mapped_column(String(100), nullable=False)
    total: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    lines: Mapped[list["SubmissionLineModel"]] = relationship(
        back_populates="submission",
        cascade="all, delete-orphan",
        order_by="SubmissionLineModel.position",
    )

    __table_args__ = (
        Index("ix_submissions_group_order_created_at", "group_order_id", "created_at"),
    )


class SubmissionLineModel(Base):
    __tablename__ = "submission_lines"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_submission_lines_quantity_positive"),
    )

    submission_id: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("submissions.id", ondelete="CASCADE"),
        primary_key=True,
    )
    position: Mapped[int] = mapped_column(Integer, primary_key=True)
    menu_item_id: Mapped[str] = mapped_column(String(50), nullable=False)
    menu_item_name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    temperature: Mapped[str] = mapped_column(String(50), nullable=False)
    sugar_level: Mapped[str] = mapped_column(String(50), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    submission: Mapped[SubmissionModel] = relationship(back_populates="lines")
