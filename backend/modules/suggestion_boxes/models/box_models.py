# backend/modules/suggestion_boxes/models/box_models.py

from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from core.database import Base
from core.mixins import TimestampMixin, UUIDPrimaryKeyMixin
from modules.auth.models.admin_models import AdminUser  # noqa: F401 - registers "administrators"

DEFAULT_BOX_COLOR = "#3B82F6"


class SuggestionBox(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A feedback channel owned by exactly one administrator"""
    __tablename__ = "suggestion_boxes"

    owner_id = Column(String(36), ForeignKey("administrators.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    color = Column(String(7), nullable=False, default=DEFAULT_BOX_COLOR)

    suggestions = relationship(
        "Suggestion",
        back_populates="box",
        cascade="all, delete-orphan",
        order_by="desc(Suggestion.created_at)",
    )

    __table_args__ = (
        Index("idx_box_owner_created", "owner_id", "created_at"),
    )


class Suggestion(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """One anonymous submission to a suggestion box"""
    __tablename__ = "suggestions"

    box_id = Column(
        String(36),
        ForeignKey("suggestion_boxes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    content = Column(Text, nullable=False)
    rating = Column(Integer, nullable=True)  # submitter's 1-5 stars
    admin_rating = Column(Integer, nullable=True)  # owner's 1-5 stars
    is_anonymous = Column(Boolean, nullable=False, default=True)

    box = relationship("SuggestionBox", back_populates="suggestions")

    __table_args__ = (
        CheckConstraint("rating IS NULL OR (rating >= 1 AND rating <= 5)", name="ck_suggestion_rating"),
        CheckConstraint(
            "admin_rating IS NULL OR (admin_rating >= 1 AND admin_rating <= 5)",
            name="ck_suggestion_admin_rating",
        ),
        Index("idx_suggestion_box_created", "box_id", "created_at"),
    )
