import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship

from groupcart.database import Base


class MemberRole(str, enum.Enum):
    """Role held by a user within a single group."""

    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


# Association table for many-to-many relationship between users and groups.
# The composite primary key is what stops a user joining the same group twice.
group_members = Table(
    "group_members",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("group_id", Integer, ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True),
    Column("joined_at", DateTime, default=datetime.utcnow, nullable=False),
    Column("role", String(20), default=MemberRole.MEMBER.value, nullable=False),
)


class Group(Base):
    """Group model representing a set of users sharing shopping lists."""

    __tablename__ = "groups"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    invite_code = Column(String(20), unique=True, index=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    # Relationships
    # Many-to-many with users through group_members association table
    members = relationship("User", secondary=group_members, back_populates="groups")

    # One-to-many with shopping lists
    shopping_lists = relationship(
        "ShoppingList",
        back_populates="group",
        cascade="all, delete-orphan",
    )

    # Many-to-one with creator
    creator = relationship("User", foreign_keys=[created_by])
