"""User and Role SQLAlchemy models."""
import uuid
from typing import List

from sqlalchemy import Column, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base, EntityColumns


user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Uuid, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class Role(Base):
    __tablename__ = "roles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(30), unique=True, comment="USER, ADMIN")

    def __repr__(self) -> str:
        return f"<Role(name={self.name})>"


class User(EntityColumns, Base):
    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255), comment="bcrypt hash")

    # lazy="raise": roles são sempre carregados explicitamente com selectinload
    roles: Mapped[List[Role]] = relationship(secondary=user_roles, lazy="raise")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
