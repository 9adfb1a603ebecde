"""User model definitions."""

from sqlalchemy import Column, String
from backend.database import Base


class User(Base):
    """Represents a staff member on the roster."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    name = Column(String(255))
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash
    role = Column(String(100))
    photo = Column(String(512))
