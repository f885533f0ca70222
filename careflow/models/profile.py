"""Profile model definitions."""

from sqlalchemy import Column, String
from careflow.database import Base


class Profile(Base):
    """Contact details for a portal user."""
    __tablename__ = "profiles"

    user_id = Column(String, primary_key=True)
    email = Column(String)
    first_name = Column(String)
