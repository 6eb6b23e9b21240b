"""
User model for authentication and job applications.
"""

from sqlalchemy import Column, String, Text, Boolean, false
from app.core.database import Base


class User(Base):
    """
    User account.

    The password column only ever holds a bcrypt hash; reads through the
    CRUD layer never return it.
    """
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)
    password = Column(Text, nullable=False)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    is_admin = Column(Boolean, default=False, server_default=false(), nullable=False)

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"
