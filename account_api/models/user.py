"""ORM model for user accounts (legacy tbl_users table)."""

from sqlalchemy import Column, Date, DateTime, Integer, String, Text, func

from account_api.models.base import Base


class User(Base):
    """
    User account for registration, login and CRUD.

    password holds either a legacy plaintext value or a bcrypt hash ($2...).
    Legacy values are rewritten to a hash on the first successful login.
    """

    __tablename__ = "tbl_users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    firstname = Column(String(100), nullable=True)
    fullname = Column(String(255), nullable=True)
    lastname = Column(String(100), nullable=True)
    username = Column(String(100), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    address = Column(Text, nullable=True)
    sex = Column(String(20), nullable=True)
    birthday = Column(Date, nullable=True)
    status = Column(String(20), nullable=False, default="active", server_default="active")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=True,
        server_default=func.now(),
        onupdate=func.now(),
    )
