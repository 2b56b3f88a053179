# server/models/user.py

from sqlalchemy import CheckConstraint, Column, Integer, String
from . import Base


# -------------------------------
# Credential Model
# -------------------------------

class User(Base):
    """
    Credential record for a registered user.
    Holds the unique username and the bcrypt hash of the password.
    The unique constraint on username is what settles duplicate registrations.
    """
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("username <> ''", name="ck_users_username_present"),
        CheckConstraint("hashed_password <> ''", name="ck_users_hash_present"),
    )

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    # bcrypt modular-crypt string, e.g. $2b$10$<22-char salt><31-char digest>
    hashed_password = Column(String(60), nullable=False)
