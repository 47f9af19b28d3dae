# services/auth_service.py
"""
Auth Service - landlord sign-up and sign-in.

Passwords are bcrypt-hashed with passlib; sessions are HS256 JWTs carrying the
user id. Every failure raises AuthError with a code the UI maps to a message.
"""
import logging
import re
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

import config
from models import User
from .errors import AuthError, StoreError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

MIN_PASSWORD_LENGTH = 6
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(email: str) -> str:
     return (email or "").strip().lower()


def create_access_token(user: User) -> str:
     return jwt.encode({"id": user.id}, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
     """Return the token payload, or None if the token is invalid."""
     try:
          return jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
     except JWTError:
          return None


def register_user(db: Session, email: str, password: str, display_name: Optional[str] = None) -> User:
     """
     Create a landlord account.

     Raises:
          AuthError: operation-not-allowed, invalid-email, weak-password or
               email-in-use
     """
     if not config.ALLOW_SIGNUPS:
          raise AuthError("operation-not-allowed")

     email = normalize_email(email)
     if not EMAIL_PATTERN.match(email):
          raise AuthError("invalid-email")
     if len(password or "") < MIN_PASSWORD_LENGTH:
          raise AuthError("weak-password")

     if db.query(User).filter(User.email == email).first():
          raise AuthError("email-in-use")

     user = User(email=email, password=pwd_context.hash(password), display_name=display_name)
     db.add(user)
     try:
          db.flush()
     except IntegrityError:
          db.rollback()
          raise AuthError("email-in-use")
     except SQLAlchemyError as e:
          db.rollback()
          logger.error("Registration failed for %s: %s", email, e)
          raise StoreError("Failed to create account") from e
     logger.info("Registered user %s", user.id)
     return user


def authenticate_user(db: Session, email: str, password: str) -> User:
     """
     Check credentials.

     Raises:
          AuthError: invalid-email or invalid-credential
     """
     email = normalize_email(email)
     if not EMAIL_PATTERN.match(email):
          raise AuthError("invalid-email")

     user = db.query(User).filter(User.email == email).first()
     if user is None or not pwd_context.verify(password or "", user.password):
          raise AuthError("invalid-credential")
     return user
