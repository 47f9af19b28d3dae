# dependencies.py
"""
Shared FastAPI dependencies: bearer-token auth and the per-request ledger store.
"""
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from database import get_session
from services.auth_service import decode_access_token
from services.ledger_store import LedgerStore


# Token Auth Dependency
def verify_token(request: Request) -> dict:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise HTTPException(status_code=401, detail="Missing token")
     token = auth.split(" ", 1)[1]
     payload = decode_access_token(token)
     if payload is None:
          raise HTTPException(status_code=403, detail="Invalid token")
     return payload


def get_owner_id(token: dict = Depends(verify_token)) -> int:
     """Id of the signed-in landlord; every ledger query is scoped by it."""
     owner_id = token.get("id")
     if not isinstance(owner_id, int):
          raise HTTPException(status_code=403, detail="Invalid token")
     return owner_id


def get_store(db: Session = Depends(get_session)) -> LedgerStore:
     return LedgerStore(db)
