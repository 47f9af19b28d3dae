# routers/auth.py
"""
Sign-up / sign-in routes.

Failures come back as {"detail": {"code": ..., "message": ...}} so the client
can show the mapped message for known causes and a generic one otherwise.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_owner_id
from models import User
from schemas.auth import RegisterRequest, LoginRequest, TokenResponse, UserResponse
from services.auth_service import authenticate_user, create_access_token, register_user
from services.errors import AuthError

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_failure(error: AuthError, status_code: int) -> HTTPException:
     return HTTPException(
          status_code=status_code,
          detail={"code": error.code, "message": error.message},
     )


@router.post(
     "/register",
     response_model=TokenResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a landlord account"
)
def register(body: RegisterRequest, db: Session = Depends(get_session)):
     try:
          user = register_user(db, body.email, body.password, body.display_name)
     except AuthError as e:
          code = status.HTTP_409_CONFLICT if e.code == "email-in-use" else status.HTTP_400_BAD_REQUEST
          if e.code == "operation-not-allowed":
               code = status.HTTP_403_FORBIDDEN
          raise _auth_failure(e, code)
     db.refresh(user)
     return TokenResponse(token=create_access_token(user), user=UserResponse.model_validate(user))


@router.post("/login", response_model=TokenResponse, summary="Sign in")
def login(body: LoginRequest, db: Session = Depends(get_session)):
     try:
          user = authenticate_user(db, body.email, body.password)
     except AuthError as e:
          raise _auth_failure(e, status.HTTP_401_UNAUTHORIZED)
     return TokenResponse(token=create_access_token(user), user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse, summary="Current user")
def me(owner_id: int = Depends(get_owner_id), db: Session = Depends(get_session)):
     user = db.query(User).filter(User.id == owner_id).first()
     if not user:
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
     return UserResponse.model_validate(user)
