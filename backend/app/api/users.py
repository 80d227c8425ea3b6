from datetime import date, datetime
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.user import User
from ..schemas.user import LoginRequest, SignupRequest, TokenResponse
from ..utils.dependencies import get_current_user
from ..utils.error_handlers import get_error_message, handle_database_error
from ..utils.jwt import create_access_token
from ..utils.security import hash_password, verify_password_timing_safe
from ..utils.validation import validate_email, validate_password, validate_required_fields

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])

PROFILE_FIELDS = ("name", "phone_number", "gender", "date_of_birth", "membership_status")


def _user_to_public(user: User) -> dict:
    def _iso(value):
        return value.isoformat() if isinstance(value, (date, datetime)) else value

    return {
        "_id": user.id,
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "phone_number": user.phone_number,
        "gender": user.gender,
        "date_of_birth": _iso(user.date_of_birth),
        "membership_status": user.membership_status,
        "created_at": _iso(user.created_at),
        "updated_at": _iso(user.updated_at),
    }


@router.post("/signup", status_code=201, response_model=TokenResponse)
def signup(payload: SignupRequest, db: Session = Depends(get_db)):
    validate_required_fields(payload, ("email", "password"), get_error_message("credentials_required"))
    validate_required_fields(payload, PROFILE_FIELDS, get_error_message("missing_fields"))

    email = validate_email(payload.email)
    validate_password(payload.password)

    # Check if email already exists
    try:
        existing = db.query(User).filter(User.email == email).first()
    except Exception as e:
        raise handle_database_error(e, "checking existing user", "signup_failed")
    if existing:
        raise HTTPException(status_code=400, detail=get_error_message("email_exists"))

    try:
        hashed = hash_password(payload.password)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    user = User(
        name=payload.name.strip(),
        email=email,
        password=hashed,
        phone_number=payload.phone_number.strip(),
        gender=payload.gender.strip(),
        date_of_birth=payload.date_of_birth,
        membership_status=payload.membership_status.strip(),
    )
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError:
        # Lost a race with a concurrent signup for the same email.
        db.rollback()
        raise HTTPException(status_code=400, detail=get_error_message("email_exists"))
    except SQLAlchemyError as e:
        db.rollback()
        raise handle_database_error(e, "creating user", "signup_failed")

    logger.info("Registered user %s", user.id)
    return {"email": user.email, "token": create_access_token(user.id)}


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    validate_required_fields(payload, ("email", "password"), get_error_message("credentials_required"))
    email = payload.email.strip().lower()

    try:
        user = db.query(User).filter(User.email == email).first()
    except Exception as e:
        raise handle_database_error(e, "login", "login_failed")

    # Unknown email and wrong password are indistinguishable, in message and in bcrypt cost.
    if not verify_password_timing_safe(payload.password, user.password if user else None):
        raise HTTPException(
            status_code=401,
            detail=get_error_message("invalid_credentials")
        )

    return {"email": user.email, "token": create_access_token(user.id)}


@router.get("/me")
def me(user: User = Depends(get_current_user)):
    return _user_to_public(user)
