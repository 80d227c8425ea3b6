from datetime import date

from pydantic import BaseModel

# Every field is optional at the schema level so that missing values are
# reported with the API's own 400 messages rather than a generic schema error.


class SignupRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    phone_number: str | None = None
    gender: str | None = None
    date_of_birth: date | None = None
    membership_status: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class TokenResponse(BaseModel):
    email: str
    token: str
