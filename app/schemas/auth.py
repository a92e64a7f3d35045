from pydantic import BaseModel, constr, field_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(BaseModel):
    email: constr(strip_whitespace=True, pattern=EMAIL_PATTERN, max_length=255)
    password: constr(min_length=8, max_length=128)
    first_name: constr(strip_whitespace=True, min_length=1, max_length=100)
    last_name: constr(strip_whitespace=True, min_length=1, max_length=100)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return v.lower()


class LoginRequest(BaseModel):
    email: constr(strip_whitespace=True, pattern=EMAIL_PATTERN)
    password: constr(min_length=1)


class RefreshRequest(BaseModel):
    refresh_token: constr(min_length=1)
