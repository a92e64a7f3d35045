import logging
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash
from models import db
from models.user import User
from app.exceptions import Conflict, Unauthorized, ValidationError

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8

# Compared against when the email is unknown so both failure paths do the same work.
_DUMMY_HASH = generate_password_hash("not-a-real-password")


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _email_taken(email: str) -> bool:
    return User.query.filter_by(email=email).first() is not None


def register_user(email: str, password: str, first_name: str, last_name: str) -> User:
    """Create a user with a salted password hash. Does NOT commit."""
    email = normalize_email(email)
    if "@" not in email:
        raise ValidationError("Invalid email address")
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    if _email_taken(email):
        raise Conflict("Email already registered")

    user = User(
        email=email,
        password_hash=generate_password_hash(password),
        first_name=first_name.strip(),
        last_name=last_name.strip(),
    )
    db.session.add(user)
    try:
        db.session.flush()
    except IntegrityError as e:
        # A concurrent registration won the unique email index.
        raise Conflict("Email already registered") from e
    logger.info({"event": "user_registered", "user_id": user.id, "email": email})
    return user


def authenticate(email: str, password: str) -> User:
    """Return the user for valid credentials, raise Unauthorized otherwise.

    The error never says whether the email exists.
    """
    user = User.query.filter_by(email=normalize_email(email)).first()
    if user is None:
        check_password_hash(_DUMMY_HASH, password or "")
        raise Unauthorized()
    if not check_password_hash(user.password_hash, password or ""):
        raise Unauthorized()
    return user


def get_user(user_id: int):
    return db.session.get(User, user_id)
