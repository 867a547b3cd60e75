import logging

from flask import current_app
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from sqlalchemy.exc import IntegrityError

from errors import AuthenticationError, ConflictError, ValidationError
from models import db, User
from validation import EMAIL_RULES, PASSWORD_RULES, USERNAME_RULES, first_failure

logger = logging.getLogger(__name__)

TOKEN_SALT = 'taskmaster-auth-token'


def get_serializer():
    return URLSafeTimedSerializer(current_app.config['SECRET_KEY'], salt=TOKEN_SALT)


def register(username, email, password):
    if not username or not email or not password:
        raise ValidationError("Username, email and password are required")

    # Username, then email, then password; first failure wins
    for rules, value in ((USERNAME_RULES, username),
                         (EMAIL_RULES, email),
                         (PASSWORD_RULES, password)):
        message = first_failure(rules, value)
        if message:
            raise ValidationError(message)

    if User.query.filter_by(username=username).first():
        raise ConflictError("Username already taken")
    if User.query.filter_by(email=email).first():
        raise ConflictError("Email already registered")

    user = User(username=username, email=email)
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        logger.warning(f"Integrity error registering {username}")
        raise ConflictError("User already exists")

    logger.info(f"Registered user {user.username} (id={user.id})")
    return user


def issue_token(user):
    return get_serializer().dumps({"id": user.id, "username": user.username})


def login(email, password):
    if not email or not password:
        raise ValidationError("Email and password are required")

    user = User.query.filter_by(email=email).first()
    if user is None or not user.check_password(password):
        logger.info(f"Failed login for {email}")
        raise AuthenticationError("Invalid credentials")

    logger.info(f"User {user.username} logged in")
    return issue_token(user), user


def verify_token(token):
    """Return the user a token was issued to.

    Raises AuthenticationError for a tampered, expired or orphaned token.
    """
    if not token:
        raise AuthenticationError("Missing token")
    try:
        payload = get_serializer().loads(token, max_age=current_app.config['TOKEN_MAX_AGE'])
    except SignatureExpired:
        raise AuthenticationError("Token expired")
    except BadSignature:
        logger.warning("Rejected token with bad signature")
        raise AuthenticationError("Invalid token")

    user_id = payload.get("id") if isinstance(payload, dict) else None
    user = db.session.get(User, user_id) if isinstance(user_id, int) else None
    if user is None:
        raise AuthenticationError("Invalid token")
    return user
