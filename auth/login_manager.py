import logging
import os
import bcrypt
from typing import Optional
from database.db_manager import DBManager, DuplicateEmailError


log = logging.getLogger(__name__)


class AuthError(Exception):
    def __init__(self, message: str, status_code: int = 401):
        super().__init__(message)
        self.status_code = status_code


def hash_password(plain: str) -> str:
    rounds = int(os.getenv('BCRYPT_ROUNDS', '10'))
    return bcrypt.hashpw(plain.encode('utf-8'), bcrypt.gensalt(rounds=rounds)).decode('utf-8')


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode('utf-8'), hashed.encode('utf-8'))
    except (ValueError, TypeError, AttributeError):
        return False


def public_user(user: dict) -> dict:
    return {'id': user['id'], 'name': user['name'], 'email': user['email']}


def signup(db: DBManager, name: str, email: str, password: str) -> dict:
    if db.get_user_by_email(email):
        raise AuthError("Email already registered", status_code=409)
    password_hash = hash_password(password)
    # create_user repeats the email check under the store lock
    try:
        user = db.create_user(name=name, email=email, password_hash=password_hash)
    except DuplicateEmailError:
        raise AuthError("Email already registered", status_code=409)
    log.info("Registered user %s", user['id'])
    return user


def login(db: DBManager, email: str, password: str) -> dict:
    # same message for unknown email and wrong password
    user: Optional[dict] = db.get_user_by_email(email)
    if not user or not verify_password(password, user.get('hash', '')):
        log.info("Failed login attempt")
        raise AuthError("Invalid email or password")
    return user
