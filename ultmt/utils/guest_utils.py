import secrets
import time

from ultmt.constants.roster import GUEST_EMAIL_DOMAIN, GUEST_PASSWORD_ALPHABET, GUEST_PASSWORD_LENGTH
from ultmt.utils.validators import is_valid_password


def generate_guest_username() -> str:
    return f"guest{time.time_ns() // 1_000_000}"


def generate_guest_email(username: str) -> str:
    return f"{username}@{GUEST_EMAIL_DOMAIN}"


def generate_guest_password() -> str:
    """Random password that passes the password policy. Nobody is ever told it."""
    while True:
        password = "".join(secrets.choice(GUEST_PASSWORD_ALPHABET) for _ in range(GUEST_PASSWORD_LENGTH))
        if is_valid_password(password):
            return password
