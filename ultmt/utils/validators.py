import re
from typing import Optional

from django.core.exceptions import ValidationError
from django.core.validators import validate_email

from ultmt.constants.roster import MAX_HANDLE_LENGTH, MAX_NAME_LENGTH, MIN_HANDLE_LENGTH

HANDLE_PATTERN = re.compile(rf"^[a-zA-Z0-9]{{{MIN_HANDLE_LENGTH},{MAX_HANDLE_LENGTH}}}$")


def is_valid_email(email: Optional[str]) -> bool:
    if not email:
        return False
    try:
        validate_email(email)
    except ValidationError:
        return False
    return True


def is_valid_password(password: Optional[str]) -> bool:
    """At least 8 characters with a lower case letter, an upper case letter, a digit and a symbol."""
    if not password or len(password) < 8:
        return False
    return (
        any(char.islower() for char in password)
        and any(char.isupper() for char in password)
        and any(char.isdigit() for char in password)
        and any(not char.isalnum() for char in password)
    )


def is_valid_handle(value: Optional[str]) -> bool:
    """Usernames and teamnames share the same rule."""
    return bool(value) and HANDLE_PATTERN.match(value) is not None


def is_valid_name(value: Optional[str]) -> bool:
    return value is not None and len(value) <= MAX_NAME_LENGTH
