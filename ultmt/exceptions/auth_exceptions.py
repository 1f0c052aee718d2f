from rest_framework import status

from ultmt.constants.messages import AuthErrorMessages


class BaseAuthException(Exception):
    """Token problems raised while authenticating a request. Always answered with a 401."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = AuthErrorMessages.TOKEN_INVALID):
        self.message = message
        super().__init__(message)


class TokenMissingError(BaseAuthException):
    def __init__(self, message: str = AuthErrorMessages.TOKEN_MISSING):
        super().__init__(message)


class TokenExpiredError(BaseAuthException):
    def __init__(self, message: str = AuthErrorMessages.TOKEN_EXPIRED):
        super().__init__(message)


class RefreshTokenExpiredError(TokenExpiredError):
    def __init__(self, message: str = AuthErrorMessages.REFRESH_TOKEN_EXPIRED):
        super().__init__(message)


class TokenInvalidError(BaseAuthException):
    pass
