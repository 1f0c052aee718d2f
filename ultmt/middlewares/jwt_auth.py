import re

from django.conf import settings
from django.http import JsonResponse
from rest_framework import status

from ultmt.constants.messages import ApiErrors, AuthErrorMessages
from ultmt.dto.responses.error_response import ApiErrorDetail, ApiErrorResponse
from ultmt.exceptions.auth_exceptions import (
    BaseAuthException,
    TokenExpiredError,
    TokenInvalidError,
    TokenMissingError,
)
from ultmt.repositories.user_repository import UserRepository
from ultmt.utils.jwt_utils import validate_access_token

BEARER_PREFIX = "Bearer "


class JWTAuthenticationMiddleware:
    def __init__(self, get_response) -> None:
        self.get_response = get_response
        self._public_endpoints = [
            (tuple(method.upper() for method in methods), re.compile(pattern))
            for methods, pattern in settings.PUBLIC_ENDPOINTS
        ]

    def __call__(self, request):
        if request.method == "OPTIONS" or self._is_public(request.method, request.path):
            return self.get_response(request)

        try:
            self._authenticate(request)
        except BaseAuthException as e:
            return self._handle_auth_error(e)

        return self.get_response(request)

    def _is_public(self, method: str, path: str) -> bool:
        return any(
            method in methods and pattern.fullmatch(path.rstrip("/") or "/")
            for methods, pattern in self._public_endpoints
        )

    def _authenticate(self, request) -> None:
        header = request.headers.get("Authorization", "")
        if not header.startswith(BEARER_PREFIX):
            raise TokenMissingError()
        token = header[len(BEARER_PREFIX) :].strip()
        if not token:
            raise TokenMissingError()

        payload = validate_access_token(token)
        user_id = payload.get("user_id")
        if not user_id or UserRepository.get_by_id(user_id) is None:
            raise TokenInvalidError(AuthErrorMessages.TOKEN_INVALID)

        request.user_id = user_id
        request.access_token = token

    def _handle_auth_error(self, exception: BaseAuthException) -> JsonResponse:
        if isinstance(exception, TokenExpiredError):
            title = AuthErrorMessages.TOKEN_EXPIRED_TITLE
        elif isinstance(exception, TokenInvalidError):
            title = AuthErrorMessages.INVALID_TOKEN_TITLE
        else:
            title = ApiErrors.AUTHENTICATION_FAILED

        error_response = ApiErrorResponse(
            statusCode=status.HTTP_401_UNAUTHORIZED,
            message=exception.message,
            errors=[ApiErrorDetail(title=title, detail=exception.message)],
        )
        return JsonResponse(
            data=error_response.model_dump(mode="json", exclude_none=True),
            status=status.HTTP_401_UNAUTHORIZED,
        )
