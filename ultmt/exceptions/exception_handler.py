import logging
from typing import List

from django.conf import settings
from rest_framework import status
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from ultmt.constants.messages import ApiErrors, AuthErrorMessages
from ultmt.dto.responses.error_response import ApiErrorDetail, ApiErrorResponse, ApiErrorSource
from ultmt.exceptions.api_exceptions import ApiException
from .auth_exceptions import (
    BaseAuthException,
    RefreshTokenExpiredError,
    TokenExpiredError,
    TokenInvalidError,
    TokenMissingError,
)

logger = logging.getLogger(__name__)

TOKEN_ERROR_TITLES = {
    TokenExpiredError: AuthErrorMessages.TOKEN_EXPIRED_TITLE,
    RefreshTokenExpiredError: AuthErrorMessages.TOKEN_EXPIRED_TITLE,
    TokenMissingError: AuthErrorMessages.AUTHENTICATION_REQUIRED,
    TokenInvalidError: AuthErrorMessages.INVALID_TOKEN_TITLE,
}


def format_validation_errors(errors) -> List[ApiErrorDetail]:
    """Flatten DRF serializer errors, nested ones included, into one list keyed by parameter."""
    if isinstance(errors, list):
        return [ApiErrorDetail(detail=str(message)) for message in errors]
    if not isinstance(errors, dict):
        return []

    formatted = []
    for field, messages in errors.items():
        for message in messages if isinstance(messages, list) else [messages]:
            if isinstance(message, dict):
                formatted.extend(format_validation_errors(message))
            else:
                formatted.append(ApiErrorDetail(detail=str(message), source={ApiErrorSource.PARAMETER: field}))
    return formatted


def _token_error(exc: BaseAuthException) -> ApiErrorDetail:
    return ApiErrorDetail(
        source={ApiErrorSource.HEADER: "Authorization"},
        title=TOKEN_ERROR_TITLES.get(type(exc), AuthErrorMessages.INVALID_TOKEN_TITLE),
        detail=exc.message,
    )


def _errors_for(exc, response):
    if isinstance(exc, ApiException):
        return exc.status_code, [ApiErrorDetail(title=exc.message, detail=exc.message)]

    if isinstance(exc, BaseAuthException):
        return exc.status_code, [_token_error(exc)]

    if isinstance(exc, DRFValidationError):
        errors = format_validation_errors(exc.detail)
        if not errors and exc.detail:
            errors = [ApiErrorDetail(detail=str(exc.detail), title=ApiErrors.VALIDATION_ERROR)]
        return status.HTTP_400_BAD_REQUEST, errors

    if response is not None:
        data = response.data
        detail = str(data["detail"]) if isinstance(data, dict) and "detail" in data else str(data)
        return response.status_code, [ApiErrorDetail(title=detail, detail=detail)]

    logger.error(f"Unhandled error: {exc}", exc_info=exc)
    detail = str(exc) if settings.DEBUG else ApiErrors.INTERNAL_SERVER_ERROR
    return status.HTTP_500_INTERNAL_SERVER_ERROR, [ApiErrorDetail(title=detail, detail=detail)]


def handle_exception(exc, context):
    status_code, errors = _errors_for(exc, drf_exception_handler(exc, context))
    body = ApiErrorResponse(
        statusCode=status_code,
        message=errors[0].detail if errors else str(exc),
        errors=errors,
    )
    return Response(data=body.model_dump(mode="json", exclude_none=True), status=status_code)
