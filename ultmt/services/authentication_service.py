import logging

import jwt
from django.contrib.auth.hashers import check_password
from rest_framework import status

from ultmt.constants.messages import ApiErrors
from ultmt.dto.user_dto import TokenPairDTO
from ultmt.exceptions.api_exceptions import ApiException
from ultmt.models.user import UserModel
from ultmt.repositories.user_repository import UserRepository
from ultmt.utils.jwt_utils import blacklist_token, generate_token_pair, validate_refresh_token
from ultmt.utils.validation_chain import ValidationChain

logger = logging.getLogger(__name__)


class AuthenticationService:
    @classmethod
    def create_tokens(cls, user_id) -> TokenPairDTO:
        try:
            return TokenPairDTO(**generate_token_pair(str(user_id)))
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            logger.error(f"Token generation failed for user {user_id}: {e}")
            raise ApiException(ApiErrors.UNABLE_TO_GENERATE_TOKEN, status.HTTP_500_INTERNAL_SERVER_ERROR)

    @classmethod
    def verify_credentials(cls, identifier: str, password: str) -> UserModel:
        """The user for a username or email and matching password. Guests never pass."""
        user = UserRepository.get_by_username_or_email(identifier) if identifier else None
        if user is None or user.guest or not password or not check_password(password, user.password):
            raise ApiException(ApiErrors.INVALID_CREDENTIALS, status.HTTP_401_UNAUTHORIZED)
        return user

    @classmethod
    def login(cls, identifier: str, password: str) -> TokenPairDTO:
        user = cls.verify_credentials(identifier, password)
        logger.info(f"User {user.id} logged in")
        return cls.create_tokens(user.id)

    @classmethod
    def logout(cls, token: str) -> None:
        blacklist_token(token)

    @classmethod
    def refresh_tokens(cls, refresh_token: str) -> TokenPairDTO:
        """Trade a refresh token for a new pair. The used refresh token is revoked."""
        payload = validate_refresh_token(refresh_token)
        user = UserRepository.get_by_id(payload["user_id"])
        if user is None:
            raise ApiException(ApiErrors.UNABLE_TO_FIND_USER, status.HTTP_404_NOT_FOUND)
        blacklist_token(refresh_token)
        return cls.create_tokens(user.id)

    @classmethod
    def authenticate_manager(cls, manager_id: str, team_id: str) -> UserModel:
        user = UserRepository.get_by_id(manager_id)
        if user is None:
            raise ApiException(ApiErrors.UNAUTHORIZED_MANAGER, status.HTTP_401_UNAUTHORIZED)
        ValidationChain().user_is_manager(manager_id, team_id).test()
        return user
