import logging
from typing import List, Optional, Tuple

from django.contrib.auth.hashers import make_password
from rest_framework import status

from ultmt.constants.messages import ApiErrors
from ultmt.constants.roster import MIN_HANDLE_LENGTH, OTPReason
from ultmt.dto.user_dto import GetMeResponse, SignUpDTO, TokenPairDTO
from ultmt.exceptions.api_exceptions import ApiException
from ultmt.models.embedded import EmbeddedUser
from ultmt.models.user import UserModel
from ultmt.repositories.one_time_passcode_repository import OneTimePasscodeRepository
from ultmt.repositories.team_repository import TeamRepository
from ultmt.repositories.user_repository import UserRepository
from ultmt.services.authentication_service import AuthenticationService
from ultmt.services.one_time_passcode_service import OneTimePasscodeService
from ultmt.utils.email_utils import send_passcode_email
from ultmt.utils.embedded import append_unique, embed_team, embed_user, without_id
from ultmt.utils.entity_lookup import get_team_or_raise, get_user_or_raise
from ultmt.utils.search_utils import build_prefix_clauses, rank_by_distance
from ultmt.utils.validation_chain import ValidationChain
from ultmt.utils.validators import is_valid_email, is_valid_handle, is_valid_name, is_valid_password

logger = logging.getLogger(__name__)

USER_SEARCH_FIELDS = ("firstName", "lastName", "username")


class UserService:
    @classmethod
    def sign_up(cls, dto: SignUpDTO) -> Tuple[UserModel, TokenPairDTO]:
        if not all([dto.firstName, dto.lastName, dto.email, dto.username, dto.password]):
            raise ApiException(ApiErrors.MISSING_FIELDS)
        if not is_valid_name(dto.firstName) or not is_valid_name(dto.lastName):
            raise ApiException(ApiErrors.NAME_TOO_LONG)
        if not is_valid_email(dto.email):
            raise ApiException(ApiErrors.INVALID_EMAIL)
        if not is_valid_handle(dto.username):
            raise ApiException(ApiErrors.INVALID_USERNAME)
        if not is_valid_password(dto.password):
            raise ApiException(ApiErrors.INVALID_PASSWORD)
        if UserRepository.email_taken(dto.email):
            raise ApiException(ApiErrors.DUPLICATE_EMAIL)
        if UserRepository.username_taken(dto.username):
            raise ApiException(ApiErrors.DUPLICATE_USERNAME)

        user = UserModel(
            firstName=dto.firstName,
            lastName=dto.lastName,
            email=dto.email.lower(),
            username=dto.username,
            password=make_password(dto.password),
        )
        UserRepository.create(user)
        logger.info(f"User {user.id} signed up")
        return user, AuthenticationService.create_tokens(user.id)

    @classmethod
    def get_user(cls, user_id: str) -> UserModel:
        """Public profile. Requests are never shown and private users hide their teams."""
        user = get_user_or_raise(user_id)
        user.requests = []
        if user.private:
            user.playerTeams = []
            user.managerTeams = []
            user.archiveTeams = []
        return user

    @classmethod
    def get_me(cls, user_id: str) -> GetMeResponse:
        user = get_user_or_raise(user_id)
        full_manager_teams = TeamRepository.get_by_ids([team.id for team in user.managerTeams])
        return GetMeResponse(user=user, fullManagerTeams=full_manager_teams)

    @classmethod
    def delete_user(cls, user_id: str) -> None:
        """
        Delete an account. Unknown ids are ignored. Guest accounts are only ever
        removed by accepting a claim on them, which moves their memberships first.
        """
        user = UserRepository.get_by_id(user_id)
        if user is None:
            return
        if user.guest:
            raise ApiException(ApiErrors.GUEST_ACCOUNT_DELETE)
        UserRepository.delete_by_id(user.id)
        logger.info(f"User {user.id} deleted")

    @classmethod
    def set_open_to_requests(cls, user_id: str, open_to_requests: bool) -> UserModel:
        user = get_user_or_raise(user_id)
        user.openToRequests = open_to_requests
        return UserRepository.save(user)

    @classmethod
    def set_private_account(cls, user_id: str, private_account: bool) -> UserModel:
        user = get_user_or_raise(user_id)
        user.private = private_account
        return UserRepository.save(user)

    @classmethod
    def leave_team(cls, user_id: str, team_id: str) -> UserModel:
        ValidationChain().user_exists(user_id).team_exists(team_id).user_on_team(user_id, team_id).test()
        user = get_user_or_raise(user_id)
        team = get_team_or_raise(team_id)

        team.players = without_id(team.players, user.id)
        user.playerTeams = without_id(user.playerTeams, team.id)
        TeamRepository.save(team)
        return UserRepository.save(user)

    @classmethod
    def search_users(cls, term: str, open_to_requests: Optional[bool] = None) -> List[EmbeddedUser]:
        ValidationChain().enough_search_characters(term).test()

        clauses = build_prefix_clauses(term, USER_SEARCH_FIELDS)
        if not clauses:
            return []

        users = UserRepository.search(clauses, open_to_requests)
        ranked = rank_by_distance(term, users, lambda user: (f"{user.firstName} {user.lastName}", user.username))
        return [embed_user(user) for user in ranked]

    @classmethod
    def leave_manager_role(cls, team_id: str, manager_id: str) -> UserModel:
        ValidationChain().user_exists(manager_id).team_exists(team_id).user_is_manager(manager_id, team_id).test()
        team = get_team_or_raise(team_id)
        if len(team.managers) < 2:
            raise ApiException(ApiErrors.USER_IS_ONLY_MANAGER)

        manager = get_user_or_raise(manager_id)
        team.managers = without_id(team.managers, manager.id)
        manager.managerTeams = without_id(manager.managerTeams, team.id)
        TeamRepository.save(team)
        return UserRepository.save(manager)

    @classmethod
    def change_password(cls, user_id: str, current_password: str, new_password: str) -> Tuple[UserModel, TokenPairDTO]:
        user = get_user_or_raise(user_id)
        AuthenticationService.verify_credentials(user.username, current_password)
        if not is_valid_password(new_password):
            raise ApiException(ApiErrors.INVALID_PASSWORD)

        user.password = make_password(new_password)
        UserRepository.save(user)
        return user, AuthenticationService.create_tokens(user.id)

    @classmethod
    def change_email(cls, user_id: str, current_password: str, new_email: str) -> UserModel:
        user = get_user_or_raise(user_id)
        AuthenticationService.verify_credentials(user.username, current_password)
        if not is_valid_email(new_email):
            raise ApiException(ApiErrors.INVALID_EMAIL)
        if new_email.lower() != user.email and UserRepository.email_taken(new_email):
            raise ApiException(ApiErrors.DUPLICATE_EMAIL)

        user.email = new_email.lower()
        return UserRepository.save(user)

    @classmethod
    def change_name(cls, user_id: str, first_name: Optional[str] = None, last_name: Optional[str] = None) -> UserModel:
        user = get_user_or_raise(user_id)
        if first_name:
            if not is_valid_name(first_name):
                raise ApiException(ApiErrors.NAME_TOO_LONG)
            user.firstName = first_name
        if last_name:
            if not is_valid_name(last_name):
                raise ApiException(ApiErrors.NAME_TOO_LONG)
            user.lastName = last_name
        return UserRepository.save(user)

    @classmethod
    def request_password_recovery(cls, email: str) -> None:
        user = UserRepository.get_by_email(email) if email else None
        if user is None or user.guest:
            logger.info("Password recovery requested for an unknown email")
            return

        otp = OneTimePasscodeService.create_otp(user.id, OTPReason.PASSWORD_RECOVERY)
        try:
            send_passcode_email(user.email, otp.passcode)
        except OSError as e:
            logger.error(f"Unable to send password recovery email to user {user.id}: {e}")
            OneTimePasscodeRepository.delete_by_id(otp.id)
            raise ApiException(ApiErrors.UNABLE_TO_SEND_EMAIL, status.HTTP_500_INTERNAL_SERVER_ERROR)

    @classmethod
    def reset_password(cls, passcode: str, new_password: str) -> Tuple[UserModel, TokenPairDTO]:
        otp = OneTimePasscodeService.get_valid_passcode(passcode, OTPReason.PASSWORD_RECOVERY)
        if not is_valid_password(new_password):
            raise ApiException(ApiErrors.INVALID_PASSWORD)

        user = get_user_or_raise(otp.creator)
        user.password = make_password(new_password)
        UserRepository.save(user)
        OneTimePasscodeRepository.delete_by_id(otp.id)
        return user, AuthenticationService.create_tokens(user.id)

    @classmethod
    def join_by_code(cls, user_id: str, passcode: str) -> UserModel:
        """Join a team with a manager's bulk join code. The code stays valid for other players."""
        ValidationChain().user_exists(user_id).test()
        otp = OneTimePasscodeService.get_valid_passcode(passcode, OTPReason.TEAM_JOIN)
        ValidationChain().team_exists(otp.team).user_not_on_team(user_id, otp.team).test()

        user = get_user_or_raise(user_id)
        team = get_team_or_raise(otp.team)
        team.players = append_unique(team.players, embed_user(user))
        user.playerTeams = append_unique(user.playerTeams, embed_team(team))
        TeamRepository.save(team)
        return UserRepository.save(user)

    @classmethod
    def username_taken(cls, username: Optional[str]) -> bool:
        if not username or len(username) < MIN_HANDLE_LENGTH:
            raise ApiException(ApiErrors.INVALID_USERNAME)
        return UserRepository.username_taken(username)
