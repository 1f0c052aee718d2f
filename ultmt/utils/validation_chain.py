from datetime import datetime, timezone
from functools import partial
from typing import Callable, Iterable, List, Optional

from django.conf import settings
from rest_framework import status

from ultmt.constants.messages import ApiErrors
from ultmt.constants.roster import MIN_SEARCH_LENGTH, Initiator, Status
from ultmt.exceptions.api_exceptions import ApiException
from ultmt.repositories.claim_guest_request_repository import ClaimGuestRequestRepository
from ultmt.repositories.common.mongo_repository import to_object_id
from ultmt.repositories.roster_request_repository import RosterRequestRepository
from ultmt.repositories.team_designation_repository import TeamDesignationRepository
from ultmt.repositories.team_repository import TeamRepository
from ultmt.repositories.user_repository import UserRepository
from ultmt.repositories.verification_request_repository import VerificationRequestRepository


def _contains(members: Iterable, member_id) -> bool:
    object_id = to_object_id(member_id)
    return any(member.id == object_id for member in members)


class ValidationChain:
    """
    Ordered precondition checks. Each builder method queues one check and returns
    the chain; test() runs them in the order they were added and the first
    failure raises, so later checks never run.

        ValidationChain().user_exists(user_id).team_exists(team_id).user_is_manager(user_id, team_id).test()

    Every check loads fresh entities. Nothing is shared between checks.
    """

    def __init__(self, admin_emails: Optional[Iterable[str]] = None):
        self._checks: List[Callable[[], None]] = []
        source = settings.ADMIN_EMAILS if admin_emails is None else admin_emails
        self._admin_emails = {email.lower() for email in source}

    def _add(self, check: Callable, *args) -> "ValidationChain":
        self._checks.append(partial(check, *args))
        return self

    def test(self) -> bool:
        for check in self._checks:
            check()
        return True

    def user_exists(self, user_id) -> "ValidationChain":
        return self._add(self._check_user_exists, user_id)

    def team_exists(self, team_id) -> "ValidationChain":
        return self._add(self._check_team_exists, team_id)

    def request_exists(self, request_id) -> "ValidationChain":
        return self._add(self._check_request_exists, request_id)

    def designation_exists(self, designation_id) -> "ValidationChain":
        return self._add(self._check_designation_exists, designation_id)

    def verification_exists(self, verification_id) -> "ValidationChain":
        return self._add(self._check_verification_exists, verification_id)

    def user_is_manager(self, user_id, team_id) -> "ValidationChain":
        return self._add(self._check_user_is_manager, user_id, team_id)

    def user_is_not_manager(self, user_id, team_id) -> "ValidationChain":
        return self._add(self._check_user_is_not_manager, user_id, team_id)

    def no_pending_request(self, user_id, team_id, source: Initiator) -> "ValidationChain":
        return self._add(self._check_no_pending_request, user_id, team_id, source)

    def user_not_on_team(self, user_id, team_id) -> "ValidationChain":
        return self._add(self._check_user_not_on_team, user_id, team_id)

    def user_on_team(self, user_id, team_id) -> "ValidationChain":
        return self._add(self._check_user_on_team, user_id, team_id)

    def request_is_team_initiated(self, request_id) -> "ValidationChain":
        return self._add(self._check_request_source, request_id, Initiator.TEAM)

    def request_is_user_initiated(self, request_id) -> "ValidationChain":
        return self._add(self._check_request_source, request_id, Initiator.PLAYER)

    def request_is_pending(self, request_id) -> "ValidationChain":
        return self._add(self._check_request_is_pending, request_id)

    def user_on_request(self, user_id, request_id) -> "ValidationChain":
        return self._add(self._check_user_on_request, user_id, request_id)

    def team_contains_request(self, team_id, request_id) -> "ValidationChain":
        return self._add(self._check_team_contains_request, team_id, request_id)

    def user_contains_request(self, user_id, request_id) -> "ValidationChain":
        return self._add(self._check_user_contains_request, user_id, request_id)

    def user_accepting_requests(self, user_id) -> "ValidationChain":
        return self._add(self._check_user_accepting_requests, user_id)

    def team_accepting_requests(self, team_id) -> "ValidationChain":
        return self._add(self._check_team_accepting_requests, team_id)

    def enough_search_characters(self, term: Optional[str]) -> "ValidationChain":
        return self._add(self._check_enough_search_characters, term)

    def valid_season_dates(self, season_start: datetime, season_end: datetime) -> "ValidationChain":
        return self._add(self._check_valid_season_dates, season_start, season_end)

    def user_is_admin(self, user_id) -> "ValidationChain":
        return self._add(self._check_user_is_admin, user_id)

    def user_is_guest(self, user_id) -> "ValidationChain":
        return self._add(self._check_user_is_guest, user_id)

    def claim_guest_request_does_not_exist(self, user_id, guest_id, team_id) -> "ValidationChain":
        return self._add(self._check_claim_guest_request_does_not_exist, user_id, guest_id, team_id)

    def user_authorized_for_request(self, user_id, request_id) -> "ValidationChain":
        return self._add(self._check_user_authorized_for_request, user_id, request_id)

    @staticmethod
    def _check_user_exists(user_id):
        if UserRepository.get_by_id(user_id) is None:
            raise ApiException(ApiErrors.UNABLE_TO_FIND_USER, status.HTTP_404_NOT_FOUND)

    @staticmethod
    def _check_team_exists(team_id):
        if TeamRepository.get_by_id(team_id) is None:
            raise ApiException(ApiErrors.UNABLE_TO_FIND_TEAM, status.HTTP_404_NOT_FOUND)

    @staticmethod
    def _check_request_exists(request_id):
        if RosterRequestRepository.get_by_id(request_id) is None:
            raise ApiException(ApiErrors.UNABLE_TO_FIND_REQUEST, status.HTTP_404_NOT_FOUND)

    @staticmethod
    def _check_designation_exists(designation_id):
        if TeamDesignationRepository.get_by_id(designation_id) is None:
            raise ApiException(ApiErrors.UNABLE_TO_FIND_DESIGNATION, status.HTTP_404_NOT_FOUND)

    @staticmethod
    def _check_verification_exists(verification_id):
        if VerificationRequestRepository.get_by_id(verification_id) is None:
            raise ApiException(ApiErrors.UNABLE_TO_FIND_VERIFICATION, status.HTTP_404_NOT_FOUND)

    @staticmethod
    def _check_user_is_manager(user_id, team_id):
        # both sides must agree; a desynced cache is treated as not a manager
        user = UserRepository.get_by_id(user_id)
        team = TeamRepository.get_by_id(team_id)
        if not user or not team or not _contains(team.managers, user_id) or not _contains(user.managerTeams, team_id):
            raise ApiException(ApiErrors.UNAUTHORIZED_MANAGER, status.HTTP_401_UNAUTHORIZED)

    @staticmethod
    def _check_user_is_not_manager(user_id, team_id):
        user = UserRepository.get_by_id(user_id)
        if not user:
            raise ApiException(ApiErrors.UNABLE_TO_FIND_USER, status.HTTP_404_NOT_FOUND)
        team = TeamRepository.get_by_id(team_id)
        if not team:
            raise ApiException(ApiErrors.UNABLE_TO_FIND_TEAM, status.HTTP_404_NOT_FOUND)
        if _contains(team.managers, user_id) or _contains(user.managerTeams, team_id):
            raise ApiException(ApiErrors.USER_ALREADY_MANAGES_TEAM)

    @staticmethod
    def _check_no_pending_request(user_id, team_id, source: Initiator):
        # the error names whoever sent the existing request, not the new sender
        existing = RosterRequestRepository.get_pending(user_id, team_id)
        if existing:
            if existing.requestSource == Initiator.TEAM:
                raise ApiException(ApiErrors.TEAM_ALREADY_REQUESTED)
            raise ApiException(ApiErrors.PLAYER_ALREADY_REQUESTED)

    @staticmethod
    def _check_user_not_on_team(user_id, team_id):
        user = UserRepository.get_by_id(user_id)
        team = TeamRepository.get_by_id(team_id)
        if (team and _contains(team.players, user_id)) or (user and _contains(user.playerTeams, team_id)):
            raise ApiException(ApiErrors.PLAYER_ALREADY_ROSTERED)

    @staticmethod
    def _check_user_on_team(user_id, team_id):
        user = UserRepository.get_by_id(user_id)
        team = TeamRepository.get_by_id(team_id)
        if not user or not team or not _contains(team.players, user_id) or not _contains(user.playerTeams, team_id):
            raise ApiException(ApiErrors.PLAYER_NOT_ON_TEAM)

    @staticmethod
    def _check_request_source(request_id, source: Initiator):
        request = RosterRequestRepository.get_by_id(request_id)
        if not request or request.requestSource != source:
            raise ApiException(ApiErrors.NOT_ALLOWED_TO_RESPOND)

    @staticmethod
    def _check_request_is_pending(request_id):
        request = RosterRequestRepository.get_by_id(request_id)
        if not request or request.status != Status.PENDING:
            raise ApiException(ApiErrors.REQUEST_ALREADY_RESOLVED)

    @staticmethod
    def _check_user_on_request(user_id, request_id):
        request = RosterRequestRepository.get_by_id(request_id)
        if not request or request.user != to_object_id(user_id):
            raise ApiException(ApiErrors.NOT_ALLOWED_TO_RESPOND)

    @staticmethod
    def _check_team_contains_request(team_id, request_id):
        team = TeamRepository.get_by_id(team_id)
        if not team or to_object_id(request_id) not in team.requests:
            raise ApiException(ApiErrors.REQUEST_NOT_IN_LIST)

    @staticmethod
    def _check_user_contains_request(user_id, request_id):
        user = UserRepository.get_by_id(user_id)
        if not user or to_object_id(request_id) not in user.requests:
            raise ApiException(ApiErrors.REQUEST_NOT_IN_LIST)

    @staticmethod
    def _check_user_accepting_requests(user_id):
        user = UserRepository.get_by_id(user_id)
        if not user or not user.openToRequests:
            raise ApiException(ApiErrors.NOT_ACCEPTING_REQUESTS)

    @staticmethod
    def _check_team_accepting_requests(team_id):
        team = TeamRepository.get_by_id(team_id)
        if not team or not team.rosterOpen:
            raise ApiException(ApiErrors.NOT_ACCEPTING_REQUESTS)

    @staticmethod
    def _check_enough_search_characters(term: Optional[str]):
        if term is None or len(term.strip()) < MIN_SEARCH_LENGTH:
            raise ApiException(ApiErrors.NOT_ENOUGH_CHARACTERS)

    @staticmethod
    def _check_valid_season_dates(season_start: datetime, season_end: datetime):
        current_year = datetime.now(timezone.utc).year
        allowed_years = {current_year, current_year + 1}
        if (
            season_start is None
            or season_end is None
            or season_start.year not in allowed_years
            or season_end.year not in allowed_years
            or season_end < season_start
        ):
            raise ApiException(ApiErrors.INVALID_SEASON_DATE)

    def _check_user_is_admin(self, user_id):
        user = UserRepository.get_by_id(user_id)
        if not user or user.email.lower() not in self._admin_emails:
            raise ApiException(ApiErrors.UNAUTHORIZED_ADMIN, status.HTTP_401_UNAUTHORIZED)

    @staticmethod
    def _check_user_is_guest(user_id):
        user = UserRepository.get_by_id(user_id)
        if not user or not user.guest:
            raise ApiException(ApiErrors.USER_IS_NOT_A_GUEST)

    @staticmethod
    def _check_claim_guest_request_does_not_exist(user_id, guest_id, team_id):
        if ClaimGuestRequestRepository.get_pending(user_id, guest_id, team_id):
            raise ApiException(ApiErrors.CLAIM_GUEST_REQUEST_ALREADY_EXISTS)

    @staticmethod
    def _check_user_authorized_for_request(user_id, request_id):
        request = RosterRequestRepository.get_by_id(request_id)
        if request and request.user == to_object_id(user_id):
            return
        team = TeamRepository.get_by_id(request.team) if request else None
        if team and _contains(team.managers, user_id):
            return
        raise ApiException(ApiErrors.UNAUTHORIZED_TO_VIEW_REQUEST, status.HTTP_401_UNAUTHORIZED)
