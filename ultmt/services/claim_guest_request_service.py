import logging
from typing import List

from rest_framework import status

from ultmt.constants.messages import ApiErrors
from ultmt.constants.roster import Status
from ultmt.exceptions.api_exceptions import ApiException
from ultmt.models.claim_guest_request import ClaimGuestRequestModel
from ultmt.models.user import UserModel
from ultmt.repositories.claim_guest_request_repository import ClaimGuestRequestRepository
from ultmt.repositories.common.mongo_repository import to_object_id
from ultmt.repositories.team_repository import ArchiveTeamRepository, TeamRepository
from ultmt.repositories.user_repository import UserRepository
from ultmt.utils.embedded import append_unique, contains_id, embed_team, embed_user, without_id
from ultmt.utils.entity_lookup import get_user_or_raise
from ultmt.utils.validation_chain import ValidationChain

logger = logging.getLogger(__name__)


class ClaimGuestRequestService:
    @classmethod
    def create_claim_guest_request(cls, user_id: str, guest_id: str, team_id: str) -> ClaimGuestRequestModel:
        """A real user asks to take over a guest on one of a team's rosters."""
        (
            ValidationChain()
            .user_exists(user_id)
            .user_exists(guest_id)
            .team_exists(team_id)
            .user_is_guest(guest_id)
            .user_on_team(guest_id, team_id)
            .claim_guest_request_does_not_exist(user_id, guest_id, team_id)
            .test()
        )
        request = ClaimGuestRequestModel(
            guestId=to_object_id(guest_id), userId=to_object_id(user_id), teamId=to_object_id(team_id)
        )
        ClaimGuestRequestRepository.create(request)
        logger.info(f"Claim request {request.id} created for guest {guest_id} by user {user_id}")
        return request

    @classmethod
    def get_claim_guest_requests_for_team(cls, manager_id: str, team_id: str) -> List[ClaimGuestRequestModel]:
        ValidationChain().user_exists(manager_id).team_exists(team_id).user_is_manager(manager_id, team_id).test()
        return ClaimGuestRequestRepository.get_pending_for_team(team_id)

    @classmethod
    def deny_claim_guest_request(cls, manager_id: str, request_id: str) -> ClaimGuestRequestModel:
        request = cls._get_pending_for_manager(manager_id, request_id)
        request.status = Status.DENIED.value
        ClaimGuestRequestRepository.save(request)
        logger.info(f"Claim request {request.id} denied")
        return request

    @classmethod
    def accept_claim_guest_request(cls, manager_id: str, request_id: str) -> ClaimGuestRequestModel:
        """
        Merge the guest into the claiming user and delete the guest.

        Live teams swap the guest for the user on the roster; archived seasons
        only land in the user's archiveTeams. A team the user is already on just
        loses the guest, so accepting never creates a duplicate membership. Once
        this claim is approved every other pending claim on the guest is denied.
        """
        request = cls._get_pending_for_manager(manager_id, request_id)
        guest = get_user_or_raise(request.guestId)
        user = get_user_or_raise(request.userId)

        cls._merge_live_teams(guest, user)
        cls._merge_archive_teams(guest, user)
        UserRepository.save(user)

        request.status = Status.APPROVED.value
        ClaimGuestRequestRepository.save(request)
        ClaimGuestRequestRepository.deny_other_pending(guest.id, request.id)

        UserRepository.delete_by_id(guest.id)
        logger.info(f"Claim request {request.id} accepted, guest {guest.id} merged into user {user.id}")
        return request

    @staticmethod
    def _merge_live_teams(guest: UserModel, user: UserModel) -> None:
        embedded_user = embed_user(user)
        for guest_team in guest.playerTeams:
            team = TeamRepository.get_by_id(guest_team.id)
            if team is None:
                logger.warning(f"Guest {guest.id} lists missing team {guest_team.id}")
                continue
            team.players = without_id(team.players, guest.id)
            team.players = append_unique(team.players, embedded_user)
            TeamRepository.save(team)
            user.playerTeams = append_unique(user.playerTeams, embed_team(team))

    @staticmethod
    def _merge_archive_teams(guest: UserModel, user: UserModel) -> None:
        for archive_team in guest.archiveTeams:
            if contains_id(user.archiveTeams, archive_team.id):
                continue
            if ArchiveTeamRepository.get_by_id(archive_team.id) is None:
                logger.warning(f"Guest {guest.id} lists missing archived team {archive_team.id}")
                continue
            user.archiveTeams = [*user.archiveTeams, archive_team]

    @classmethod
    def _get_pending_for_manager(cls, manager_id: str, request_id: str) -> ClaimGuestRequestModel:
        request = ClaimGuestRequestRepository.get_by_id(request_id)
        if request is None:
            raise ApiException(ApiErrors.UNABLE_TO_FIND_REQUEST, status.HTTP_404_NOT_FOUND)
        ValidationChain().user_exists(manager_id).user_is_manager(manager_id, request.teamId).test()
        if request.status != Status.PENDING:
            raise ApiException(ApiErrors.REQUEST_ALREADY_RESOLVED)
        return request
