import logging
from typing import List

from ultmt.constants.roster import Initiator, Status
from ultmt.dto.roster_request_dto import RosterRequestDetailsDTO
from ultmt.models.roster_request import RosterRequestModel
from ultmt.repositories.roster_request_repository import RosterRequestRepository
from ultmt.repositories.team_repository import TeamRepository
from ultmt.repositories.user_repository import UserRepository
from ultmt.utils.embedded import append_unique, embed_team, embed_user
from ultmt.utils.entity_lookup import get_request_or_raise, get_team_or_raise, get_user_or_raise
from ultmt.utils.validation_chain import ValidationChain

logger = logging.getLogger(__name__)


class RosterRequestService:
    """
    Membership requests between a team and a player.

    A request is created pending and its id is pushed onto both the user's and
    the team's request queue. Responding resolves it and clears it from the
    responding side's queue only, so the other side still sees the outcome.
    Deleting clears both queues and removes the record.

    None of this is transactional. Every method validates against freshly
    loaded entities first and then writes the request, the team and the user in
    that order; list appends and removals are by id so a repeated write does
    not duplicate anything.
    """

    @classmethod
    def request_from_team(cls, manager_id: str, team_id: str, user_id: str) -> RosterRequestModel:
        (
            ValidationChain()
            .user_exists(manager_id)
            .team_exists(team_id)
            .user_exists(user_id)
            .user_is_manager(manager_id, team_id)
            .no_pending_request(user_id, team_id, Initiator.TEAM)
            .user_not_on_team(user_id, team_id)
            .user_accepting_requests(user_id)
            .test()
        )
        return cls._create_request(user_id, team_id, Initiator.TEAM)

    @classmethod
    def request_from_player(cls, user_id: str, team_id: str) -> RosterRequestModel:
        (
            ValidationChain()
            .user_exists(user_id)
            .team_exists(team_id)
            .no_pending_request(user_id, team_id, Initiator.PLAYER)
            .user_not_on_team(user_id, team_id)
            .team_accepting_requests(team_id)
            .test()
        )
        return cls._create_request(user_id, team_id, Initiator.PLAYER)

    @classmethod
    def _create_request(cls, user_id: str, team_id: str, source: Initiator) -> RosterRequestModel:
        team = get_team_or_raise(team_id)
        user = get_user_or_raise(user_id)

        request = RosterRequestRepository.create(
            RosterRequestModel(team=team.id, user=user.id, requestSource=source.value)
        )

        team.requests = [*team.requests, request.id]
        user.requests = [*user.requests, request.id]
        TeamRepository.save(team)
        UserRepository.save(user)

        logger.info(f"Roster request {request.id} created by {source.value} for team {team.id} and user {user.id}")
        return request

    @classmethod
    def team_respond_to_request(cls, manager_id: str, request_id: str, approve: bool) -> RosterRequestModel:
        """
        A manager answers a request the player sent. The id leaves the team's
        queue and stays on the player's.
        """
        request = get_request_or_raise(request_id)
        chain = (
            ValidationChain()
            .user_exists(manager_id)
            .team_exists(request.team)
            .user_is_manager(manager_id, request.team)
            .request_is_user_initiated(request_id)
            .request_is_pending(request_id)
        )
        if approve:
            chain.user_not_on_team(request.user, request.team)
        chain.test()

        team = get_team_or_raise(request.team)
        user = get_user_or_raise(request.user) if approve else None
        if user:
            cls._join_roster(team, user)
        team.requests = [queued for queued in team.requests if queued != request.id]
        request.status = Status.APPROVED.value if approve else Status.DENIED.value

        RosterRequestRepository.save(request)
        TeamRepository.save(team)
        if user:
            UserRepository.save(user)

        logger.info(f"Team {team.id} resolved roster request {request.id} as {request.status}")
        return request

    @classmethod
    def user_respond_to_request(cls, user_id: str, request_id: str, approve: bool) -> RosterRequestModel:
        """
        A player answers a request the team sent. The id leaves the player's
        queue and stays on the team's.
        """
        request = get_request_or_raise(request_id)
        chain = (
            ValidationChain()
            .user_exists(user_id)
            .team_exists(request.team)
            .request_is_team_initiated(request_id)
            .request_is_pending(request_id)
            .user_on_request(user_id, request_id)
        )
        if approve:
            chain.user_not_on_team(user_id, request.team)
        chain.test()

        user = get_user_or_raise(user_id)
        team = get_team_or_raise(request.team) if approve else None
        if team:
            cls._join_roster(team, user)
        user.requests = [queued for queued in user.requests if queued != request.id]
        request.status = Status.APPROVED.value if approve else Status.DENIED.value

        RosterRequestRepository.save(request)
        if team:
            TeamRepository.save(team)
        UserRepository.save(user)

        logger.info(f"User {user.id} resolved roster request {request.id} as {request.status}")
        return request

    @staticmethod
    def _join_roster(team, user) -> None:
        team.players = append_unique(team.players, embed_user(user))
        user.playerTeams = append_unique(user.playerTeams, embed_team(team))

    @classmethod
    def team_delete(cls, manager_id: str, request_id: str) -> RosterRequestModel:
        request = get_request_or_raise(request_id)
        (
            ValidationChain()
            .user_exists(manager_id)
            .team_exists(request.team)
            .user_is_manager(manager_id, request.team)
            .team_contains_request(request.team, request_id)
            .test()
        )
        return cls._delete_request(request)

    @classmethod
    def user_delete(cls, user_id: str, request_id: str) -> RosterRequestModel:
        request = get_request_or_raise(request_id)
        (
            ValidationChain()
            .user_exists(user_id)
            .user_on_request(user_id, request_id)
            .user_contains_request(user_id, request_id)
            .test()
        )
        return cls._delete_request(request)

    @classmethod
    def _delete_request(cls, request: RosterRequestModel) -> RosterRequestModel:
        team = TeamRepository.get_by_id(request.team)
        if team:
            team.requests = [queued for queued in team.requests if queued != request.id]
            TeamRepository.save(team)

        user = UserRepository.get_by_id(request.user)
        if user:
            user.requests = [queued for queued in user.requests if queued != request.id]
            UserRepository.save(user)

        RosterRequestRepository.delete_by_id(request.id)
        logger.info(f"Roster request {request.id} deleted")
        return request

    @classmethod
    def get_roster_request(cls, user_id: str, request_id: str) -> RosterRequestDetailsDTO:
        ValidationChain().request_exists(request_id).user_authorized_for_request(user_id, request_id).test()
        request = get_request_or_raise(request_id)
        return cls._with_details([request])[0]

    @classmethod
    def get_requests_by_team(cls, manager_id: str, team_id: str) -> List[RosterRequestDetailsDTO]:
        ValidationChain().user_exists(manager_id).team_exists(team_id).user_is_manager(manager_id, team_id).test()
        team = get_team_or_raise(team_id)
        return cls._with_details(RosterRequestRepository.get_by_ids(team.requests))

    @classmethod
    def get_requests_by_user(cls, user_id: str) -> List[RosterRequestDetailsDTO]:
        user = get_user_or_raise(user_id)
        return cls._with_details(RosterRequestRepository.get_by_ids(user.requests))

    @staticmethod
    def _with_details(requests: List[RosterRequestModel]) -> List[RosterRequestDetailsDTO]:
        teams = {team.id: team for team in TeamRepository.get_by_ids([request.team for request in requests])}
        users = {user.id: user for user in UserRepository.get_by_ids([request.user for request in requests])}

        details = []
        for request in requests:
            team = teams.get(request.team)
            user = users.get(request.user)
            details.append(
                RosterRequestDetailsDTO(
                    _id=request.id,
                    team=embed_team(team) if team else None,
                    user=embed_user(user) if user else None,
                    requestSource=request.requestSource,
                    status=request.status,
                )
            )
        return details
