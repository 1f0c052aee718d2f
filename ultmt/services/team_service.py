import logging
from datetime import datetime
from typing import Iterable, List, Optional

from django.conf import settings
from django.contrib.auth.hashers import make_password
from rest_framework import status

from ultmt.constants.messages import ApiErrors
from ultmt.constants.roster import MAX_NAME_LENGTH, MIN_HANDLE_LENGTH, OTPReason
from ultmt.dto.team_dto import CreateGuestDTO, CreateTeamDTO
from ultmt.exceptions.api_exceptions import ApiException
from ultmt.models.common.pyobjectid import PyObjectId
from ultmt.models.embedded import EmbeddedTeam, EmbeddedUser
from ultmt.models.one_time_passcode import OneTimePasscodeModel
from ultmt.models.team import ArchiveTeamModel, TeamModel
from ultmt.models.user import UserModel
from ultmt.repositories.claim_guest_request_repository import ClaimGuestRequestRepository
from ultmt.repositories.common.mongo_repository import to_object_id
from ultmt.repositories.roster_request_repository import RosterRequestRepository
from ultmt.repositories.team_repository import ArchiveTeamRepository, TeamRepository
from ultmt.repositories.user_repository import UserRepository
from ultmt.services.one_time_passcode_service import OneTimePasscodeService
from ultmt.utils.embedded import append_unique, embed_team, embed_user, without_id
from ultmt.utils.entity_lookup import get_team_or_raise, get_user_or_raise
from ultmt.utils.guest_utils import generate_guest_email, generate_guest_password, generate_guest_username
from ultmt.utils.search_utils import build_prefix_clauses, rank_by_distance
from ultmt.utils.validation_chain import ValidationChain
from ultmt.utils.validators import is_valid_handle

logger = logging.getLogger(__name__)

TEAM_SEARCH_FIELDS = ("place", "name", "teamname")


class TeamService:
    @classmethod
    def create_team(cls, dto: CreateTeamDTO, user_id: str) -> TeamModel:
        """
        Create the first season of a team with the creating user as its manager.

        The new id doubles as the continuationId, which every later season of
        the team keeps.
        """
        if not all([dto.place, dto.name, dto.teamname]):
            raise ApiException(ApiErrors.MISSING_FIELDS)
        if len(dto.place) > MAX_NAME_LENGTH or len(dto.name) > MAX_NAME_LENGTH:
            raise ApiException(ApiErrors.NAME_TOO_LONG)
        if not is_valid_handle(dto.teamname):
            raise ApiException(ApiErrors.NON_ALPHANUM_TEAM_NAME)

        ValidationChain().user_exists(user_id).valid_season_dates(dto.seasonStart, dto.seasonEnd).test()
        if TeamRepository.teamname_taken(dto.teamname):
            raise ApiException(ApiErrors.DUPLICATE_TEAM_NAME)

        user = get_user_or_raise(user_id)
        team_id = PyObjectId()
        team = TeamModel(
            _id=team_id,
            continuationId=team_id,
            place=dto.place,
            name=dto.name,
            teamname=dto.teamname,
            seasonStart=dto.seasonStart,
            seasonEnd=dto.seasonEnd,
            rosterOpen=dto.rosterOpen,
            managers=[embed_user(user)],
        )
        TeamRepository.create(team)

        user.managerTeams = append_unique(user.managerTeams, embed_team(team))
        UserRepository.save(user)

        logger.info(f"Team {team.id} ({team.teamname}) created by user {user.id}")
        return team

    @classmethod
    def get_team(cls, team_id: str, public_req: bool = True) -> TeamModel:
        team = get_team_or_raise(team_id)
        if public_req:
            team.requests = []
        return team

    @classmethod
    def get_managed_team(cls, team_id: str, user_id: str) -> TeamModel:
        ValidationChain().team_exists(team_id).user_is_manager(user_id, team_id).test()
        return get_team_or_raise(team_id)

    @classmethod
    def get_archived_team(cls, team_id: str) -> ArchiveTeamModel:
        archive_team = ArchiveTeamRepository.get_by_id(team_id)
        if archive_team is None:
            raise ApiException(ApiErrors.UNABLE_TO_FIND_TEAM, status.HTTP_404_NOT_FOUND)
        return archive_team

    @classmethod
    def remove_player(cls, manager_id: str, team_id: str, user_id: str) -> TeamModel:
        (
            ValidationChain()
            .user_exists(manager_id)
            .team_exists(team_id)
            .user_exists(user_id)
            .user_is_manager(manager_id, team_id)
            .user_on_team(user_id, team_id)
            .test()
        )
        team = get_team_or_raise(team_id)
        user = get_user_or_raise(user_id)

        team.players = without_id(team.players, user.id)
        user.playerTeams = without_id(user.playerTeams, team.id)
        TeamRepository.save(team)
        UserRepository.save(user)
        return team

    @classmethod
    def rollover(
        cls, manager_id: str, team_id: str, copy_players: bool, season_start: datetime, season_end: datetime
    ) -> TeamModel:
        """
        Close the current season and open the next one.

        The current season is archived under its own id and the live team moves
        to a new id with the same continuationId. Pending requests are purged and
        every manager and player gets the archived season in archiveTeams.
        Pending guest claims move to the new id. There is no transaction, so
        the steps run in this order: archive, purge requests, swap the live
        record and its claims, then fix up managers and players. Each
        user update is an id based remove/append and can be repeated safely.
        """
        (
            ValidationChain()
            .user_exists(manager_id)
            .team_exists(team_id)
            .user_is_manager(manager_id, team_id)
            .valid_season_dates(season_start, season_end)
            .test()
        )
        team = get_team_or_raise(team_id)
        if season_start.year < team.seasonEnd.year:
            raise ApiException(ApiErrors.SEASON_START_ERROR)

        team.rosterOpen = False
        archive_team = ArchiveTeamRepository.archive(team)

        old_id = team.id
        old_requests = list(team.requests)
        old_players = list(team.players)
        archive_snapshot = embed_team(archive_team)

        new_team = team.model_copy(
            update={
                "id": PyObjectId(),
                "players": old_players if copy_players else [],
                "seasonStart": season_start,
                "seasonEnd": season_end,
                "seasonNumber": team.seasonNumber + 1,
                "requests": [],
            }
        )

        cls._purge_requests(old_requests)

        TeamRepository.delete_by_id(old_id)
        TeamRepository.create(new_team)
        ClaimGuestRequestRepository.move_pending_to_team(old_id, new_team.id)

        new_snapshot = embed_team(new_team)
        cls._retire_season(
            old_id,
            archive_snapshot,
            managers=new_team.managers,
            players=old_players,
            manager_snapshot=new_snapshot,
            player_snapshot=new_snapshot if copy_players else None,
        )

        logger.info(
            f"Team {old_id} rolled over to {new_team.id} "
            f"(season {new_team.seasonNumber}, lineage {new_team.continuationId})"
        )
        return new_team

    @classmethod
    def archive_team(cls, manager_id: str, team_id: str) -> ArchiveTeamModel:
        """Retire a team without starting a new season."""
        ValidationChain().user_exists(manager_id).team_exists(team_id).user_is_manager(manager_id, team_id).test()
        team = get_team_or_raise(team_id)

        team.rosterOpen = False
        archive_team = ArchiveTeamRepository.archive(team)

        cls._purge_requests(team.requests)
        TeamRepository.delete_by_id(team.id)
        ClaimGuestRequestRepository.deny_pending_for_team(team.id)

        cls._retire_season(team.id, embed_team(archive_team), managers=team.managers, players=team.players)

        logger.info(f"Team {team.id} archived")
        return archive_team

    @staticmethod
    def _purge_requests(request_ids: Iterable) -> None:
        """
        Delete requests that were queued on a team and drop them from their
        users' queues. A request whose user no longer exists is still deleted.
        """
        for request_id in request_ids:
            request = RosterRequestRepository.get_by_id(request_id)
            if request is None:
                logger.warning(f"Skipping missing roster request {request_id}")
                continue

            user = UserRepository.get_by_id(request.user)
            if user:
                user.requests = [queued for queued in user.requests if queued != request.id]
                UserRepository.save(user)
            else:
                logger.warning(f"Roster request {request.id} refers to missing user {request.user}")

            RosterRequestRepository.delete_by_id(request.id)

    @staticmethod
    def _retire_season(
        old_id,
        archive_snapshot: EmbeddedTeam,
        managers: List[EmbeddedUser],
        players: List[EmbeddedUser],
        manager_snapshot: Optional[EmbeddedTeam] = None,
        player_snapshot: Optional[EmbeddedTeam] = None,
    ) -> None:
        for manager in managers:
            user = UserRepository.get_by_id(manager.id)
            if user is None:
                logger.warning(f"Skipping missing manager {manager.id} of team {old_id}")
                continue
            user.managerTeams = without_id(user.managerTeams, old_id)
            user.archiveTeams = append_unique(user.archiveTeams, archive_snapshot)
            if manager_snapshot:
                user.managerTeams = append_unique(user.managerTeams, manager_snapshot)
            UserRepository.save(user)

        for player in players:
            user = UserRepository.get_by_id(player.id)
            if user is None:
                logger.warning(f"Skipping missing player {player.id} of team {old_id}")
                continue
            user.playerTeams = without_id(user.playerTeams, old_id)
            user.archiveTeams = append_unique(user.archiveTeams, archive_snapshot)
            if player_snapshot:
                user.playerTeams = append_unique(user.playerTeams, player_snapshot)
            UserRepository.save(user)

    @classmethod
    def delete_team(cls, manager_id: str, team_id: str) -> None:
        ValidationChain().user_exists(manager_id).team_exists(team_id).user_is_manager(manager_id, team_id).test()
        team = get_team_or_raise(team_id)
        if len(team.managers) != 1:
            raise ApiException(ApiErrors.UNAUTHORIZED_MANAGER, status.HTTP_401_UNAUTHORIZED)

        cls._purge_requests(team.requests)
        UserRepository.pull_player_team(team.id)
        UserRepository.pull_manager_team(team.id)
        TeamRepository.delete_by_id(team.id)
        ClaimGuestRequestRepository.deny_pending_for_team(team.id)
        logger.info(f"Team {team.id} deleted by manager {manager_id}")

    @classmethod
    def set_roster_open(cls, manager_id: str, team_id: str, roster_open: bool) -> TeamModel:
        ValidationChain().user_exists(manager_id).team_exists(team_id).user_is_manager(manager_id, team_id).test()
        team = get_team_or_raise(team_id)
        team.rosterOpen = roster_open
        return TeamRepository.save(team)

    @classmethod
    def search(cls, term: str, roster_open: Optional[bool] = None) -> List[TeamModel]:
        ValidationChain().enough_search_characters(term).test()

        clauses = build_prefix_clauses(term, TEAM_SEARCH_FIELDS)
        if not clauses:
            return []

        teams = TeamRepository.search(clauses, roster_open)
        for team in teams:
            team.requests = []
        return rank_by_distance(term, teams, lambda team: (f"{team.place} {team.name}", team.teamname))

    @classmethod
    def add_manager(cls, manager_id: str, new_manager_id: str, team_id: str) -> TeamModel:
        (
            ValidationChain()
            .user_exists(manager_id)
            .user_exists(new_manager_id)
            .team_exists(team_id)
            .user_is_manager(manager_id, team_id)
            .user_is_not_manager(new_manager_id, team_id)
            .user_accepting_requests(new_manager_id)
            .test()
        )
        team = get_team_or_raise(team_id)
        new_manager = get_user_or_raise(new_manager_id)

        team.managers = append_unique(team.managers, embed_user(new_manager))
        new_manager.managerTeams = append_unique(new_manager.managerTeams, embed_team(team))
        TeamRepository.save(team)
        UserRepository.save(new_manager)
        return team

    @classmethod
    def create_bulk_join_code(cls, manager_id: str, team_id: str) -> OneTimePasscodeModel:
        ValidationChain().user_exists(manager_id).team_exists(team_id).user_is_manager(manager_id, team_id).test()
        return OneTimePasscodeService.create_otp(
            manager_id, OTPReason.TEAM_JOIN, team_id=team_id, lifetime=settings.BULK_JOIN_CODE_LIFETIME
        )

    @classmethod
    def change_designation(cls, manager_id: str, team_id: str, designation_id: str) -> TeamModel:
        (
            ValidationChain()
            .user_exists(manager_id)
            .team_exists(team_id)
            .user_is_manager(manager_id, team_id)
            .designation_exists(designation_id)
            .test()
        )
        team = get_team_or_raise(team_id)
        team.designation = to_object_id(designation_id)
        TeamRepository.save(team)
        UserRepository.set_embedded_team_fields(team.id, {"designation": team.designation})
        return team

    @classmethod
    def teamname_taken(cls, teamname: Optional[str]) -> bool:
        if not teamname or len(teamname) < MIN_HANDLE_LENGTH:
            raise ApiException(ApiErrors.INVALID_TEAM_NAME)
        return TeamRepository.teamname_taken(teamname)

    @classmethod
    def add_guest(cls, team_id: str, manager_id: str, dto: CreateGuestDTO) -> TeamModel:
        """
        Put a placeholder player on the roster for someone without an account.
        The guest gets a generated username and email and a random password no
        one is told, until a real user claims it.
        """
        (
            ValidationChain()
            .team_exists(team_id)
            .user_exists(manager_id)
            .user_is_manager(manager_id, team_id)
            .test()
        )
        if not dto.firstName or not dto.lastName:
            raise ApiException(ApiErrors.MISSING_FIELDS)
        if len(dto.firstName) > MAX_NAME_LENGTH or len(dto.lastName) > MAX_NAME_LENGTH:
            raise ApiException(ApiErrors.NAME_TOO_LONG)

        team = get_team_or_raise(team_id)

        username = generate_guest_username()
        email = generate_guest_email(username)
        while UserRepository.username_taken(username) or UserRepository.email_taken(email):
            username = generate_guest_username()
            email = generate_guest_email(username)

        guest = UserModel(
            firstName=dto.firstName,
            lastName=dto.lastName,
            username=username,
            email=email,
            password=make_password(generate_guest_password()),
            guest=True,
            playerTeams=[embed_team(team)],
        )
        UserRepository.create(guest)

        team.players = append_unique(team.players, embed_user(guest))
        TeamRepository.save(team)

        logger.info(f"Guest {guest.id} added to team {team.id}")
        return team
