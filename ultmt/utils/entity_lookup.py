from rest_framework import status

from ultmt.constants.messages import ApiErrors
from ultmt.exceptions.api_exceptions import ApiException
from ultmt.models.roster_request import RosterRequestModel
from ultmt.models.team import TeamModel
from ultmt.models.user import UserModel
from ultmt.repositories.roster_request_repository import RosterRequestRepository
from ultmt.repositories.team_repository import TeamRepository
from ultmt.repositories.user_repository import UserRepository


def get_user_or_raise(user_id) -> UserModel:
    user = UserRepository.get_by_id(user_id)
    if user is None:
        raise ApiException(ApiErrors.UNABLE_TO_FIND_USER, status.HTTP_404_NOT_FOUND)
    return user


def get_team_or_raise(team_id) -> TeamModel:
    team = TeamRepository.get_by_id(team_id)
    if team is None:
        raise ApiException(ApiErrors.UNABLE_TO_FIND_TEAM, status.HTTP_404_NOT_FOUND)
    return team


def get_request_or_raise(request_id) -> RosterRequestModel:
    request = RosterRequestRepository.get_by_id(request_id)
    if request is None:
        raise ApiException(ApiErrors.UNABLE_TO_FIND_REQUEST, status.HTTP_404_NOT_FOUND)
    return request
