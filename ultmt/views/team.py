from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from ultmt.dto.team_dto import CreateGuestDTO, CreateTeamDTO
from ultmt.models.one_time_passcode import OneTimePasscodeModel
from ultmt.models.team import ArchiveTeamModel, TeamModel
from ultmt.serializers.query_serializers import ManagerQuerySerializer, OpenQuerySerializer
from ultmt.serializers.team_serializers import (
    ChangeDesignationSerializer,
    CreateGuestSerializer,
    CreateTeamSerializer,
    RolloverSerializer,
    TeamSearchQuerySerializer,
)
from ultmt.services.team_service import TeamService

TEAM_ID_PARAMETER = OpenApiParameter(
    name="team_id",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.PATH,
    description="Unique identifier of the team",
)


def _dump(team) -> dict:
    return team.model_dump(mode="json", by_alias=True)


class TeamListView(APIView):
    @extend_schema(
        operation_id="create_team",
        summary="Create a new team",
        description="Creates the first season of a team. The creator becomes its only manager.",
        tags=["teams"],
        request=CreateTeamSerializer,
        responses={
            201: OpenApiResponse(response=TeamModel, description="Team created successfully"),
            400: OpenApiResponse(description="Bad request - validation error or duplicate teamname"),
        },
    )
    def post(self, request: Request):
        serializer = CreateTeamSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        team = TeamService.create_team(CreateTeamDTO(**serializer.validated_data), request.user_id)
        return Response(data=_dump(team), status=status.HTTP_201_CREATED)


class TeamSearchView(APIView):
    @extend_schema(
        operation_id="search_teams",
        summary="Search teams by place, name or teamname",
        tags=["teams"],
        parameters=[
            OpenApiParameter(name="q", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=True),
            OpenApiParameter(name="rosterOpen", type=OpenApiTypes.BOOL, location=OpenApiParameter.QUERY),
        ],
        responses={200: OpenApiResponse(response=TeamModel, description="Teams ranked by closeness to the term")},
    )
    def get(self, request: Request):
        query = TeamSearchQuerySerializer(data=request.query_params.dict())
        query.is_valid(raise_exception=True)
        teams = TeamService.search(query.validated_data["q"], query.validated_data["rosterOpen"])
        return Response(data=[_dump(team) for team in teams], status=status.HTTP_200_OK)


class TeamnameTakenView(APIView):
    @extend_schema(
        operation_id="teamname_taken",
        summary="Check whether a team handle is in use",
        tags=["teams"],
        parameters=[
            OpenApiParameter(name="teamname", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=True)
        ],
        responses={
            200: OpenApiResponse(description="taken is true when another team uses the handle"),
            400: OpenApiResponse(description="Handle missing or too short"),
        },
    )
    def get(self, request: Request):
        taken = TeamService.teamname_taken(request.query_params.get("teamname"))
        return Response(data={"taken": taken}, status=status.HTTP_200_OK)


class TeamDetailView(APIView):
    @extend_schema(
        operation_id="get_team_by_id",
        summary="Get team by ID",
        description="Public view of a team. Pending requests are not included.",
        tags=["teams"],
        parameters=[TEAM_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=TeamModel),
            404: OpenApiResponse(description="Team not found"),
        },
    )
    def get(self, request: Request, team_id: str):
        team = TeamService.get_team(team_id, public_req=True)
        return Response(data=_dump(team), status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="delete_team",
        summary="Delete a team",
        description="Only allowed for a team with exactly one manager, who must be the caller.",
        tags=["teams"],
        parameters=[TEAM_ID_PARAMETER],
        responses={
            204: OpenApiResponse(description="Team deleted"),
            401: OpenApiResponse(description="Not the sole manager"),
            404: OpenApiResponse(description="Team not found"),
        },
    )
    def delete(self, request: Request, team_id: str):
        TeamService.delete_team(request.user_id, team_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ManagedTeamView(APIView):
    @extend_schema(
        operation_id="get_managed_team",
        summary="Get the full team record, including pending requests",
        tags=["teams"],
        parameters=[TEAM_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=TeamModel),
            401: OpenApiResponse(description="Not a manager of the team"),
        },
    )
    def get(self, request: Request, team_id: str):
        team = TeamService.get_managed_team(team_id, request.user_id)
        return Response(data=_dump(team), status=status.HTTP_200_OK)


class ArchiveTeamDetailView(APIView):
    @extend_schema(
        operation_id="get_archived_team",
        summary="Get an archived season by its original team id",
        tags=["teams"],
        responses={
            200: OpenApiResponse(response=ArchiveTeamModel),
            404: OpenApiResponse(description="Archived team not found"),
        },
    )
    def get(self, request: Request, team_id: str):
        archive_team = TeamService.get_archived_team(team_id)
        return Response(data=_dump(archive_team), status=status.HTTP_200_OK)


class RemovePlayerView(APIView):
    @extend_schema(
        operation_id="remove_player",
        summary="Take a player off the roster",
        tags=["teams"],
        parameters=[
            TEAM_ID_PARAMETER,
            OpenApiParameter(name="user_id", type=OpenApiTypes.STR, location=OpenApiParameter.PATH),
        ],
        responses={
            200: OpenApiResponse(response=TeamModel),
            400: OpenApiResponse(description="Player is not on the team"),
            401: OpenApiResponse(description="Not a manager of the team"),
        },
    )
    def post(self, request: Request, team_id: str, user_id: str):
        team = TeamService.remove_player(request.user_id, team_id, user_id)
        return Response(data=_dump(team), status=status.HTTP_200_OK)


class RolloverView(APIView):
    @extend_schema(
        operation_id="rollover_team",
        summary="Start a new season",
        description=(
            "Archives the current season under the current id and moves the live team to a new id with the "
            "same continuationId. Pending requests are deleted. Players are carried over only when copyPlayers is true."
        ),
        tags=["teams"],
        parameters=[TEAM_ID_PARAMETER],
        request=RolloverSerializer,
        responses={
            200: OpenApiResponse(response=TeamModel, description="The new season"),
            400: OpenApiResponse(description="Invalid season dates or season has not started"),
            401: OpenApiResponse(description="Not a manager of the team"),
        },
    )
    def post(self, request: Request, team_id: str):
        serializer = RolloverSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        team = TeamService.rollover(
            request.user_id,
            team_id,
            serializer.validated_data["copyPlayers"],
            serializer.validated_data["seasonStart"],
            serializer.validated_data["seasonEnd"],
        )
        return Response(data=_dump(team), status=status.HTTP_200_OK)


class RosterOpenView(APIView):
    @extend_schema(
        operation_id="set_roster_open",
        summary="Open or close the roster to player requests",
        tags=["teams"],
        parameters=[
            TEAM_ID_PARAMETER,
            OpenApiParameter(name="open", type=OpenApiTypes.BOOL, location=OpenApiParameter.QUERY, required=True),
        ],
        responses={
            200: OpenApiResponse(response=TeamModel),
            400: OpenApiResponse(description="open query parameter missing or not a boolean"),
        },
    )
    def put(self, request: Request, team_id: str):
        query = OpenQuerySerializer(data=request.query_params.dict())
        query.is_valid(raise_exception=True)
        team = TeamService.set_roster_open(request.user_id, team_id, query.validated_data["open"])
        return Response(data=_dump(team), status=status.HTTP_200_OK)


class AddManagerView(APIView):
    @extend_schema(
        operation_id="add_manager",
        summary="Add another manager to the team",
        tags=["teams"],
        parameters=[
            TEAM_ID_PARAMETER,
            OpenApiParameter(
                name="manager",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="Id of the user to promote",
            ),
        ],
        responses={200: OpenApiResponse(response=TeamModel)},
    )
    def post(self, request: Request, team_id: str):
        query = ManagerQuerySerializer(data=request.query_params.dict())
        query.is_valid(raise_exception=True)
        team = TeamService.add_manager(request.user_id, query.validated_data["manager"], team_id)
        return Response(data=_dump(team), status=status.HTTP_200_OK)


class BulkJoinCodeView(APIView):
    @extend_schema(
        operation_id="create_bulk_join_code",
        summary="Create a join code players can use to get on the roster",
        tags=["teams"],
        parameters=[TEAM_ID_PARAMETER],
        responses={200: OpenApiResponse(response=OneTimePasscodeModel)},
    )
    def get(self, request: Request, team_id: str):
        otp = TeamService.create_bulk_join_code(request.user_id, team_id)
        return Response(data=_dump(otp), status=status.HTTP_200_OK)


class TeamDesignationChangeView(APIView):
    @extend_schema(
        operation_id="change_designation",
        summary="Change the team's designation",
        tags=["teams"],
        parameters=[TEAM_ID_PARAMETER],
        request=ChangeDesignationSerializer,
        responses={
            200: OpenApiResponse(response=TeamModel),
            404: OpenApiResponse(description="Designation not found"),
        },
    )
    def put(self, request: Request, team_id: str):
        serializer = ChangeDesignationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        team = TeamService.change_designation(request.user_id, team_id, serializer.validated_data["designation"])
        return Response(data=_dump(team), status=status.HTTP_200_OK)


class ArchiveTeamView(APIView):
    @extend_schema(
        operation_id="archive_team",
        summary="Archive the current season without starting a new one",
        tags=["teams"],
        parameters=[TEAM_ID_PARAMETER],
        responses={200: OpenApiResponse(response=ArchiveTeamModel)},
    )
    def post(self, request: Request, team_id: str):
        archive_team = TeamService.archive_team(request.user_id, team_id)
        return Response(data=_dump(archive_team), status=status.HTTP_200_OK)


class AddGuestView(APIView):
    @extend_schema(
        operation_id="add_guest",
        summary="Add a guest player to the roster",
        tags=["teams"],
        parameters=[TEAM_ID_PARAMETER],
        request=CreateGuestSerializer,
        responses={201: OpenApiResponse(response=TeamModel)},
    )
    def post(self, request: Request, team_id: str):
        serializer = CreateGuestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        team = TeamService.add_guest(team_id, request.user_id, CreateGuestDTO(**serializer.validated_data))
        return Response(data=_dump(team), status=status.HTTP_201_CREATED)
