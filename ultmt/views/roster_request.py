from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from ultmt.dto.roster_request_dto import RosterRequestDetailsDTO
from ultmt.models.roster_request import RosterRequestModel
from ultmt.serializers.query_serializers import AcceptQuerySerializer
from ultmt.services.roster_request_service import RosterRequestService

ACCEPT_PARAMETER = OpenApiParameter(
    name="accept",
    type=OpenApiTypes.BOOL,
    location=OpenApiParameter.QUERY,
    required=True,
    description="true approves the request, false denies it",
)


def _dump(request) -> dict:
    return request.model_dump(mode="json", by_alias=True)


class PlayerRequestView(APIView):
    @extend_schema(
        operation_id="request_from_player",
        summary="Ask to join a team's roster",
        tags=["roster-requests"],
        responses={
            201: OpenApiResponse(response=RosterRequestModel),
            400: OpenApiResponse(description="Already requested, already rostered or roster closed"),
        },
    )
    def post(self, request: Request, team_id: str):
        roster_request = RosterRequestService.request_from_player(request.user_id, team_id)
        return Response(data=_dump(roster_request), status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="get_requests_by_team",
        summary="List a team's queued requests with team and user details",
        tags=["roster-requests"],
        responses={200: OpenApiResponse(response=RosterRequestDetailsDTO)},
    )
    def get(self, request: Request, team_id: str):
        requests = RosterRequestService.get_requests_by_team(request.user_id, team_id)
        return Response(data=[_dump(details) for details in requests], status=status.HTTP_200_OK)


class TeamRequestView(APIView):
    @extend_schema(
        operation_id="request_from_team",
        summary="Invite a user to the roster",
        tags=["roster-requests"],
        responses={
            201: OpenApiResponse(response=RosterRequestModel),
            400: OpenApiResponse(description="Already requested, already rostered or user not accepting requests"),
            401: OpenApiResponse(description="Not a manager of the team"),
        },
    )
    def post(self, request: Request, team_id: str, user_id: str):
        roster_request = RosterRequestService.request_from_team(request.user_id, team_id, user_id)
        return Response(data=_dump(roster_request), status=status.HTTP_201_CREATED)


class UserRequestsView(APIView):
    @extend_schema(
        operation_id="get_requests_by_user",
        summary="List the caller's queued requests with team and user details",
        tags=["roster-requests"],
        responses={200: OpenApiResponse(response=RosterRequestDetailsDTO)},
    )
    def get(self, request: Request):
        requests = RosterRequestService.get_requests_by_user(request.user_id)
        return Response(data=[_dump(details) for details in requests], status=status.HTTP_200_OK)


class RosterRequestDetailView(APIView):
    @extend_schema(
        operation_id="get_roster_request",
        summary="Get a request with team and user details",
        description="Visible to the requested user and to the team's managers.",
        tags=["roster-requests"],
        responses={
            200: OpenApiResponse(response=RosterRequestDetailsDTO),
            401: OpenApiResponse(description="Not allowed to view the request"),
            404: OpenApiResponse(description="Request not found"),
        },
    )
    def get(self, request: Request, request_id: str):
        details = RosterRequestService.get_roster_request(request.user_id, request_id)
        return Response(data=_dump(details), status=status.HTTP_200_OK)


class TeamResponseView(APIView):
    @extend_schema(
        operation_id="team_respond_to_request",
        summary="A manager approves or denies a request",
        tags=["roster-requests"],
        parameters=[ACCEPT_PARAMETER],
        responses={200: OpenApiResponse(response=RosterRequestModel)},
    )
    def post(self, request: Request, request_id: str):
        query = AcceptQuerySerializer(data=request.query_params.dict())
        query.is_valid(raise_exception=True)
        roster_request = RosterRequestService.team_respond_to_request(
            request.user_id, request_id, query.validated_data["accept"]
        )
        return Response(data=_dump(roster_request), status=status.HTTP_200_OK)


class UserResponseView(APIView):
    @extend_schema(
        operation_id="user_respond_to_request",
        summary="A user approves or denies a team's invitation",
        tags=["roster-requests"],
        parameters=[ACCEPT_PARAMETER],
        responses={200: OpenApiResponse(response=RosterRequestModel)},
    )
    def post(self, request: Request, request_id: str):
        query = AcceptQuerySerializer(data=request.query_params.dict())
        query.is_valid(raise_exception=True)
        roster_request = RosterRequestService.user_respond_to_request(
            request.user_id, request_id, query.validated_data["accept"]
        )
        return Response(data=_dump(roster_request), status=status.HTTP_200_OK)


class TeamDeleteRequestView(APIView):
    @extend_schema(
        operation_id="team_delete_request",
        summary="A manager withdraws a request from both queues",
        tags=["roster-requests"],
        responses={
            200: OpenApiResponse(response=RosterRequestModel),
            400: OpenApiResponse(description="Request is not in the team's queue"),
            401: OpenApiResponse(description="Not a manager of the team"),
        },
    )
    def delete(self, request: Request, request_id: str):
        roster_request = RosterRequestService.team_delete(request.user_id, request_id)
        return Response(data=_dump(roster_request), status=status.HTTP_200_OK)


class UserDeleteRequestView(APIView):
    @extend_schema(
        operation_id="user_delete_request",
        summary="A user withdraws a request from both queues",
        tags=["roster-requests"],
        responses={
            200: OpenApiResponse(response=RosterRequestModel),
            400: OpenApiResponse(description="Request is not in the user's queue"),
        },
    )
    def delete(self, request: Request, request_id: str):
        roster_request = RosterRequestService.user_delete(request.user_id, request_id)
        return Response(data=_dump(roster_request), status=status.HTTP_200_OK)
