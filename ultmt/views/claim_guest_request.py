from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from ultmt.models.claim_guest_request import ClaimGuestRequestModel
from ultmt.serializers.claim_guest_request_serializer import CreateClaimGuestRequestSerializer
from ultmt.services.claim_guest_request_service import ClaimGuestRequestService


class ClaimGuestRequestListView(APIView):
    @extend_schema(
        operation_id="create_claim_guest_request",
        summary="Ask to take over a guest player",
        tags=["claim-guest-requests"],
        request=CreateClaimGuestRequestSerializer,
        responses={
            201: OpenApiResponse(response=ClaimGuestRequestModel),
            400: OpenApiResponse(description="Not a guest, guest not on team or claim already pending"),
        },
    )
    def post(self, request: Request):
        serializer = CreateClaimGuestRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        claim = ClaimGuestRequestService.create_claim_guest_request(
            request.user_id, serializer.validated_data["guestId"], serializer.validated_data["teamId"]
        )
        return Response(data=claim.model_dump(mode="json", by_alias=True), status=status.HTTP_201_CREATED)


class TeamClaimGuestRequestsView(APIView):
    @extend_schema(
        operation_id="get_claim_guest_requests_for_team",
        summary="List pending guest claims for a team",
        tags=["claim-guest-requests"],
        responses={
            200: OpenApiResponse(response=ClaimGuestRequestModel),
            401: OpenApiResponse(description="Not a manager of the team"),
        },
    )
    def get(self, request: Request, team_id: str):
        claims = ClaimGuestRequestService.get_claim_guest_requests_for_team(request.user_id, team_id)
        return Response(
            data=[claim.model_dump(mode="json", by_alias=True) for claim in claims], status=status.HTTP_200_OK
        )


class AcceptClaimGuestRequestView(APIView):
    @extend_schema(
        operation_id="accept_claim_guest_request",
        summary="Merge the guest into the claiming user",
        description="The guest's teams and archived seasons move to the user and the guest is deleted.",
        tags=["claim-guest-requests"],
        responses={200: OpenApiResponse(response=ClaimGuestRequestModel)},
    )
    def post(self, request: Request, request_id: str):
        claim = ClaimGuestRequestService.accept_claim_guest_request(request.user_id, request_id)
        return Response(data=claim.model_dump(mode="json", by_alias=True), status=status.HTTP_200_OK)


class DenyClaimGuestRequestView(APIView):
    @extend_schema(
        operation_id="deny_claim_guest_request",
        summary="Deny a guest claim",
        tags=["claim-guest-requests"],
        responses={
            200: OpenApiResponse(response=ClaimGuestRequestModel),
            400: OpenApiResponse(description="Claim is no longer pending"),
        },
    )
    def post(self, request: Request, request_id: str):
        claim = ClaimGuestRequestService.deny_claim_guest_request(request.user_id, request_id)
        return Response(data=claim.model_dump(mode="json", by_alias=True), status=status.HTTP_200_OK)
