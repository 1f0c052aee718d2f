from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from ultmt.models.verification_request import VerificationRequestModel
from ultmt.serializers.verification_request_serializer import (
    CreateVerificationRequestSerializer,
    VerificationResponseQuerySerializer,
)
from ultmt.services.verification_request_service import VerificationRequestService


class VerificationRequestListView(APIView):
    @extend_schema(
        operation_id="request_verification",
        summary="Ask the admins to verify a team or your own account",
        tags=["verification"],
        request=CreateVerificationRequestSerializer,
        responses={
            201: OpenApiResponse(response=VerificationRequestModel),
            400: OpenApiResponse(description="Invalid source type"),
            401: OpenApiResponse(description="Not allowed to request verification of this source"),
        },
    )
    def post(self, request: Request):
        serializer = CreateVerificationRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        verification = VerificationRequestService.request_verification(
            request.user_id, serializer.validated_data["sourceType"], serializer.validated_data["sourceId"]
        )
        return Response(data=verification.model_dump(mode="json", by_alias=True), status=status.HTTP_201_CREATED)


class VerificationRequestDetailView(APIView):
    @extend_schema(
        operation_id="get_verification",
        summary="Get a verification request",
        tags=["verification"],
        responses={
            200: OpenApiResponse(response=VerificationRequestModel),
            404: OpenApiResponse(description="Verification request not found"),
        },
    )
    def get(self, request: Request, verification_id: str):
        verification = VerificationRequestService.get_verification(verification_id)
        return Response(data=verification.model_dump(mode="json", by_alias=True), status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="respond_to_verification",
        summary="Approve or deny a verification request",
        tags=["verification"],
        parameters=[
            OpenApiParameter(
                name="response",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="approved or denied",
            )
        ],
        responses={
            200: OpenApiResponse(response=VerificationRequestModel),
            401: OpenApiResponse(description="Not an admin"),
        },
    )
    def put(self, request: Request, verification_id: str):
        query = VerificationResponseQuerySerializer(data=request.query_params.dict())
        query.is_valid(raise_exception=True)
        verification = VerificationRequestService.respond_to_verification(
            request.user_id, verification_id, query.validated_data["response"]
        )
        return Response(data=verification.model_dump(mode="json", by_alias=True), status=status.HTTP_200_OK)
