from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from ultmt.constants.messages import AppMessages
from ultmt.dto.user_dto import TokenPairDTO
from ultmt.models.user import UserModel
from ultmt.serializers.auth_serializers import LoginSerializer, RefreshTokenSerializer
from ultmt.services.authentication_service import AuthenticationService


class LoginView(APIView):
    @extend_schema(
        operation_id="login",
        summary="Log in with username or email",
        tags=["auth"],
        request=LoginSerializer,
        responses={
            200: OpenApiResponse(response=TokenPairDTO, description="Access and refresh tokens"),
            401: OpenApiResponse(description="Invalid credentials"),
        },
    )
    def post(self, request: Request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        tokens = AuthenticationService.login(serializer.validated_data["username"], serializer.validated_data["password"])
        return Response(data=tokens.model_dump(mode="json"), status=status.HTTP_200_OK)


class RefreshTokenView(APIView):
    @extend_schema(
        operation_id="refresh_tokens",
        summary="Exchange a refresh token for a new token pair",
        description="The refresh token that was used is revoked.",
        tags=["auth"],
        request=RefreshTokenSerializer,
        responses={
            200: OpenApiResponse(response=TokenPairDTO),
            401: OpenApiResponse(description="Refresh token expired, revoked or invalid"),
        },
    )
    def post(self, request: Request):
        serializer = RefreshTokenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        tokens = AuthenticationService.refresh_tokens(serializer.validated_data["refresh"])
        return Response(data=tokens.model_dump(mode="json"), status=status.HTTP_200_OK)


class LogoutView(APIView):
    @extend_schema(
        operation_id="logout",
        summary="Revoke the current access token",
        tags=["auth"],
        responses={200: OpenApiResponse(description="Logged out")},
    )
    def post(self, request: Request):
        AuthenticationService.logout(request.access_token)
        return Response(data={"message": AppMessages.LOGGED_OUT}, status=status.HTTP_200_OK)


class ManagerAuthenticationView(APIView):
    @extend_schema(
        operation_id="authenticate_manager",
        summary="Confirm the caller manages the team",
        tags=["auth"],
        responses={
            200: OpenApiResponse(response=UserModel),
            401: OpenApiResponse(description="Not a manager of the team"),
        },
    )
    def get(self, request: Request, team_id: str):
        user = AuthenticationService.authenticate_manager(request.user_id, team_id)
        return Response(data=user.model_dump(mode="json", by_alias=True), status=status.HTTP_200_OK)
