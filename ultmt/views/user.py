from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from ultmt.dto.user_dto import GetMeResponse, SignUpDTO, UserWithTokensResponse
from ultmt.models.user import UserModel
from ultmt.serializers.query_serializers import CodeQuerySerializer, OpenQuerySerializer, PrivateQuerySerializer
from ultmt.serializers.user_serializers import (
    ChangeEmailSerializer,
    ChangeNameSerializer,
    ChangePasswordSerializer,
    PasswordRecoverySerializer,
    PasswordResetSerializer,
    SignUpSerializer,
    UserSearchQuerySerializer,
)
from ultmt.services.user_service import UserService


def _user_with_tokens(user, tokens) -> dict:
    return UserWithTokensResponse(user=user, tokens=tokens).model_dump(mode="json", by_alias=True)


class UserView(APIView):
    @extend_schema(
        operation_id="sign_up",
        summary="Create an account",
        tags=["users"],
        request=SignUpSerializer,
        responses={
            201: OpenApiResponse(response=UserWithTokensResponse, description="Account created"),
            400: OpenApiResponse(description="Missing fields, invalid values or duplicate email/username"),
        },
    )
    def post(self, request: Request):
        serializer = SignUpSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user, tokens = UserService.sign_up(SignUpDTO(**serializer.validated_data))
        return Response(data=_user_with_tokens(user, tokens), status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="delete_user",
        summary="Delete the authenticated account",
        tags=["users"],
        responses={204: OpenApiResponse(description="Account deleted")},
    )
    def delete(self, request: Request):
        UserService.delete_user(request.user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class UserMeView(APIView):
    @extend_schema(
        operation_id="get_me",
        summary="Get the authenticated user with full records of managed teams",
        tags=["users"],
        responses={200: OpenApiResponse(response=GetMeResponse)},
    )
    def get(self, request: Request):
        response = UserService.get_me(request.user_id)
        return Response(data=response.model_dump(mode="json", by_alias=True), status=status.HTTP_200_OK)


class UserDetailView(APIView):
    @extend_schema(
        operation_id="get_user",
        summary="Get a public user profile",
        description="Pending requests are never included. Private users also hide their team lists.",
        tags=["users"],
        responses={
            200: OpenApiResponse(response=UserModel),
            404: OpenApiResponse(description="User not found"),
        },
    )
    def get(self, request: Request, user_id: str):
        user = UserService.get_user(user_id)
        return Response(data=user.model_dump(mode="json", by_alias=True), status=status.HTTP_200_OK)


class UserSearchView(APIView):
    @extend_schema(
        operation_id="search_users",
        summary="Search users by name or username",
        tags=["users"],
        parameters=[
            OpenApiParameter(name="q", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=True),
            OpenApiParameter(
                name="open",
                type=OpenApiTypes.BOOL,
                location=OpenApiParameter.QUERY,
                description="Only return users that are (or are not) open to requests",
            ),
        ],
    )
    def get(self, request: Request):
        query = UserSearchQuerySerializer(data=request.query_params.dict())
        query.is_valid(raise_exception=True)
        users = UserService.search_users(query.validated_data["q"], query.validated_data["open"])
        return Response(
            data=[user.model_dump(mode="json", by_alias=True) for user in users], status=status.HTTP_200_OK
        )


class UsernameTakenView(APIView):
    @extend_schema(
        operation_id="username_taken",
        summary="Check whether a username is in use",
        tags=["users"],
        parameters=[
            OpenApiParameter(name="username", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=True)
        ],
        responses={
            200: OpenApiResponse(description="taken is true when another user has the username"),
            400: OpenApiResponse(description="Username missing or too short"),
        },
    )
    def get(self, request: Request):
        taken = UserService.username_taken(request.query_params.get("username"))
        return Response(data={"taken": taken}, status=status.HTTP_200_OK)


class UserOpenView(APIView):
    @extend_schema(
        operation_id="set_open_to_requests",
        summary="Accept or refuse invitations from teams",
        tags=["users"],
        parameters=[
            OpenApiParameter(name="open", type=OpenApiTypes.BOOL, location=OpenApiParameter.QUERY, required=True)
        ],
        responses={200: OpenApiResponse(response=UserModel)},
    )
    def put(self, request: Request):
        query = OpenQuerySerializer(data=request.query_params.dict())
        query.is_valid(raise_exception=True)
        user = UserService.set_open_to_requests(request.user_id, query.validated_data["open"])
        return Response(data=user.model_dump(mode="json", by_alias=True), status=status.HTTP_200_OK)


class UserPrivateView(APIView):
    @extend_schema(
        operation_id="set_private_account",
        summary="Hide or show the user's teams on their public profile",
        tags=["users"],
        parameters=[
            OpenApiParameter(name="private", type=OpenApiTypes.BOOL, location=OpenApiParameter.QUERY, required=True)
        ],
        responses={200: OpenApiResponse(response=UserModel)},
    )
    def put(self, request: Request):
        query = PrivateQuerySerializer(data=request.query_params.dict())
        query.is_valid(raise_exception=True)
        user = UserService.set_private_account(request.user_id, query.validated_data["private"])
        return Response(data=user.model_dump(mode="json", by_alias=True), status=status.HTTP_200_OK)


class LeaveTeamView(APIView):
    @extend_schema(
        operation_id="leave_team",
        summary="Leave a team's roster",
        tags=["users"],
        responses={
            200: OpenApiResponse(response=UserModel),
            400: OpenApiResponse(description="User is not on the team"),
        },
    )
    def post(self, request: Request, team_id: str):
        user = UserService.leave_team(request.user_id, team_id)
        return Response(data=user.model_dump(mode="json", by_alias=True), status=status.HTTP_200_OK)


class LeaveManagerRoleView(APIView):
    @extend_schema(
        operation_id="leave_manager_role",
        summary="Stop managing a team",
        description="Refused when the user is the team's only manager.",
        tags=["users"],
        responses={
            200: OpenApiResponse(response=UserModel),
            400: OpenApiResponse(description="User is the only manager"),
            401: OpenApiResponse(description="User is not a manager of the team"),
        },
    )
    def post(self, request: Request, team_id: str):
        user = UserService.leave_manager_role(team_id, request.user_id)
        return Response(data=user.model_dump(mode="json", by_alias=True), status=status.HTTP_200_OK)


class ChangePasswordView(APIView):
    @extend_schema(
        operation_id="change_password",
        summary="Change password",
        description="Requires the current password. Returns a fresh token pair.",
        tags=["users"],
        request=ChangePasswordSerializer,
        responses={200: OpenApiResponse(response=UserWithTokensResponse)},
    )
    def put(self, request: Request):
        serializer = ChangePasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user, tokens = UserService.change_password(
            request.user_id, serializer.validated_data["currentPassword"], serializer.validated_data["newPassword"]
        )
        return Response(data=_user_with_tokens(user, tokens), status=status.HTTP_200_OK)


class ChangeEmailView(APIView):
    @extend_schema(
        operation_id="change_email",
        summary="Change email",
        tags=["users"],
        request=ChangeEmailSerializer,
        responses={200: OpenApiResponse(response=UserModel)},
    )
    def put(self, request: Request):
        serializer = ChangeEmailSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = UserService.change_email(
            request.user_id, serializer.validated_data["currentPassword"], serializer.validated_data["newEmail"]
        )
        return Response(data=user.model_dump(mode="json", by_alias=True), status=status.HTTP_200_OK)


class ChangeNameView(APIView):
    @extend_schema(
        operation_id="change_name",
        summary="Change first and/or last name",
        tags=["users"],
        request=ChangeNameSerializer,
        responses={200: OpenApiResponse(response=UserModel)},
    )
    def put(self, request: Request):
        serializer = ChangeNameSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = UserService.change_name(
            request.user_id, serializer.validated_data.get("firstName"), serializer.validated_data.get("lastName")
        )
        return Response(data=user.model_dump(mode="json", by_alias=True), status=status.HTTP_200_OK)


class PasswordRecoveryView(APIView):
    @extend_schema(
        operation_id="request_password_recovery",
        summary="Email a password recovery passcode",
        description="Always answers 200 so callers cannot tell which emails have accounts.",
        tags=["users"],
        request=PasswordRecoverySerializer,
        responses={
            200: OpenApiResponse(description="Recovery requested"),
            500: OpenApiResponse(description="Email could not be sent"),
        },
    )
    def post(self, request: Request):
        serializer = PasswordRecoverySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        UserService.request_password_recovery(serializer.validated_data["email"])
        return Response(status=status.HTTP_200_OK)


class PasswordResetView(APIView):
    @extend_schema(
        operation_id="reset_password",
        summary="Set a new password with a recovery passcode",
        tags=["users"],
        request=PasswordResetSerializer,
        responses={
            200: OpenApiResponse(response=UserWithTokensResponse),
            400: OpenApiResponse(description="Invalid or expired passcode, or weak password"),
        },
    )
    def post(self, request: Request):
        serializer = PasswordResetSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user, tokens = UserService.reset_password(
            serializer.validated_data["passcode"], serializer.validated_data["newPassword"]
        )
        return Response(data=_user_with_tokens(user, tokens), status=status.HTTP_200_OK)


class JoinByCodeView(APIView):
    @extend_schema(
        operation_id="join_team_by_code",
        summary="Join a team roster with a bulk join code",
        tags=["users"],
        parameters=[OpenApiParameter(name="code", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY)],
        responses={200: OpenApiResponse(response=UserModel)},
    )
    def post(self, request: Request):
        query = CodeQuerySerializer(data=request.query_params.dict())
        query.is_valid(raise_exception=True)
        user = UserService.join_by_code(request.user_id, query.validated_data["code"])
        return Response(data=user.model_dump(mode="json", by_alias=True), status=status.HTTP_200_OK)
