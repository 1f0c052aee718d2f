from django.urls import path

from ultmt.views.auth import LoginView, LogoutView, ManagerAuthenticationView, RefreshTokenView
from ultmt.views.claim_guest_request import (
    AcceptClaimGuestRequestView,
    ClaimGuestRequestListView,
    DenyClaimGuestRequestView,
    TeamClaimGuestRequestsView,
)
from ultmt.views.health import HealthView
from ultmt.views.one_time_passcode import ExpiredPasscodesView, OneTimePasscodeView
from ultmt.views.roster_request import (
    PlayerRequestView,
    RosterRequestDetailView,
    TeamDeleteRequestView,
    TeamRequestView,
    TeamResponseView,
    UserDeleteRequestView,
    UserRequestsView,
    UserResponseView,
)
from ultmt.views.team import (
    AddGuestView,
    AddManagerView,
    ArchiveTeamDetailView,
    ArchiveTeamView,
    BulkJoinCodeView,
    ManagedTeamView,
    RemovePlayerView,
    RolloverView,
    RosterOpenView,
    TeamDesignationChangeView,
    TeamDetailView,
    TeamListView,
    TeamnameTakenView,
    TeamSearchView,
)
from ultmt.views.team_designation import TeamDesignationCreateView, TeamDesignationListView
from ultmt.views.user import (
    ChangeEmailView,
    ChangeNameView,
    ChangePasswordView,
    JoinByCodeView,
    LeaveManagerRoleView,
    LeaveTeamView,
    PasswordRecoveryView,
    PasswordResetView,
    UserDetailView,
    UserMeView,
    UsernameTakenView,
    UserOpenView,
    UserPrivateView,
    UserSearchView,
    UserView,
)
from ultmt.views.verification_request import VerificationRequestDetailView, VerificationRequestListView

urlpatterns = [
    path("health", HealthView.as_view(), name="health"),
    path("user", UserView.as_view(), name="user"),
    path("user/me", UserMeView.as_view(), name="user_me"),
    path("user/search", UserSearchView.as_view(), name="user_search"),
    path("user/username-taken", UsernameTakenView.as_view(), name="username_taken"),
    path("user/open", UserOpenView.as_view(), name="user_open"),
    path("user/private", UserPrivateView.as_view(), name="user_private"),
    path("user/leave/team/<str:team_id>", LeaveTeamView.as_view(), name="user_leave_team"),
    path("user/leave/manager/<str:team_id>", LeaveManagerRoleView.as_view(), name="user_leave_manager"),
    path("user/password", ChangePasswordView.as_view(), name="user_password"),
    path("user/email", ChangeEmailView.as_view(), name="user_email"),
    path("user/name", ChangeNameView.as_view(), name="user_name"),
    path("user/password-recovery", PasswordRecoveryView.as_view(), name="password_recovery"),
    path("user/password-reset", PasswordResetView.as_view(), name="password_reset"),
    path("user/join", JoinByCodeView.as_view(), name="user_join"),
    path("user/<str:user_id>", UserDetailView.as_view(), name="user_detail"),
    path("auth/login", LoginView.as_view(), name="login"),
    path("auth/refresh", RefreshTokenView.as_view(), name="refresh"),
    path("auth/logout", LogoutView.as_view(), name="logout"),
    path("auth/manager/<str:team_id>", ManagerAuthenticationView.as_view(), name="authenticate_manager"),
    path("team", TeamListView.as_view(), name="teams"),
    path("team/search", TeamSearchView.as_view(), name="team_search"),
    path("team/teamname-taken", TeamnameTakenView.as_view(), name="teamname_taken"),
    path("team/managing/<str:team_id>", ManagedTeamView.as_view(), name="managed_team"),
    path("team/<str:team_id>", TeamDetailView.as_view(), name="team_detail"),
    path("team/<str:team_id>/remove-player/<str:user_id>", RemovePlayerView.as_view(), name="remove_player"),
    path("team/<str:team_id>/rollover", RolloverView.as_view(), name="rollover"),
    path("team/<str:team_id>/open", RosterOpenView.as_view(), name="roster_open"),
    path("team/<str:team_id>/managers", AddManagerView.as_view(), name="add_manager"),
    path("team/<str:team_id>/bulk-code", BulkJoinCodeView.as_view(), name="bulk_join_code"),
    path("team/<str:team_id>/designation", TeamDesignationChangeView.as_view(), name="change_designation"),
    path("team/<str:team_id>/archive", ArchiveTeamView.as_view(), name="archive_team"),
    path("team/<str:team_id>/guest", AddGuestView.as_view(), name="add_guest"),
    path("archive-team/<str:team_id>", ArchiveTeamDetailView.as_view(), name="archive_team_detail"),
    path("request/user", UserRequestsView.as_view(), name="user_requests"),
    path("request/team/<str:team_id>", PlayerRequestView.as_view(), name="team_requests"),
    path("request/team/<str:team_id>/user/<str:user_id>", TeamRequestView.as_view(), name="request_from_team"),
    path("request/<str:request_id>", RosterRequestDetailView.as_view(), name="roster_request_detail"),
    path("request/<str:request_id>/team-response", TeamResponseView.as_view(), name="team_response"),
    path("request/<str:request_id>/user-response", UserResponseView.as_view(), name="user_response"),
    path("request/<str:request_id>/team", TeamDeleteRequestView.as_view(), name="team_delete_request"),
    path("request/<str:request_id>/user", UserDeleteRequestView.as_view(), name="user_delete_request"),
    path("claim-guest-request", ClaimGuestRequestListView.as_view(), name="claim_guest_requests"),
    path(
        "claim-guest-request/team/<str:team_id>",
        TeamClaimGuestRequestsView.as_view(),
        name="team_claim_guest_requests",
    ),
    path(
        "claim-guest-request/<str:request_id>/accept",
        AcceptClaimGuestRequestView.as_view(),
        name="accept_claim_guest_request",
    ),
    path(
        "claim-guest-request/<str:request_id>/deny",
        DenyClaimGuestRequestView.as_view(),
        name="deny_claim_guest_request",
    ),
    path("otp", OneTimePasscodeView.as_view(), name="otp"),
    path("otp/expired", ExpiredPasscodesView.as_view(), name="expired_passcodes"),
    path("team-designations", TeamDesignationListView.as_view(), name="team_designations"),
    path("team-designation", TeamDesignationCreateView.as_view(), name="create_team_designation"),
    path("verification-request", VerificationRequestListView.as_view(), name="verification_requests"),
    path(
        "verification-request/<str:verification_id>",
        VerificationRequestDetailView.as_view(),
        name="verification_request_detail",
    ),
]
