from unittest import TestCase
from unittest.mock import Mock, patch

import jwt
from bson import ObjectId
from rest_framework import status

from ultmt.constants.messages import ApiErrors
from ultmt.exceptions.api_exceptions import ApiException
from ultmt.exceptions.auth_exceptions import TokenInvalidError
from ultmt.services.authentication_service import AuthenticationService
from ultmt.tests.fixtures.in_memory_store import InMemoryStore
from ultmt.tests.fixtures.roster import seed_managed_team, seed_player
from ultmt.tests.fixtures.user import TEST_PASSWORD, make_guest, make_user
from ultmt.utils.jwt_utils import is_token_blacklisted, validate_access_token


class AuthenticationServiceTests(TestCase):
    def setUp(self):
        self.store = InMemoryStore().start()
        self.addCleanup(self.store.stop)
        self.user = make_user()
        self.store.put("users", self.user)

    def test_login_with_username_or_email(self):
        for identifier in ["jrivera", "Jamie@Example.com"]:
            with self.subTest(identifier=identifier):
                tokens = AuthenticationService.login(identifier, TEST_PASSWORD)
                self.assertEqual(validate_access_token(tokens.access)["user_id"], str(self.user.id))

    def test_login_with_wrong_password(self):
        with self.assertRaises(ApiException) as context:
            AuthenticationService.login("jrivera", "wrong")

        self.assertEqual(context.exception.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(context.exception.message, ApiErrors.INVALID_CREDENTIALS)

    def test_guest_cannot_log_in(self):
        guest = make_guest()
        self.store.put("users", guest)

        with self.assertRaises(ApiException) as context:
            AuthenticationService.login(guest.username, TEST_PASSWORD)

        self.assertEqual(context.exception.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_logout_blacklists_token(self):
        tokens = AuthenticationService.create_tokens(self.user.id)

        AuthenticationService.logout(tokens.access)

        self.assertTrue(is_token_blacklisted(tokens.access))
        with self.assertRaises(TokenInvalidError):
            validate_access_token(tokens.access)

    def test_refresh_revokes_used_refresh_token(self):
        tokens = AuthenticationService.create_tokens(self.user.id)

        refreshed = AuthenticationService.refresh_tokens(tokens.refresh)

        self.assertTrue(refreshed.access)
        with self.assertRaises(TokenInvalidError):
            AuthenticationService.refresh_tokens(tokens.refresh)

    def test_refresh_with_access_token_is_invalid(self):
        tokens = AuthenticationService.create_tokens(self.user.id)

        with self.assertRaises(TokenInvalidError):
            AuthenticationService.refresh_tokens(tokens.access)

    @patch("ultmt.services.authentication_service.generate_token_pair")
    def test_token_generation_failure_is_server_error(self, mock_generate: Mock):
        mock_generate.side_effect = jwt.PyJWTError("bad key")

        with self.assertRaises(ApiException) as context:
            AuthenticationService.create_tokens(self.user.id)

        self.assertEqual(context.exception.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(context.exception.message, ApiErrors.UNABLE_TO_GENERATE_TOKEN)

    def test_authenticate_manager(self):
        manager, team = seed_managed_team(self.store)
        player = seed_player(self.store, "casey", team=self.store.team(team.id))

        self.assertEqual(AuthenticationService.authenticate_manager(str(manager.id), str(team.id)).id, manager.id)
        for user_id in [str(player.id), str(ObjectId())]:
            with self.subTest(user_id=user_id):
                with self.assertRaises(ApiException) as context:
                    AuthenticationService.authenticate_manager(user_id, str(team.id))
                self.assertEqual(context.exception.status_code, status.HTTP_401_UNAUTHORIZED)
                self.assertEqual(context.exception.message, ApiErrors.UNAUTHORIZED_MANAGER)
