from datetime import datetime, timezone
from unittest import TestCase
from unittest.mock import Mock, patch

from bson import ObjectId
from rest_framework import status

from ultmt.constants.messages import ApiErrors
from ultmt.constants.roster import Initiator, Status
from ultmt.exceptions.api_exceptions import ApiException
from ultmt.models.roster_request import RosterRequestModel
from ultmt.tests.fixtures.team import make_team
from ultmt.tests.fixtures.user import make_user
from ultmt.utils.embedded import embed_team, embed_user
from ultmt.utils.validation_chain import ValidationChain


class ValidationChainOrderingTests(TestCase):
    def test_checks_run_in_declared_order_and_stop_at_first_failure(self):
        calls = []
        chain = ValidationChain(admin_emails=[])

        def passing():
            calls.append("first")

        def failing():
            calls.append("second")
            raise ApiException(ApiErrors.GENERIC_ERROR)

        def never_runs():
            calls.append("third")

        chain._add(passing)._add(failing)._add(never_runs)

        with self.assertRaises(ApiException):
            chain.test()
        self.assertEqual(calls, ["first", "second"])

    def test_empty_chain_passes(self):
        self.assertTrue(ValidationChain(admin_emails=[]).test())

    @patch("ultmt.utils.validation_chain.TeamRepository.get_by_id")
    @patch("ultmt.utils.validation_chain.UserRepository.get_by_id")
    def test_missing_user_reported_before_missing_team(self, mock_get_user: Mock, mock_get_team: Mock):
        mock_get_user.return_value = None
        mock_get_team.return_value = None

        with self.assertRaises(ApiException) as context:
            ValidationChain(admin_emails=[]).user_exists("abc").team_exists("def").test()

        self.assertEqual(context.exception.message, ApiErrors.UNABLE_TO_FIND_USER)
        self.assertEqual(context.exception.status_code, status.HTTP_404_NOT_FOUND)
        mock_get_team.assert_not_called()


class UserIsManagerTests(TestCase):
    """A manager must be listed on the team and have the team in managerTeams."""

    def setUp(self):
        self.user = make_user()
        self.team = make_team()

    def _run(self, team_lists_user: bool, user_lists_team: bool):
        if team_lists_user:
            self.team.managers = [embed_user(self.user)]
        if user_lists_team:
            self.user.managerTeams = [embed_team(self.team)]
        with (
            patch("ultmt.utils.validation_chain.UserRepository.get_by_id", return_value=self.user),
            patch("ultmt.utils.validation_chain.TeamRepository.get_by_id", return_value=self.team),
        ):
            return ValidationChain(admin_emails=[]).user_is_manager(str(self.user.id), str(self.team.id)).test()

    def test_passes_when_both_sides_agree(self):
        self.assertTrue(self._run(team_lists_user=True, user_lists_team=True))

    def test_fails_when_only_team_lists_manager(self):
        with self.assertRaises(ApiException) as context:
            self._run(team_lists_user=True, user_lists_team=False)
        self.assertEqual(context.exception.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(context.exception.message, ApiErrors.UNAUTHORIZED_MANAGER)

    def test_fails_when_only_user_lists_team(self):
        with self.assertRaises(ApiException) as context:
            self._run(team_lists_user=False, user_lists_team=True)
        self.assertEqual(context.exception.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_fails_when_neither_side_lists_the_other(self):
        with self.assertRaises(ApiException) as context:
            self._run(team_lists_user=False, user_lists_team=False)
        self.assertEqual(context.exception.status_code, status.HTTP_401_UNAUTHORIZED)


class NoPendingRequestTests(TestCase):
    def setUp(self):
        self.user_id = str(ObjectId())
        self.team_id = str(ObjectId())

    def _pending(self, source: Initiator) -> RosterRequestModel:
        return RosterRequestModel(team=ObjectId(self.team_id), user=ObjectId(self.user_id), requestSource=source)

    @patch("ultmt.utils.validation_chain.RosterRequestRepository.get_pending")
    def test_existing_team_request_blocks_new_player_request(self, mock_get_pending: Mock):
        mock_get_pending.return_value = self._pending(Initiator.TEAM)

        with self.assertRaises(ApiException) as context:
            ValidationChain(admin_emails=[]).no_pending_request(self.user_id, self.team_id, Initiator.PLAYER).test()

        self.assertEqual(context.exception.message, ApiErrors.TEAM_ALREADY_REQUESTED)

    @patch("ultmt.utils.validation_chain.RosterRequestRepository.get_pending")
    def test_existing_player_request_blocks_new_team_request(self, mock_get_pending: Mock):
        mock_get_pending.return_value = self._pending(Initiator.PLAYER)

        with self.assertRaises(ApiException) as context:
            ValidationChain(admin_emails=[]).no_pending_request(self.user_id, self.team_id, Initiator.TEAM).test()

        self.assertEqual(context.exception.message, ApiErrors.PLAYER_ALREADY_REQUESTED)

    @patch("ultmt.utils.validation_chain.RosterRequestRepository.get_pending")
    def test_passes_without_pending_request(self, mock_get_pending: Mock):
        mock_get_pending.return_value = None

        self.assertTrue(
            ValidationChain(admin_emails=[]).no_pending_request(self.user_id, self.team_id, Initiator.TEAM).test()
        )
        mock_get_pending.assert_called_once_with(self.user_id, self.team_id)


class RequestStateTests(TestCase):
    def setUp(self):
        self.request = RosterRequestModel(team=ObjectId(), user=ObjectId(), requestSource=Initiator.PLAYER)

    @patch("ultmt.utils.validation_chain.RosterRequestRepository.get_by_id")
    def test_resolved_request_is_not_pending(self, mock_get_request: Mock):
        self.request.status = Status.APPROVED.value
        mock_get_request.return_value = self.request

        with self.assertRaises(ApiException) as context:
            ValidationChain(admin_emails=[]).request_is_pending(str(self.request.id)).test()

        self.assertEqual(context.exception.message, ApiErrors.REQUEST_ALREADY_RESOLVED)

    @patch("ultmt.utils.validation_chain.RosterRequestRepository.get_by_id")
    def test_request_source_checks(self, mock_get_request: Mock):
        mock_get_request.return_value = self.request
        request_id = str(self.request.id)

        self.assertTrue(ValidationChain(admin_emails=[]).request_is_user_initiated(request_id).test())
        with self.assertRaises(ApiException) as context:
            ValidationChain(admin_emails=[]).request_is_team_initiated(request_id).test()
        self.assertEqual(context.exception.message, ApiErrors.NOT_ALLOWED_TO_RESPOND)

    @patch("ultmt.utils.validation_chain.RosterRequestRepository.get_by_id")
    def test_user_on_request(self, mock_get_request: Mock):
        mock_get_request.return_value = self.request

        self.assertTrue(
            ValidationChain(admin_emails=[]).user_on_request(str(self.request.user), str(self.request.id)).test()
        )
        with self.assertRaises(ApiException):
            ValidationChain(admin_emails=[]).user_on_request(str(ObjectId()), str(self.request.id)).test()


class RosterMembershipTests(TestCase):
    def setUp(self):
        self.user = make_user()
        self.team = make_team()

    def _patch(self):
        return (
            patch("ultmt.utils.validation_chain.UserRepository.get_by_id", return_value=self.user),
            patch("ultmt.utils.validation_chain.TeamRepository.get_by_id", return_value=self.team),
        )

    def test_user_not_on_team_fails_when_either_side_lists_membership(self):
        self.team.players = [embed_user(self.user)]
        user_patch, team_patch = self._patch()
        with user_patch, team_patch, self.assertRaises(ApiException) as context:
            ValidationChain(admin_emails=[]).user_not_on_team(str(self.user.id), str(self.team.id)).test()
        self.assertEqual(context.exception.message, ApiErrors.PLAYER_ALREADY_ROSTERED)

    def test_user_on_team_requires_both_sides(self):
        self.team.players = [embed_user(self.user)]
        user_patch, team_patch = self._patch()
        with user_patch, team_patch, self.assertRaises(ApiException) as context:
            ValidationChain(admin_emails=[]).user_on_team(str(self.user.id), str(self.team.id)).test()
        self.assertEqual(context.exception.message, ApiErrors.PLAYER_NOT_ON_TEAM)

        self.user.playerTeams = [embed_team(self.team)]
        user_patch, team_patch = self._patch()
        with user_patch, team_patch:
            self.assertTrue(
                ValidationChain(admin_emails=[]).user_on_team(str(self.user.id), str(self.team.id)).test()
            )

    def test_accepting_requests(self):
        self.user.openToRequests = False
        self.team.rosterOpen = False
        user_patch, team_patch = self._patch()
        with user_patch, team_patch:
            with self.assertRaises(ApiException) as context:
                ValidationChain(admin_emails=[]).user_accepting_requests(str(self.user.id)).test()
            self.assertEqual(context.exception.message, ApiErrors.NOT_ACCEPTING_REQUESTS)
            with self.assertRaises(ApiException):
                ValidationChain(admin_emails=[]).team_accepting_requests(str(self.team.id)).test()


class InputCheckTests(TestCase):
    def test_search_needs_three_characters(self):
        with self.assertRaises(ApiException) as context:
            ValidationChain(admin_emails=[]).enough_search_characters("ab").test()
        self.assertEqual(context.exception.message, ApiErrors.NOT_ENOUGH_CHARACTERS)
        with self.assertRaises(ApiException):
            ValidationChain(admin_emails=[]).enough_search_characters(None).test()
        self.assertTrue(ValidationChain(admin_emails=[]).enough_search_characters("abc").test())

    def test_season_dates_must_be_this_year_or_next_and_ordered(self):
        year = datetime.now(timezone.utc).year
        this_year = datetime(year, 3, 1, tzinfo=timezone.utc)
        next_year = datetime(year + 1, 3, 1, tzinfo=timezone.utc)
        last_year = datetime(year - 1, 3, 1, tzinfo=timezone.utc)

        self.assertTrue(ValidationChain(admin_emails=[]).valid_season_dates(this_year, next_year).test())
        for start, end in [(last_year, this_year), (next_year, this_year), (this_year, None)]:
            with self.assertRaises(ApiException) as context:
                ValidationChain(admin_emails=[]).valid_season_dates(start, end).test()
            self.assertEqual(context.exception.message, ApiErrors.INVALID_SEASON_DATE)

    @patch("ultmt.utils.validation_chain.UserRepository.get_by_id")
    def test_admin_check_uses_injected_allow_list(self, mock_get_user: Mock):
        mock_get_user.return_value = make_user(email="boss@example.com")

        self.assertTrue(ValidationChain(admin_emails=["Boss@Example.com"]).user_is_admin("id").test())
        with self.assertRaises(ApiException) as context:
            ValidationChain(admin_emails=["someone@example.com"]).user_is_admin("id").test()
        self.assertEqual(context.exception.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(context.exception.message, ApiErrors.UNAUTHORIZED_ADMIN)
