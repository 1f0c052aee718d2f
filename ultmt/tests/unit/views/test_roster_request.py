from unittest import TestCase
from unittest.mock import Mock, patch

from bson import ObjectId
from django.urls import reverse
from rest_framework import status

from ultmt.constants.messages import ApiErrors
from ultmt.constants.roster import Initiator, Status
from ultmt.dto.roster_request_dto import RosterRequestDetailsDTO
from ultmt.exceptions.api_exceptions import ApiException
from ultmt.models.roster_request import RosterRequestModel
from ultmt.tests.fixtures.auth import authenticated_client
from ultmt.tests.fixtures.team import make_team
from ultmt.utils.embedded import embed_team, embed_user


class RosterRequestViewTests(TestCase):
    def setUp(self):
        self.client, self.user = authenticated_client(self)
        self.team = make_team()
        self.team_id = str(self.team.id)
        self.roster_request = RosterRequestModel(team=self.team.id, user=self.user.id, requestSource=Initiator.PLAYER)
        self.request_id = str(self.roster_request.id)

    @patch("ultmt.views.roster_request.RosterRequestService.request_from_player")
    def test_player_requests_team(self, mock_request: Mock):
        mock_request.return_value = self.roster_request

        response = self.client.post(reverse("team_requests", args=[self.team_id]))

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["requestSource"], "player")
        self.assertEqual(response.data["status"], "pending")
        mock_request.assert_called_once_with(str(self.user.id), self.team_id)

    @patch("ultmt.views.roster_request.RosterRequestService.request_from_team")
    def test_team_requests_player(self, mock_request: Mock):
        mock_request.return_value = self.roster_request
        player_id = str(ObjectId())

        response = self.client.post(reverse("request_from_team", args=[self.team_id, player_id]))

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        mock_request.assert_called_once_with(str(self.user.id), self.team_id, player_id)

    @patch("ultmt.views.roster_request.RosterRequestService.request_from_player")
    def test_closed_roster(self, mock_request: Mock):
        mock_request.side_effect = ApiException(ApiErrors.NOT_ACCEPTING_REQUESTS)

        response = self.client.post(reverse("team_requests", args=[self.team_id]))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], ApiErrors.NOT_ACCEPTING_REQUESTS)

    @patch("ultmt.views.roster_request.RosterRequestService.get_roster_request")
    def test_detail_includes_team_and_user(self, mock_get: Mock):
        mock_get.return_value = RosterRequestDetailsDTO(
            _id=self.roster_request.id,
            team=embed_team(self.team),
            user=embed_user(self.user),
            requestSource=Initiator.PLAYER,
            status=Status.PENDING,
        )

        response = self.client.get(reverse("roster_request_detail", args=[self.request_id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["team"]["teamname"], "pghtemper")
        self.assertEqual(response.data["user"]["username"], "jrivera")

    @patch("ultmt.views.roster_request.RosterRequestService.get_requests_by_user")
    def test_user_requests(self, mock_get: Mock):
        mock_get.return_value = []

        response = self.client.get(reverse("user_requests"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, [])
        mock_get.assert_called_once_with(str(self.user.id))

    @patch("ultmt.views.roster_request.RosterRequestService.team_respond_to_request")
    def test_team_response(self, mock_respond: Mock):
        self.roster_request.status = Status.APPROVED.value
        mock_respond.return_value = self.roster_request

        response = self.client.post(reverse("team_response", args=[self.request_id]) + "?accept=true")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "approved")
        mock_respond.assert_called_once_with(str(self.user.id), self.request_id, True)

    @patch("ultmt.views.roster_request.RosterRequestService.team_respond_to_request")
    def test_team_response_without_accept_leaves_request_pending(self, mock_respond: Mock):
        response = self.client.post(reverse("team_response", args=[self.request_id]))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["errors"][0]["source"], {"parameter": "accept"})
        mock_respond.assert_not_called()

    @patch("ultmt.views.roster_request.RosterRequestService.user_respond_to_request")
    def test_user_response_requires_accept(self, mock_respond: Mock):
        response = self.client.post(reverse("user_response", args=[self.request_id]))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        mock_respond.assert_not_called()

    @patch("ultmt.views.roster_request.RosterRequestService.user_respond_to_request")
    def test_user_response_from_wrong_side(self, mock_respond: Mock):
        mock_respond.side_effect = ApiException(ApiErrors.NOT_ALLOWED_TO_RESPOND)

        response = self.client.post(reverse("user_response", args=[self.request_id]) + "?accept=false")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        mock_respond.assert_called_once_with(str(self.user.id), self.request_id, False)

    @patch("ultmt.views.roster_request.RosterRequestService.team_delete")
    @patch("ultmt.views.roster_request.RosterRequestService.user_delete")
    def test_delete_routes(self, mock_user_delete: Mock, mock_team_delete: Mock):
        mock_user_delete.return_value = self.roster_request
        mock_team_delete.return_value = self.roster_request

        self.assertEqual(
            self.client.delete(reverse("user_delete_request", args=[self.request_id])).status_code,
            status.HTTP_200_OK,
        )
        self.assertEqual(
            self.client.delete(reverse("team_delete_request", args=[self.request_id])).status_code,
            status.HTTP_200_OK,
        )
        mock_user_delete.assert_called_once_with(str(self.user.id), self.request_id)
        mock_team_delete.assert_called_once_with(str(self.user.id), self.request_id)
