from datetime import datetime, timezone
from unittest import TestCase
from unittest.mock import Mock, patch

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from ultmt.constants.messages import ApiErrors
from ultmt.exceptions.api_exceptions import ApiException
from ultmt.models.team import ArchiveTeamModel
from ultmt.tests.fixtures.auth import authenticated_client
from ultmt.tests.fixtures.team import make_team, season_dates


class TeamListViewTests(TestCase):
    def setUp(self):
        self.client, self.user = authenticated_client(self)
        self.team = make_team()
        season_start, season_end = season_dates()
        self.payload = {
            "place": "Pittsburgh",
            "name": "Temper",
            "teamname": "pghtemper",
            "seasonStart": season_start.isoformat(),
            "seasonEnd": season_end.isoformat(),
        }

    @patch("ultmt.views.team.TeamService.create_team")
    def test_create_team(self, mock_create: Mock):
        mock_create.return_value = self.team

        response = self.client.post(reverse("teams"), self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["_id"], str(self.team.id))
        self.assertEqual(response.data["continuationId"], str(self.team.id))
        dto, user_id = mock_create.call_args[0]
        self.assertEqual(user_id, str(self.user.id))
        self.assertFalse(dto.rosterOpen)

    def test_create_team_requires_season_dates(self):
        del self.payload["seasonEnd"]

        response = self.client.post(reverse("teams"), self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["errors"][0]["source"], {"parameter": "seasonEnd"})

    def test_create_team_requires_token(self):
        response = APIClient().post(reverse("teams"), self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class TeamDetailViewTests(TestCase):
    def setUp(self):
        self.team = make_team()

    @patch("ultmt.views.team.TeamService.get_team")
    def test_get_team_is_public(self, mock_get: Mock):
        mock_get.return_value = self.team

        response = APIClient().get(reverse("team_detail", args=[str(self.team.id)]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        mock_get.assert_called_once_with(str(self.team.id), public_req=True)

    @patch("ultmt.views.team.TeamService.get_team")
    def test_missing_team(self, mock_get: Mock):
        mock_get.side_effect = ApiException(ApiErrors.UNABLE_TO_FIND_TEAM, status.HTTP_404_NOT_FOUND)

        response = APIClient().get(reverse("team_detail", args=["missing"]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["message"], ApiErrors.UNABLE_TO_FIND_TEAM)

    @patch("ultmt.views.team.TeamService.delete_team")
    def test_delete_team(self, mock_delete: Mock):
        client, user = authenticated_client(self)

        response = client.delete(reverse("team_detail", args=[str(self.team.id)]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        mock_delete.assert_called_once_with(str(user.id), str(self.team.id))

    @patch("ultmt.views.team.TeamService.get_managed_team")
    def test_managed_team_requires_token(self, mock_get: Mock):
        self.assertEqual(
            APIClient().get(reverse("managed_team", args=[str(self.team.id)])).status_code,
            status.HTTP_401_UNAUTHORIZED,
        )
        mock_get.assert_not_called()


class TeamSearchViewTests(TestCase):
    @patch("ultmt.views.team.TeamService.search")
    def test_search(self, mock_search: Mock):
        mock_search.return_value = [make_team()]

        response = APIClient().get(reverse("team_search"), {"q": "temper"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        mock_search.assert_called_once_with("temper", None)

    @patch("ultmt.views.team.TeamService.search")
    def test_short_term(self, mock_search: Mock):
        mock_search.side_effect = ApiException(ApiErrors.NOT_ENOUGH_CHARACTERS)

        response = APIClient().get(reverse("team_search"), {"q": "te", "rosterOpen": "true"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        mock_search.assert_called_once_with("te", True)


class RolloverViewTests(TestCase):
    def setUp(self):
        self.client, self.user = authenticated_client(self)
        self.team = make_team()

    @patch("ultmt.views.team.TeamService.rollover")
    def test_rollover(self, mock_rollover: Mock):
        new_team = make_team(continuationId=self.team.id, seasonNumber=2)
        mock_rollover.return_value = new_team
        season_start, season_end = season_dates(1)

        response = self.client.post(
            reverse("rollover", args=[str(self.team.id)]),
            {"copyPlayers": True, "seasonStart": season_start.isoformat(), "seasonEnd": season_end.isoformat()},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["seasonNumber"], 2)
        manager_id, team_id, copy_players, start, end = mock_rollover.call_args[0]
        self.assertEqual((manager_id, team_id, copy_players), (str(self.user.id), str(self.team.id), True))
        self.assertEqual(start, season_start)
        self.assertIsInstance(end, datetime)

    @patch("ultmt.views.team.TeamService.archive_team")
    def test_archive(self, mock_archive: Mock):
        mock_archive.return_value = ArchiveTeamModel(**self.team.to_document())

        response = self.client.post(reverse("archive_team", args=[str(self.team.id)]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["_id"], str(self.team.id))


class TeamManagementViewTests(TestCase):
    def setUp(self):
        self.client, self.user = authenticated_client(self)
        self.team = make_team()
        self.team_id = str(self.team.id)

    @patch("ultmt.views.team.TeamService.set_roster_open")
    def test_roster_open(self, mock_open: Mock):
        mock_open.return_value = self.team

        response = self.client.put(reverse("roster_open", args=[self.team_id]) + "?open=true")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        mock_open.assert_called_once_with(str(self.user.id), self.team_id, True)

    @patch("ultmt.views.team.TeamService.set_roster_open")
    def test_roster_open_without_flag_keeps_roster_unchanged(self, mock_open: Mock):
        response = self.client.put(reverse("roster_open", args=[self.team_id]))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        mock_open.assert_not_called()

    @patch("ultmt.views.team.TeamService.add_manager")
    def test_add_manager(self, mock_add: Mock):
        mock_add.return_value = self.team

        response = self.client.post(reverse("add_manager", args=[self.team_id]) + "?manager=abc")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        mock_add.assert_called_once_with(str(self.user.id), "abc", self.team_id)

    @patch("ultmt.views.team.TeamService.remove_player")
    def test_remove_player(self, mock_remove: Mock):
        mock_remove.return_value = self.team

        response = self.client.post(reverse("remove_player", args=[self.team_id, "player1"]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        mock_remove.assert_called_once_with(str(self.user.id), self.team_id, "player1")

    @patch("ultmt.views.team.TeamService.add_guest")
    def test_add_guest(self, mock_add_guest: Mock):
        mock_add_guest.return_value = self.team

        response = self.client.post(
            reverse("add_guest", args=[self.team_id]), {"firstName": "Pat", "lastName": "Doe"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        team_id, manager_id, dto = mock_add_guest.call_args[0]
        self.assertEqual((team_id, manager_id, dto.firstName), (self.team_id, str(self.user.id), "Pat"))

    @patch("ultmt.views.team.TeamService.change_designation")
    def test_change_designation(self, mock_change: Mock):
        mock_change.return_value = self.team

        response = self.client.put(
            reverse("change_designation", args=[self.team_id]), {"designation": "d1"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        mock_change.assert_called_once_with(str(self.user.id), self.team_id, "d1")

    @patch("ultmt.views.team.TeamService.get_archived_team")
    def test_archived_team_is_public(self, mock_get: Mock):
        mock_get.return_value = ArchiveTeamModel(**self.team.to_document())

        response = APIClient().get(reverse("archive_team_detail", args=[self.team_id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["seasonEnd"][:4], str(datetime.now(timezone.utc).year))
