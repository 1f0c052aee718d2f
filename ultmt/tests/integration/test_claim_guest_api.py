from django.urls import reverse
from rest_framework import status

from ultmt.tests.fixtures.team import make_team
from ultmt.tests.integration.base_mongo_test import AuthenticatedMongoTestCase
from ultmt.utils.embedded import embed_team, embed_user


class ClaimGuestApiTests(AuthenticatedMongoTestCase):
    def setUp(self):
        super().setUp()
        self.team = make_team(managers=[embed_user(self.user)])
        self.db.teams.insert_one(self.team.to_document())
        self.db.users.update_one(
            {"_id": self.user.id}, {"$set": {"managerTeams": [embed_team(self.team).model_dump(by_alias=True)]}}
        )
        self.claimer = self.insert_user(username="casey", email="casey@example.com", firstName="Casey")

    def test_guest_is_merged_into_claiming_user(self):
        team_id = str(self.team.id)
        added = self.client.post(
            reverse("add_guest", args=[team_id]), {"firstName": "Casey", "lastName": "Jones"}, format="json"
        )
        self.assertEqual(added.status_code, status.HTTP_201_CREATED)
        guest_id = added.data["players"][0]["_id"]

        claimer_client = self.client_for(self.claimer)
        claim = claimer_client.post(
            reverse("claim_guest_requests"), {"guestId": guest_id, "teamId": team_id}, format="json"
        )
        self.assertEqual(claim.status_code, status.HTTP_201_CREATED)

        pending = self.client.get(reverse("team_claim_guest_requests", args=[team_id]))
        self.assertEqual([entry["_id"] for entry in pending.data], [claim.data["_id"]])

        accepted = self.client.post(reverse("accept_claim_guest_request", args=[claim.data["_id"]]))
        self.assertEqual(accepted.status_code, status.HTTP_200_OK)

        team = self.db.teams.find_one({"_id": self.team.id})
        self.assertEqual([player["username"] for player in team["players"]], ["casey"])
        self.assertEqual(self.db.users.count_documents({"guest": True}), 0)
        claimer = self.db.users.find_one({"_id": self.claimer.id})
        self.assertEqual([entry["_id"] for entry in claimer["playerTeams"]], [self.team.id])
