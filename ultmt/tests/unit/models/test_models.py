from datetime import datetime, timedelta, timezone
from unittest import TestCase

from bson import ObjectId
from pydantic import ValidationError

from ultmt.constants.roster import Initiator, OTPReason, Status
from ultmt.models.one_time_passcode import OneTimePasscodeModel
from ultmt.models.roster_request import RosterRequestModel
from ultmt.models.team_designation import TeamDesignationModel
from ultmt.tests.fixtures.team import make_team
from ultmt.tests.fixtures.user import make_user


class UserModelTests(TestCase):
    def test_password_is_stored_but_never_serialized(self):
        user = make_user()

        self.assertNotIn("password", user.model_dump(mode="json", by_alias=True))
        self.assertEqual(user.to_document()["password"], user.password)
        self.assertEqual(user.to_document()["_id"], user.id)

    def test_defaults(self):
        user = make_user()

        self.assertTrue(user.openToRequests)
        self.assertFalse(user.private)
        self.assertFalse(user.guest)
        self.assertEqual(user.requests, [])


class TeamModelTests(TestCase):
    def test_defaults(self):
        team = make_team()

        self.assertEqual(team.seasonNumber, 1)
        self.assertFalse(team.rosterOpen)
        self.assertEqual(team.continuationId, team.id)

    def test_teamname_length(self):
        with self.assertRaises(ValidationError):
            make_team(teamname="p")


class RosterRequestModelTests(TestCase):
    def test_enums_are_stored_as_values(self):
        request = RosterRequestModel(team=ObjectId(), user=ObjectId(), requestSource=Initiator.TEAM)

        document = request.to_document()
        self.assertEqual(document["requestSource"], "team")
        self.assertEqual(document["status"], Status.PENDING.value)


class OneTimePasscodeModelTests(TestCase):
    def test_passcode_must_be_six_digits(self):
        for passcode in ["12345", "1234567", "12a456"]:
            with self.subTest(passcode=passcode):
                with self.assertRaises(ValidationError):
                    OneTimePasscodeModel(passcode=passcode, creator=ObjectId(), reason=OTPReason.TEAM_JOIN)

    def test_is_expired(self):
        now = datetime.now(timezone.utc)
        live = OneTimePasscodeModel(passcode="123456", creator=ObjectId(), reason=OTPReason.TEAM_JOIN)
        expired = OneTimePasscodeModel(
            passcode="123456", creator=ObjectId(), reason=OTPReason.TEAM_JOIN, expiresAt=now - timedelta(seconds=1)
        )

        self.assertFalse(live.is_expired())
        self.assertTrue(expired.is_expired())


class TeamDesignationModelTests(TestCase):
    def test_abbreviation_is_at_most_three_characters(self):
        with self.assertRaises(ValidationError):
            TeamDesignationModel(description="Collegiate", abbreviation="COLL")
