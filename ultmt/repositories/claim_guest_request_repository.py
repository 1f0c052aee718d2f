from typing import List, Optional

from ultmt.constants.roster import Status
from ultmt.models.claim_guest_request import ClaimGuestRequestModel
from ultmt.repositories.common.mongo_repository import MongoRepository, to_object_id


class ClaimGuestRequestRepository(MongoRepository[ClaimGuestRequestModel]):
    collection_name = ClaimGuestRequestModel.collection_name
    model = ClaimGuestRequestModel

    @classmethod
    def get_pending(cls, user_id, guest_id, team_id) -> Optional[ClaimGuestRequestModel]:
        return cls.find_one(
            {
                "userId": to_object_id(user_id),
                "guestId": to_object_id(guest_id),
                "teamId": to_object_id(team_id),
                "status": Status.PENDING.value,
            }
        )

    @classmethod
    def get_pending_for_team(cls, team_id) -> List[ClaimGuestRequestModel]:
        return cls.find({"teamId": to_object_id(team_id), "status": Status.PENDING.value})

    @classmethod
    def deny_other_pending(cls, guest_id, approved_request_id) -> int:
        """Deny every other pending claim on the guest once one claim has won."""
        return cls.update_many(
            {
                "guestId": to_object_id(guest_id),
                "_id": {"$ne": to_object_id(approved_request_id)},
                "status": Status.PENDING.value,
            },
            {"$set": {"status": Status.DENIED.value}},
        )

    @classmethod
    def move_pending_to_team(cls, old_team_id, new_team_id) -> int:
        """Follow a team to its next season so its managers can still resolve open claims."""
        return cls.update_many(
            {"teamId": to_object_id(old_team_id), "status": Status.PENDING.value},
            {"$set": {"teamId": to_object_id(new_team_id)}},
        )

    @classmethod
    def deny_pending_for_team(cls, team_id) -> int:
        return cls.update_many(
            {"teamId": to_object_id(team_id), "status": Status.PENDING.value},
            {"$set": {"status": Status.DENIED.value}},
        )
