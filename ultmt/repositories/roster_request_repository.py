from typing import Optional

from ultmt.constants.roster import Status
from ultmt.models.roster_request import RosterRequestModel
from ultmt.repositories.common.mongo_repository import MongoRepository, to_object_id


class RosterRequestRepository(MongoRepository[RosterRequestModel]):
    collection_name = RosterRequestModel.collection_name
    model = RosterRequestModel

    @classmethod
    def get_pending(cls, user_id, team_id) -> Optional[RosterRequestModel]:
        """The pending request between a user and a team, whichever side sent it."""
        return cls.find_one(
            {
                "user": to_object_id(user_id),
                "team": to_object_id(team_id),
                "status": Status.PENDING.value,
            }
        )
