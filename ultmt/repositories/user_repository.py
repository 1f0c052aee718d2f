from typing import List, Optional

from ultmt.models.user import UserModel
from ultmt.repositories.common.mongo_repository import MongoRepository, to_object_id


class UserRepository(MongoRepository[UserModel]):
    collection_name = UserModel.collection_name
    model = UserModel

    @classmethod
    def get_by_email(cls, email: str) -> Optional[UserModel]:
        return cls.find_one({"email": email.lower()})

    @classmethod
    def get_by_username(cls, username: str) -> Optional[UserModel]:
        return cls.find_one({"username": username})

    @classmethod
    def get_by_username_or_email(cls, identifier: str) -> Optional[UserModel]:
        return cls.find_one({"$or": [{"username": identifier}, {"email": identifier.lower()}]})

    @classmethod
    def email_taken(cls, email: str) -> bool:
        return cls.get_collection().count_documents({"email": email.lower()}, limit=1) > 0

    @classmethod
    def username_taken(cls, username: str) -> bool:
        return cls.get_collection().count_documents({"username": username}, limit=1) > 0

    @classmethod
    def search(cls, clauses: List[dict], open_to_requests: Optional[bool] = None) -> List[UserModel]:
        """Users matching any of the clauses. Guests never appear in search."""
        query = {"$or": clauses, "guest": False}
        if open_to_requests is not None:
            query["openToRequests"] = open_to_requests
        return cls.find(query)

    @classmethod
    def pull_player_team(cls, team_id) -> int:
        """Remove a team from every user's playerTeams cache."""
        return cls.update_many(
            {"playerTeams._id": to_object_id(team_id)}, {"$pull": {"playerTeams": {"_id": to_object_id(team_id)}}}
        )

    @classmethod
    def pull_manager_team(cls, team_id) -> int:
        return cls.update_many(
            {"managerTeams._id": to_object_id(team_id)}, {"$pull": {"managerTeams": {"_id": to_object_id(team_id)}}}
        )

    @classmethod
    def set_embedded_team_fields(cls, team_id, fields: dict) -> int:
        """Propagate changed team fields into every playerTeams and managerTeams snapshot."""
        object_id = to_object_id(team_id)
        modified = 0
        for cache in ("playerTeams", "managerTeams"):
            update = {"$set": {f"{cache}.$[team].{key}": value for key, value in fields.items()}}
            result = cls.get_collection().update_many(
                {f"{cache}._id": object_id}, update, array_filters=[{"team._id": object_id}]
            )
            modified += result.modified_count
        return modified
