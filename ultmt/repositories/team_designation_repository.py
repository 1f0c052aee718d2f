from typing import List

from pymongo import ReturnDocument

from ultmt.models.team_designation import TeamDesignationModel
from ultmt.repositories.common.mongo_repository import MongoRepository


class TeamDesignationRepository(MongoRepository[TeamDesignationModel]):
    collection_name = TeamDesignationModel.collection_name
    model = TeamDesignationModel

    @classmethod
    def upsert(cls, description: str, abbreviation: str) -> TeamDesignationModel:
        """Create the designation, or update the abbreviation of an existing one with the same description."""
        document = cls.get_collection().find_one_and_update(
            {"description": description},
            {"$set": {"abbreviation": abbreviation}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return TeamDesignationModel(**document)

    @classmethod
    def get_all(cls) -> List[TeamDesignationModel]:
        return cls.find({})
