from typing import List, Optional

from ultmt.models.team import ArchiveTeamModel, TeamModel
from ultmt.repositories.common.mongo_repository import MongoRepository


class TeamRepository(MongoRepository[TeamModel]):
    collection_name = TeamModel.collection_name
    model = TeamModel

    @classmethod
    def teamname_taken(cls, teamname: str) -> bool:
        return cls.get_collection().count_documents({"teamname": teamname}, limit=1) > 0

    @classmethod
    def search(cls, clauses: List[dict], roster_open: Optional[bool] = None) -> List[TeamModel]:
        query = {"$or": clauses}
        if roster_open is not None:
            query["rosterOpen"] = roster_open
        return cls.find(query)


class ArchiveTeamRepository(MongoRepository[ArchiveTeamModel]):
    """Archived seasons are written once and only read afterwards."""

    collection_name = ArchiveTeamModel.collection_name
    model = ArchiveTeamModel

    @classmethod
    def archive(cls, team: TeamModel) -> ArchiveTeamModel:
        """
        Copy a live season into the archive under the same id. Pending request
        ids are left behind; those requests are deleted along with the season.
        """
        archive_team = ArchiveTeamModel(**team.model_dump(by_alias=True, exclude={"requests"}))
        return cls.save(archive_team)
