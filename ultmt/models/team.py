from datetime import datetime
from typing import ClassVar, List, Optional

from pydantic import Field

from ultmt.models.common.document import Document
from ultmt.models.common.pyobjectid import PyObjectId
from ultmt.models.embedded import EmbeddedUser


class TeamModel(Document):
    """
    A single season of a team. continuationId links every season of the same
    team and never changes; the document id changes on every rollover.
    """

    collection_name: ClassVar[str] = "teams"

    place: str = Field(..., max_length=20)
    name: str = Field(..., max_length=20)
    teamname: str = Field(..., min_length=2, max_length=20)
    managers: List[EmbeddedUser] = Field(default_factory=list)
    players: List[EmbeddedUser] = Field(default_factory=list)
    seasonStart: datetime
    seasonEnd: datetime
    seasonNumber: int = 1
    continuationId: PyObjectId
    rosterOpen: bool = False
    requests: List[PyObjectId] = Field(default_factory=list)
    games: List[PyObjectId] = Field(default_factory=list)
    designation: Optional[PyObjectId] = None
    verified: bool = False


class ArchiveTeamModel(TeamModel):
    """Frozen copy of a team season, keyed by the id the season had while live."""

    collection_name: ClassVar[str] = "archiveteams"
