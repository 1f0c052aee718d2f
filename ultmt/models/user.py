from typing import ClassVar, List

from pydantic import Field

from ultmt.models.common.document import Document
from ultmt.models.common.pyobjectid import PyObjectId
from ultmt.models.embedded import EmbeddedTeam


class UserModel(Document):
    """
    Account plus the denormalized membership caches. The caches must always agree
    with the team side (team.players / team.managers).
    """

    collection_name: ClassVar[str] = "users"

    firstName: str
    lastName: str
    email: str
    username: str
    password: str = Field(..., exclude=True)
    private: bool = False
    openToRequests: bool = True
    guest: bool = False
    verified: bool = False
    playerTeams: List[EmbeddedTeam] = Field(default_factory=list)
    managerTeams: List[EmbeddedTeam] = Field(default_factory=list)
    archiveTeams: List[EmbeddedTeam] = Field(default_factory=list)
    requests: List[PyObjectId] = Field(default_factory=list)
    stats: List[PyObjectId] = Field(default_factory=list)

    def to_document(self) -> dict:
        document = super().to_document()
        document["password"] = self.password
        return document
