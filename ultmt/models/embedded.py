from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ultmt.models.common.pyobjectid import PyObjectId


class EmbeddedUser(BaseModel):
    """Snapshot of a user stored inside teams and verification requests."""

    id: PyObjectId = Field(..., alias="_id")
    firstName: str
    lastName: str
    username: str

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)


class EmbeddedTeam(BaseModel):
    """Snapshot of a team stored in a user's playerTeams, managerTeams and archiveTeams."""

    id: PyObjectId = Field(..., alias="_id")
    place: str
    name: str
    teamname: str
    seasonStart: datetime
    seasonEnd: datetime
    verified: bool = False
    designation: Optional[PyObjectId] = None

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)
