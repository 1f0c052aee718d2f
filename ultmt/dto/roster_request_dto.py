from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ultmt.constants.roster import Initiator, Status
from ultmt.models.common.pyobjectid import PyObjectId
from ultmt.models.embedded import EmbeddedTeam, EmbeddedUser


class RosterRequestDetailsDTO(BaseModel):
    """A roster request with the team and user it refers to filled in."""

    id: PyObjectId = Field(..., alias="_id")
    team: Optional[EmbeddedTeam] = None
    user: Optional[EmbeddedUser] = None
    requestSource: Initiator
    status: Status

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True, use_enum_values=True)
