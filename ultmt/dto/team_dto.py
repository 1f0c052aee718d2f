from datetime import datetime

from pydantic import BaseModel


class CreateTeamDTO(BaseModel):
    place: str
    name: str
    teamname: str
    seasonStart: datetime
    seasonEnd: datetime
    rosterOpen: bool = False


class CreateGuestDTO(BaseModel):
    firstName: str
    lastName: str
