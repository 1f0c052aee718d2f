from typing import List

from pydantic import BaseModel

from ultmt.models.team import TeamModel
from ultmt.models.user import UserModel


class SignUpDTO(BaseModel):
    firstName: str
    lastName: str
    email: str
    username: str
    password: str


class TokenPairDTO(BaseModel):
    access: str
    refresh: str


class UserWithTokensResponse(BaseModel):
    user: UserModel
    tokens: TokenPairDTO


class GetMeResponse(BaseModel):
    user: UserModel
    fullManagerTeams: List[TeamModel]
