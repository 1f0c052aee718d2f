from typing import List

from ultmt.models.embedded import EmbeddedTeam, EmbeddedUser
from ultmt.models.team import TeamModel
from ultmt.models.user import UserModel
from ultmt.repositories.common.mongo_repository import to_object_id


def embed_user(user: UserModel) -> EmbeddedUser:
    return EmbeddedUser(_id=user.id, firstName=user.firstName, lastName=user.lastName, username=user.username)


def embed_team(team: TeamModel) -> EmbeddedTeam:
    return EmbeddedTeam(
        _id=team.id,
        place=team.place,
        name=team.name,
        teamname=team.teamname,
        seasonStart=team.seasonStart,
        seasonEnd=team.seasonEnd,
        verified=team.verified,
        designation=team.designation,
    )


def contains_id(entries: List, entry_id) -> bool:
    object_id = to_object_id(entry_id)
    return any(entry.id == object_id for entry in entries)


def without_id(entries: List, entry_id) -> List:
    object_id = to_object_id(entry_id)
    return [entry for entry in entries if entry.id != object_id]


def append_unique(entries: List, entry) -> List:
    """Append unless an entry with the same id is already there. Safe to repeat."""
    if contains_id(entries, entry.id):
        return entries
    return [*entries, entry]
