from enum import Enum


class Initiator(str, Enum):
    PLAYER = "player"
    TEAM = "team"


class Status(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"


class OTPReason(str, Enum):
    PASSWORD_RECOVERY = "passwordrecovery"
    TEAM_JOIN = "teamjoin"
    GAME_JOIN = "gamejoin"


class SourceType(str, Enum):
    TEAM = "team"
    USER = "user"
    TOURNAMENT = "tournament"


VERIFIABLE_SOURCE_TYPES = [SourceType.TEAM.value, SourceType.USER.value]
VERIFICATION_RESPONSES = [Status.APPROVED.value, Status.DENIED.value]

# Name, handle and username limits
MIN_HANDLE_LENGTH = 2
MAX_HANDLE_LENGTH = 20
MAX_NAME_LENGTH = 20
MIN_SEARCH_LENGTH = 3
PASSCODE_LENGTH = 6

GUEST_EMAIL_DOMAIN = "theultmtapp.com"
GUEST_PASSWORD_LENGTH = 15
GUEST_PASSWORD_ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789!@#$%"
