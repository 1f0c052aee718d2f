# Domain error messages, rendered as the "message" of an error response
class ApiErrors:
    UNABLE_TO_FIND_USER = "Unable to find user"
    UNABLE_TO_FIND_TEAM = "Unable to find team"
    UNABLE_TO_FIND_REQUEST = "Unable to find request"
    UNABLE_TO_FIND_VERIFICATION = "Unable to find verification request"
    UNABLE_TO_FIND_DESIGNATION = "Unable to find team designation"
    UNAUTHORIZED_MANAGER = "User is not a manager of this team"
    UNAUTHORIZED_ADMIN = "User is not an admin"
    UNAUTHORIZED_TO_VIEW_REQUEST = "User is not authorized to view this request"
    UNAUTHORIZED_TO_VERIFY = "User is not authorized to request this verification"
    NOT_ALLOWED_TO_RESPOND = "User is not allowed to respond to this request"
    TEAM_ALREADY_REQUESTED = "The team has already requested this player"
    PLAYER_ALREADY_REQUESTED = "The player has already requested this team"
    REQUEST_ALREADY_RESOLVED = "This request has already been resolved"
    PLAYER_ALREADY_ROSTERED = "Player is already on this team"
    PLAYER_NOT_ON_TEAM = "Player is not on this team"
    REQUEST_NOT_IN_LIST = "Request is not in the list"
    NOT_ACCEPTING_REQUESTS = "Not accepting requests at this time"
    SEASON_START_ERROR = "A new season cannot start before the current season ends"
    NOT_ENOUGH_CHARACTERS = "At least 3 characters are required to search"
    DUPLICATE_TEAM_NAME = "Team name is already taken"
    DUPLICATE_EMAIL = "Email is already in use"
    DUPLICATE_USERNAME = "Username is already taken"
    NON_ALPHANUM_TEAM_NAME = "Team name may only contain letters and numbers"
    INVALID_TEAM_NAME = "Team name must be 2 to 20 letters or numbers"
    USER_ALREADY_MANAGES_TEAM = "User already manages this team"
    USER_IS_ONLY_MANAGER = "Cannot leave a team you are the only manager of"
    USER_IS_NOT_A_GUEST = "User is not a guest"
    GUEST_ACCOUNT_DELETE = "Guest accounts can only be removed by claiming them"
    CLAIM_GUEST_REQUEST_ALREADY_EXISTS = "A pending claim request already exists for this guest"
    INVALID_SEASON_DATE = "Invalid season dates"
    INVALID_EMAIL = "Invalid email address"
    INVALID_PASSWORD = "Password must be at least 8 characters with upper and lower case letters, a number and a symbol"
    INVALID_USERNAME = "Username must be 2 to 20 letters or numbers"
    INVALID_CREDENTIALS = "Invalid username or password"
    INVALID_PASSCODE = "Invalid or expired passcode"
    INVALID_SOURCE_TYPE = "Invalid verification source type"
    INVALID_RESPONSE_TYPE = "Invalid verification response"
    NAME_TOO_LONG = "Names must be 20 characters or less"
    MISSING_FIELDS = "Missing required fields"
    UNABLE_TO_SEND_EMAIL = "Unable to send email"
    UNABLE_TO_GENERATE_TOKEN = "Unable to generate token"
    GENERIC_ERROR = "Something went wrong"

    # Titles used in error response details
    VALIDATION_ERROR = "Validation Error"
    AUTHENTICATION_FAILED = "Authentication Failed"
    INTERNAL_SERVER_ERROR = "Internal server error"
    UNEXPECTED_ERROR_OCCURRED = "An unexpected error occurred"


class AuthErrorMessages:
    TOKEN_MISSING = "Authentication token is required"
    TOKEN_EXPIRED = "Authentication token has expired"
    TOKEN_INVALID = "Invalid authentication token"
    TOKEN_BLACKLISTED = "Authentication token has been revoked"
    REFRESH_TOKEN_EXPIRED = "Refresh token has expired, please log in again"
    AUTHENTICATION_REQUIRED = "Authentication credentials were not provided"
    TOKEN_EXPIRED_TITLE = "Token Expired"
    INVALID_TOKEN_TITLE = "Invalid Token"


class AppMessages:
    LOGGED_OUT = "Logged out successfully"
    PASSCODES_DELETED = "Expired passcodes deleted"
