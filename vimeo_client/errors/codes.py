"""Error code namespaces recognized by the client.

Server codes must match the API bit for bit; local codes live in the 90xx range.
"""

from enum import Enum, IntEnum


class ErrorDomain(str, Enum):
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    SERVER_REPORTED = "server_reported"
    LOCAL = "local"


class ServerErrorCode(IntEnum):
    """API error codes currently recognized by the client."""

    # Upload
    UPLOAD_STORAGE_QUOTA_EXCEEDED = 4101
    UPLOAD_DAILY_QUOTA_EXCEEDED = 4102

    # Root code for all the invalid parameter errors below
    INVALID_REQUEST_INPUT = 2204

    # Password-protected video playback
    VIDEO_PASSWORD_INCORRECT = 2222
    NO_VIDEO_PASSWORD_PROVIDED = 2223

    # Authentication
    EMAIL_TOO_LONG = 2216
    PASSWORD_TOO_SHORT = 2210
    PASSWORD_TOO_SIMPLE = 2211
    NAME_IN_PASSWORD = 2212
    EMAIL_NOT_RECOGNIZED = 2217
    PASSWORD_EMAIL_MISMATCH = 2218
    NO_PASSWORD_PROVIDED = 2209
    NO_EMAIL_PROVIDED = 2214
    INVALID_EMAIL = 2215
    NO_NAME_PROVIDED = 2213
    NAME_TOO_LONG = 2208
    FACEBOOK_JOIN_INVALID_TOKEN = 2303
    FACEBOOK_JOIN_NO_TOKEN = 2306
    FACEBOOK_JOIN_MISSING_PROPERTY = 2304
    FACEBOOK_JOIN_MALFORMED_TOKEN = 2305
    FACEBOOK_JOIN_DECRYPT_FAIL = 2307
    FACEBOOK_JOIN_TOKEN_TOO_LONG = 2308
    FACEBOOK_LOG_IN_NO_TOKEN = 2312
    FACEBOOK_LOG_IN_MISSING_PROPERTY = 2310
    FACEBOOK_LOG_IN_MALFORMED_TOKEN = 2311
    FACEBOOK_LOG_IN_DECRYPT_FAIL = 2313
    FACEBOOK_LOG_IN_TOKEN_TOO_LONG = 2314
    FACEBOOK_INVALID_INPUT_GRANT_TYPE = 2221
    FACEBOOK_JOIN_VALIDATE_TOKEN_FAIL = 2315
    FACEBOOK_INVALID_NO_INPUT = 2207
    FACEBOOK_INVALID_TOKEN = 2300
    FACEBOOK_MISSING_PROPERTY = 2301
    FACEBOOK_MALFORMED_TOKEN = 2302
    EMAIL_ALREADY_REGISTERED = 2400
    EMAIL_BLOCKED = 2401
    EMAIL_SPAMMER = 2402
    EMAIL_PURGATORY = 2403
    URL_UNAVAILABLE = 2404
    TIMEOUT = 5000
    TOKEN_NOT_GENERATED = 5001


class HTTPStatusCode(IntEnum):
    """HTTP statuses the classifier inspects directly."""

    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    SERVICE_UNAVAILABLE = 503


class LocalErrorCode(IntEnum):
    """Error conditions generated inside the client itself."""

    # Dispatcher
    UNDEFINED = 9000
    INVALID_RESPONSE_DICTIONARY = 9001
    REQUEST_MALFORMED = 9002
    CACHED_RESPONSE_NOT_FOUND = 9003

    # Authentication
    AUTH_TOKEN = 9004
    CODE_GRANT = 9005
    CODE_GRANT_STATE = 9006
    NO_RESPONSE = 9007
    PIN_CODE_INFO = 9008
    PIN_CODE_EXPIRED = 9009

    # Decoder
    NO_MAPPING_CLASS = 9010
    MAPPING_FAILED = 9011

    # Stored credentials
    ACCOUNT_CORRUPTED = 9012


SERVER_ERROR_MESSAGES: dict[ServerErrorCode, str] = {
    ServerErrorCode.UPLOAD_STORAGE_QUOTA_EXCEEDED: "Upload storage quota exceeded",
    ServerErrorCode.UPLOAD_DAILY_QUOTA_EXCEEDED: "Daily upload quota exceeded",
    ServerErrorCode.INVALID_REQUEST_INPUT: "Invalid request input",
    ServerErrorCode.VIDEO_PASSWORD_INCORRECT: "Video password is incorrect",
    ServerErrorCode.NO_VIDEO_PASSWORD_PROVIDED: "No video password provided",
    ServerErrorCode.EMAIL_TOO_LONG: "Email is too long",
    ServerErrorCode.PASSWORD_TOO_SHORT: "Password is too short",
    ServerErrorCode.PASSWORD_TOO_SIMPLE: "Password is too simple",
    ServerErrorCode.NAME_IN_PASSWORD: "Password contains the user name",
    ServerErrorCode.EMAIL_NOT_RECOGNIZED: "Email not recognized",
    ServerErrorCode.PASSWORD_EMAIL_MISMATCH: "Email and password do not match",
    ServerErrorCode.NO_PASSWORD_PROVIDED: "No password provided",
    ServerErrorCode.NO_EMAIL_PROVIDED: "No email provided",
    ServerErrorCode.INVALID_EMAIL: "Invalid email",
    ServerErrorCode.NO_NAME_PROVIDED: "No name provided",
    ServerErrorCode.NAME_TOO_LONG: "Name is too long",
    ServerErrorCode.FACEBOOK_JOIN_INVALID_TOKEN: "Facebook join: invalid token",
    ServerErrorCode.FACEBOOK_JOIN_NO_TOKEN: "Facebook join: no token",
    ServerErrorCode.FACEBOOK_JOIN_MISSING_PROPERTY: "Facebook join: missing property",
    ServerErrorCode.FACEBOOK_JOIN_MALFORMED_TOKEN: "Facebook join: malformed token",
    ServerErrorCode.FACEBOOK_JOIN_DECRYPT_FAIL: "Facebook join: token decrypt failed",
    ServerErrorCode.FACEBOOK_JOIN_TOKEN_TOO_LONG: "Facebook join: token too long",
    ServerErrorCode.FACEBOOK_LOG_IN_NO_TOKEN: "Facebook login: no token",
    ServerErrorCode.FACEBOOK_LOG_IN_MISSING_PROPERTY: "Facebook login: missing property",  # noqa: E501
    ServerErrorCode.FACEBOOK_LOG_IN_MALFORMED_TOKEN: "Facebook login: malformed token",
    ServerErrorCode.FACEBOOK_LOG_IN_DECRYPT_FAIL: "Facebook login: token decrypt failed",  # noqa: E501
    ServerErrorCode.FACEBOOK_LOG_IN_TOKEN_TOO_LONG: "Facebook login: token too long",
    ServerErrorCode.FACEBOOK_INVALID_INPUT_GRANT_TYPE: "Facebook: invalid grant type",
    ServerErrorCode.FACEBOOK_JOIN_VALIDATE_TOKEN_FAIL: "Facebook join: token validation failed",  # noqa: E501
    ServerErrorCode.FACEBOOK_INVALID_NO_INPUT: "Facebook: no input",
    ServerErrorCode.FACEBOOK_INVALID_TOKEN: "Facebook: invalid token",
    ServerErrorCode.FACEBOOK_MISSING_PROPERTY: "Facebook: missing property",
    ServerErrorCode.FACEBOOK_MALFORMED_TOKEN: "Facebook: malformed token",
    ServerErrorCode.EMAIL_ALREADY_REGISTERED: "Email already registered",
    ServerErrorCode.EMAIL_BLOCKED: "Email blocked",
    ServerErrorCode.EMAIL_SPAMMER: "Email flagged as spam",
    ServerErrorCode.EMAIL_PURGATORY: "Email is pending review",
    ServerErrorCode.URL_UNAVAILABLE: "URL unavailable",
    ServerErrorCode.TIMEOUT: "Server timeout",
    ServerErrorCode.TOKEN_NOT_GENERATED: "Token could not be generated",
}

HTTP_STATUS_MESSAGES: dict[HTTPStatusCode, str] = {
    HTTPStatusCode.BAD_REQUEST: "Bad request",
    HTTPStatusCode.UNAUTHORIZED: "Unauthorized",
    HTTPStatusCode.FORBIDDEN: "Forbidden",
    HTTPStatusCode.SERVICE_UNAVAILABLE: "Service unavailable",
}

LOCAL_ERROR_MESSAGES: dict[LocalErrorCode, str] = {
    LocalErrorCode.UNDEFINED: "A response failed but returned no error object",
    LocalErrorCode.INVALID_RESPONSE_DICTIONARY: "The response dictionary was not valid",  # noqa: E501
    LocalErrorCode.REQUEST_MALFORMED: "The request could not be initiated with the specified values",  # noqa: E501
    LocalErrorCode.CACHED_RESPONSE_NOT_FOUND: "A cache-only request found no cached response",  # noqa: E501
    LocalErrorCode.AUTH_TOKEN: "No access token was returned with a successful authentication response",  # noqa: E501
    LocalErrorCode.CODE_GRANT: "Could not retrieve parameters from code grant response",  # noqa: E501
    LocalErrorCode.CODE_GRANT_STATE: "Code grant returned state did not match existing state",  # noqa: E501
    LocalErrorCode.NO_RESPONSE: "No response was returned for the request",
    LocalErrorCode.PIN_CODE_INFO: "Pin code authentication did not return an activate link or pin code",  # noqa: E501
    LocalErrorCode.PIN_CODE_EXPIRED: "The currently active pin code has expired",
    LocalErrorCode.NO_MAPPING_CLASS: "No model class was specified for deserialization",  # noqa: E501
    LocalErrorCode.MAPPING_FAILED: "Model object mapping was not successful",
    LocalErrorCode.ACCOUNT_CORRUPTED: "An account object could not be decoded from stored data",  # noqa: E501
}
