"""User Messages — fixed user-facing strings returned by manager operations.

Invariants:
    - Every failure path of every operation maps to exactly one string here
      unless the backend supplied its own message
    - Strings are final copy: callers display them verbatim
"""

from authsession.core.domain_types import Operation

LOGIN_FAILED = "Login failed"
REGISTRATION_FAILED = "Registration failed"
LOGIN_PROFILE_FETCH_FAILED = "Login succeeded, but failed to fetch user profile."
LOGIN_NETWORK_ERROR = "Network error during login."
REGISTRATION_NETWORK_ERROR = "Network error during registration."
LOGIN_STORAGE_ERROR = "Could not save the login session."

_REJECTED_DEFAULTS: dict[Operation, str] = {
    Operation.LOGIN: LOGIN_FAILED,
    Operation.REGISTER: REGISTRATION_FAILED,
}

_NETWORK_MESSAGES: dict[Operation, str] = {
    Operation.LOGIN: LOGIN_NETWORK_ERROR,
    Operation.REGISTER: REGISTRATION_NETWORK_ERROR,
}


def rejected_default(operation: Operation) -> str:
    """Fallback shown when the backend rejects a call without a usable message."""
    return _REJECTED_DEFAULTS[operation]


def network_error(operation: Operation) -> str:
    return _NETWORK_MESSAGES[operation]
