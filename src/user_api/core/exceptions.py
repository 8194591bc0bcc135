"""Domain errors raised by the data-access layer."""


class UserApiError(Exception):
    """Base class for errors the HTTP layer maps to client responses."""


class DuplicateUsernameError(UserApiError):
    """A user with exactly this username already exists."""

    def __init__(self, username: str) -> None:
        super().__init__("A user with the given username already exists.")
        self.username = username
