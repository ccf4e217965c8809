class LudoError(Exception):
    """Base exception for the turn engine."""

    pass


class InvalidRequest(LudoError):
    """Raised when a roll or move request does not fit the current turn.

    The engine state is left untouched.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class ConfigurationError(LudoError):
    """Raised when game settings cannot start a session."""

    def __init__(self, problems: list[str]):
        super().__init__("; ".join(problems))
        self.problems = list(problems)
