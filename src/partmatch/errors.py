"""Exception types raised by the part matching core."""


class PartMatchError(Exception):
    """Base class for part matching errors surfaced to callers."""


class UnknownProfileError(PartMatchError, ValueError):
    """A similarity profile name that does not exist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown similarity profile: {name!r}")
