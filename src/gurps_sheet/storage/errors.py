"""Errors raised when a character file cannot be loaded."""


class CharacterLoadError(ValueError):
    """The top-level structure of an imported file could not be parsed."""

    def __init__(self, fmt: str, reason: str) -> None:
        self.fmt = fmt
        self.reason = reason
        super().__init__(f"Invalid {fmt.upper()} format: {reason}")


class UnsupportedFormatError(ValueError):
    """The file extension does not name a supported encoding."""

    def __init__(self, extension: str) -> None:
        self.extension = extension
        super().__init__(f"Unsupported file format: {extension or '(none)'}")
