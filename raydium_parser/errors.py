"""Exception hierarchy for the Raydium instruction codec."""


class RaydiumParserError(Exception):
    """Base exception for every error raised by this package."""


class BuildError(RaydiumParserError):
    """Raised when an instruction config cannot be turned into an instruction."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class MissingFieldError(BuildError):
    """A required account or argument was never set on the config."""

    def __init__(self, field: str):
        super().__init__(field, f"missing required field: {field}")


class InvalidFieldError(BuildError):
    """A field was set to a value that cannot be encoded."""

    def __init__(self, field: str, reason: str):
        super().__init__(field, f"invalid value for {field}: {reason}")
        self.reason = reason


class ParseError(RaydiumParserError):
    """Raised when a transaction envelope cannot be parsed."""


class EmptyInputError(ParseError):
    """The encoded transaction string was empty."""


class DecodeError(ParseError):
    """The encoded transaction was not a well-formed wire transaction."""
