"""Exception hierarchy for oaslint.

Fatal errors halt a run before any result is produced. Reference errors are only
raised on request through ``ReferenceFailure.unwrap()``; the engine itself
consumes resolution outcomes as values.
"""


class OasLintError(Exception):
    """Base class for all oaslint errors."""


class ConfigError(OasLintError):
    """Rule configuration could not be resolved."""


class DocumentError(OasLintError):
    """Input is not a structured document that can be validated."""


class PointerError(OasLintError):
    """Base class for in-document pointer failures."""

    def __init__(self, pointer: str, message: str):
        super().__init__(message)
        self.pointer = pointer


class CyclicReferenceError(PointerError):
    """Pointer is already being resolved on the current branch."""


class UnresolvedReferenceError(PointerError):
    """Pointer does not name a node in the document."""
