# src/domain/exceptions.py


class DocumentQAError(Exception):
    """Base class for every error raised by this application."""


class EmptyQueryError(DocumentQAError, ValueError):
    """The search query was missing or blank."""


class MetadataNotFoundError(DocumentQAError, KeyError):
    """No upload record exists for the requested id."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class RulesConfigError(DocumentQAError, ValueError):
    """A topic-group / intent rules file is malformed."""
