"""Exceptions raised by catpoint."""


class CatpointError(Exception):
    """Base exception for all catpoint errors."""


class CatpointInvalidParameterError(CatpointError):
    """Raised when an argument is missing or of the wrong kind."""


class CatpointRepositoryError(CatpointError):
    """Raised when the state store cannot be read or written."""


class CatpointClassifierError(CatpointError):
    """Raised when an image cannot be classified."""


class CatpointSensorNotFoundError(CatpointError, KeyError):
    """Raised when a sensor id is not known to the repository."""

    def __str__(self) -> str:
        # KeyError quotes its message; keep it readable
        return str(self.args[0]) if self.args else ""
