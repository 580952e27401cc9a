class VecBridgeError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NoValuesProvidedError(VecBridgeError):
    """A DML helper was given no present column values."""


class NoRowsProvidedError(VecBridgeError):
    """insert_many_vec0 was given an empty row list."""


class DimensionMismatchError(VecBridgeError, ValueError):
    """Two vectors (or a vector and a declared size) disagree on length."""


class InvalidVectorError(VecBridgeError, ValueError):
    """Value is not a well-formed numeric vector."""


class ExtensionLoadError(VecBridgeError):
    """sqlite-vec could not be loaded into a connection."""
