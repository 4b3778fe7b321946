from pathlib import Path
from typing import Optional, Union


class ConversionError(Exception):
    """Base class for every error that aborts a conversion run."""


class MissingInput(ConversionError):
    """A required input directory or file does not exist."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class EmptyDataset(ConversionError):
    """No image-label pairs were found in the source directory."""


class InvalidConfiguration(ConversionError):
    """The conversion options are out of range or cannot be loaded."""


class IOFailure(ConversionError):
    """A read, write or create operation failed for a specific path."""

    def __init__(self, message: str, path: Union[str, Path]):
        super().__init__(message)
        self.path = Path(path)
