"""Source file classification by extension."""

from enum import Enum
from pathlib import PurePosixPath


class SourceCodeFileType(Enum):
    """File types recognised when scanning a repository snapshot."""

    BINARY = "binary"
    JAVA = "java"
    GO = "go"
    TEXT = "text"
    XML = "xml"
    JSON = "json"
    OTHER = "other"

    @classmethod
    def exists(cls, file_name: str) -> bool:
        """True if the file's extension names one of the known types."""
        return _extension(file_name) in {member.value for member in cls}

    @classmethod
    def from_path(cls, file_name: str) -> "SourceCodeFileType":
        try:
            return cls(_extension(file_name))
        except ValueError:
            return cls.OTHER


def _extension(file_name: str) -> str:
    # Repository paths always use forward slashes
    return PurePosixPath(file_name.replace("\\", "/")).suffix.lstrip(".").lower()
