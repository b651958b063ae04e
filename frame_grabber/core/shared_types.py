from dataclasses import dataclass
from pathlib import Path
from typing import Optional

@dataclass(frozen=True)
class TimeWindow:
    """
    Value Object describing which part of the source to extract.
    Both fields are opaque strings ("00:00:05", "10", "1:30.5") whose
    meaning belongs to the transcoder. None means "not bounded".
    """
    start: Optional[str] = None
    duration: Optional[str] = None

    def __post_init__(self):
        for name, value in (("start", self.start), ("duration", self.duration)):
            if value is not None and not value.strip():
                raise ValueError(f"Time window {name} cannot be blank.")

    @property
    def is_full_length(self) -> bool:
        return self.start is None and self.duration is None

@dataclass(frozen=True)
class MediaFile:
    """
    Entity representing a media file on the filesystem.
    Encapsulates path validation and directory creation.
    """
    path: Path

    def __post_init__(self):
        if str(self.path).strip() == "." or str(self.path).strip() == "":
             raise ValueError("File path cannot be empty.")

    def exists(self) -> bool:
        return self.path.is_file()

    def ensure_parent_dir(self) -> None:
        """Creates the directory structure for this file if it doesn't exist."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
