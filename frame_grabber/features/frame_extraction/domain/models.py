from dataclasses import dataclass
from pathlib import Path
from typing import Optional

@dataclass(frozen=True)
class ProcessOutcome:
    """
    What came back from one external tool invocation.
    """
    returncode: int
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0

@dataclass(frozen=True)
class ExtractionResult:
    """
    The result of a successful run.
    frame_count is None when the frames could not be counted.
    video_path is only set when the downloaded video was kept.
    """
    out_dir: Path
    frame_count: Optional[int] = None
    video_path: Optional[Path] = None
