# File: frame_grabber/core/common/enums.py

from enum import Enum, unique

@unique
class JobStage(str, Enum):
    IDLE = "idle"
    DOWNLOADING = "downloading"
    EXTRACTING = "extracting"
    CLEANING_UP = "cleaning_up"
    DONE = "done"
    FAILED = "failed"

@unique
class ExternalTool(str, Enum):
    DOWNLOADER = "yt-dlp"
    TRANSCODER = "ffmpeg"
