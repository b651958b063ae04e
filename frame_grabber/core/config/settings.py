# File: frame_grabber/core/config/settings.py

import os
import shutil

DEFAULT_YT_DLP_FORMAT = "bv*[ext=mp4]+ba[ext=m4a]/b[ext=mp4]/best"


class Settings:
    VERSION: str = "0.1.0"

    # --- External Tools ---
    # Auto-detect the binaries or use env vars
    FFMPEG_BINARY: str = os.getenv("FFMPEG_BINARY_PATH", shutil.which("ffmpeg") or "ffmpeg")
    YT_DLP_BINARY: str = os.getenv("YT_DLP_BINARY_PATH", shutil.which("yt-dlp") or "yt-dlp")

    # Prefer mp4 video + m4a audio, fall back to the best single file
    YT_DLP_FORMAT: str = os.getenv("YT_DLP_FORMAT", DEFAULT_YT_DLP_FORMAT)

    # --- Process Control ---
    # Seconds a terminated child gets before it is killed
    TERMINATE_GRACE_SECONDS: float = float(os.getenv("FRAME_GRABBER_TERMINATE_GRACE", "5.0"))

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("FRAME_GRABBER_LOG_LEVEL", "WARNING").upper()
    LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


settings = Settings()
