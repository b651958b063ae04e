from frame_grabber.features.options.domain.models import ExtractionJob
from frame_grabber.features.tooling.service.provisioning import ensure_ffmpeg_available, resolve_downloader
from ..domain.models import ExtractionResult
from ..data.ffmpeg_adapter import FFmpegTranscoder
from ..data.ytdlp_adapter import YtDlpDownloader
from .orchestrator import FrameExtractionOrchestrator

def extract_frames(job: ExtractionJob, fetch_downloader: bool = False) -> ExtractionResult:
    """
    Public Service API: Download the job's video and extract its frames.

    Args:
        job: The resolved ExtractionJob.
        fetch_downloader: Fall back to the bundled yt_dlp package when the
            yt-dlp binary is not on PATH.

    Raises:
        ToolNotFoundError: If ffmpeg or yt-dlp cannot be resolved.
        OrchestrationError: If any step of the pipeline fails.
    """
    # 1. Preflight: both tools must resolve before anything is downloaded
    ffmpeg_binary = ensure_ffmpeg_available()
    launcher = resolve_downloader(fetch_if_missing=fetch_downloader)

    # 2. Instantiate Adapters
    orchestrator = FrameExtractionOrchestrator(
        downloader=YtDlpDownloader(launcher),
        transcoder=FFmpegTranscoder(ffmpeg_binary),
    )

    # 3. Execute Logic
    return orchestrator.run(job)
