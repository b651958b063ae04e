import subprocess
import logging
from typing import List

from frame_grabber.core.config.settings import settings
from frame_grabber.core.errors import ExtractionCancelled
from ..domain.models import ProcessOutcome

logger = logging.getLogger(__name__)

# Conventional "command not found" status, used when the spawn itself fails
SPAWN_FAILED = 127


def run_tool(cmd: List[str], stage: str) -> ProcessOutcome:
    """
    Runs an external tool to completion and captures its stderr.

    A spawn failure (missing binary, no permission) becomes a non-zero
    outcome. A KeyboardInterrupt terminates the child and is re-raised as
    ExtractionCancelled for `stage`.
    """
    logger.debug(f"Spawning: {cmd}")
    try:
        proc = subprocess.Popen(
            cmd,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
        )
    except OSError as e:
        logger.error(f"Could not start {cmd[0]}: {e}")
        return ProcessOutcome(returncode=SPAWN_FAILED, stderr=f"could not start {cmd[0]}: {e}")

    try:
        _, stderr = proc.communicate()
    except KeyboardInterrupt:
        logger.warning(f"Interrupted while {stage}, stopping {cmd[0]} (pid {proc.pid})")
        stderr = _stop(proc)
        raise ExtractionCancelled(stage, stderr)

    return ProcessOutcome(returncode=proc.returncode, stderr=stderr or "")


def _stop(proc: subprocess.Popen) -> str:
    """Terminate, then kill if the child ignores it. Returns whatever stderr was left."""
    proc.terminate()
    try:
        _, stderr = proc.communicate(timeout=settings.TERMINATE_GRACE_SECONDS)
    except subprocess.TimeoutExpired:
        proc.kill()
        _, stderr = proc.communicate()
    return stderr or ""
