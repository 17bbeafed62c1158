# backend/app/core/run_lock.py
"""
Per-interview run registry for the transcription pipeline.
Keeps at most one pipeline run per interview inside this process so two runs
never interleave their persistence writes.
"""
from contextlib import asynccontextmanager
from typing import Set


class PipelineBusyError(RuntimeError):
    """A transcription run for this interview is already in progress."""

    def __init__(self, interview_id: str):
        super().__init__(f"Transcription already in progress for interview {interview_id}")
        self.interview_id = interview_id


class RunRegistry:
    """
    In-memory set of interview ids with an active pipeline run.

    A second run for the same interview is rejected rather than queued.
    Runs for different interviews proceed independently. The registry lives
    only in this process: after a crash it starts empty, which is how a
    stranded "processing" status is recognised.
    """
    def __init__(self):
        self._active: Set[str] = set()

    def is_running(self, interview_id: str) -> bool:
        return str(interview_id) in self._active

    def acquire(self, interview_id: str) -> None:
        """
        Mark a run as started.

        Raises:
            PipelineBusyError: If a run for this interview is already active
        """
        key = str(interview_id)
        if key in self._active:
            raise PipelineBusyError(key)
        self._active.add(key)

    def release(self, interview_id: str) -> None:
        self._active.discard(str(interview_id))

    @asynccontextmanager
    async def hold(self, interview_id: str):
        """acquire() on enter, release() on exit (including on errors)"""
        self.acquire(interview_id)
        try:
            yield
        finally:
            self.release(interview_id)

# Global registry instance (singleton pattern)
run_registry = RunRegistry()
