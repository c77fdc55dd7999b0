"""
Fire-and-forget job dispatcher built on APScheduler.

Jobs are registered by name and submitted with positional arguments. They run
out of band on the application's event loop; their outcome is logged and
never reported back to the code that submitted them.
"""

import asyncio
import uuid
from typing import Any, Awaitable, Callable, Dict, Optional, Set

import structlog
from apscheduler.events import (
    EVENT_JOB_ERROR,
    EVENT_JOB_EXECUTED,
    EVENT_JOB_MAX_INSTANCES,
    EVENT_JOB_MISSED,
)
from apscheduler.schedulers.asyncio import AsyncIOScheduler

logger = structlog.get_logger(__name__)

JobFunc = Callable[..., Awaitable[Any]]

_FINISHED_EVENTS = EVENT_JOB_EXECUTED | EVENT_JOB_ERROR | EVENT_JOB_MISSED | EVENT_JOB_MAX_INSTANCES


class JobDispatcher:
    """Bounded queue of named jobs executed as soon as possible."""

    def __init__(self, max_pending_jobs: int = 100):
        """
        Initialize the dispatcher.

        Args:
            max_pending_jobs: Jobs submitted while this many are still in
                flight are dropped
        """
        self.max_pending_jobs = max_pending_jobs
        self.scheduler: Optional[AsyncIOScheduler] = None
        self.logger = logger.bind(component="job_dispatcher")
        self._jobs: Dict[str, JobFunc] = {}
        self._pending: Set[str] = set()

    def _on_job_finished(self, event) -> None:
        self._pending.discard(event.job_id)

        if event.code == EVENT_JOB_ERROR:
            self.logger.error(
                "Job execution failed",
                job_id=event.job_id,
                error=str(event.exception)
            )
        elif event.code == EVENT_JOB_EXECUTED:
            self.logger.info("Job executed successfully", job_id=event.job_id)
        else:
            self.logger.warning("Job did not run", job_id=event.job_id, event_code=event.code)

    @property
    def pending_count(self) -> int:
        """Number of submitted jobs that have not finished yet."""
        return len(self._pending)

    @property
    def running(self) -> bool:
        return self.scheduler is not None and self.scheduler.running

    def register(self, name: str, func: JobFunc) -> None:
        """Bind a job name to the coroutine function that performs it."""
        self._jobs[name] = func
        self.logger.debug("Job registered", job_name=name)

    def submit(self, name: str, *args: Any) -> bool:
        """
        Submit a job for immediate out-of-band execution.

        Args:
            name: Registered job name
            *args: Arguments passed to the job function

        Returns:
            True if the job was queued, False if it was dropped
        """
        func = self._jobs.get(name)
        if func is None:
            self.logger.warning("Unknown job submitted", job_name=name)
            return False

        if not self.running:
            self.logger.warning("Job dispatcher not running, dropping job", job_name=name)
            return False

        if len(self._pending) >= self.max_pending_jobs:
            self.logger.warning(
                "Job queue full, dropping job",
                job_name=name,
                pending=len(self._pending),
                max_pending_jobs=self.max_pending_jobs
            )
            return False

        job_id = f"{name}-{uuid.uuid4().hex}"
        self._pending.add(job_id)
        try:
            self.scheduler.add_job(func, args=list(args), id=job_id, name=name, misfire_grace_time=None)
        except Exception as e:
            self._pending.discard(job_id)
            self.logger.error("Failed to submit job", job_name=name, error=str(e))
            return False

        self.logger.debug("Job submitted", job_name=name, job_id=job_id)
        return True

    def start(self) -> None:
        """Start executing jobs; must be called from a running event loop."""
        if self.running:
            return

        self.scheduler = AsyncIOScheduler(event_loop=asyncio.get_running_loop())
        self.scheduler.add_listener(self._on_job_finished, _FINISHED_EVENTS)
        self.scheduler.start()
        self.logger.info("Job dispatcher started", jobs=sorted(self._jobs))

    def shutdown(self, wait: bool = False) -> None:
        """Stop the dispatcher; jobs still queued are discarded."""
        if self.running:
            self.scheduler.shutdown(wait=wait)
            self.logger.info("Job dispatcher stopped", dropped=len(self._pending))
        self.scheduler = None
        self._pending.clear()
