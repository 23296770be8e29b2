"""Fixed-interval auto-refresh on an APScheduler background scheduler."""

import threading
from typing import Callable

from apscheduler.schedulers.background import BackgroundScheduler

from asset_monitor.domain.constants import (
    DEFAULT_REFRESH_MINUTES,
    REFRESH_INTERVAL_CHOICES,
)
from asset_monitor.infrastructure.logging.logger import get_app_logger


REFRESH_JOB_ID = "asset-monitor-refresh"


class AutoRefreshScheduler:
    """Call ``callback`` every ``interval_minutes`` until stopped.

    An interval of 0 disables the refresh job. Changing the interval while
    running reschedules the job. A stopped scheduler is rebuilt on the next
    ``start``.
    """

    def __init__(
        self,
        callback: Callable[[], object],
        interval_minutes: int = DEFAULT_REFRESH_MINUTES,
        logger=None,
        scheduler_factory: Callable[..., BackgroundScheduler] = BackgroundScheduler,
    ) -> None:
        self._callback = callback
        self._interval_minutes = self._validate(interval_minutes)
        self._logger = logger or get_app_logger()
        self._scheduler_factory = scheduler_factory
        self._scheduler: BackgroundScheduler | None = None
        self._stopped = threading.Event()

    @property
    def interval_minutes(self) -> int:
        return self._interval_minutes

    @property
    def is_running(self) -> bool:
        return (
            self._scheduler is not None
            and self._scheduler.running
            and self._scheduler.get_job(REFRESH_JOB_ID) is not None
        )

    def start(self) -> None:
        if self.is_running:
            return
        if self._interval_minutes == 0:
            self._logger.info("Auto-refresh disabled")
            return
        if self._scheduler is None:
            self._scheduler = self._scheduler_factory(daemon=True)
        self._stopped.clear()
        self._scheduler.add_job(
            self._run_callback,
            "interval",
            minutes=self._interval_minutes,
            id=REFRESH_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        if not self._scheduler.running:
            self._scheduler.start()
        self._logger.info(
            f"Auto-refresh every {self._interval_minutes} minutes"
        )

    def stop(self) -> None:
        if self._scheduler is not None and self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        self._scheduler = None
        self._stopped.set()

    def set_interval(self, minutes: int) -> None:
        """Change the interval, rescheduling a running job.

        Raises:
            ValueError: If ``minutes`` is not a supported interval.
        """
        minutes = self._validate(minutes)
        self._interval_minutes = minutes
        if not self.is_running:
            return
        if minutes == 0:
            self._scheduler.remove_job(REFRESH_JOB_ID)
            self._logger.info("Auto-refresh disabled")
            return
        self._scheduler.reschedule_job(
            REFRESH_JOB_ID,
            trigger="interval",
            minutes=minutes,
        )
        self._logger.info(f"Auto-refresh every {minutes} minutes")

    def wait(self, timeout: float | None = None) -> bool:
        """Block until stopped; return True if the stop was requested."""
        return self._stopped.wait(timeout)

    def _run_callback(self) -> None:
        try:
            self._callback()
        except Exception as exc:
            self._logger.exception(f"Auto-refresh failed: {exc}")

    @staticmethod
    def _validate(minutes: int) -> int:
        if minutes not in REFRESH_INTERVAL_CHOICES:
            raise ValueError(
                f"Refresh interval must be one of {REFRESH_INTERVAL_CHOICES}"
            )
        return minutes


__all__ = ["AutoRefreshScheduler", "REFRESH_JOB_ID"]
