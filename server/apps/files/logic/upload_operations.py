"""Simulated upload transfer.

No bytes move anywhere. An upload is a progress counter advanced by a
repeating timer; the file record only appears once the counter reaches
completion.

States::

    IDLE --start()--> IN_PROGRESS --tick()...--> COMPLETE
     |                 |     |
     |                 |     +--tick()--> FAILED
     |                 +--cancel()--> CANCELLED
     +--start()--> REJECTED

FAILED is reached when storing the completed file raises, for example
because the target folder was deleted while the transfer was running.
"""

import enum
import logging
import time
from collections.abc import Callable
from typing import Final, final

from django.conf import settings
from django.db import transaction

from server.apps.accounts.logic.account_operations import (
    apply_usage_delta,
    get_account,
)
from server.apps.accounts.models import Account
from server.apps.files.exceptions import QuotaExceededError, UploadStateError
from server.apps.files.logic.file_operations import (
    create_file,
    validate_file_input,
)
from server.apps.files.logic.folder_operations import get_folder
from server.apps.files.logic.quota_operations import check_quota
from server.apps.files.models import File

logger = logging.getLogger(__name__)

_COMPLETE_PERCENT: Final = 100


def get_progress_step() -> int:
    """Get progress added per timer tick.

    Returns:
        Percentage points from settings or default of 10.
    """
    return getattr(settings, 'MYCLOUD_UPLOAD_PROGRESS_STEP', 10)


def get_tick_interval() -> float:
    """Get delay between timer ticks.

    Returns:
        Interval in seconds from settings or default of 0.2.
    """
    return getattr(settings, 'MYCLOUD_UPLOAD_TICK_INTERVAL', 0.2)


class UploadState(enum.StrEnum):
    """Lifecycle states of an upload transfer."""

    IDLE = 'idle'
    IN_PROGRESS = 'in_progress'
    COMPLETE = 'complete'
    REJECTED = 'rejected'
    CANCELLED = 'cancelled'
    FAILED = 'failed'


_TERMINAL_STATES: Final = frozenset((
    UploadState.COMPLETE,
    UploadState.REJECTED,
    UploadState.CANCELLED,
    UploadState.FAILED,
))


@final
class UploadTransfer:
    """One simulated upload of a selected file into a folder.

    Each call to ``tick`` is atomic. The completion side effect,
    creating the File record and charging its size to the owner, runs
    in a single transaction on the tick that reaches 100 percent.
    """

    def __init__(  # noqa: WPS211
        self,
        account: Account,
        name: str,
        size_bytes: int,
        mime_type: str = '',
        folder_id: int | None = None,
        step: int | None = None,
    ) -> None:
        """Prepare a transfer in the IDLE state.

        Args:
            account: Uploading account.
            name: Name of the selected file.
            size_bytes: Size of the selected file.
            mime_type: MIME type of the selected file.
            folder_id: Target folder, None for the root level.
            step: Percentage points per tick, defaults to settings.
        """
        if step is None:
            step = get_progress_step()
        if step <= 0:
            raise ValueError(f'Progress step must be positive: {step}')

        self.account_id = account.pk
        self.name = name
        self.size_bytes = size_bytes
        self.mime_type = mime_type
        self.folder_id = folder_id
        self.step = step
        self.state = UploadState.IDLE
        self.progress = 0
        self.file: File | None = None

    @property
    def is_finished(self) -> bool:
        """Whether the transfer reached a terminal state."""
        return self.state in _TERMINAL_STATES

    def start(self) -> None:
        """Run the admission check and begin the transfer.

        The check uses the authoritative account record. On rejection
        nothing is stored and progress never begins.

        Raises:
            MissingFieldError: If the file name is empty.
            InvalidFileSizeError: If the file size is negative.
            QuotaExceededError: If the file doesn't fit the quota.
            Folder.DoesNotExist: If the target folder is gone.
            UploadStateError: If the transfer was already started.
        """
        self._expect(UploadState.IDLE)
        validate_file_input(self.name, self.size_bytes)

        account = get_account(self.account_id)
        if self.folder_id is not None:
            get_folder(account, self.folder_id)

        try:
            check_quota(account, self.size_bytes)
        except QuotaExceededError:
            self.state = UploadState.REJECTED
            logger.info('Upload rejected: %s (%d bytes)', self.name, self.size_bytes)
            raise

        self.state = UploadState.IN_PROGRESS
        self.progress = 0
        logger.info('Upload started: %s (%d bytes)', self.name, self.size_bytes)

    def tick(self) -> UploadState:
        """Advance progress by one step.

        Returns:
            State after the tick.

        Raises:
            UploadStateError: If the transfer is not in progress.
            Folder.DoesNotExist: If the target folder vanished before
                completion; the transfer is then FAILED.
        """
        self._expect(UploadState.IN_PROGRESS)

        self.progress = min(_COMPLETE_PERCENT, self.progress + self.step)
        logger.debug('Upload progress: %s %d%%', self.name, self.progress)

        if self.progress >= _COMPLETE_PERCENT:
            self._complete()
        return self.state

    def cancel(self) -> None:
        """Abandon an in-progress transfer without storing anything.

        Raises:
            UploadStateError: If the transfer is not in progress.
        """
        self._expect(UploadState.IN_PROGRESS)
        self.state = UploadState.CANCELLED
        self.progress = 0
        logger.info('Upload cancelled: %s', self.name)

    def _complete(self) -> None:
        try:
            with transaction.atomic():
                account = get_account(self.account_id)
                self.file = create_file(
                    account,
                    name=self.name,
                    size_bytes=self.size_bytes,
                    mime_type=self.mime_type,
                    folder_id=self.folder_id,
                )
                apply_usage_delta(account, self.size_bytes)
        except Exception:
            self.state = UploadState.FAILED
            self.file = None
            logger.exception('Upload failed on completion: %s', self.name)
            raise

        self.state = UploadState.COMPLETE
        logger.info('Upload complete: %s (ID: %d)', self.name, self.file.id)

    def _expect(self, state: UploadState) -> None:
        if self.state != state:
            raise UploadStateError(
                f'Upload {self.name!r} is {self.state}, expected {state}',
            )


def run_transfer(
    transfer: UploadTransfer,
    interval: float | None = None,
    sleep: Callable[[float], None] = time.sleep,
    on_progress: Callable[[UploadTransfer], None] | None = None,
) -> UploadTransfer:
    """Drive a transfer with a repeating timer until it finishes.

    Starts an IDLE transfer first, so a rejection surfaces here
    before any tick.

    Args:
        transfer: Transfer to drive.
        interval: Seconds between ticks, defaults to settings.
        sleep: Timer used to wait between ticks.
        on_progress: Called after every tick.

    Returns:
        The finished transfer.

    Raises:
        MissingFieldError: If the file name is empty.
        InvalidFileSizeError: If the file size is negative.
        QuotaExceededError: If the admission check fails.
        Folder.DoesNotExist: If the target folder is missing or vanishes.
    """
    if interval is None:
        interval = get_tick_interval()

    if transfer.state == UploadState.IDLE:
        transfer.start()

    while not transfer.is_finished:
        sleep(interval)
        transfer.tick()
        if on_progress is not None:
            on_progress(transfer)

    return transfer
