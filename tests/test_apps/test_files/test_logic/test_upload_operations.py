"""Tests for the simulated upload transfer."""

import pytest
from django.test import override_settings

from server.apps.accounts.exceptions import MissingFieldError
from server.apps.accounts.logic.account_operations import apply_usage_delta
from server.apps.files.exceptions import (
    InvalidFileSizeError,
    QuotaExceededError,
    UploadStateError,
)
from server.apps.files.logic.file_operations import list_children, remove_file
from server.apps.files.logic.folder_operations import delete_folder
from server.apps.files.logic.upload_operations import (
    UploadState,
    UploadTransfer,
    get_progress_step,
    get_tick_interval,
    run_transfer,
)
from server.apps.files.models import File, Folder

GIB = 1024 * 1024 * 1024


def _no_sleep(interval):
    """Timer replacement that returns immediately."""


@pytest.mark.django_db
def test_new_transfer_is_idle(account):
    """Test a transfer starts IDLE with no progress."""
    transfer = UploadTransfer(account, 'a.txt', 100)

    assert transfer.state == UploadState.IDLE
    assert transfer.progress == 0
    assert transfer.file is None
    assert not transfer.is_finished


@pytest.mark.django_db
def test_progress_reaches_completion_in_fixed_steps(account):
    """Test ten ticks of 10% complete the transfer."""
    transfer = UploadTransfer(account, 'a.txt', 100, step=10)
    transfer.start()

    states = [transfer.tick() for _ in range(9)]

    assert set(states) == {UploadState.IN_PROGRESS}
    assert transfer.progress == 90
    assert not File.objects.exists()

    assert transfer.tick() == UploadState.COMPLETE
    assert transfer.progress == 100


@pytest.mark.django_db
def test_completion_records_file_and_usage(account, folder):
    """Test the completing tick creates the file and charges its size."""
    transfer = UploadTransfer(
        account,
        'song.mp3',
        300,
        'audio/mpeg',
        folder_id=folder.id,
        step=50,
    )
    transfer.start()
    transfer.tick()

    account.refresh_from_db()
    assert account.storage_used == 0

    transfer.tick()

    account.refresh_from_db()
    assert account.storage_used == 300
    assert transfer.file is not None
    assert list_children(account, folder.id).files == [transfer.file]
    assert transfer.file.mime_type == 'audio/mpeg'


@pytest.mark.django_db
def test_step_not_dividing_hundred_caps_at_complete(account):
    """Test progress is capped at 100 percent."""
    transfer = UploadTransfer(account, 'a.txt', 1, step=30)
    transfer.start()

    for _ in range(4):
        transfer.tick()

    assert transfer.progress == 100
    assert transfer.state == UploadState.COMPLETE


@pytest.mark.django_db
def test_rejected_before_progress(small_account):
    """Test a failed admission check rejects without any change."""
    transfer = UploadTransfer(small_account, 'big.bin', 1001)

    with pytest.raises(QuotaExceededError):
        transfer.start()

    assert transfer.state == UploadState.REJECTED
    assert transfer.progress == 0
    assert transfer.is_finished
    small_account.refresh_from_db()
    assert small_account.storage_used == 0
    assert not File.objects.exists()


@pytest.mark.django_db
def test_exact_fit_is_admitted(small_account):
    """Test an upload filling the remaining space completes."""
    transfer = UploadTransfer(small_account, 'fit.bin', 1000, step=100)

    transfer.start()
    transfer.tick()

    small_account.refresh_from_db()
    assert transfer.state == UploadState.COMPLETE
    assert small_account.storage_used == 1000


@pytest.mark.django_db
def test_admission_uses_stored_usage(small_account):
    """Test a stale account snapshot can't sneak an upload past the quota."""
    stale = small_account
    apply_usage_delta(small_account, 900)

    transfer = UploadTransfer(stale, 'b.bin', 200)

    with pytest.raises(QuotaExceededError):
        transfer.start()


@pytest.mark.django_db
def test_start_missing_folder(account):
    """Test uploading into a missing folder fails before progress."""
    transfer = UploadTransfer(account, 'a.txt', 1, folder_id=99999)

    with pytest.raises(Folder.DoesNotExist):
        transfer.start()

    assert transfer.state == UploadState.IDLE


@pytest.mark.django_db
def test_start_empty_name(account):
    """Test a nameless file is refused before progress begins."""
    transfer = UploadTransfer(account, '', 10, step=50)

    with pytest.raises(MissingFieldError):
        transfer.start()

    assert transfer.state == UploadState.IDLE
    assert transfer.progress == 0
    with pytest.raises(UploadStateError):
        transfer.tick()


@pytest.mark.django_db
def test_start_negative_size(account):
    """Test a negative size is refused before admission can pass it."""
    transfer = UploadTransfer(account, 'x.txt', -5, step=50)

    with pytest.raises(InvalidFileSizeError):
        transfer.start()

    assert transfer.state == UploadState.IDLE
    account.refresh_from_db()
    assert account.storage_used == 0
    assert not File.objects.exists()


@pytest.mark.django_db
def test_folder_deleted_mid_transfer_fails(account, folder):
    """Test a completion error ends the transfer instead of leaving it at 100%."""
    transfer = UploadTransfer(account, 'a.txt', 100, folder_id=folder.id, step=50)
    transfer.start()
    transfer.tick()

    delete_folder(folder.id)

    with pytest.raises(Folder.DoesNotExist):
        transfer.tick()

    assert transfer.state == UploadState.FAILED
    assert transfer.is_finished
    assert transfer.file is None
    account.refresh_from_db()
    assert account.storage_used == 0
    assert not File.objects.exists()
    with pytest.raises(UploadStateError):
        transfer.tick()


@pytest.mark.django_db
def test_run_transfer_stops_after_failure(account, folder):
    """Test the timer loop does not keep retrying a failed completion."""
    waits = []
    transfer = UploadTransfer(account, 'a.txt', 100, folder_id=folder.id, step=50)

    def sleep_and_delete(interval):
        waits.append(interval)
        if len(waits) == 2:
            delete_folder(folder.id)

    with pytest.raises(Folder.DoesNotExist):
        run_transfer(transfer, interval=0, sleep=sleep_and_delete)

    assert transfer.state == UploadState.FAILED
    assert len(waits) == 2


@pytest.mark.django_db
def test_cancel_stores_nothing(account):
    """Test cancelling an in-progress transfer leaves the store untouched."""
    transfer = UploadTransfer(account, 'a.txt', 100)
    transfer.start()
    transfer.tick()

    transfer.cancel()

    assert transfer.state == UploadState.CANCELLED
    assert transfer.progress == 0
    assert not File.objects.exists()
    with pytest.raises(UploadStateError):
        transfer.tick()


@pytest.mark.django_db
def test_tick_before_start(account):
    """Test ticking an IDLE transfer is an error."""
    transfer = UploadTransfer(account, 'a.txt', 100)

    with pytest.raises(UploadStateError):
        transfer.tick()


@pytest.mark.django_db
def test_start_twice(account):
    """Test a transfer can only be started once."""
    transfer = UploadTransfer(account, 'a.txt', 100)
    transfer.start()

    with pytest.raises(UploadStateError):
        transfer.start()


@pytest.mark.django_db
def test_invalid_step(account):
    """Test the progress step must be positive."""
    with pytest.raises(ValueError, match='positive'):
        UploadTransfer(account, 'a.txt', 1, step=0)


@pytest.mark.django_db
def test_run_transfer_ticks_on_timer(account):
    """Test run_transfer sleeps between ticks until completion."""
    waits = []
    seen = []
    transfer = UploadTransfer(account, 'a.txt', 100, step=25)

    run_transfer(
        transfer,
        interval=0.5,
        sleep=waits.append,
        on_progress=lambda current: seen.append(current.progress),
    )

    assert transfer.state == UploadState.COMPLETE
    assert waits == [0.5] * 4
    assert seen == [25, 50, 75, 100]


@pytest.mark.django_db
def test_run_transfer_rejected(small_account):
    """Test run_transfer surfaces a rejection before any tick."""
    waits = []
    transfer = UploadTransfer(small_account, 'big.bin', 5000)

    with pytest.raises(QuotaExceededError):
        run_transfer(transfer, sleep=waits.append)

    assert waits == []


@override_settings(
    MYCLOUD_UPLOAD_PROGRESS_STEP=20,
    MYCLOUD_UPLOAD_TICK_INTERVAL=0.05,
)
def test_timer_settings():
    """Test step and interval come from settings."""
    assert get_progress_step() == 20
    assert get_tick_interval() == 0.05


@pytest.mark.django_db
def test_quota_scenario_with_five_gib(account):
    """Test upload, rejection, delete and retry on a 5 GiB account."""
    first = run_transfer(UploadTransfer(account, 'one.iso', 3 * GIB), sleep=_no_sleep)

    account.refresh_from_db()
    assert account.storage_used == 3 * GIB

    with pytest.raises(QuotaExceededError):
        run_transfer(UploadTransfer(account, 'two.iso', 3 * GIB), sleep=_no_sleep)

    remove_file(first.file.id)

    account.refresh_from_db()
    assert account.storage_used == 0

    retry = run_transfer(UploadTransfer(account, 'two.iso', 3 * GIB), sleep=_no_sleep)

    account.refresh_from_db()
    assert retry.state == UploadState.COMPLETE
    assert account.storage_used == 3 * GIB
