"""Business logic for storage quota operations."""

import logging

from django.db import transaction
from django.db.models import Sum

from server.apps.accounts.models import Account
from server.apps.files.exceptions import QuotaExceededError
from server.apps.files.models import File

logger = logging.getLogger(__name__)


def can_admit(account: Account, incoming_size: int) -> bool:
    """Decide whether an upload of the given size fits the quota.

    An upload that exactly fills the remaining space is admitted.

    Args:
        account: Account snapshot to evaluate.
        incoming_size: Size of the upload in bytes.

    Returns:
        True if the upload is admissible.
    """
    return account.has_space_for(incoming_size)


def check_quota(account: Account, incoming_size: int) -> None:
    """Check if account has enough quota for an upload.

    Args:
        account: Account snapshot to evaluate.
        incoming_size: Size of the upload in bytes.

    Raises:
        QuotaExceededError: If upload would exceed quota.
    """
    if not can_admit(account, incoming_size):
        logger.warning(
            'Quota exceeded for %s: need %d, have %d available',
            account.email,
            incoming_size,
            account.available_bytes(),
        )
        raise QuotaExceededError(
            quota_bytes=account.storage_limit,
            used_bytes=account.storage_used,
            required_bytes=incoming_size,
        )


def available_bytes(account: Account) -> int:
    """Remaining capacity in bytes, never negative."""
    return account.available_bytes()


def usage_percent(account: Account) -> float:
    """Share of the limit in use, in percent.

    May exceed 100 for an account left over quota by a downgrade.
    """
    return account.storage_used / account.storage_limit * 100


def recalculate_usage(account: Account) -> int:
    """Recalculate account's storage usage from its file records.

    This is an explicit repair tool: usage not reclaimed when a folder
    delete cascades to its files is only corrected by calling it.

    Args:
        account: Account to recalculate usage for.

    Returns:
        New calculated usage in bytes.
    """
    total = File.objects.filter(owner=account).aggregate(
        total=Sum('size_bytes'),
    )['total'] or 0

    with transaction.atomic():
        locked = Account.objects.select_for_update().get(pk=account.pk)
        old_usage = locked.storage_used
        locked.storage_used = total
        locked.save(update_fields=['storage_used'])

    logger.info(
        'Recalculated usage for %s: %d -> %d bytes',
        account.email,
        old_usage,
        total,
    )

    return total
