"""Business logic for account operations."""

import logging
from typing import Final
from uuid import UUID

from django.db import IntegrityError, transaction

from server.apps.accounts.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    MissingFieldError,
)
from server.apps.accounts.models import Account
from server.apps.accounts.plans import DEFAULT_PLAN, get_plan

_STORAGE_USED_FIELD: Final = 'storage_used'

logger = logging.getLogger(__name__)


def _require(**fields: str) -> None:
    """Raise MissingFieldError for the first empty field."""
    for field_name, field_value in fields.items():
        if not field_value:
            raise MissingFieldError(field_name)


def register(name: str, email: str, password: str) -> Account:
    """Create a new account on the Free plan.

    Args:
        name: Display name.
        email: Login email, unique across all accounts.
        password: Plaintext password.

    Returns:
        Created Account instance.

    Raises:
        MissingFieldError: If any input is empty.
        DuplicateEmailError: If the email is already registered.
    """
    _require(name=name, email=email, password=password)

    if Account.objects.filter(email=email).exists():
        logger.warning('Signup rejected, email already exists: %s', email)
        raise DuplicateEmailError(email)

    try:
        with transaction.atomic():
            account = Account.objects.create(
                name=name,
                email=email,
                password=password,
                plan=DEFAULT_PLAN.name,
                storage_used=0,
                storage_limit=DEFAULT_PLAN.storage_limit_bytes,
            )
    except IntegrityError as error:
        # Lost a race against a concurrent signup with the same email
        raise DuplicateEmailError(email) from error

    logger.info('Account created: %s (ID: %s)', email, account.id)
    return account


def authenticate(email: str, password: str) -> Account:
    """Resolve credentials to an account.

    Both values must match a stored account exactly.

    Args:
        email: Login email.
        password: Plaintext password.

    Returns:
        Matching Account instance.

    Raises:
        MissingFieldError: If any input is empty.
        InvalidCredentialsError: If no account matches.
    """
    _require(email=email, password=password)

    account = Account.objects.filter(email=email, password=password).first()
    if account is None:
        logger.warning('Authentication failed for: %s', email)
        raise InvalidCredentialsError

    logger.info('Account authenticated: %s', email)
    return account


def get_account(account_id: UUID | str) -> Account:
    """Read the authoritative record of an account.

    Raises:
        Account.DoesNotExist: If the account doesn't exist.
    """
    return Account.objects.get(pk=account_id)


def apply_usage_delta(account: Account, delta_bytes: int) -> Account:
    """Atomically add a (possibly negative) delta to storage usage.

    Usage is clamped to 0 from below. No upper clamp is applied here,
    the quota ceiling is only checked when admitting an upload.

    Args:
        account: Account whose usage changes.
        delta_bytes: Bytes to add, negative to release space.

    Returns:
        Refreshed Account instance.
    """
    with transaction.atomic():
        locked = Account.objects.select_for_update().get(pk=account.pk)
        new_usage = max(0, locked.storage_used + delta_bytes)
        locked.storage_used = new_usage
        locked.save(update_fields=[_STORAGE_USED_FIELD])

    logger.debug(
        'Applied usage delta for %s: %+d bytes (new: %d)',
        locked.email,
        delta_bytes,
        new_usage,
    )
    return locked


def change_plan(
    account: Account,
    plan_name: str,
    new_limit_bytes: int,
) -> Account:
    """Replace the plan and storage limit of an account.

    Storage usage is left untouched, so a downgrade may leave the
    account over its new limit. Further uploads are then rejected until
    enough files are deleted.

    Args:
        account: Account to change.
        plan_name: Name of the new plan.
        new_limit_bytes: Storage limit of the new plan in bytes.

    Returns:
        Refreshed Account instance.
    """
    with transaction.atomic():
        locked = Account.objects.select_for_update().get(pk=account.pk)
        old_plan = locked.plan
        locked.plan = plan_name
        locked.storage_limit = new_limit_bytes
        locked.save(update_fields=['plan', 'storage_limit'])

    logger.info(
        'Plan changed for %s: %s -> %s (limit: %d bytes)',
        locked.email,
        old_plan,
        plan_name,
        new_limit_bytes,
    )
    if locked.storage_used > new_limit_bytes:
        logger.warning(
            'Account %s is over quota after plan change: %d/%d',
            locked.email,
            locked.storage_used,
            new_limit_bytes,
        )
    return locked


def upgrade_plan(account: Account, plan_name: str) -> Account:
    """Switch an account to a catalog plan.

    No eligibility rules apply: any plan may be picked, including one
    smaller than the current usage.

    Args:
        account: Account to change.
        plan_name: Catalog plan name.

    Returns:
        Refreshed Account instance.

    Raises:
        PlanNotFoundError: If the plan is not in the catalog.
    """
    plan = get_plan(plan_name)
    return change_plan(account, plan.name, plan.storage_limit_bytes)
