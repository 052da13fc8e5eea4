"""Shared fixtures for files app tests."""

import pytest

from server.apps.accounts.models import Account
from server.apps.files.models import Folder

GIB = 1024 * 1024 * 1024


@pytest.fixture
def account(db):
    """Create test account on the Free plan (5 GiB).

    Returns:
        Account instance for testing.
    """
    return Account.objects.create(
        name='Test User',
        email='test@example.com',
        password='testpass123',
    )


@pytest.fixture
def other_account(db):
    """Create second test account for isolation tests.

    Returns:
        Second account instance.
    """
    return Account.objects.create(
        name='Other User',
        email='other@example.com',
        password='testpass123',
    )


@pytest.fixture
def small_account(db):
    """Create account with a 1000 byte limit.

    Returns:
        Account instance with a tiny quota.
    """
    return Account.objects.create(
        name='Small User',
        email='small@example.com',
        password='testpass123',
        storage_limit=1000,
    )


@pytest.fixture
def folder(account):
    """Create a root level folder for the test account.

    Returns:
        Folder instance.
    """
    return Folder.objects.create(owner=account, name='Documents')
