"""Shared fixtures for accounts app tests."""

import pytest

from server.apps.accounts.models import Account


@pytest.fixture
def account(db):
    """Create test account on the Free plan.

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
