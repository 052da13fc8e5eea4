"""Database models for accounts app."""

import uuid
import sys
from typing import Final, final

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

from django.db import models

from server.apps.accounts.plans import DEFAULT_PLAN, PlanName

# Constants for field max lengths
_NAME_MAX_LENGTH: Final = 150
_PASSWORD_MAX_LENGTH: Final = 128
_PLAN_MAX_LENGTH: Final = 32


@final
class Account(models.Model):
    """Registered user of the cloud drive.

    Holds identity, the current subscription plan and the storage
    figures the quota checks are evaluated against.

    ``storage_used`` never goes below zero, but it may exceed
    ``storage_limit`` after a downgrade: the ceiling is only enforced
    when admitting an upload.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )

    name = models.CharField(max_length=_NAME_MAX_LENGTH)

    # Compared exactly as stored, no normalization
    email = models.EmailField(unique=True)

    password = models.CharField(
        max_length=_PASSWORD_MAX_LENGTH,
        help_text='Stored and compared in the clear',
    )

    plan = models.CharField(
        max_length=_PLAN_MAX_LENGTH,
        choices=PlanName.choices,
        default=PlanName.FREE,
    )

    storage_used = models.BigIntegerField(
        default=0,
        help_text='Currently used storage in bytes',
    )

    storage_limit = models.BigIntegerField(
        default=DEFAULT_PLAN.storage_limit_bytes,
        help_text='Storage limit of the current plan in bytes',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Account'  # type: ignore[mutable-override]
        verbose_name_plural = 'Accounts'  # type: ignore[mutable-override]
        ordering = ['created_at']

        constraints = [
            models.CheckConstraint(
                condition=models.Q(storage_used__gte=0),
                name='storage_used_non_negative',
            ),
            models.CheckConstraint(
                condition=models.Q(storage_limit__gt=0),
                name='storage_limit_positive',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.email}: {self.storage_used}/{self.storage_limit}'

    def has_space_for(self, size_bytes: int) -> bool:
        """Check if there's enough space for the given size.

        Args:
            size_bytes: Size to check in bytes.

        Returns:
            True if there's enough space, False otherwise.
        """
        return self.storage_used + size_bytes <= self.storage_limit

    def available_bytes(self) -> int:
        """Get available storage space.

        Returns:
            Available bytes (never negative).
        """
        available = self.storage_limit - self.storage_used
        return max(0, available)
