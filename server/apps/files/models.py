"""Database models for files app."""

from pathlib import Path
import sys
from typing import Final, final

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

from django.db import models

from server.apps.accounts.models import Account

# Constants for field max lengths
_NAME_MAX_LENGTH: Final = 255
_MIME_TYPE_MAX_LENGTH: Final = 255


@final
class Folder(models.Model):
    """Folder in a user's hierarchy.

    Folders form a forest per owner: ``parent`` is null for top-level
    folders. Membership is resolved by filtering on ``parent_id``,
    there are no child lists.

    The parent reference carries no database constraint and no delete
    behavior: deleting a folder leaves its subfolders in place, still
    pointing at the removed id.
    """

    owner = models.ForeignKey(
        Account,
        on_delete=models.CASCADE,
        related_name='folders',
        db_index=True,
    )

    name = models.CharField(max_length=_NAME_MAX_LENGTH)

    parent = models.ForeignKey(
        'self',
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        blank=True,
        related_name='+',
        help_text='Parent folder, empty for the root level',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Folder'  # type: ignore[mutable-override]
        verbose_name_plural = 'Folders'  # type: ignore[mutable-override]
        # Insertion order
        ordering = ['id']

        indexes = [
            # Optimize directory listing queries
            models.Index(
                fields=['owner', 'parent'],
                name='folders_owner_parent_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.owner.email}:{self.name}'


@final
class File(models.Model):
    """Record of an uploaded file.

    Only metadata is kept: no file content is stored anywhere.
    Deleting the containing folder deletes the record too.
    """

    owner = models.ForeignKey(
        Account,
        on_delete=models.CASCADE,
        related_name='files',
        db_index=True,
    )

    name = models.CharField(max_length=_NAME_MAX_LENGTH)

    size_bytes = models.BigIntegerField(
        help_text='File size in bytes',
    )

    mime_type = models.CharField(
        max_length=_MIME_TYPE_MAX_LENGTH,
        blank=True,
        default='',
    )

    folder = models.ForeignKey(
        Folder,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='files',
        help_text='Containing folder, empty for the root level',
    )

    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'File'  # type: ignore[mutable-override]
        verbose_name_plural = 'Files'  # type: ignore[mutable-override]
        # Insertion order
        ordering = ['id']

        indexes = [
            # Optimize directory listing queries
            models.Index(
                fields=['owner', 'folder'],
                name='files_owner_folder_idx',
            ),
        ]

        constraints = [
            models.CheckConstraint(
                condition=models.Q(size_bytes__gte=0),
                name='size_bytes_non_negative',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.owner.email}:{self.name}'

    def get_extension(self) -> str:
        """Extract file extension.

        Example: 'file.pdf' -> 'pdf'

        Returns:
            Extension without dot (lowercase).
        """
        extension = Path(self.name).suffix
        return extension.lstrip('.').lower()
