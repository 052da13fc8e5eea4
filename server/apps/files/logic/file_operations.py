"""Business logic for file operations."""

import logging
from typing import NamedTuple

from django.db import transaction

from server.apps.accounts.exceptions import MissingFieldError
from server.apps.accounts.logic.account_operations import apply_usage_delta
from server.apps.accounts.models import Account
from server.apps.files.exceptions import InvalidFileSizeError
from server.apps.files.infrastructure.metadata import detect_mime_type
from server.apps.files.logic.folder_operations import get_folder
from server.apps.files.models import File, Folder

logger = logging.getLogger(__name__)


class Listing(NamedTuple):
    """Contents of one directory level."""

    folders: list[Folder]
    files: list[File]


def list_children(account: Account, folder_id: int | None = None) -> Listing:
    """List folders and files directly inside a folder.

    Matching is exact equality on owner and parent reference; None
    lists the root level. Records come back in insertion order.

    Args:
        account: Owner of the records.
        folder_id: Folder to list, None for the root level.

    Returns:
        Listing of subfolders and files.
    """
    logger.debug('Listing folder %s for %s', folder_id, account.email)

    folders = Folder.objects.filter(owner=account, parent_id=folder_id)
    files = File.objects.filter(owner=account, folder_id=folder_id)
    return Listing(folders=list(folders), files=list(files))


def validate_file_input(name: str, size_bytes: int) -> None:
    """Check the name and size of a file before it is recorded.

    Raises:
        MissingFieldError: If the name is empty.
        InvalidFileSizeError: If the size is negative.
    """
    if not name:
        raise MissingFieldError('name')
    if size_bytes < 0:
        raise InvalidFileSizeError(size_bytes)


def create_file(  # noqa: WPS211
    account: Account,
    name: str,
    size_bytes: int,
    mime_type: str = '',
    folder_id: int | None = None,
) -> File:
    """Record a file.

    The caller is responsible for the quota admission check and for
    the matching usage increment.

    Args:
        account: Owner of the file.
        name: File name.
        size_bytes: File size in bytes.
        mime_type: MIME type, guessed from the name when empty.
        folder_id: Containing folder, None for the root level.

    Returns:
        Created File instance.

    Raises:
        MissingFieldError: If the name is empty.
        InvalidFileSizeError: If the size is negative.
        Folder.DoesNotExist: If the folder is not a folder of the account.
    """
    validate_file_input(name, size_bytes)

    folder = None
    if folder_id is not None:
        folder = get_folder(account, folder_id)

    file_instance = File.objects.create(
        owner=account,
        name=name,
        size_bytes=size_bytes,
        mime_type=mime_type or detect_mime_type(name),
        folder=folder,
    )
    logger.info(
        'File record created: %s (ID: %d, size: %d)',
        name,
        file_instance.id,
        size_bytes,
    )
    return file_instance


def get_file(account: Account, file_id: int) -> File:
    """Get a file owned by the account.

    Raises:
        File.DoesNotExist: If the account has no such file.
    """
    return File.objects.get(pk=file_id, owner=account)


def delete_file(file_id: int) -> File:
    """Delete a file record.

    Usage is left alone: the caller issues the matching negative delta
    (see ``remove_file``).

    Args:
        file_id: ID of file to delete.

    Returns:
        The removed File instance (its id is cleared by the delete).

    Raises:
        File.DoesNotExist: If file doesn't exist.
    """
    try:
        file_instance = File.objects.get(pk=file_id)
    except File.DoesNotExist:
        logger.warning('File not found: ID=%d', file_id)
        raise

    file_instance.delete()
    logger.info('File record deleted: %s (ID: %d)', file_instance.name, file_id)
    return file_instance


def remove_file(file_id: int) -> File:
    """Delete a file and release its size from the owner's usage.

    Args:
        file_id: ID of file to delete.

    Returns:
        The removed File instance.

    Raises:
        File.DoesNotExist: If file doesn't exist.
    """
    with transaction.atomic():
        file_instance = delete_file(file_id)
        apply_usage_delta(file_instance.owner, -file_instance.size_bytes)

    return file_instance
