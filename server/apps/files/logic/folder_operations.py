"""Business logic for folder operations."""

import logging

from django.db import transaction

from server.apps.accounts.exceptions import MissingFieldError
from server.apps.accounts.models import Account
from server.apps.files.models import File, Folder

logger = logging.getLogger(__name__)


def get_folder(account: Account, folder_id: int) -> Folder:
    """Get a folder owned by the account.

    Args:
        account: Owner of the folder.
        folder_id: ID of the folder.

    Returns:
        Folder instance.

    Raises:
        Folder.DoesNotExist: If the account has no such folder.
    """
    return Folder.objects.get(pk=folder_id, owner=account)


def create_folder(
    account: Account,
    name: str,
    parent_id: int | None = None,
) -> Folder:
    """Create a folder at the root or inside another folder.

    Sibling names are not required to be unique.

    Args:
        account: Owner of the new folder.
        name: Folder name.
        parent_id: Containing folder, None for the root level.

    Returns:
        Created Folder instance.

    Raises:
        MissingFieldError: If the name is empty.
        Folder.DoesNotExist: If the parent is not a folder of the account.
    """
    if not name:
        raise MissingFieldError('name')

    parent = None
    if parent_id is not None:
        parent = get_folder(account, parent_id)

    folder = Folder.objects.create(owner=account, name=name, parent=parent)
    logger.info(
        'Folder created: %s (ID: %d, parent: %s)',
        name,
        folder.id,
        parent_id,
    )
    return folder


def delete_folder(folder_id: int) -> None:
    """Delete a folder and the files directly inside it.

    Only one level is removed: subfolders stay in place with their
    parent pointing at the removed id, and their files survive. The
    owner's usage is not reduced for the removed files; run
    ``recalculate_usage`` to bring it back in line.

    Args:
        folder_id: ID of folder to delete.

    Raises:
        Folder.DoesNotExist: If folder doesn't exist.
    """
    try:
        folder = Folder.objects.get(pk=folder_id)
    except Folder.DoesNotExist:
        logger.warning('Folder not found: ID=%d', folder_id)
        raise

    with transaction.atomic():
        # Files go with the folder through the CASCADE on File.folder
        _, deleted_per_model = folder.delete()

    files_removed = deleted_per_model.get(File._meta.label, 0)  # noqa: WPS437
    logger.info(
        'Folder deleted: %s (ID: %d), %d files removed, usage not reclaimed',
        folder.name,
        folder_id,
        files_removed,
    )
