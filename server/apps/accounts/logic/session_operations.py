"""Per-visitor session over the current account.

The session keeps references only: the current account id and the
folder being browsed. Account figures are always read back from the
store, so the view can't drift from the authoritative record after an
upload, a delete or a plan change.
"""

import logging
from typing import Final, final
from uuid import UUID

from server.apps.accounts.logic.account_operations import (
    authenticate,
    get_account,
)
from server.apps.accounts.models import Account
from server.apps.files.logic.file_operations import Listing, list_children
from server.apps.files.logic.folder_operations import get_folder
from server.apps.files.models import Folder

logger = logging.getLogger(__name__)

ROOT_TITLE: Final = 'My Files'


class NotLoggedInError(Exception):
    """Raised when the session has no current account."""


@final
class DriveSession:
    """Which account is logged in and which folder it is browsing."""

    def __init__(self) -> None:
        """Start logged out, at the root level."""
        self.account_id: UUID | None = None
        self.folder_id: int | None = None

    @property
    def is_authenticated(self) -> bool:
        """Whether an account is logged in."""
        return self.account_id is not None

    @property
    def current_account(self) -> Account:
        """Fresh copy of the logged-in account.

        Raises:
            NotLoggedInError: If nobody is logged in.
        """
        if self.account_id is None:
            raise NotLoggedInError('No account is logged in')
        return get_account(self.account_id)

    def login(self, email: str, password: str) -> Account:
        """Authenticate and make the account current, at the root level.

        Raises:
            MissingFieldError: If any input is empty.
            InvalidCredentialsError: If no account matches.
        """
        account = authenticate(email, password)
        self.account_id = account.pk
        self.folder_id = None
        logger.info('Session started for %s', account.email)
        return account

    def logout(self) -> None:
        """Forget the current account and folder."""
        logger.info('Session ended for account %s', self.account_id)
        self.account_id = None
        self.folder_id = None

    def open_folder(self, folder_id: int) -> None:
        """Browse into a folder of the current account.

        Raises:
            Folder.DoesNotExist: If the account has no such folder.
        """
        folder = get_folder(self.current_account, folder_id)
        self.folder_id = folder.pk

    def go_back(self) -> None:
        """Return to the root level."""
        self.folder_id = None

    def listing(self) -> Listing:
        """Contents of the folder being browsed."""
        return list_children(self.current_account, self.folder_id)

    def title(self) -> str:
        """Name of the folder being browsed, or the root title.

        A folder deleted while it was being browsed shows as the root.
        """
        if self.folder_id is None:
            return ROOT_TITLE
        try:
            return get_folder(self.current_account, self.folder_id).name
        except Folder.DoesNotExist:
            logger.debug('Browsed folder %s is gone', self.folder_id)
            return ROOT_TITLE
