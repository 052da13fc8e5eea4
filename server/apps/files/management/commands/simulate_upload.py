"""Management command to run a simulated upload on its timer."""

from typing import Any

from django.core.management.base import BaseCommand, CommandError

from server.apps.accounts.exceptions import MissingFieldError
from server.apps.accounts.models import Account
from server.apps.files.exceptions import (
    InvalidFileSizeError,
    QuotaExceededError,
)
from server.apps.files.formatting import format_bytes
from server.apps.files.logic.upload_operations import (
    UploadTransfer,
    run_transfer,
)
from server.apps.files.models import Folder


class Command(BaseCommand):
    """Upload a file record for an account, ticking progress to completion."""

    help = 'Simulate uploading a file into an account'

    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument('email', help='Email of the uploading account')
        parser.add_argument('name', help='Name of the uploaded file')
        parser.add_argument('size', type=int, help='File size in bytes')
        parser.add_argument(
            '--type',
            default='',
            dest='mime_type',
            help='MIME type (guessed from the name by default)',
        )
        parser.add_argument(
            '--folder',
            type=int,
            default=None,
            help='Target folder ID (root level by default)',
        )
        parser.add_argument(
            '--interval',
            type=float,
            default=None,
            help='Seconds between progress ticks (default: from settings)',
        )
        parser.add_argument(
            '--step',
            type=int,
            default=None,
            help='Progress per tick in percent (default: from settings)',
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the upload.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        try:
            account = Account.objects.get(email=options['email'])
        except Account.DoesNotExist as exc:
            raise CommandError(f'No account with email {options["email"]}') from exc

        try:
            transfer = UploadTransfer(
                account,
                name=options['name'],
                size_bytes=options['size'],
                mime_type=options['mime_type'],
                folder_id=options['folder'],
                step=options['step'],
            )
        except ValueError as exc:
            raise CommandError(str(exc)) from exc

        try:
            run_transfer(
                transfer,
                interval=options['interval'],
                on_progress=self._report,
            )
        except (MissingFieldError, InvalidFileSizeError, QuotaExceededError) as exc:
            raise CommandError(str(exc)) from exc
        except Folder.DoesNotExist as exc:
            raise CommandError(f'No folder with ID {options["folder"]}') from exc

        account.refresh_from_db()
        self.stdout.write(
            self.style.SUCCESS(
                f'Uploaded {transfer.name} '
                f'({format_bytes(transfer.size_bytes)}), now using '
                f'{format_bytes(account.storage_used)} of '
                f'{format_bytes(account.storage_limit)}',
            ),
        )

    def _report(self, transfer: UploadTransfer) -> None:
        self.stdout.write(f'{transfer.name}: {transfer.progress}%')
