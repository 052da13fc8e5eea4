"""Management command to rebuild storage usage from file records."""

import logging
from typing import Any

from django.core.management.base import BaseCommand, CommandError
from django.db.models import Sum

from server.apps.accounts.models import Account
from server.apps.files.formatting import format_bytes
from server.apps.files.logic.quota_operations import recalculate_usage
from server.apps.files.models import File

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Set every account's usage to the total size of its files.

    Folder deletes don't release the usage of the files they take
    along, this command is the explicit way to reconcile it.
    """

    help = 'Recalculate storage usage from file records'

    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--email',
            help='Only recalculate the account with this email',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would change without saving',
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the recalculation.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        dry_run = options['dry_run']
        accounts = Account.objects.all()
        if options['email']:
            accounts = accounts.filter(email=options['email'])
            if not accounts.exists():
                raise CommandError(f'No account with email {options["email"]}')

        checked = 0
        changed = 0

        for account in accounts:
            checked += 1
            if dry_run:
                total = File.objects.filter(owner=account).aggregate(
                    total=Sum('size_bytes'),
                )['total'] or 0
            else:
                total = recalculate_usage(account)

            if total == account.storage_used:
                continue

            changed += 1
            verb = 'Would set' if dry_run else 'Set'
            self.stdout.write(
                f'{verb} {account.email}: '
                f'{format_bytes(account.storage_used)} -> {format_bytes(total)}',
            )

        if dry_run:
            self.stdout.write(
                self.style.SUCCESS(
                    f'Would change {changed} of {checked} accounts',
                ),
            )
        else:
            logger.info('Usage recalculated: %d of %d changed', changed, checked)
            self.stdout.write(
                self.style.SUCCESS(
                    f'Recalculated {checked} accounts, {changed} changed',
                ),
            )
