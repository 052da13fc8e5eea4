"""Django admin configuration for accounts app."""

from django.contrib import admin
from django.utils.html import format_html

from server.apps.accounts.models import Account
from server.apps.files.formatting import format_bytes
from server.apps.files.logic.quota_operations import usage_percent

# Usage share from which the admin flags an account
_WARNING_PERCENT = 90
_FULL_PERCENT = 100


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    """Admin interface for Account model."""

    list_display = [
        'email',
        'name',
        'plan',
        'limit_display',
        'used_display',
        'percentage_display',
        'status_display',
        'created_at',
    ]

    list_filter = [
        'plan',
        'created_at',
    ]

    search_fields = [
        'email',
        'name',
    ]

    readonly_fields = [
        'storage_used',
        'created_at',
    ]

    fieldsets = (
        ('Account', {
            'fields': ('name', 'email', 'password'),
        }),
        ('Plan', {
            'fields': ('plan', 'storage_limit'),
        }),
        ('Current Usage', {
            'fields': ('storage_used',),
        }),
        ('Timestamps', {
            'fields': ('created_at',),
        }),
    )

    def limit_display(self, obj: Account) -> str:
        """Display storage limit in human-readable format."""
        return format_bytes(obj.storage_limit)
    limit_display.short_description = 'Limit'  # type: ignore[attr-defined]

    def used_display(self, obj: Account) -> str:
        """Display used bytes in human-readable format."""
        return format_bytes(obj.storage_used)
    used_display.short_description = 'Used'  # type: ignore[attr-defined]

    def percentage_display(self, obj: Account) -> str:
        """Display percentage of quota used.

        Args:
            obj: Account instance.

        Returns:
            Percentage string.
        """
        return f'{usage_percent(obj):.1f}%'
    percentage_display.short_description = '%'  # type: ignore[attr-defined]

    def status_display(self, obj: Account) -> str:
        """Display status indicator based on usage.

        Args:
            obj: Account instance.

        Returns:
            HTML formatted status indicator.
        """
        percentage = usage_percent(obj)

        if percentage > _FULL_PERCENT:
            color = '#dc3545'  # Red - over quota after a downgrade
            status = 'Over Quota'
        elif percentage >= _WARNING_PERCENT:
            color = '#ffc107'  # Yellow - warning
            status = 'Warning'
        else:
            color = '#28a745'  # Green - ok
            status = 'OK'

        return format_html(
            '<span style="color: {color}; font-weight: bold;">'
            '{status}</span>',
            color=color,
            status=status,
        )
    status_display.short_description = 'Status'  # type: ignore[attr-defined]
