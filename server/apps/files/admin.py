"""Django admin configuration for files app."""

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from server.apps.files.formatting import format_bytes
from server.apps.files.models import File, Folder


@admin.register(Folder)
class FolderAdmin(admin.ModelAdmin):
    """Admin interface for Folder model."""

    list_display = [
        'name',
        'owner',
        'parent_display',
        'file_count',
        'created_at',
    ]

    list_filter = [
        'created_at',
        'owner',
    ]

    search_fields = [
        'name',
        'owner__email',
    ]

    readonly_fields = [
        'owner',
        'parent',
        'created_at',
    ]

    def parent_display(self, obj: Folder) -> str:
        """Display the parent folder reference.

        Subfolders of a deleted folder keep pointing at the removed id,
        those are shown as orphaned.

        Args:
            obj: Folder instance.

        Returns:
            Parent name, '/' for the root level.
        """
        if obj.parent_id is None:
            return '/'
        parent = Folder.objects.filter(pk=obj.parent_id).first()
        if parent is None:
            return f'(orphaned: {obj.parent_id})'
        return parent.name
    parent_display.short_description = 'Parent'  # type: ignore[attr-defined]

    def file_count(self, obj: Folder) -> int:
        """Count of files directly inside the folder."""
        return obj.files.count()
    file_count.short_description = 'Files'  # type: ignore[attr-defined]

    def get_queryset(self, request: HttpRequest) -> QuerySet[Folder]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('owner')


@admin.register(File)
class FileAdmin(admin.ModelAdmin):
    """Admin interface for File model."""

    list_display = [
        'name',
        'owner',
        'folder',
        'size_display',
        'mime_type',
        'uploaded_at',
    ]

    list_filter = [
        'mime_type',
        'uploaded_at',
        'owner',
    ]

    search_fields = [
        'name',
        'owner__email',
    ]

    # Records are never edited after upload
    readonly_fields = [
        'owner',
        'name',
        'size_bytes',
        'mime_type',
        'folder',
        'uploaded_at',
    ]

    def size_display(self, obj: File) -> str:
        """Display file size in human-readable format.

        Args:
            obj: File instance.

        Returns:
            Formatted size string (e.g., '1.5 MB', '234 KB').
        """
        return format_bytes(obj.size_bytes)
    size_display.short_description = 'Size'  # type: ignore[attr-defined]

    def get_queryset(self, request: HttpRequest) -> QuerySet[File]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('owner', 'folder')
