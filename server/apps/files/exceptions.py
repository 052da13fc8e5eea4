"""Exceptions for files app."""


class QuotaExceededError(Exception):
    """Raised when upload would exceed user's storage quota."""

    def __init__(
        self,
        quota_bytes: int,
        used_bytes: int,
        required_bytes: int,
    ) -> None:
        """Initialize QuotaExceededError.

        Args:
            quota_bytes: Total quota limit in bytes.
            used_bytes: Currently used bytes.
            required_bytes: Bytes needed for the operation.
        """
        self.quota_bytes = quota_bytes
        self.used_bytes = used_bytes
        self.required_bytes = required_bytes

        available = max(0, quota_bytes - used_bytes)
        super().__init__(
            f'Not enough storage space: need {required_bytes} bytes, '
            f'only {available} bytes available '
            f'(quota: {quota_bytes}, used: {used_bytes})',
        )


class UploadStateError(Exception):
    """Raised when an upload transfer is driven from the wrong state."""


class InvalidFileSizeError(Exception):
    """Raised when a file size is negative."""

    def __init__(self, size_bytes: int) -> None:
        """Initialize InvalidFileSizeError.

        Args:
            size_bytes: Rejected size in bytes.
        """
        self.size_bytes = size_bytes
        super().__init__(f'File size cannot be negative: {size_bytes}')
