"""Business logic layer for files app.

This package contains all business logic for the file browser:
- Directory listing and folder management
- File records and their effect on storage usage
- Upload admission and the simulated upload transfer

All business logic should be implemented here, separate from
models (data layer) and infrastructure (external systems).

Invalid input is reported the same way across the package: an empty
required field raises ``MissingFieldError`` (shared with the accounts
app), a negative size raises ``InvalidFileSizeError`` and an unknown
or foreign record raises the model's ``DoesNotExist``.
"""
