"""Infrastructure layer for files app.

This package contains integrations with systems outside the domain:
- Metadata extraction (MIME type guessing from file names)

Keep infrastructure concerns separate from business logic.
"""
