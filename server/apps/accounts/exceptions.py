"""Exceptions for accounts app."""


class MissingFieldError(Exception):
    """Raised when a required input is empty."""

    def __init__(self, field_name: str) -> None:
        """Initialize MissingFieldError.

        Args:
            field_name: Name of the empty field.
        """
        self.field_name = field_name
        super().__init__(f'Missing required field: {field_name}')


class DuplicateEmailError(Exception):
    """Raised when signing up with an email that is already registered."""

    def __init__(self, email: str) -> None:
        """Initialize DuplicateEmailError.

        Args:
            email: The email that is already taken.
        """
        self.email = email
        super().__init__(f'Email already exists: {email}')


class InvalidCredentialsError(Exception):
    """Raised when email and password do not match any account."""

    def __init__(self) -> None:
        """Initialize InvalidCredentialsError."""
        super().__init__('Invalid credentials')


class PlanNotFoundError(Exception):
    """Raised when a plan name is not in the catalog."""

    def __init__(self, plan_name: str) -> None:
        """Initialize PlanNotFoundError.

        Args:
            plan_name: The unknown plan name.
        """
        self.plan_name = plan_name
        super().__init__(f'Unknown plan: {plan_name}')
