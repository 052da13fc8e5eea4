"""Static catalog of subscription plans.

Plans are reference data, not database records: the catalog is fixed
and ordered from the smallest to the largest tier.
"""

from dataclasses import dataclass
from typing import Final, final

from django.db import models

from server.apps.accounts.exceptions import PlanNotFoundError

BYTES_PER_GIB: Final = 1024 * 1024 * 1024

# Prices are monthly, in XAF
PRICE_CURRENCY: Final = 'XAF'


class PlanName(models.TextChoices):
    """Names of the available plans."""

    FREE = 'Free'
    BASIC = 'Basic'
    PRO = 'Pro'
    BUSINESS = 'Business'


@final
@dataclass(frozen=True, slots=True)
class Plan:
    """A named tier with a storage limit and a monthly price."""

    name: str
    storage_gib: int
    monthly_price: int
    features: tuple[str, ...]

    @property
    def storage_limit_bytes(self) -> int:
        """Storage limit converted from GiB to bytes."""
        return self.storage_gib * BYTES_PER_GIB

    @property
    def is_free(self) -> bool:
        """Whether the plan costs nothing."""
        return self.monthly_price == 0


PLANS: Final[tuple[Plan, ...]] = (
    Plan(
        name=PlanName.FREE,
        storage_gib=5,
        monthly_price=0,
        features=('5 GB Storage', 'Basic Support', 'Web Access'),
    ),
    Plan(
        name=PlanName.BASIC,
        storage_gib=50,
        monthly_price=2500,
        features=(
            '50 GB Storage',
            'Priority Support',
            'Web & Mobile Access',
            'File Sharing',
        ),
    ),
    Plan(
        name=PlanName.PRO,
        storage_gib=200,
        monthly_price=8000,
        features=(
            '200 GB Storage',
            '24/7 Support',
            'Web & Mobile Access',
            'Advanced Sharing',
            'Version History',
        ),
    ),
    Plan(
        name=PlanName.BUSINESS,
        storage_gib=1000,
        monthly_price=35000,
        features=(
            '1 TB Storage',
            'Dedicated Support',
            'All Platforms',
            'Team Collaboration',
            'Advanced Security',
            'API Access',
        ),
    ),
)

DEFAULT_PLAN: Final = PLANS[0]


def get_plan(name: str) -> Plan:
    """Look up a plan by its exact name.

    Args:
        name: Plan name, e.g. 'Pro'.

    Returns:
        Matching Plan.

    Raises:
        PlanNotFoundError: If no plan has that name.
    """
    for plan in PLANS:
        if plan.name == name:
            return plan
    raise PlanNotFoundError(name)
