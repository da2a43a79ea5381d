"""Registration policies."""

from enum import Enum


class CapabilityPolicy(str, Enum):
    """How the is_supplier / is_constructor flags must be combined.

    EXACTLY_ONE: the account is either a supplier or a constructor.
    AT_LEAST_ONE: the account may be both, but not neither.
    """

    EXACTLY_ONE = "exactly_one"
    AT_LEAST_ONE = "at_least_one"

    def allows(self, is_supplier: bool, is_constructor: bool) -> bool:
        """Check a flag combination against the policy.

        Args:
            is_supplier: Supplier capability flag.
            is_constructor: Constructor capability flag.

        Returns:
            True if the combination is accepted.
        """
        if self is CapabilityPolicy.EXACTLY_ONE:
            return is_supplier != is_constructor
        return is_supplier or is_constructor
