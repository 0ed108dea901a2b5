"""Activity classification."""

from brokermap.domain.entities import ActivityType

# Activities described by a single monetary amount rather than quantity x price
CASH_ACTIVITY_TYPES = frozenset(
    {
        ActivityType.DEPOSIT,
        ActivityType.WITHDRAWAL,
        ActivityType.DIVIDEND,
        ActivityType.INTEREST,
        ActivityType.FEE,
        ActivityType.TAX,
        ActivityType.TRANSFER_IN,
        ActivityType.TRANSFER_OUT,
        ActivityType.CONVERSION_IN,
        ActivityType.CONVERSION_OUT,
    }
)


def is_cash_activity(activity_type: str) -> bool:
    """Return True if ``activity_type`` is a cash-style activity.

    Unrecognized activity types (unmatched CSV values) are position-style.
    """
    return activity_type in CASH_ACTIVITY_TYPES
