from enum import StrEnum


class PaymentStatus(StrEnum):
    """Passive label; no payment workflow hangs off it"""

    PENDING = 'pending'
    COMPLETED = 'completed'
