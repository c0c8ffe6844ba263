from __future__ import annotations

from decimal import Decimal


class LedgerError(Exception):
    pass


class SplitValidationError(LedgerError, ValueError):
    """Caller input that cannot be turned into a split."""


class MissingSplitInputs(SplitValidationError):
    def __init__(self, mode: str, field: str) -> None:
        self.mode = mode
        self.field = field
        super().__init__(f"Split mode '{mode}' requires {field} for every participant")


class UnexpectedSplitInputs(SplitValidationError):
    def __init__(self, mode: str, field: str) -> None:
        self.mode = mode
        self.field = field
        super().__init__(f"Split mode '{mode}' does not take {field}")


class SplitCountMismatch(SplitValidationError):
    def __init__(self, field: str, expected: int, actual: int) -> None:
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected} {field}, got {actual}")


class SplitSumMismatch(SplitValidationError):
    def __init__(self, expected: Decimal, actual: Decimal, tolerance: Decimal) -> None:
        self.expected = expected
        self.actual = actual
        self.tolerance = tolerance
        super().__init__(
            f"Custom amounts must sum to the total expense amount: "
            f"expected {expected}, got {actual} (tolerance {tolerance})"
        )


class InvalidPercentageSum(SplitValidationError):
    def __init__(self, actual: Decimal, tolerance: Decimal, expected: Decimal = Decimal("100")) -> None:
        self.expected = expected
        self.actual = actual
        self.tolerance = tolerance
        super().__init__(
            f"Percentages must sum to {expected}: got {actual} (tolerance {tolerance})"
        )


class InvalidAmount(SplitValidationError):
    pass


class EmptyParticipants(SplitValidationError):
    def __init__(self) -> None:
        super().__init__("At least one participant is required")


class DuplicateParticipants(SplitValidationError):
    def __init__(self, names: list[str]) -> None:
        self.names = names
        super().__init__(f"Duplicate participants: {', '.join(names)}")


class UnknownSplitMode(SplitValidationError):
    def __init__(self, mode: object) -> None:
        self.mode = mode
        super().__init__(f"Unknown split mode: {mode!r}")


class ExpenseValidationError(LedgerError, ValueError):
    pass


class RosterError(LedgerError, ValueError):
    pass


class DataIntegrityError(LedgerError):
    """Persisted data that cannot be used for a computation."""


class GroupNotFoundError(LedgerError, LookupError):
    def __init__(self, group_id: object) -> None:
        self.group_id = group_id
        super().__init__(f"Group not found: {group_id}")


class AuthorizationError(LedgerError, PermissionError):
    pass
