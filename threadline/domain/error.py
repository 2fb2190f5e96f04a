"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ChainBrokenError(DomainError):
    """Raised when the parent chain of a target item cannot be resolved.

    Callers degrade to an unforced load instead of failing.
    """

    def __init__(self, target_id: int, reason: str):
        self.target_id = target_id
        self.reason = reason
        super().__init__(f"Ancestor chain for item {target_id} is broken: {reason}")


class StoryNotOpenError(DomainError):
    """Raised when a session operation is invoked without an open story."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot {operation}: no story is open")


class ItemNotFoundError(NotFoundError):
    """The item source has no record for the requested id."""

    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__("Item", str(item_id))


class ItemSourceNetworkError(DomainError):
    """Transient failure talking to the item source."""

    def __init__(self, item_id: int, reason: str):
        self.item_id = item_id
        self.reason = reason
        super().__init__(f"Failed to fetch item {item_id}: {reason}")
