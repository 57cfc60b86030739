"""Exceptions raised by the inventory store."""


class InventoryError(Exception):
    """Base exception for all inventory errors."""

    pass


class NotFound(InventoryError):
    """Raised when a referenced product, customer or order does not exist."""

    def __init__(self, kind, record_id):
        self.kind = kind
        self.record_id = record_id
        super().__init__("{} not found: {}".format(kind.capitalize(), record_id))


class DuplicateRecord(InventoryError):
    """Raised when inserting a record whose id is already taken."""

    def __init__(self, kind, record_id):
        self.kind = kind
        self.record_id = record_id
        super().__init__("{} already exists: {}".format(kind.capitalize(), record_id))


class InvalidUpdate(InventoryError):
    """Raised when a partial update names a field or value the record cannot take."""

    def __init__(self, kind, record_id, reason):
        self.kind = kind
        self.record_id = record_id
        self.reason = reason
        super().__init__("Cannot update {} {}: {}".format(kind, record_id, reason))
