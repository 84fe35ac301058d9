"""
ConditionalWriteError - Raised by repositories when a create-if-absent write
finds a unique key already taken. This is the authoritative duplicate signal;
any lookup done beforehand is only a fast path.

`field` names the key that collided: "id", "email" or "phone_number".
"""


class ConditionalWriteError(Exception):
    def __init__(self, key: str, field: str = "id"):
        super().__init__(f"Conditional write failed for {field} {key}")
        self.key = key
        self.field = field
