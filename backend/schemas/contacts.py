"""Contact and address schemas.

Declared at import time, before the application serves requests.
"""
from core.validation import FutureValidator, declare

ADDRESS = "address"
CONTACT = "contact"


declare(ADDRESS, [
    ("street", {"type": "string", "max-length": 200, "transform": str.strip}),
    ("city", {"type": "string", "required": True, "min-length": 1, "max-length": 100}),
    ("zip", {"type": "string", "required": True, "length": 5}),
])

contact_validator = declare(CONTACT, [
    ("name", {"type": "string", "required": True, "min-length": 1, "max-length": 100, "transform": str.strip}),
    ("email", {"type": "string", "max-length": 254, "transform": str.lower}),
    ("age", {"type": "integer"}),
    ("rating", {"type": "number", "coerce": "float"}),
    ("tags", {"type": "array"}),
    ("verified", {"type": "boolean", "required": True, "default": False}),
    ("owner_id", {"type": "id"}),
    ("address", {"validator": ADDRESS}),
])

# PATCH handlers report through a future
contact_updates = FutureValidator(CONTACT)
