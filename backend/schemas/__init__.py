# Schema declarations register themselves on import
from schemas.contacts import ADDRESS, CONTACT, contact_validator, contact_updates

__all__ = [
    "ADDRESS",
    "CONTACT",
    "contact_validator",
    "contact_updates",
]
