"""
Creature anatomy: body-part templates, weighted hit location, and an
append-only injury ledger from which all health state is derived.
"""

from anatomy.errors import AnatomyError, InvalidPartError, NotFoundError, ValidationError

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AnatomyError",
    "InvalidPartError",
    "NotFoundError",
    "ValidationError",
]
