"""Exceptions raised by the SIMON block primitive.

Both kinds are raised before any mixing starts, so a caller never sees a
partially transformed block.
"""

from __future__ import annotations


class SimonError(ValueError):
    """Base class for caller-correctable SIMON configuration errors."""


class UnsupportedVariant(SimonError):
    """The requested block/key size pair or key word count is not a SIMON variant we support."""


class MalformedInput(SimonError):
    """A block, key, schedule or byte buffer does not have the shape the variant requires."""
