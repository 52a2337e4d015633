"""Domain entities.

Pure domain models; no ORM or persistence concerns.
"""

from casehub.domain.entities.transfer import TransferEntity
from casehub.domain.entities.world import WorldEntity

__all__ = [
    "TransferEntity",
    "WorldEntity",
]
