"""Administrative credential.

Privileged registry calls are authorized by possession of an AdminCap,
not by looking the caller up in a permission table. A registry accepts only
the cap it issued most recently; transferring the role revokes the old one.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field


@dataclass(frozen=True, eq=False)
class AdminCap:
    """Unforgeable administrative credential for one registry.

    Compared by identity: a copy with the same fields is not the same cap.

    Attributes:
        registry_id: Registry that issued the cap
        holder: Address the cap was issued to
    """

    registry_id: str
    holder: str
    nonce: str = field(default_factory=lambda: secrets.token_hex(16), repr=False)
