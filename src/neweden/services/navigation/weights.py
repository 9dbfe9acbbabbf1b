"""
Route Weight Computation.

Edge costs for the different routing preferences. The cost of an edge
depends only on the security class of the system it leads into.

Weight Schemes:
- Shortest: Every jump costs 1
- Highsec: Jumps into high-sec cost 1, anything else 1000
- LowsecAndNullsec: Jumps into low/null-sec cost 1, high-sec 1000

Penalties are large but finite, so a route is still found when no route
satisfies the preference.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from ...universe.types import SecurityClass

if TYPE_CHECKING:
    from ...universe.graph import Navigable
    from ...universe.types import SystemId

Cost = int

WEIGHT_NORMAL: Cost = 1
WEIGHT_PENALTY: Cost = 1000


class Preference(str, Enum):
    """Routing preference selecting the edge cost function."""

    SHORTEST = "shortest"
    HIGHSEC = "highsec"
    LOWSEC_AND_NULLSEC = "lowsec_and_nullsec"

    def cost(self, universe: Navigable, to_id: SystemId) -> Cost | None:
        """
        Cost of jumping into a system.

        Args:
            universe: Universe to look the destination up in
            to_id: Destination system ID

        Returns:
            Positive integer cost, or None if the destination is not a
            known system (the edge cannot be used)
        """
        system = universe.get_system(to_id)
        if system is None:
            return None

        if self is Preference.SHORTEST:
            return WEIGHT_NORMAL

        is_highsec = system.security_class is SecurityClass.HIGHSEC
        if self is Preference.HIGHSEC:
            return WEIGHT_NORMAL if is_highsec else WEIGHT_PENALTY
        return WEIGHT_PENALTY if is_highsec else WEIGHT_NORMAL
