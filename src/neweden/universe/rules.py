"""
Game rules derived from system classification.
"""

from __future__ import annotations

from .types import SecurityClass, System, SystemClass


def allows_cynos(system: System) -> bool:
    """
    Check whether a cynosural field can be lit in a system.

    Cynos work in known-space low-sec and null-sec only. High-sec and
    wormhole space never allow them.

    Raises:
        UnknownSystemClassError: If the system id is in no known range
    """
    match (system.system_class, system.security_class):
        case (SystemClass.WSPACE, _):
            return False
        case (SystemClass.KSPACE, SecurityClass.HIGHSEC):
            return False
        case (SystemClass.KSPACE, SecurityClass.LOWSEC | SecurityClass.NULLSEC):
            return True
    return False
