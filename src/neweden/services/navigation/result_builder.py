"""
Route Result Construction.

Security analysis and warnings for a computed Path, used by the CLI to
build its JSON output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from ...universe.types import SecurityClass, describe_connection_type
from .path import ConnectionElement, SystemElement, WaypointElement
from .weights import Preference

if TYPE_CHECKING:
    from .path import Path

ThreatLevel = Literal["MINIMAL", "ELEVATED", "HIGH", "CRITICAL"]


@dataclass
class SecuritySummary:
    """Security breakdown for a route."""

    total_jumps: int
    highsec_systems: int
    lowsec_systems: int
    nullsec_systems: int
    lowest_security: float
    lowest_security_system: str


def compute_security_summary(path: Path) -> SecuritySummary:
    """
    Compute security breakdown for a route.

    Every system on the path is counted once per visit, origin included.

    Args:
        path: Computed route

    Returns:
        SecuritySummary with system counts by security class and lowest point
    """
    highsec = 0
    lowsec = 0
    nullsec = 0
    lowest_sec = 1.0
    lowest_system = ""

    for system in path.systems():
        sec_class = system.security_class
        if sec_class is SecurityClass.HIGHSEC:
            highsec += 1
        elif sec_class is SecurityClass.LOWSEC:
            lowsec += 1
        else:
            nullsec += 1

        if system.security < lowest_sec or not lowest_system:
            lowest_sec = system.security
            lowest_system = system.name

    return SecuritySummary(
        total_jumps=path.jumps,
        highsec_systems=highsec,
        lowsec_systems=lowsec,
        nullsec_systems=nullsec,
        lowest_security=float(lowest_sec),
        lowest_security_system=lowest_system,
    )


def generate_warnings(path: Path, preference: Preference) -> list[str]:
    """
    Generate route warnings for dangerous situations.

    Warnings are generated for:
    - Entering low/null-sec from high-sec
    - High-sec preference routes that still leave high-sec

    Args:
        path: Computed route
        preference: Preference the route was built with

    Returns:
        List of warning strings
    """
    warnings = []
    systems = path.systems()

    entries = sum(
        1
        for src, dst in zip(systems, systems[1:])
        if src.security_class is SecurityClass.HIGHSEC
        and dst.security_class is not SecurityClass.HIGHSEC
    )
    if entries > 0:
        warnings.append(f"Route enters low/null-sec {entries} time(s)")

    if preference is Preference.HIGHSEC and any(
        s.security_class is not SecurityClass.HIGHSEC for s in systems
    ):
        warnings.append("No fully high-sec route available")

    return warnings


def get_threat_level(
    lowsec: int,
    nullsec: int,
    lowest_sec: float,
) -> ThreatLevel:
    """
    Determine threat level based on route composition.

    Args:
        lowsec: Number of low-sec systems in route
        nullsec: Number of null-sec systems in route
        lowest_sec: Lowest security value encountered

    Returns:
        Threat level string: MINIMAL, ELEVATED, HIGH, or CRITICAL
    """
    if nullsec > 0:
        return "CRITICAL"
    elif lowsec > 0:
        return "HIGH"
    elif lowest_sec <= 0.5:
        return "ELEVATED"
    else:
        return "MINIMAL"


def path_to_elements(path: Path) -> list[dict[str, Any]]:
    """
    Convert a path into JSON-ready element dicts.

    Returns:
        [{"kind": "waypoint", "system_id": ..., "name": ..., "security": ...},
         {"kind": "connection", "type": "stargate/local"}, ...]
    """
    elements: list[dict[str, Any]] = []
    for element in path:
        match element:
            case WaypointElement(system=system) | SystemElement(system=system):
                elements.append(
                    {
                        "kind": "waypoint" if isinstance(element, WaypointElement) else "system",
                        "system_id": system.id,
                        "name": system.name,
                        "security": round(system.security, 2),
                        "security_class": system.security_class.value,
                    }
                )
            case ConnectionElement(type=connection_type):
                elements.append(
                    {"kind": "connection", "type": describe_connection_type(connection_type)}
                )
    return elements
