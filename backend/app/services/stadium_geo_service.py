"""
Stadium Geometry Service
Distances, adjacency and walking routes between seating sections.

Sections are modelled as polar points on one ring (see app.models.location);
1 unit of radius is treated as 1 meter.
"""
import math
import logging
from typing import Iterable, List, Optional, Set, Union

from app.core.config import settings
from app.models.location import SectionCoord, STADIUM_SECTIONS, SECTIONS_BY_ID

logger = logging.getLogger(__name__)

Distance = Union[int, float]

# Two section-widths either way
ADJACENT_MAX_DEG = 36


class StadiumGeoService:
    """Read-only geometry over the static section table."""

    @staticmethod
    def get_section(section: str) -> Optional[SectionCoord]:
        """Return the coordinates for ``section`` or None if unknown."""
        return SECTIONS_BY_ID.get(section)

    @staticmethod
    def distance(section1: str, section2: str) -> Distance:
        """Distance in whole meters between two sections.

        Law of cosines over the angular difference. Unknown sections are
        unreachable and return ``math.inf``.
        """
        coord1 = SECTIONS_BY_ID.get(section1)
        coord2 = SECTIONS_BY_ID.get(section2)
        if coord1 is None or coord2 is None:
            return math.inf

        delta = math.radians(abs(coord1.angle_deg - coord2.angle_deg))
        squared = (
            coord1.radius ** 2
            + coord2.radius ** 2
            - 2 * coord1.radius * coord2.radius * math.cos(delta)
        )
        # Half-up rounding; float noise can push identical points below zero.
        return int(math.floor(math.sqrt(max(squared, 0.0)) + 0.5))

    @staticmethod
    def sections_within_radius(target: str, radius_meters: float) -> Set[str]:
        """All sections other than ``target`` within ``radius_meters``."""
        return {
            coord.section
            for coord in STADIUM_SECTIONS
            if coord.section != target
            and StadiumGeoService.distance(target, coord.section) <= radius_meters
        }

    @staticmethod
    def are_adjacent(section1: str, section2: str) -> bool:
        """True if the sections are at most two section-widths apart.

        Uses the shorter arc around the ring, so 120 and 101 are neighbours.
        """
        coord1 = SECTIONS_BY_ID.get(section1)
        coord2 = SECTIONS_BY_ID.get(section2)
        if coord1 is None or coord2 is None:
            return False

        angle_diff = abs(coord1.angle_deg - coord2.angle_deg)
        if angle_diff > 180:
            angle_diff = 360 - angle_diff
        return angle_diff <= ADJACENT_MAX_DEG

    @staticmethod
    def nearest_route(sections: Iterable[str], start: Optional[str] = None) -> List[str]:
        """Greedy nearest-neighbour walk over ``sections``.

        Starts at ``start`` when given, otherwise at the first section. Ties
        go to the earliest remaining section in input order. Zero or one
        section is returned as-is, without ``start``.
        """
        remaining = list(sections)
        if len(remaining) <= 1:
            return remaining

        current = start if start is not None else remaining.pop(0)
        route = [current]

        while remaining:
            nearest_index = 0
            nearest_distance = StadiumGeoService.distance(current, remaining[0])
            for i in range(1, len(remaining)):
                d = StadiumGeoService.distance(current, remaining[i])
                if d < nearest_distance:
                    nearest_distance = d
                    nearest_index = i
            current = remaining.pop(nearest_index)
            route.append(current)

        return route

    @staticmethod
    def estimate_travel_minutes(from_section: str, to_section: str) -> Distance:
        """Walking minutes between sections plus the seat hand-off buffer.

        Returns ``math.inf`` when either section is unknown.
        """
        distance = StadiumGeoService.distance(from_section, to_section)
        if math.isinf(distance):
            return math.inf
        walking_minutes = distance / settings.walking_speed_mps / 60
        return math.ceil(walking_minutes + settings.handoff_buffer_minutes)

    @staticmethod
    def route_minutes(route: List[str]) -> Distance:
        """Sum of leg estimates along ``route``."""
        total: Distance = 0
        for leg_from, leg_to in zip(route, route[1:]):
            total += StadiumGeoService.estimate_travel_minutes(leg_from, leg_to)
        return total


stadium_geo = StadiumGeoService()
