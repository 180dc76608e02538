"""Stadium seating sections as points on a single ring."""

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class SectionCoord:
    section: str
    angle_deg: float
    radius: float


SECTION_SPACING_DEG = 18

# 20 sections, 101..120, one every 18 degrees on a 50m ring.
STADIUM_SECTIONS: List[SectionCoord] = [
    SectionCoord(section=str(101 + i), angle_deg=i * SECTION_SPACING_DEG, radius=50)
    for i in range(20)
]

SECTIONS_BY_ID: Dict[str, SectionCoord] = {s.section: s for s in STADIUM_SECTIONS}
