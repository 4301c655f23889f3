"""
Copyright 2026 geometric-optics-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

"""
Guides: a teaching aid that shows how a lens bends light at its edges.

Each guide pivots on a fulcrum at the top (or bottom) edge of the lens. Its
incident arm points toward the optical object; its transmitted arm points
where light leaves the lens. The deflection is calibrated so that the
transmitted arm is aligned with the rays when the object sits on the optical
axis at twice the focal length.
"""

import math
from typing import Dict, Any, TYPE_CHECKING

from shapely.geometry import LineString

from .geometry import geometry, Point
from .constants import GUIDE_ARM_LENGTH

if TYPE_CHECKING:
    from .optic import Optic


class Guide:
    """
    One guide, at the top or the bottom edge of a lens.

    Attributes:
        optic (Optic): The lens
        object_position (Point): Position of the optical object the guide follows
        location (str): 'top' or 'bottom'
    """

    TOP = 'top'
    BOTTOM = 'bottom'
    VALID_LOCATIONS = (TOP, BOTTOM)

    def __init__(self, optic: 'Optic', object_position: Point, location: str) -> None:
        """
        Raises:
            ValueError: If location is not valid, or the optic is not a lens.
        """
        if location not in self.VALID_LOCATIONS:
            raise ValueError(f"Invalid location '{location}'. Valid options: {self.VALID_LOCATIONS}")
        if not optic.is_lens:
            raise ValueError(f"Guides are only defined for a lens, got a {optic.type}")
        self.optic = optic
        self.object_position = object_position
        self.location = location

    @property
    def location_sign(self) -> int:
        return 1 if self.location == self.TOP else -1

    @property
    def fulcrum_position(self) -> Point:
        """Pivot of the guide, on the edge of the lens."""
        return geometry.translate(self.optic.position, 0, self.location_sign * self.optic.diameter / 2)

    @property
    def incident_angle(self) -> float:
        """Angle of the incident arm with respect to the positive x axis, in radians."""
        displacement = geometry.subtract(self.object_position, self.fulcrum_position)
        return math.atan2(displacement.y, displacement.x)

    @property
    def transmitted_angle(self) -> float:
        """Angle of the transmitted arm with respect to the positive x axis, in radians."""
        # direction of an undeflected ray
        through_angle = self.incident_angle + math.pi

        # opposite side (half diameter) over adjacent side (twice the focal length)
        toa = self.optic.diameter / (4 * self.optic.focal_length)

        if self.optic.is_converging:
            deflected_angle = -self.location_sign * 2 * math.atan(toa)
        else:
            deflected_angle = -self.location_sign * (math.atan(3 * toa) - math.atan(toa))

        return through_angle + deflected_angle

    def _arm(self, angle: float, length: float) -> LineString:
        fulcrum = self.fulcrum_position
        tip = geometry.add(fulcrum, geometry.polar(length, angle))
        return LineString([fulcrum.to_tuple(), tip.to_tuple()])

    def incident_arm(self, length: float = GUIDE_ARM_LENGTH) -> LineString:
        return self._arm(self.incident_angle, length)

    def transmitted_arm(self, length: float = GUIDE_ARM_LENGTH) -> LineString:
        return self._arm(self.transmitted_angle, length)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'location': self.location,
            'fulcrum_position': self.fulcrum_position.to_dict(),
            'incident_angle': self.incident_angle,
            'transmitted_angle': self.transmitted_angle,
        }

    def __repr__(self) -> str:
        fulcrum = self.fulcrum_position
        return (f"Guide(location='{self.location}', fulcrum=({fulcrum.x}, {fulcrum.y}), "
                f"incident_angle={self.incident_angle:.4f}, transmitted_angle={self.transmitted_angle:.4f})")


class Guides:
    """The top and bottom guides that follow one optical object."""

    def __init__(self, optic: 'Optic', object_position: Point) -> None:
        self.top_guide = Guide(optic, object_position, Guide.TOP)
        self.bottom_guide = Guide(optic, object_position, Guide.BOTTOM)

    def __iter__(self):
        return iter((self.top_guide, self.bottom_guide))
