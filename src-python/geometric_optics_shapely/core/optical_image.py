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

import math
from typing import Any, Dict, TYPE_CHECKING

from .geometry import geometry, Point
from .constants import LARGE_DISTANCE

if TYPE_CHECKING:
    from .optic import Optic


REAL = 'real'
VIRTUAL = 'virtual'


def object_optic_distance(object_position: Point, optic_position: Point) -> float:
    """Horizontal distance from the optical object to the optic, positive when the object is on the left."""
    return optic_position.x - object_position.x


class OpticalImage:
    """
    Image of an optical object formed by an optic, from the thin lens / mirror equation.

    All quantities are derived from the current object position and optic
    parameters each time they are read.

    Attributes:
        object_position (Point): Position of the optical object
        optic (Optic): The lens or mirror forming the image
    """

    def __init__(self, object_position: Point, optic: 'Optic') -> None:
        self.object_position = object_position
        self.optic = optic

    @property
    def optic_image_distance(self) -> float:
        """
        Horizontal "distance" between the optic and the image, which can be negative.

        Positive is a real image, negative a virtual image. For a lens a
        positive distance is to the right of the lens; for a mirror it is to
        the left of the mirror.
        """
        focal_length = self.optic.focal_length
        d_o = object_optic_distance(self.object_position, self.optic.position)

        if math.isinf(focal_length):
            # flat mirror: the image is as far behind the mirror as the object is in front
            return -d_o
        if d_o == focal_length:
            # object at the focal point; the image is at infinity
            return LARGE_DISTANCE
        return focal_length * d_o / (d_o - focal_length)

    @property
    def magnification(self) -> float:
        """Lateral magnification; negative when the image is inverted."""
        d_o = object_optic_distance(self.object_position, self.optic.position)
        if d_o == 0:
            return 1.0
        return -self.optic_image_distance / d_o

    @property
    def position(self) -> Point:
        """Position of the image, i.e. the point where the rays (or their extensions) converge."""
        optic_position = self.optic.position
        height = self.magnification * (self.object_position.y - optic_position.y)
        return geometry.translate(optic_position, self.optic.sign * self.optic_image_distance, height)

    @property
    def image_type(self) -> str:
        return VIRTUAL if self.optic_image_distance < 0 else REAL

    @property
    def is_virtual(self) -> bool:
        return self.image_type == VIRTUAL

    @property
    def is_inverted(self) -> bool:
        return self.magnification < 0

    @property
    def light_intensity(self) -> float:
        """
        Hollywooded light intensity of the image, in [0, 1].

        Scaled by the optic diameter, and reduced for magnified images only.
        """
        diameter_factor = self.optic.diameter / self.optic.max_diameter
        magnification = self.magnification
        if magnification == 0:
            return diameter_factor
        return diameter_factor * min(1.0, abs(1.0 / magnification))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'position': self.position.to_dict(),
            'optic_image_distance': self.optic_image_distance,
            'magnification': self.magnification,
            'image_type': self.image_type,
            'light_intensity': self.light_intensity,
        }

    def __repr__(self) -> str:
        position = self.position
        return (f"OpticalImage(position=({position.x:.4f}, {position.y:.4f}), "
                f"type='{self.image_type}', magnification={self.magnification:.4f})")
