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
Light spot formed on a projection screen by the light transmitted through a lens.

The spot is the cone of light from the optic's extremum points to the image,
cut by the plane of the screen. It is drawn as an ellipse (aspect ratio 1:2
for pseudo-3D perspective) clipped to the screen outline.
"""

from typing import Optional, Tuple, TYPE_CHECKING

from shapely.affinity import scale
from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry

from .geometry import geometry, Point
from .constants import FULL_INTENSITY_LIGHT_SPOT_DIAMETER, LARGE_DISTANCE

if TYPE_CHECKING:
    from .optic import Optic
    from .projection_screen import ProjectionScreen


def get_intersection_position(screen_position: Point, optic_point: Point, image_position: Point) -> Point:
    """
    Point where the line from an optic point through the image crosses the screen plane.

    Args:
        screen_position: Center of the projection screen
        optic_point: Extremum point of the optic
        image_position: Position of the optical image

    Returns:
        Point on the vertical line through the screen position
    """
    optic_image_distance = image_position.x - optic_point.x
    if optic_image_distance == 0:
        ratio = LARGE_DISTANCE
    else:
        ratio = (screen_position.x - optic_point.x) / optic_image_distance
    return geometry.blend(optic_point, image_position, ratio)


def get_position_and_diameter(optic: 'Optic', screen_position: Point, object_position: Point,
                              image_position: Point) -> Tuple[Point, float]:
    """Center and vertical diameter of the unclipped light spot."""
    top_point = optic.get_top_point(object_position, image_position)
    bottom_point = optic.get_bottom_point(object_position, image_position)

    disk_top = get_intersection_position(screen_position, top_point, image_position)
    disk_bottom = get_intersection_position(screen_position, bottom_point, image_position)

    return geometry.midpoint(disk_top, disk_bottom), geometry.distance(disk_top, disk_bottom)


def get_light_spot_shape(optic: 'Optic', screen: 'ProjectionScreen', object_position: Point,
                         image_position: Point) -> BaseGeometry:
    """
    Shape of the light spot, clipped to the screen.

    Returns:
        The intersection of the spot ellipse with the screen outline. Empty
        (zero area) when the light misses the screen.
    """
    position, diameter = get_position_and_diameter(optic, screen.position, object_position, image_position)
    if diameter <= 0:
        return Polygon()
    screen_shape = screen.get_screen_shape_translated()

    radius_y = diameter / 2
    radius_x = radius_y / 2
    circle = position.to_shapely().buffer(radius_y)
    ellipse = scale(circle, xfact=radius_x / radius_y, yfact=1.0, origin=position.to_tuple())
    return screen_shape.intersection(ellipse)


class LightSpot:
    """
    The light spot on a projection screen, for one light source.

    Attributes:
        optic (Optic): The lens in front of the screen
        screen (ProjectionScreen): The screen
        object_position (Point): Position of the light source
        image_position (Point): Position of the optical image of the light source
    """

    def __init__(self, optic: 'Optic', screen: 'ProjectionScreen', object_position: Point,
                 image_position: Point) -> None:
        self.optic = optic
        self.screen = screen
        self.object_position = object_position
        self.image_position = image_position

    @property
    def shape(self) -> BaseGeometry:
        return get_light_spot_shape(self.optic, self.screen, self.object_position, self.image_position)

    @property
    def is_on_screen(self) -> bool:
        return self.shape.area > 0

    def _position_and_diameter(self) -> Optional[Tuple[Point, float]]:
        if not self.is_on_screen:
            return None
        return get_position_and_diameter(self.optic, self.screen.position,
                                         self.object_position, self.image_position)

    @property
    def position(self) -> Optional[Point]:
        """Center of the spot (which may not be on the screen), None if the light misses the screen."""
        result = self._position_and_diameter()
        return result[0] if result is not None else None

    @property
    def diameter(self) -> Optional[float]:
        """Vertical diameter of the spot, None if the light misses the screen."""
        result = self._position_and_diameter()
        return result[1] if result is not None else None

    @property
    def intensity(self) -> float:
        """
        Normalized intensity of the spot, in [0, 1].

        A smaller spot is brighter, and a wider optic lets through more light.
        Zero when the light misses the screen.
        """
        diameter = self.diameter
        if diameter is None or diameter == 0:
            return 0.0

        min_diameter, max_diameter, _ = self.optic.DIAMETER_RANGE
        optic_diameter_factor = 0.5 + 0.5 * (self.optic.diameter - min_diameter) / (max_diameter - min_diameter)
        spot_diameter_factor = FULL_INTENSITY_LIGHT_SPOT_DIAMETER / diameter
        return min(1.0, max(0.0, optic_diameter_factor * spot_diameter_factor))

    def __repr__(self) -> str:
        return f"LightSpot(position={self.position}, diameter={self.diameter}, intensity={self.intensity:.4f})"
