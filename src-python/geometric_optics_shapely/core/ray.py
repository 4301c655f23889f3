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
from typing import Optional

from shapely.geometry import LineString

from .geometry import geometry, Point
from .constants import MIN_RAY_SEGMENT_LENGTH, POINT_ALONG_RAY_EPSILON


class GORay:
    """
    A directed ray segment with an origin, a unit direction and a length.

    A GORay starts out semi-infinite (length = infinity). Setting a final
    point gives it a finite length. There is no way to make a finite ray
    infinite again: the transition is one way.

    Attributes:
        origin (Point): Starting point of the ray
        direction (Point): Unit direction vector of the ray
        final_point (Point or None): End point, or None while semi-infinite
    """

    def __init__(self, origin: Point, direction: Point) -> None:
        """
        Initialize a semi-infinite ray.

        Args:
            origin (Point): Starting point of the ray
            direction (Point): Direction of the ray, must be a unit vector
        """
        self.origin: Point = origin
        self.direction: Point = direction
        self.final_point: Optional[Point] = None
        self._length: float = math.inf

    @property
    def length(self) -> float:
        """Length of the ray. Note that the length may be infinite."""
        return self._length

    @property
    def is_finite(self) -> bool:
        return self.final_point is not None

    def set_length(self, length: float) -> None:
        """
        Set the length of the ray.

        Args:
            length: A finite, positive length

        Raises:
            ValueError: If length is not finite or not positive.
        """
        if not math.isfinite(length) or length <= 0:
            raise ValueError(f"Ray length must be finite and positive, got {length}")
        self._length = length
        self.final_point = self.point_at_distance(length)

    def set_final_point(self, final_point: Point) -> None:
        """
        Set the length of the ray by using a final point.

        Args:
            final_point: Point along the direction of the ray

        Raises:
            ValueError: If the point is not along the ray.
        """
        if not self.is_point_along_ray(final_point):
            raise ValueError(f"Final point {final_point} is not along ray {self}")
        self._length = geometry.distance(self.origin, final_point)
        self.final_point = final_point

    def point_at_distance(self, distance: float) -> Point:
        """Point reached after travelling the given distance from the origin."""
        return geometry.add(self.origin, geometry.scale(self.direction, distance))

    def is_point_along_ray(self, point: Point, epsilon: float = POINT_ALONG_RAY_EPSILON) -> bool:
        """
        Determine if a point is along the direction of the ray.

        Args:
            point: Point to test
            epsilon: Tolerance on the components of the normalized displacement

        Returns:
            True if the direction from the origin to the point matches the ray direction.
            The origin itself is not considered to be along the ray.
        """
        displacement = geometry.subtract(point, self.origin)
        if geometry.magnitude(displacement) < MIN_RAY_SEGMENT_LENGTH:
            return False
        return geometry.equals_epsilon(geometry.normalize_vec(displacement), self.direction, epsilon)

    def distance_to(self, point: Point) -> float:
        """
        Signed distance from the origin to a point, measured along the ray.

        The point does not need to be along the ray; this is the projection
        of the displacement onto the direction.
        """
        return geometry.dot(self.direction, geometry.subtract(point, self.origin))

    def to_shapely(self, reach: float) -> LineString:
        """
        Convert to a finite Shapely LineString.

        Args:
            reach: Length used in place of an infinite length

        Returns:
            LineString from the origin to the final point, or to the point at
            distance `reach` when the ray is semi-infinite.
        """
        end = self.final_point if self.final_point is not None else self.point_at_distance(reach)
        return geometry.line(self.origin, end).to_shapely()

    def __repr__(self) -> str:
        return (f"GORay(origin=({self.origin.x:.4f}, {self.origin.y:.4f}), "
                f"direction=({self.direction.x:.4f}, {self.direction.y:.4f}), "
                f"length={self._length})")
