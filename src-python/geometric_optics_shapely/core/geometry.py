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
from typing import Dict, Iterable, List, Tuple

from shapely.geometry import Point as ShapelyPoint, LineString
import numpy as np


class Point:
    """
    A point (or vector) in 2D space.
    Can be converted to/from Shapely Point objects.
    """
    def __init__(self, x: float, y: float):
        self.x = x
        self.y = y

    def to_shapely(self) -> ShapelyPoint:
        """Convert to Shapely Point."""
        return ShapelyPoint(self.x, self.y)

    @classmethod
    def from_shapely(cls, sp: ShapelyPoint) -> 'Point':
        """Create Point from Shapely Point."""
        return cls(sp.x, sp.y)

    def __repr__(self) -> str:
        return f"Point(x={self.x}, y={self.y})"

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary representation."""
        return {'x': self.x, 'y': self.y}

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


class Line:
    """
    A line in 2D space, defined by two points.
    Can represent a line, ray, or segment depending on context.
    - As a line: p1 and p2 are two distinct points on the line.
    - As a ray: p1 is the starting point and p2 is another point on the ray.
    - As a segment: p1 and p2 are the two endpoints.
    """
    def __init__(self, p1: Point, p2: Point):
        self.p1 = p1
        self.p2 = p2

    def to_shapely(self) -> LineString:
        """Convert to Shapely LineString."""
        return LineString([(self.p1.x, self.p1.y), (self.p2.x, self.p2.y)])

    def __repr__(self) -> str:
        return f"Line(p1={self.p1}, p2={self.p2})"


class Geometry:
    """
    Basic geometric figures and vector operations on Points.

    Vectors are represented as Points. All operations return new Points and
    never mutate their arguments.
    """

    @staticmethod
    def point(x: float, y: float) -> Point:
        """
        Create a point.

        Args:
            x: The x-coordinate of the point.
            y: The y-coordinate of the point.

        Returns:
            Point object
        """
        return Point(x, y)

    @staticmethod
    def line(p1: Point, p2: Point) -> Line:
        """
        Create a line, which also represents a ray or a segment.

        Args:
            p1: First point
            p2: Second point

        Returns:
            Line object
        """
        return Line(p1, p2)

    @staticmethod
    def add(p1: Point, p2: Point) -> Point:
        return Point(p1.x + p2.x, p1.y + p2.y)

    @staticmethod
    def subtract(p1: Point, p2: Point) -> Point:
        """Vector from p2 to p1 (p1 - p2)."""
        return Point(p1.x - p2.x, p1.y - p2.y)

    @staticmethod
    def scale(p1: Point, factor: float) -> Point:
        return Point(p1.x * factor, p1.y * factor)

    @staticmethod
    def negate(p1: Point) -> Point:
        return Point(-p1.x, -p1.y)

    @staticmethod
    def translate(p1: Point, dx: float, dy: float) -> Point:
        return Point(p1.x + dx, p1.y + dy)

    @staticmethod
    def dot(p1: Point, p2: Point) -> float:
        """
        Calculate the dot product, where the two points are treated as vectors.

        Args:
            p1: First point (as vector)
            p2: Second point (as vector)

        Returns:
            Dot product
        """
        return p1.x * p2.x + p1.y * p2.y

    @staticmethod
    def magnitude(p1: Point) -> float:
        return math.sqrt(p1.x * p1.x + p1.y * p1.y)

    @staticmethod
    def distance(p1: Point, p2: Point) -> float:
        """
        Calculate the distance between two points.

        Args:
            p1: First point
            p2: Second point

        Returns:
            Distance between points
        """
        return math.sqrt(Geometry.distance_squared(p1, p2))

    @staticmethod
    def distance_squared(p1: Point, p2: Point) -> float:
        """
        Calculate the squared distance between two points.

        Args:
            p1: First point
            p2: Second point

        Returns:
            Squared distance between points
        """
        dx = p1.x - p2.x
        dy = p1.y - p2.y
        return dx * dx + dy * dy

    @staticmethod
    def midpoint(p1: Point, p2: Point) -> Point:
        """
        Calculate the midpoint between two points.

        Args:
            p1: First point
            p2: Second point

        Returns:
            Midpoint
        """
        nx = (p1.x + p2.x) * 0.5
        ny = (p1.y + p2.y) * 0.5
        return Geometry.point(nx, ny)

    @staticmethod
    def blend(p1: Point, p2: Point, ratio: float) -> Point:
        """
        Linear interpolation between two points.

        A ratio of 0 returns p1, a ratio of 1 returns p2. Ratios outside
        [0, 1] extrapolate along the line through p1 and p2.

        Args:
            p1: Start point
            p2: End point
            ratio: Interpolation parameter

        Returns:
            Interpolated point
        """
        return Geometry.point(
            p1.x + (p2.x - p1.x) * ratio,
            p1.y + (p2.y - p1.y) * ratio
        )

    @staticmethod
    def normalize_vec(p1: Point) -> Point:
        """
        Normalize the given point as if it were a vector.

        Args:
            p1: Point (as vector)

        Returns:
            Normalized vector

        Raises:
            ZeroDivisionError: If the vector has zero length.
        """
        len_val = Geometry.distance(Geometry.point(0, 0), p1)
        return Geometry.point(p1.x / len_val, p1.y / len_val)

    @staticmethod
    def polar(magnitude: float, angle: float) -> Point:
        """Vector of the given magnitude at the given angle (radians, from +x)."""
        return Geometry.point(magnitude * math.cos(angle), magnitude * math.sin(angle))

    @staticmethod
    def equals_epsilon(p1: Point, p2: Point, epsilon: float) -> bool:
        """Component-wise comparison within epsilon."""
        return abs(p1.x - p2.x) <= epsilon and abs(p1.y - p2.y) <= epsilon

    @staticmethod
    def quadratic_bezier(p0: Point, control: Point, p2: Point, segments: int) -> LineString:
        """
        Sample a quadratic Bezier curve into a Shapely LineString.

        The curve starts at p0, ends at p2 and is pulled toward (but does not
        pass through) the control point.

        Args:
            p0: Start point
            control: Control point
            p2: End point
            segments: Number of straight segments in the approximation

        Returns:
            LineString with segments + 1 vertices, from p0 to p2
        """
        t = np.linspace(0.0, 1.0, segments + 1)
        a = (1.0 - t) ** 2
        b = 2.0 * (1.0 - t) * t
        c = t ** 2
        xs = a * p0.x + b * control.x + c * p2.x
        ys = a * p0.y + b * control.y + c * p2.y
        return LineString(np.column_stack((xs, ys)))

    @staticmethod
    def polyline(points: Iterable[Point]) -> LineString:
        return LineString([(p.x, p.y) for p in points])

    @staticmethod
    def shapely_points(geom) -> List[Point]:
        """
        Flatten the point content of a Shapely intersection result.

        Args:
            geom: Result of a Shapely intersection (Point, MultiPoint,
                  LineString for overlaps, GeometryCollection, or empty)

        Returns:
            List of Points. Overlapping linear pieces contribute their vertices.
        """
        if geom.is_empty:
            return []
        if geom.geom_type == 'Point':
            return [Point.from_shapely(geom)]
        if geom.geom_type in ('LineString', 'LinearRing'):
            return [Point(x, y) for x, y in geom.coords]
        if hasattr(geom, 'geoms'):
            points: List[Point] = []
            for part in geom.geoms:
                points.extend(Geometry.shapely_points(part))
            return points
        return []


# Create a singleton instance for convenience
geometry = Geometry()
