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
Ray/curve intersection.

Boundary curves (lens and mirror surfaces, the optic's vertical axis, the
projection screen's bisector) are Shapely LineStrings. A ray is turned into
a finite segment that is just long enough to reach every part of the curve,
and Shapely computes the crossing.
"""

import math
from typing import Optional

from shapely.geometry import LineString

from .geometry import geometry, Point
from .ray import GORay
from .constants import MIN_RAY_SEGMENT_LENGTH


def reach_for_curve(ray: GORay, curve: LineString) -> float:
    """
    Distance from the ray origin to the farthest corner of the curve's bounding box.

    Scaled up slightly so that a segment of this length starting at the
    origin is guaranteed to cross the whole curve.

    Args:
        ray: The ray (only its origin is used)
        curve: The boundary curve

    Returns:
        A finite reach, at least 1.
    """
    min_x, min_y, max_x, max_y = curve.bounds

    # Offset the bounding box so that the ray origin is at 0,0
    dx_min = min_x - ray.origin.x
    dx_max = max_x - ray.origin.x
    dy_min = min_y - ray.origin.y
    dy_max = max_y - ray.origin.y

    farthest_x = dx_min if abs(dx_min) > abs(dx_max) else dx_max
    farthest_y = dy_min if abs(dy_min) > abs(dy_max) else dy_max

    return max(1.0, math.sqrt(farthest_x ** 2 + farthest_y ** 2) * 1.001)


def intersect(ray: GORay, curve: LineString) -> Optional[Point]:
    """
    Find where a ray crosses a boundary curve.

    Every boundary curve is a single simple arc, so there is at most one
    meaningful crossing. If Shapely reports several (for instance when a
    sampled curve is grazed), the one nearest to the ray origin wins.
    Crossings closer to the origin than MIN_RAY_SEGMENT_LENGTH are ignored,
    so a ray never re-intersects the surface it starts on.

    Args:
        ray: The ray to test. Finite rays are only tested up to their final point.
        curve: The boundary curve

    Returns:
        The intersection point, or None if the ray misses the curve.
    """
    if curve.is_empty:
        return None

    segment = ray.to_shapely(reach_for_curve(ray, curve))
    hits = geometry.shapely_points(segment.intersection(curve))

    nearest = None
    nearest_distance = math.inf
    for hit in hits:
        distance = geometry.distance(ray.origin, hit)
        if MIN_RAY_SEGMENT_LENGTH < distance < nearest_distance:
            nearest = hit
            nearest_distance = distance

    return nearest
