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
Focal length and boundary curves of an optic.

The two halves of this module are deliberately independent:

- compute_focal_length() is the physical formula (lens maker's equation for
  a symmetric thin lens, and R/2 for a mirror).
- compute_boundary_curves() builds the shapes used for drawing and for ray
  hit testing. Lens shapes are "hollywooded": their width is a visual
  approximation that does not match the radius of curvature, so that large
  radii still give legible lenses. Nothing here feeds back into the focal
  length.

Shapes are built in the optic's local frame (origin at the optic's
geometric center) and translated to the optic's position.
"""

import math
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from shapely.affinity import translate
from shapely.geometry import LineString, Polygon

from .geometry import geometry
from .constants import (
    CURVE_SEGMENTS,
    HOLLYWOOD_OFFSET_RADIUS,
    MIRROR_THICKNESS,
    VERTICAL_AXIS_HALF_LENGTH,
)

if TYPE_CHECKING:
    from .optic import Optic


# Surface types shared by all optics. Both surfaces of a lens have the same type.
CONVEX = 'convex'
CONCAVE = 'concave'
FLAT = 'flat'
SURFACE_TYPES = (CONVEX, CONCAVE, FLAT)

# Sign of the surface curvature: convex bows outward, concave inward
SURFACE_SIGNS = {CONVEX: 1, CONCAVE: -1, FLAT: 0}


@dataclass
class OpticShapes:
    """
    The set of shapes that describe an optic.

    Attributes:
        front: Front (left-facing) surface, the first surface hit by rays.
            For a mirror this is the reflective coating.
        back: Back (right-facing) surface of a lens, None for a mirror.
        mid: Vertical line through the center of the optic. Principal rays
            are refracted (or reflected) there.
        outline: Closed outline of the whole optic, for rendering.
            For a mirror this includes the backing.
        active_bounds: (min_x, min_y, max_x, max_y) of the optically active
            part: the whole lens, or the reflective coating of a mirror.
    """
    front: LineString
    back: Optional[LineString]
    mid: LineString
    outline: Polygon
    active_bounds: tuple

    def translated(self, dx: float, dy: float) -> 'OpticShapes':
        """Return a copy of these shapes moved by (dx, dy)."""
        min_x, min_y, max_x, max_y = self.active_bounds
        return OpticShapes(
            front=translate(self.front, dx, dy),
            back=translate(self.back, dx, dy) if self.back is not None else None,
            mid=translate(self.mid, dx, dy),
            outline=translate(self.outline, dx, dy),
            active_bounds=(min_x + dx, min_y + dy, max_x + dx, max_y + dy),
        )


# =============================================================================
# Focal length
# =============================================================================

def compute_focal_length(optic: 'Optic') -> float:
    """
    Focal length of an optic. Positive is converging, negative is diverging.

    Lens: sign(surface) * R / (2 (n - 1)).
    Mirror: -sign(surface) * R / 2, i.e. a lens of index 2 with the sign flipped
    since a concave mirror converges.

    A flat surface never focuses: the focal length is math.inf, and callers
    must special-case it.

    Args:
        optic: Lens or Mirror

    Returns:
        Focal length in cm
    """
    if optic.surface_type == FLAT:
        return math.inf

    sign = SURFACE_SIGNS[optic.surface_type]
    radius = optic.radius_of_curvature
    if optic.is_lens:
        return sign * radius / (2 * (optic.index_of_refraction - 1))
    return -sign * radius / 2


# =============================================================================
# Boundary curves
# =============================================================================

def vertical_axis() -> LineString:
    """A straight vertical line through the middle of the optic, in the local frame."""
    return LineString([(0.0, VERTICAL_AXIS_HALF_LENGTH), (0.0, -VERTICAL_AXIS_HALF_LENGTH)])


def lens_half_width(radius_of_curvature: float, diameter: float, is_hollywooded: bool = True) -> float:
    """
    Half of the width of a lens at its thickest (convex) or thinnest (concave) point.

    When hollywooded, the width is a parabolic approximation that stays
    reasonable for radii larger than half the diameter, a physical
    impossibility for a real spherical lens.
    """
    half_height = diameter / 2
    if is_hollywooded:
        return 0.5 * half_height * half_height / (radius_of_curvature + HOLLYWOOD_OFFSET_RADIUS)
    return radius_of_curvature - math.sqrt(radius_of_curvature ** 2 - half_height ** 2)


def lens_shapes(surface_type: str, radius_of_curvature: float, diameter: float,
                is_hollywooded: bool = True) -> OpticShapes:
    """
    Shapes of a lens, approximated as a parabolic lens drawn with quadratic Bezier curves.

    Args:
        surface_type: 'convex' or 'concave'
        radius_of_curvature: Radius of curvature, in cm
        diameter: Height of the lens, in cm
        is_hollywooded: Whether the width is decoupled from the radius

    Returns:
        OpticShapes in the lens' local frame
    """
    half_height = diameter / 2
    half_width = lens_half_width(radius_of_curvature, diameter, is_hollywooded)

    if surface_type == CONVEX:
        top = geometry.point(0, half_height)
        bottom = geometry.point(0, -half_height)

        # Control points on the optical axis. The curves pass through (-half_width, 0)
        # and (half_width, 0), not through the control points.
        left = geometry.point(-2 * half_width, 0)
        right = geometry.point(2 * half_width, 0)

        front = geometry.quadratic_bezier(top, left, bottom, CURVE_SEGMENTS)
        back = geometry.quadratic_bezier(top, right, bottom, CURVE_SEGMENTS)

        # front runs top to bottom, back reversed runs bottom to top
        outline = Polygon(list(front.coords) + list(back.coords)[::-1][1:])

    elif surface_type == CONCAVE:
        top_left = geometry.point(-half_width, half_height)
        top_right = geometry.point(half_width, half_height)
        bottom_left = geometry.point(-half_width, -half_height)
        bottom_right = geometry.point(half_width, -half_height)

        # Curves pass through (-half_width / 4, 0) and (half_width / 4, 0)
        mid_left = geometry.point(half_width / 2, 0)
        mid_right = geometry.point(-half_width / 2, 0)

        front = geometry.quadratic_bezier(top_left, mid_left, bottom_left, CURVE_SEGMENTS)
        back = geometry.quadratic_bezier(top_right, mid_right, bottom_right, CURVE_SEGMENTS)

        outline = Polygon(list(front.coords) + list(back.coords)[::-1])

    else:
        raise ValueError(f"Unsupported lens surface type '{surface_type}'")

    min_x, min_y, max_x, max_y = outline.bounds
    return OpticShapes(front=front, back=back, mid=vertical_axis(), outline=outline,
                       active_bounds=(min_x, min_y, max_x, max_y))


def mirror_shapes(surface_type: str, radius_of_curvature: float, diameter: float,
                  thickness: float = MIRROR_THICKNESS) -> OpticShapes:
    """
    Shapes of a first-surface mirror: a reflective coating in front of a backing.

    Curved mirrors are parabolic, drawn with a quadratic Bezier curve that
    passes through the mirror's center (0, 0). A flat mirror is a straight
    vertical line.

    Args:
        surface_type: 'concave', 'convex' or 'flat'
        radius_of_curvature: Radius of curvature at the center of the mirror, in cm.
            Ignored for a flat mirror; must exceed diameter / 2 otherwise.
        diameter: Vertical height of the mirror, in cm
        thickness: Thickness of the backing, in cm

    Returns:
        OpticShapes in the mirror's local frame, with back=None
    """
    half_height = diameter / 2

    if surface_type == FLAT:
        front = LineString([(0.0, half_height), (0.0, -half_height)])
        outline = Polygon([(0.0, half_height), (0.0, -half_height),
                           (thickness, -half_height), (thickness, half_height)])
    elif surface_type in (CONVEX, CONCAVE):
        half_width = radius_of_curvature - math.sqrt(radius_of_curvature ** 2 - half_height ** 2)

        # top and bottom of the backing are tilted to give right-angle corners
        angle = math.atan(half_height / radius_of_curvature)
        curve_sign = 1 if surface_type == CONVEX else -1

        top_left = geometry.point(curve_sign * half_width, half_height)
        bottom_left = geometry.point(curve_sign * half_width, -half_height)
        top_right = geometry.add(top_left, geometry.polar(thickness, -curve_sign * angle))
        bottom_right = geometry.add(bottom_left, geometry.polar(thickness, curve_sign * angle))

        # The curves pass through (0, 0) and (thickness, 0)
        mid_left = geometry.point(-curve_sign * half_width, 0)
        mid_right = geometry.translate(mid_left, thickness, 0)

        front = geometry.quadratic_bezier(top_left, mid_left, bottom_left, CURVE_SEGMENTS)
        backing = geometry.quadratic_bezier(bottom_right, mid_right, top_right, CURVE_SEGMENTS)
        outline = Polygon(list(front.coords) + list(backing.coords))
    else:
        raise ValueError(f"Unsupported mirror surface type '{surface_type}'")

    return OpticShapes(front=front, back=None, mid=vertical_axis(), outline=outline,
                       active_bounds=front.bounds)


def compute_boundary_curves(optic: 'Optic') -> OpticShapes:
    """
    Boundary curves of an optic, in model coordinates.

    Args:
        optic: Lens or Mirror

    Returns:
        OpticShapes centered on the optic's position
    """
    if optic.is_lens:
        shapes = lens_shapes(optic.surface_type, optic.radius_of_curvature, optic.diameter)
    else:
        shapes = mirror_shapes(optic.surface_type, optic.radius_of_curvature, optic.diameter)
    return shapes.translated(optic.position.x, optic.position.y)
