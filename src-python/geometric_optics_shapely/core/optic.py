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
from typing import Optional, Tuple

from shapely.geometry import LineString

from .geometry import geometry, Point
from .optic_geometry import (
    CONVEX,
    CONCAVE,
    FLAT,
    OpticShapes,
    compute_boundary_curves,
    compute_focal_length,
)
from .constants import EXTREMUM_EROSION


class Optic:
    """
    Base class for the optic of a scene: a lens or a mirror.

    Parameters are validated where they are set. Everything derived from them
    (focal length, boundary curves) is recomputed on access, so an Optic can
    be mutated freely between frames.

    Class attributes (overridden by subclasses):
        type (str): 'lens' or 'mirror'
        VALID_SURFACE_TYPES (tuple): Supported surface types, in display order
        RADIUS_OF_CURVATURE_RANGE (tuple): (min, max, default), in cm
        INDEX_OF_REFRACTION_RANGE (tuple): (min, max, default), unitless
        FOCAL_LENGTH_MAGNITUDE_RANGE (tuple): (min, max, default) of |f| in the
            'direct' focal length model, in cm
        DIAMETER_RANGE (tuple): (min, max, default), in cm
        DEFAULT_SURFACE_TYPE (str): Initial surface type
        sign (int): +1 if a positive image distance is to the right of the
            optic (lens), -1 if it is to the left (mirror)

    Attributes:
        position (Point): Geometric center of the optic
        surface_type (str): 'convex', 'concave' or 'flat'
        focal_length_model (str): 'indirect' (default) or 'direct'
        radius_of_curvature (float): Magnitude of the radius of curvature, in cm
        index_of_refraction (float): Index of refraction
        focal_length_magnitude (float): |f| used by the 'direct' model, in cm
        diameter (float): Aperture height, in cm

    Focal length models:
        'indirect': radius of curvature and index of refraction are settable,
            the focal length is derived from them.
        'direct': the focal length magnitude is settable, the index of
            refraction is fixed at its default, and the radius of curvature is
            derived as |f| * 2 * (n - 1). Ignored by a flat mirror.
    """

    DIRECT = 'direct'
    INDIRECT = 'indirect'
    VALID_FOCAL_LENGTH_MODELS = (DIRECT, INDIRECT)

    type = None
    VALID_SURFACE_TYPES: Tuple[str, ...] = ()
    RADIUS_OF_CURVATURE_RANGE: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    INDEX_OF_REFRACTION_RANGE: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    FOCAL_LENGTH_MAGNITUDE_RANGE: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    DIAMETER_RANGE: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    DEFAULT_SURFACE_TYPE: Optional[str] = None
    sign = 1

    def __init__(self, position: Optional[Point] = None, surface_type: Optional[str] = None,
                 radius_of_curvature: Optional[float] = None,
                 index_of_refraction: Optional[float] = None,
                 diameter: Optional[float] = None,
                 focal_length_model: str = INDIRECT,
                 focal_length_magnitude: Optional[float] = None) -> None:
        """
        Initialize the optic. Omitted parameters take their default values.

        Raises:
            ValueError: If any parameter is outside its valid range.
        """
        self._initial_position = position if position is not None else geometry.point(0, 0)
        self.position = self._initial_position
        self._focal_length_model = self.INDIRECT
        self.surface_type = surface_type if surface_type is not None else self.DEFAULT_SURFACE_TYPE
        self.radius_of_curvature = (radius_of_curvature if radius_of_curvature is not None
                                    else self.RADIUS_OF_CURVATURE_RANGE[2])
        self.index_of_refraction = (index_of_refraction if index_of_refraction is not None
                                    else self.INDEX_OF_REFRACTION_RANGE[2])
        self._focal_length_magnitude = self.FOCAL_LENGTH_MAGNITUDE_RANGE[2]
        self.diameter = diameter if diameter is not None else self.DIAMETER_RANGE[2]
        self.focal_length_model = focal_length_model
        if focal_length_magnitude is not None:
            self.focal_length_magnitude = focal_length_magnitude

    # =========================================================================
    # Validated parameters
    # =========================================================================

    @staticmethod
    def _check_range(name: str, value: float, value_range: Tuple[float, float, float]) -> float:
        low, high, _ = value_range
        if not isinstance(value, (int, float)) or math.isnan(value) or not (low <= value <= high):
            raise ValueError(f"{name} must be in [{low}, {high}], got {value}")
        return float(value)

    @property
    def surface_type(self) -> str:
        """Get the surface type."""
        return self._surface_type

    @surface_type.setter
    def surface_type(self, value: str) -> None:
        """Set the surface type with validation."""
        if value not in self.VALID_SURFACE_TYPES:
            raise ValueError(
                f"Invalid surface_type '{value}' for a {self.type}. "
                f"Valid options: {self.VALID_SURFACE_TYPES}"
            )
        self._surface_type = value

    @property
    def focal_length_model(self) -> str:
        """Get the focal length model ('direct' or 'indirect')."""
        return self._focal_length_model

    @focal_length_model.setter
    def focal_length_model(self, value: str) -> None:
        """
        Set the focal length model with validation.

        Switching to 'direct' carries the current focal length magnitude over,
        constrained to FOCAL_LENGTH_MAGNITUDE_RANGE, so the optic keeps its
        power where the range allows it.
        """
        if value not in self.VALID_FOCAL_LENGTH_MODELS:
            raise ValueError(
                f"Invalid focal_length_model '{value}'. "
                f"Valid options: {self.VALID_FOCAL_LENGTH_MODELS}"
            )
        if value == self.DIRECT and self._focal_length_model != self.DIRECT:
            magnitude = abs(self.focal_length)
            if math.isfinite(magnitude):
                low, high, _ = self.FOCAL_LENGTH_MAGNITUDE_RANGE
                self._focal_length_magnitude = min(high, max(low, magnitude))
        self._focal_length_model = value

    @property
    def is_direct_focal_length_model(self) -> bool:
        return self._focal_length_model == self.DIRECT

    @property
    def focal_length_magnitude(self) -> float:
        """Get |f| of the 'direct' focal length model, in cm."""
        return self._focal_length_magnitude

    @focal_length_magnitude.setter
    def focal_length_magnitude(self, value: float) -> None:
        """
        Set |f| of the 'direct' focal length model with validation.

        Raises:
            ValueError: If the value is outside FOCAL_LENGTH_MAGNITUDE_RANGE.
        """
        self._focal_length_magnitude = self._check_range(
            'focal_length_magnitude', value, self.FOCAL_LENGTH_MAGNITUDE_RANGE)

    @property
    def radius_of_curvature(self) -> float:
        """Get the radius of curvature (magnitude), in cm. Derived in the 'direct' model."""
        if self.is_direct_focal_length_model:
            return self._focal_length_magnitude * 2 * (self.index_of_refraction - 1)
        return self._radius_of_curvature

    @radius_of_curvature.setter
    def radius_of_curvature(self, value: float) -> None:
        """
        Set the radius of curvature with validation.

        Raises:
            ValueError: If the radius is zero or outside RADIUS_OF_CURVATURE_RANGE,
                or if the focal length model is 'direct'.
        """
        self._check_settable_in_direct_model('radius_of_curvature')
        if value == 0:
            raise ValueError("radius_of_curvature must not be zero")
        self._radius_of_curvature = self._check_range(
            'radius_of_curvature', value, self.RADIUS_OF_CURVATURE_RANGE)

    @property
    def index_of_refraction(self) -> float:
        """Get the index of refraction. Fixed at its default in the 'direct' model."""
        if self.is_direct_focal_length_model:
            return self.INDEX_OF_REFRACTION_RANGE[2]
        return self._index_of_refraction

    @index_of_refraction.setter
    def index_of_refraction(self, value: float) -> None:
        """
        Set the index of refraction with validation.

        Raises:
            ValueError: If the index is not greater than 1 or outside INDEX_OF_REFRACTION_RANGE,
                or if the focal length model is 'direct'.
        """
        self._check_settable_in_direct_model('index_of_refraction')
        if isinstance(value, (int, float)) and value <= 1:
            raise ValueError(f"index_of_refraction must be greater than 1, got {value}")
        self._index_of_refraction = self._check_range(
            'index_of_refraction', value, self.INDEX_OF_REFRACTION_RANGE)

    def _check_settable_in_direct_model(self, name: str) -> None:
        if self.is_direct_focal_length_model:
            raise ValueError(
                f"{name} is derived in the '{self.DIRECT}' focal length model; "
                f"set focal_length_magnitude or switch to '{self.INDIRECT}'"
            )

    @property
    def diameter(self) -> float:
        """Get the diameter, in cm."""
        return self._diameter

    @diameter.setter
    def diameter(self, value: float) -> None:
        """
        Set the diameter with validation.

        Raises:
            ValueError: If the diameter is not positive or outside DIAMETER_RANGE.
        """
        if isinstance(value, (int, float)) and value <= 0:
            raise ValueError(f"diameter must be positive, got {value}")
        self._diameter = self._check_range('diameter', value, self.DIAMETER_RANGE)

    @property
    def max_diameter(self) -> float:
        return self.DIAMETER_RANGE[1]

    @property
    def is_lens(self) -> bool:
        return self.type == 'lens'

    @property
    def is_mirror(self) -> bool:
        return self.type == 'mirror'

    def reset(self) -> None:
        """Restore all parameters to their defaults. The focal length model is kept."""
        self.position = self._initial_position
        self.surface_type = self.DEFAULT_SURFACE_TYPE
        self._radius_of_curvature = self.RADIUS_OF_CURVATURE_RANGE[2]
        self._index_of_refraction = self.INDEX_OF_REFRACTION_RANGE[2]
        self._focal_length_magnitude = self.FOCAL_LENGTH_MAGNITUDE_RANGE[2]
        self.diameter = self.DIAMETER_RANGE[2]

    # =========================================================================
    # Derived quantities
    # =========================================================================

    @property
    def focal_length(self) -> float:
        """Focal length in cm. Positive is converging, negative diverging, inf for flat."""
        return compute_focal_length(self)

    @property
    def is_converging(self) -> bool:
        return self.focal_length > 0 and math.isfinite(self.focal_length)

    @property
    def left_focal_point(self) -> Optional[Point]:
        """Focal point to the left of the optic, or None if the focal length is infinite."""
        f = self.focal_length
        if math.isinf(f):
            return None
        return geometry.translate(self.position, -abs(f), 0)

    @property
    def right_focal_point(self) -> Optional[Point]:
        """Focal point to the right of the optic, or None if the focal length is infinite."""
        f = self.focal_length
        if math.isinf(f):
            return None
        return geometry.translate(self.position, abs(f), 0)

    @property
    def shapes(self) -> OpticShapes:
        """Boundary curves and outline, in model coordinates."""
        return compute_boundary_curves(self)

    def get_vertical_axis(self) -> LineString:
        """Vertical line through the middle of the optic, in model coordinates."""
        return self.shapes.mid

    def get_front_shape(self, is_principal_rays_mode: bool = False) -> LineString:
        """
        Surface that a ray will initially hit.

        Principal rays are refracted (or reflected) at the optic's vertical axis.
        """
        shapes = self.shapes
        return shapes.mid if is_principal_rays_mode else shapes.front

    def get_back_shape(self) -> Optional[LineString]:
        """Back (right) surface of a lens, None for a mirror."""
        return self.shapes.back

    def _bounds_eroded(self) -> Tuple[float, float, float, float]:
        min_x, min_y, max_x, max_y = self.shapes.active_bounds
        return (min_x, min_y + EXTREMUM_EROSION, max_x, max_y - EXTREMUM_EROSION)

    def get_top_point(self, source_point: Point, target_point: Point) -> Point:
        """Top-most position within the optic that ensures a ray is transmitted (or reflected)."""
        return self.get_extremum_point(source_point, target_point, is_top=True)

    def get_bottom_point(self, source_point: Point, target_point: Point) -> Point:
        """Bottom-most position within the optic that ensures a ray is transmitted (or reflected)."""
        return self.get_extremum_point(source_point, target_point, is_top=False)

    def get_extremum_point(self, source_point: Point, target_point: Point, is_top: bool) -> Point:
        raise NotImplementedError("Subclasses must implement get_extremum_point()")

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(position=({self.position.x}, {self.position.y}), "
                f"surface_type='{self.surface_type}', R={self.radius_of_curvature}, "
                f"n={self.index_of_refraction}, diameter={self.diameter}, f={self.focal_length})")


class Lens(Optic):
    """
    A thin lens with two surfaces of the same type.

    Rays enter through the front (left) surface and leave through the back
    (right) surface, travelling to the right.
    """

    type = 'lens'
    VALID_SURFACE_TYPES = (CONVEX, CONCAVE)
    RADIUS_OF_CURVATURE_RANGE = (30.0, 130.0, 80.0)
    INDEX_OF_REFRACTION_RANGE = (1.2, 1.9, 1.5)
    FOCAL_LENGTH_MAGNITUDE_RANGE = (30.0, 130.0, 80.0)
    DIAMETER_RANGE = (30.0, 130.0, 80.0)
    DEFAULT_SURFACE_TYPE = CONVEX
    sign = 1

    def get_extremum_point(self, source_point: Point, target_point: Point, is_top: bool) -> Point:
        """
        Most extreme position within the lens that ensures a ray is transmitted.

        For a convex lens this is the top (or bottom) center of the lens.
        For a concave lens, a ray aimed too high would miss the back surface,
        so the offset is the smaller of the offsets of the rays from the source
        to the left corner and from the target to the right corner.

        Args:
            source_point: Position of the optical object
            target_point: Position of the optical image
            is_top: True for the top point, False for the bottom point

        Returns:
            A point on (or near) the optic's vertical axis
        """
        min_x, min_y, max_x, max_y = self._bounds_eroded()
        y = max_y if is_top else min_y

        if self.surface_type == CONVEX:
            return geometry.point((min_x + max_x) / 2, y)

        left_point = geometry.point(min_x, y)
        right_point = geometry.point(max_x, y)
        position = self.position

        right_target = geometry.subtract(right_point, target_point)
        left_source = geometry.subtract(left_point, source_point)

        # vertical offsets, from the center of the lens, of the two limiting rays
        y_offset1 = ((right_point.y - position.y) +
                     (position.x - right_point.x) * right_target.y / right_target.x)
        y_offset2 = ((left_point.y - position.y) +
                     (position.x - left_point.x) * left_source.y / left_source.x)

        offset_y = y_offset1 if abs(y_offset1) < abs(y_offset2) else y_offset2
        return geometry.translate(position, 0, offset_y)


class Mirror(Optic):
    """
    A first-surface mirror.

    A mirror has no index of refraction; its focal length is that of a lens
    with an index of 2, with the sign flipped so that concave converges.
    Reflected rays travel to the left.
    """

    type = 'mirror'
    VALID_SURFACE_TYPES = (CONCAVE, CONVEX, FLAT)
    RADIUS_OF_CURVATURE_RANGE = (150.0, 300.0, 200.0)
    INDEX_OF_REFRACTION_RANGE = (2.0, 2.0, 2.0)
    FOCAL_LENGTH_MAGNITUDE_RANGE = (75.0, 150.0, 100.0)
    DIAMETER_RANGE = (30.0, 130.0, 80.0)
    DEFAULT_SURFACE_TYPE = CONCAVE
    sign = -1

    def get_extremum_point(self, source_point: Point, target_point: Point, is_top: bool) -> Point:
        """
        Most extreme position on the mirror that ensures a ray is reflected.

        Since a mirror reflects light, the extremum point is a corner of the
        reflective coating: left corners for concave, right corners otherwise.
        """
        min_x, min_y, max_x, max_y = self._bounds_eroded()
        y = max_y if is_top else min_y
        x = min_x if self.surface_type == CONCAVE else max_x
        return geometry.point(x, y)
