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

import logging
import math
from typing import List, Optional, TYPE_CHECKING

from .geometry import geometry, Point
from .light_ray import LightRay, LightRaySegment
from .constants import LIGHT_SPEED, MANY_RAYS_COUNT, MANY_RAYS_HALF_ANGLE

if TYPE_CHECKING:
    from .optic import Optic
    from .optical_image import OpticalImage
    from .projection_screen import ProjectionScreen

logger = logging.getLogger(__name__)


class RaysMode:
    """Ray representation modes."""
    MARGINAL = 'marginal'
    PRINCIPAL = 'principal'
    MANY = 'many'
    NONE = 'none'

    VALID_MODES = (MARGINAL, PRINCIPAL, MANY, NONE)


def get_ray_directions(source_position: Point, optic: 'Optic', rays_mode: str,
                       target_point: Point) -> List[Point]:
    """
    Initial directions of the rays emitted by an optical object.

    Args:
        source_position: Position of the optical object
        optic: The lens or mirror
        rays_mode: One of RaysMode.VALID_MODES
        target_point: Position of the optical image

    Returns:
        List of unit vectors. Empty in 'none' mode.

    Raises:
        ValueError: If rays_mode is not valid.
    """
    if rays_mode not in RaysMode.VALID_MODES:
        raise ValueError(f"Invalid rays_mode '{rays_mode}'. Valid options: {RaysMode.VALID_MODES}")

    directions: List[Point] = []
    source_optic_vector = geometry.subtract(optic.position, source_position)

    if rays_mode == RaysMode.MARGINAL:
        # through the center, the top and the bottom of the optic
        top_point = optic.get_top_point(source_position, target_point)
        bottom_point = optic.get_bottom_point(source_position, target_point)
        directions.append(geometry.normalize_vec(source_optic_vector))
        directions.append(geometry.normalize_vec(geometry.subtract(top_point, source_position)))
        directions.append(geometry.normalize_vec(geometry.subtract(bottom_point, source_position)))

    elif rays_mode == RaysMode.PRINCIPAL:
        # parallel to the optical axis
        directions.append(geometry.point(1, 0))

        # through the center of the optic
        directions.append(geometry.normalize_vec(source_optic_vector))

        # through the first focal point, pointing to the right
        focal_length = optic.focal_length
        if math.isinf(focal_length):
            # no focal point: the limit of the focal ray is parallel to the axis
            directions.append(geometry.point(1, 0))
        else:
            source_focal_vector = geometry.translate(source_optic_vector, -focal_length, 0)
            if source_focal_vector.x < 0:
                source_focal_vector = geometry.negate(source_focal_vector)
            directions.append(geometry.normalize_vec(source_focal_vector))

    elif rays_mode == RaysMode.MANY:
        # a fan of equally spaced rays
        delta_theta = -2 * MANY_RAYS_HALF_ANGLE / (MANY_RAYS_COUNT - 1)
        for i in range(MANY_RAYS_COUNT):
            directions.append(geometry.polar(1, MANY_RAYS_HALF_ANGLE + i * delta_theta))

    return directions


class LightRays:
    """
    All the light rays emitted by one optical object, at one moment of the animation.

    Attributes:
        light_rays (List[LightRay]): One traced LightRay per initial direction
        real_segments (List[LightRaySegment]): Real segments of all rays
        virtual_segments (List[LightRaySegment]): Virtual segments of all rays
        is_image_visible (bool): Whether the optical image should be shown.
            The image is not visible until a ray reaches it, except in 'none'
            mode where there are no rays to wait for.
    """

    def __init__(self, source_position: Point, optic: 'Optic', optical_image: 'OpticalImage', rays_mode: str,
                 time: float, projection_screen: Optional['ProjectionScreen'] = None,
                 light_speed: float = LIGHT_SPEED, verbose: int = 0) -> None:
        target_point = optical_image.position
        is_image_virtual = optical_image.is_virtual
        directions = get_ray_directions(source_position, optic, rays_mode, target_point)

        self.light_rays: List[LightRay] = []
        self.real_segments: List[LightRaySegment] = []
        self.virtual_segments: List[LightRaySegment] = []
        self.is_image_visible: bool = (rays_mode == RaysMode.NONE)

        for direction in directions:
            light_ray = LightRay(source_position, direction, optic, target_point, is_image_virtual, rays_mode,
                                 time, projection_screen=projection_screen, light_speed=light_speed,
                                 verbose=verbose)
            if light_ray.has_reached_target:
                self.is_image_visible = True
            self.light_rays.append(light_ray)
            self.real_segments.extend(light_ray.real_segments)
            self.virtual_segments.extend(light_ray.virtual_segments)

        if verbose >= 1:
            logger.debug("LightRays (%s): %d rays, %d real segments, %d virtual segments, image visible=%s",
                         rays_mode, len(self.light_rays), len(self.real_segments),
                         len(self.virtual_segments), self.is_image_visible)

    def __repr__(self) -> str:
        return (f"LightRays(rays={len(self.light_rays)}, real_segments={len(self.real_segments)}, "
                f"virtual_segments={len(self.virtual_segments)}, is_image_visible={self.is_image_visible})")
