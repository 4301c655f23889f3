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
Ray tracer for a single light ray.

A LightRay follows one ray emitted by an optical object: it hits the optic,
is refracted (lens) or reflected (mirror) toward the optical image given by
the thin lens / mirror equation, and may be stopped by a projection screen.
The rays are then cut into drawable segments according to how far light has
traveled since the animation started.

Rays are not physically refracted at each surface. The direction of the
transmitted ray is forced through the image position, which is exact for a
thin lens and a parabolic mirror, and is what the drawing needs.
"""

import logging
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from shapely.geometry import LineString

from .geometry import geometry, Point
from .ray import GORay
from .intersection import intersect
from .constants import LIGHT_SPEED

if TYPE_CHECKING:
    from .optic import Optic
    from .projection_screen import ProjectionScreen

logger = logging.getLogger(__name__)

PRINCIPAL = 'principal'


class LightRaySegment:
    """
    A drawable line segment of a light ray.

    Attributes:
        start (Point): Start of the segment
        end (Point): End of the segment
    """

    def __init__(self, start: Point, end: Point) -> None:
        self.start = start
        self.end = end

    @property
    def length(self) -> float:
        return geometry.distance(self.start, self.end)

    def to_shapely(self) -> LineString:
        return geometry.line(self.start, self.end).to_shapely()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {'start': self.start.to_dict(), 'end': self.end.to_dict()}

    def __repr__(self) -> str:
        return (f"LightRaySegment(start=({self.start.x:.4f}, {self.start.y:.4f}), "
                f"end=({self.end.x:.4f}, {self.end.y:.4f}))")


class LightRay:
    """
    The real and virtual paths of one light ray, at one moment of the animation.

    Everything is computed at construction and never mutated afterwards.

    Attributes:
        real_rays (List[GORay]): Incident, optional internal, and transmitted rays.
            Only the incident ray is present if the ray misses the optic.
        virtual_ray (GORay or None): Backward extension of the last real ray
            toward a virtual image
        real_segments (List[LightRaySegment]): Drawable parts of the real rays
        virtual_segments (List[LightRaySegment]): Drawable part of the virtual ray (0 or 1)
        has_reached_target (bool): Whether light has reached the image (or the screen)
        distance_traveled (float): Distance light has traveled since time 0
    """

    def __init__(self, object_point: Point, direction: Point, optic: 'Optic', target_point: Point,
                 is_image_virtual: bool, rays_mode: str, time: float,
                 projection_screen: Optional['ProjectionScreen'] = None,
                 light_speed: float = LIGHT_SPEED, verbose: int = 0) -> None:
        """
        Trace one light ray.

        Args:
            object_point: Position of the optical object, where the ray starts
            direction: Initial unit direction of the ray
            optic: The lens or mirror
            target_point: Position of the optical image, where all rays focus
            is_image_virtual: Whether the optical image is virtual
            rays_mode: Ray representation mode. Only 'principal' changes how
                rays are traced (they are redirected at the optic's vertical axis).
            time: Elapsed animation time, in seconds
            projection_screen: Optional screen that stops the transmitted ray
            light_speed: Speed of light for the animation, in cm/s
            verbose: Verbosity level (default: 0)
                0 = silent
                1 = ray-level info
                2 = detailed geometry

        Raises:
            ValueError: If time is negative.
        """
        if time < 0:
            raise ValueError(f"time must be non-negative, got {time}")

        self.verbose = verbose
        self.real_segments: List[LightRaySegment] = []
        self.virtual_segments: List[LightRaySegment] = []

        self.distance_traveled: float = light_speed * time

        is_principal_rays_mode = (rays_mode == PRINCIPAL)
        initial_ray = GORay(object_point, direction)

        # None if the ray misses the optic
        first_point = self._get_first_point(initial_ray, optic, is_principal_rays_mode)

        self.real_rays: List[GORay] = self._get_real_rays(
            initial_ray, first_point, optic, is_principal_rays_mode, target_point)

        if projection_screen is not None:
            self._set_final_point_projection_screen(self.real_rays, projection_screen.get_bisector_line_translated())

        self.has_virtual_ray: bool = is_image_virtual and len(self.real_rays) > 1
        self.virtual_ray: Optional[GORay] = (self._get_virtual_ray(self.real_rays, target_point)
                                             if self.has_virtual_ray else None)

        self.has_reached_target: bool = self._get_has_reached_target(object_point, target_point, projection_screen)

        self._rays_to_segments(self.distance_traveled)

        if self.verbose >= 1:
            logger.debug("LightRay: %d real rays, virtual=%s, reached target=%s, %d real segments",
                         len(self.real_rays), self.virtual_ray is not None,
                         self.has_reached_target, len(self.real_segments))

    # =========================================================================
    # Ray construction
    # =========================================================================

    def _get_first_point(self, initial_ray: GORay, optic: 'Optic', is_principal_rays_mode: bool) -> Optional[Point]:
        first_point = intersect(initial_ray, optic.get_front_shape(is_principal_rays_mode))
        if self.verbose >= 2:
            logger.debug("  first point: %s", first_point)
        return first_point

    def _get_real_rays(self, initial_ray: GORay, first_point: Optional[Point], optic: 'Optic',
                       is_principal_rays_mode: bool, target_point: Point) -> List[GORay]:
        """
        All the real rays of the light ray.

        The transmitted ray (last ray) is semi-infinite. It may later be
        truncated by a projection screen.
        """
        rays = [initial_ray]

        if first_point is None:
            return rays

        initial_ray.set_final_point(first_point)

        # a mirror, or any optic in principal mode, has a single surface to hit
        if optic.is_mirror or is_principal_rays_mode:
            rays.append(self._get_transmitted_ray(first_point, target_point, optic))
            return rays

        # lens: find where the ray leaves the glass by aiming from the lens' vertical axis at the image
        intermediate_point = self._get_intermediate_point(initial_ray, first_point, optic)
        aiming_ray = self._get_transmitted_ray(intermediate_point, target_point, optic)
        back_point = intersect(aiming_ray, optic.get_back_shape())

        if self.verbose >= 2:
            logger.debug("  intermediate point: %s, back point: %s", intermediate_point, back_point)

        if back_point is not None:
            internal_ray = GORay(first_point, geometry.normalize_vec(geometry.subtract(back_point, first_point)))
            internal_ray.set_final_point(back_point)
            rays.append(internal_ray)
            rays.append(self._get_transmitted_ray(back_point, target_point, optic))
        else:
            # the back surface is missed: transmit directly from the front point
            rays.append(self._get_transmitted_ray(first_point, target_point, optic))

        return rays

    @staticmethod
    def _get_intermediate_point(initial_ray: GORay, first_point: Point, optic: 'Optic') -> Point:
        """Point along the initial ray that is on the vertical line through the optic's position."""
        optic_source_vector = geometry.subtract(optic.position, initial_ray.origin)
        first_source_vector = geometry.subtract(first_point, initial_ray.origin)
        return geometry.blend(initial_ray.origin, first_point, optic_source_vector.x / first_source_vector.x)

    @staticmethod
    def _get_transmitted_ray(origin_point: Point, target_point: Point, optic: 'Optic') -> GORay:
        """
        Semi-infinite ray starting at origin_point, along (or opposite to) the direction of target_point.

        Real rays only propagate to the right for a lens and to the left for a mirror.
        """
        direction = geometry.normalize_vec(geometry.subtract(origin_point, target_point))
        if (optic.is_lens and direction.x < 0) or (optic.is_mirror and direction.x > 0):
            direction = geometry.negate(direction)
        return GORay(origin_point, direction)

    @staticmethod
    def _set_final_point_projection_screen(real_rays: List[GORay], bisector_line: LineString) -> None:
        """The screen can only stop the last ray."""
        last_ray = real_rays[-1]
        point_on_screen = intersect(last_ray, bisector_line)
        if point_on_screen is not None:
            last_ray.set_final_point(point_on_screen)

    @staticmethod
    def _get_virtual_ray(real_rays: List[GORay], target_point: Point) -> Optional[GORay]:
        """
        Ray opposite to the last real ray, ending at the target point.

        Returns None if the target point is not along that ray.
        """
        last_ray = real_rays[-1]
        virtual_ray = GORay(last_ray.origin, geometry.negate(last_ray.direction))
        if not virtual_ray.is_point_along_ray(target_point):
            return None
        virtual_ray.set_final_point(target_point)
        return virtual_ray

    # =========================================================================
    # Animation
    # =========================================================================

    def _get_has_reached_target(self, object_point: Point, target_point: Point,
                                projection_screen: Optional['ProjectionScreen']) -> bool:
        """
        Whether light has traveled far enough to reach the target.

        With a screen, the target is the plane of the screen: the horizontal
        distance from the object to the screen is used, so that light looks
        like a wavefront reaching the screen. Without a screen, the target is
        the image, reached along the real rays and then the target ray.

        Only a ray that has been refracted (or reflected) can reach the target.
        """
        if len(self.real_rays) <= 1:
            return False

        if projection_screen is not None:
            distance = projection_screen.position.x - object_point.x
            return self.distance_traveled >= distance

        # the last real ray is semi-infinite
        distance = sum(ray.length for ray in self.real_rays[:-1])

        # a virtual image is along the virtual ray, a real image along the last real ray
        target_ray = self.virtual_ray if self.virtual_ray is not None else self.real_rays[-1]
        distance += target_ray.distance_to(target_point)

        return self.distance_traveled > distance

    def _rays_to_segments(self, distance_traveled: float) -> None:
        """Convert rays to line segments, up to the distance traveled."""
        remaining_distance = distance_traveled

        i = 0
        while remaining_distance > 0 and i < len(self.real_rays):
            real_ray = self.real_rays[i]

            real_ray_distance = min(remaining_distance, real_ray.length)
            self.real_segments.append(LightRaySegment(real_ray.origin, real_ray.point_at_distance(real_ray_distance)))

            # the virtual ray starts where the real ray being processed starts
            if self.virtual_ray is not None and self.virtual_ray.origin is real_ray.origin:
                virtual_ray_distance = min(remaining_distance, self.virtual_ray.length)
                self.virtual_segments.append(LightRaySegment(
                    self.virtual_ray.origin, self.virtual_ray.point_at_distance(virtual_ray_distance)))

            remaining_distance -= real_ray_distance
            i += 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'real_segments': [segment.to_dict() for segment in self.real_segments],
            'virtual_segments': [segment.to_dict() for segment in self.virtual_segments],
            'has_reached_target': self.has_reached_target,
        }

    def __repr__(self) -> str:
        return (f"LightRay(real_rays={len(self.real_rays)}, virtual={self.virtual_ray is not None}, "
                f"real_segments={len(self.real_segments)}, virtual_segments={len(self.virtual_segments)}, "
                f"has_reached_target={self.has_reached_target})")


def trace_ray(object_point: Point, direction: Point, optic: 'Optic', target_point: Point,
              is_image_virtual: bool, rays_mode: str, time: float,
              projection_screen: Optional['ProjectionScreen'] = None,
              light_speed: float = LIGHT_SPEED, verbose: int = 0) -> LightRay:
    """
    Trace one light ray at one moment of the animation.

    Call this whenever the object, the optic, the image, the rays mode or the
    time changes. Nothing is cached between calls.

    Returns:
        LightRay holding real_segments, virtual_segments and has_reached_target
    """
    return LightRay(object_point, direction, optic, target_point, is_image_virtual, rays_mode, time,
                    projection_screen=projection_screen, light_speed=light_speed, verbose=verbose)
