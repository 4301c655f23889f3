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
import uuid as uuid_module
from typing import List, Optional

from .geometry import geometry, Point
from .optic import Optic, Lens
from .optical_image import OpticalImage
from .projection_screen import ProjectionScreen
from .light_rays import LightRays, RaysMode
from .light_spot import LightSpot
from .guide import Guides
from .constants import (
    LIGHT_SPEED,
    MIN_LIGHT_SPEED,
    MIN_DISTANCE_FROM_OBJECT_TO_OPTIC,
    MIN_DISTANCE_FROM_OPTIC_TO_PROJECTION_SCREEN,
)

logger = logging.getLogger(__name__)


class Scene:
    """
    Container for an optic, an optical object and the animation settings.

    The scene owns the animation clock. Each call to trace() recomputes the
    rays from the current state; nothing is cached between calls.

    Attributes:
        optic (Optic): The lens or mirror
        object_position (Point): Position of the optical object
        second_object_position (Point or None): Position of an optional second
            light source. It gets its own image, rays, light spot and guides.
        projection_screen (ProjectionScreen or None): Screen that stops transmitted light
        rays_mode (str): Ray representation mode ('marginal', 'principal', 'many', 'none')
        light_speed (float): Speed of light for the animation, in cm/s
        time (float): Elapsed animation time, in seconds
        verbose (int): Verbosity level (default: 0)
            0 = silent
            1 = ray-level info
            2 = detailed geometry
        name (str or None): Optional name for the scene (used in exports)

    Placement constraints:
        Each object must stay at least MIN_DISTANCE_FROM_OBJECT_TO_OPTIC to
        the left of the optic, and the screen at least
        MIN_DISTANCE_FROM_OPTIC_TO_PROJECTION_SCREEN to its right.
    """

    VALID_RAYS_MODES = RaysMode.VALID_MODES

    DEFAULT_OBJECT_POSITION = (-170.0, 27.0)
    DEFAULT_SECOND_OBJECT_POSITION = (-170.0, -20.0)

    def __init__(self, optic: Optional[Optic] = None, object_position: Optional[Point] = None,
                 projection_screen: Optional[ProjectionScreen] = None, rays_mode: str = RaysMode.MARGINAL,
                 light_speed: float = LIGHT_SPEED, second_object_position: Optional[Point] = None,
                 verbose: int = 0) -> None:
        """
        Initialize a scene. A default Lens is used when no optic is given.

        Raises:
            ValueError: If a setting is invalid or a placement constraint is violated.
        """
        self.optic = optic if optic is not None else Lens()
        self._object_position = geometry.point(*self.DEFAULT_OBJECT_POSITION)
        self.object_position = object_position if object_position is not None else self._object_position
        self._second_object_position = None
        self.second_object_position = second_object_position
        self._projection_screen = None
        self.projection_screen = projection_screen
        self.rays_mode = rays_mode
        self.light_speed = light_speed
        self._time = 0.0
        self.verbose = verbose
        self.name = None

        self._uuid: str = str(uuid_module.uuid4())

    @property
    def uuid(self) -> str:
        """Unique identifier of the scene, useful to correlate exports."""
        return self._uuid

    # =========================================================================
    # Validated settings
    # =========================================================================

    @property
    def object_position(self) -> Point:
        """Get the position of the optical object."""
        return self._object_position

    @object_position.setter
    def object_position(self, value: Point) -> None:
        """Set the position of the optical object with validation."""
        self._check_object_position(value)
        self._object_position = value

    @property
    def second_object_position(self) -> Optional[Point]:
        """Get the position of the second light source, None if there is none."""
        return self._second_object_position

    @second_object_position.setter
    def second_object_position(self, value: Optional[Point]) -> None:
        """Set (or remove, with None) the second light source with validation."""
        if value is not None:
            self._check_object_position(value)
        self._second_object_position = value

    @property
    def object_positions(self) -> List[Point]:
        """Positions of all optical objects, the first object first."""
        positions = [self._object_position]
        if self._second_object_position is not None:
            positions.append(self._second_object_position)
        return positions

    @property
    def projection_screen(self) -> Optional[ProjectionScreen]:
        return self._projection_screen

    @projection_screen.setter
    def projection_screen(self, value: Optional[ProjectionScreen]) -> None:
        """Set (or remove, with None) the projection screen with validation."""
        if value is not None:
            self._check_screen_position(value.position)
        self._projection_screen = value

    @property
    def rays_mode(self) -> str:
        """Get the ray representation mode."""
        return self._rays_mode

    @rays_mode.setter
    def rays_mode(self, value: str) -> None:
        """Set the ray representation mode with validation."""
        if value not in self.VALID_RAYS_MODES:
            raise ValueError(
                f"Invalid rays_mode '{value}'. "
                f"Valid options: {self.VALID_RAYS_MODES}"
            )
        self._rays_mode = value

    @property
    def light_speed(self) -> float:
        return self._light_speed

    @light_speed.setter
    def light_speed(self, value: float) -> None:
        """
        Set the light speed with validation.

        Raises:
            ValueError: If value is not a finite number of at least MIN_LIGHT_SPEED cm/s.
        """
        if not isinstance(value, (int, float)) or not math.isfinite(value) or value < MIN_LIGHT_SPEED:
            raise ValueError(f"light_speed must be a finite number >= {MIN_LIGHT_SPEED}, got {value}")
        self._light_speed = float(value)

    @property
    def time(self) -> float:
        """Elapsed animation time, in seconds."""
        return self._time

    @time.setter
    def time(self, value: float) -> None:
        if not isinstance(value, (int, float)) or not math.isfinite(value) or value < 0:
            raise ValueError(f"time must be a finite non-negative number, got {value}")
        self._time = float(value)

    def _check_object_position(self, position: Point) -> None:
        max_x = self.optic.position.x - MIN_DISTANCE_FROM_OBJECT_TO_OPTIC
        if position.x > max_x:
            raise ValueError(
                f"object must be at least {MIN_DISTANCE_FROM_OBJECT_TO_OPTIC} cm to the left of the optic "
                f"(x <= {max_x}), got x={position.x}"
            )

    def _check_screen_position(self, position: Point) -> None:
        min_x = self.optic.position.x + MIN_DISTANCE_FROM_OPTIC_TO_PROJECTION_SCREEN
        if position.x < min_x:
            raise ValueError(
                f"projection screen must be at least {MIN_DISTANCE_FROM_OPTIC_TO_PROJECTION_SCREEN} cm "
                f"to the right of the optic (x >= {min_x}), got x={position.x}"
            )

    def validate(self) -> None:
        """
        Re-check the placement constraints.

        The optic and the screen can be moved after they were handed to the
        scene, so this runs before every trace.

        Raises:
            ValueError: If a placement constraint is violated.
        """
        for position in self.object_positions:
            self._check_object_position(position)
        if self._projection_screen is not None:
            self._check_screen_position(self._projection_screen.position)

    # =========================================================================
    # Animation clock
    # =========================================================================

    def step(self, dt: float) -> float:
        """
        Advance the animation clock.

        Args:
            dt: Time step in seconds, non-negative

        Returns:
            The new elapsed time

        Raises:
            ValueError: If dt is negative.
        """
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        self.time = self._time + dt
        return self._time

    def reset_time(self) -> None:
        """Rewind the animation, e.g. when anything in the scene changes."""
        self._time = 0.0

    def reset(self) -> None:
        """
        Restore the optic, the objects, the screen and the clock to their defaults.

        A second object stays in the scene, back at its default position.
        """
        self.optic.reset()
        self._object_position = geometry.point(*self.DEFAULT_OBJECT_POSITION)
        if self._second_object_position is not None:
            self._second_object_position = geometry.point(*self.DEFAULT_SECOND_OBJECT_POSITION)
        if self._projection_screen is not None:
            self._projection_screen.reset()
        self.reset_time()

    # =========================================================================
    # Model outputs
    # =========================================================================

    def optical_image(self) -> OpticalImage:
        return OpticalImage(self._object_position, self.optic)

    def optical_images(self) -> List[OpticalImage]:
        """Optical image of each object, in the order of object_positions."""
        return [OpticalImage(position, self.optic) for position in self.object_positions]

    def trace(self) -> LightRays:
        """
        Trace all rays of the first object for the current state of the scene.

        Returns:
            LightRays bundle with the real and virtual segments of every ray

        Raises:
            ValueError: If a placement constraint is violated.
        """
        self.validate()
        return self._trace_object(self._object_position)

    def trace_all(self) -> List[LightRays]:
        """
        Trace the rays of every object.

        Returns:
            One LightRays bundle per object, in the order of object_positions

        Raises:
            ValueError: If a placement constraint is violated.
        """
        self.validate()
        return [self._trace_object(position) for position in self.object_positions]

    def _trace_object(self, object_position: Point) -> LightRays:
        if self.verbose >= 1:
            logger.debug("Scene %s: tracing %s rays from (%.2f, %.2f) at t=%.4f s with %r",
                         self.name or self._uuid, self._rays_mode, object_position.x, object_position.y,
                         self._time, self.optic)
        return LightRays(object_position, self.optic, OpticalImage(object_position, self.optic),
                         self._rays_mode, self._time, projection_screen=self._projection_screen,
                         light_speed=self._light_speed, verbose=self.verbose)

    def light_spot(self) -> Optional[LightSpot]:
        """
        Light spot of the first object on the projection screen.

        Returns:
            LightSpot, or None if there is no screen or the optic is not a lens
        """
        spots = self.light_spots()
        return spots[0] if spots else None

    def light_spots(self) -> List[LightSpot]:
        """Light spot of each object, empty if there is no screen or the optic is not a lens."""
        if self._projection_screen is None or not self.optic.is_lens:
            return []
        self.validate()
        return [LightSpot(self.optic, self._projection_screen, position, OpticalImage(position, self.optic).position)
                for position in self.object_positions]

    def guides(self) -> List[Guides]:
        """Top and bottom guides of each object, empty if the optic is not a lens."""
        if not self.optic.is_lens:
            return []
        return [Guides(self.optic, position) for position in self.object_positions]

    def __repr__(self) -> str:
        return (f"Scene(optic={self.optic!r}, object_position=({self._object_position.x}, "
                f"{self._object_position.y}), rays_mode='{self._rays_mode}', time={self._time})")
