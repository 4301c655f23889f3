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

from typing import Optional

from shapely.affinity import translate
from shapely.geometry import LineString, Polygon

from .geometry import geometry, Point
from .constants import SCREEN_WIDTH, SCREEN_NEAR_HEIGHT, SCREEN_FAR_HEIGHT


class ProjectionScreen:
    """
    A flat screen that stops the light transmitted by a lens.

    The screen is drawn in pseudo-3D perspective: its left (far) edge is
    shorter than its right (near) edge. Rays are stopped at the vertical
    line that bisects the screen.

    Attributes:
        position (Point): Center of the screen
    """

    DEFAULT_POSITION = (200.0, 0.0)

    def __init__(self, position: Optional[Point] = None) -> None:
        self.position = position if position is not None else geometry.point(*self.DEFAULT_POSITION)

    @staticmethod
    def screen_shape() -> Polygon:
        """Outline of the screen relative to its position, clockwise from the top left."""
        return Polygon([
            (-SCREEN_WIDTH / 2, SCREEN_FAR_HEIGHT / 2),
            (SCREEN_WIDTH / 2, SCREEN_NEAR_HEIGHT / 2),
            (SCREEN_WIDTH / 2, -SCREEN_NEAR_HEIGHT / 2),
            (-SCREEN_WIDTH / 2, -SCREEN_FAR_HEIGHT / 2),
        ])

    @staticmethod
    def bisector_line() -> LineString:
        """Vertical line through the middle of the screen, relative to its position, top to bottom."""
        average_height = (SCREEN_NEAR_HEIGHT + SCREEN_FAR_HEIGHT) / 2
        return LineString([(0.0, average_height / 2), (0.0, -average_height / 2)])

    def get_screen_shape_translated(self) -> Polygon:
        return translate(self.screen_shape(), self.position.x, self.position.y)

    def get_bisector_line_translated(self) -> LineString:
        return translate(self.bisector_line(), self.position.x, self.position.y)

    def reset(self) -> None:
        self.position = geometry.point(*self.DEFAULT_POSITION)

    def __repr__(self) -> str:
        return f"ProjectionScreen(position=({self.position.x}, {self.position.y}))"
