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
from typing import Iterable, Optional, TYPE_CHECKING

import svgwrite
from shapely.geometry import LineString, Polygon
from shapely.geometry.base import BaseGeometry

from .geometry import Point

if TYPE_CHECKING:
    from .guide import Guides
    from .light_ray import LightRaySegment
    from .light_rays import LightRays
    from .light_spot import LightSpot
    from .optic import Optic
    from .optical_image import OpticalImage
    from .projection_screen import ProjectionScreen
    from .scene import Scene


REAL_RAY_COLOR = 'rgb(255, 255, 0)'
VIRTUAL_RAY_COLOR = 'rgb(255, 165, 0)'
VIRTUAL_RAY_DASH = '6, 4'


class SVGRenderer:
    """
    SVG renderer for the geometric optics model.

    The SVG is organized into three layers, bottom to top:
    - objects: optic, projection screen, light spot, object and image points
    - rays: real and virtual ray segments
    - labels: text annotations

    Coordinate System:
        The renderer uses a Y-up coordinate system (positive Y points upward),
        which matches the model. This is achieved by applying a vertical flip
        transformation to each layer.

    Attributes:
        width (int): Canvas width in pixels
        height (int): Canvas height in pixels
        viewbox (tuple): SVG viewBox (min_x, min_y, width, height), Y-down
        dwg (svgwrite.Drawing): The SVG drawing object
    """

    def __init__(self, width=800, height=600, viewbox=None, background='black'):
        """
        Initialize the SVG renderer.

        Args:
            width (int): Canvas width in pixels (default: 800)
            height (int): Canvas height in pixels (default: 600)
            viewbox (tuple or None): Model area as (min_x, min_y, width, height), in
                Y-up coordinates. If None, the area is centered on the origin.
            background (str): Background color (default: 'black', so that light is visible)
        """
        self.width = width
        self.height = height
        self.user_viewbox = viewbox if viewbox is not None else (-width / 2, -height / 2, width, height)

        # Convert the Y-up viewbox to SVG's Y-down viewbox
        min_x, min_y, vb_width, vb_height = self.user_viewbox
        self.viewbox = (min_x, -(min_y + vb_height), vb_width, vb_height)

        self.dwg = svgwrite.Drawing(size=(f'{width}px', f'{height}px'), profile='full', debug=False)
        self.dwg.viewbox(*self.viewbox)

        self.dwg.add(self.dwg.rect(
            insert=(self.viewbox[0], self.viewbox[1]),
            size=(self.viewbox[2], self.viewbox[3]),
            fill=background
        ))

        self.layer_objects = self.dwg.add(self.dwg.g(id='layer-objects', transform='scale(1, -1)'))
        self.layer_rays = self.dwg.add(self.dwg.g(id='layer-rays', transform='scale(1, -1)'))
        self.layer_labels = self.dwg.add(self.dwg.g(id='layer-labels', transform='scale(1, -1)'))

    @staticmethod
    def _normalize_coord(value: float) -> float:
        """Map negative zero and values very close to zero to 0.0."""
        if value == 0.0 or abs(value) < 1e-10:
            return 0.0
        return value

    def _coords(self, geom: BaseGeometry):
        return [(self._normalize_coord(x), self._normalize_coord(y)) for x, y in geom.coords]

    # =========================================================================
    # Primitives
    # =========================================================================

    def draw_segment(self, segment: 'LightRaySegment', color=REAL_RAY_COLOR, stroke_width=1.0,
                     dasharray=None, css_class='ray'):
        """
        Draw a ray segment.

        Segments with non-finite coordinates are skipped.
        """
        start, end = segment.start, segment.end
        if not all(math.isfinite(v) for v in (start.x, start.y, end.x, end.y)):
            return

        line = self.dwg.line(
            start=(self._normalize_coord(start.x), self._normalize_coord(start.y)),
            end=(self._normalize_coord(end.x), self._normalize_coord(end.y)),
            stroke=color,
            stroke_width=stroke_width,
        )
        line['class'] = css_class
        if dasharray:
            line['stroke-dasharray'] = dasharray
        self.layer_rays.add(line)

    def draw_polyline(self, line: LineString, color='white', stroke_width=1.0, dasharray=None, css_class=None):
        """Draw an open Shapely LineString."""
        if line.is_empty:
            return
        polyline = self.dwg.polyline(points=self._coords(line), stroke=color,
                                     stroke_width=stroke_width, fill='none')
        if dasharray:
            polyline['stroke-dasharray'] = dasharray
        if css_class:
            polyline['class'] = css_class
        self.layer_objects.add(polyline)

    def draw_polygon(self, polygon: BaseGeometry, fill='cyan', fill_opacity=0.3, stroke='white',
                     stroke_width=1.0, css_class=None):
        """
        Draw a Shapely Polygon (or MultiPolygon) by its exterior.

        Empty geometries are skipped.
        """
        if polygon.is_empty:
            return
        parts = polygon.geoms if hasattr(polygon, 'geoms') else [polygon]
        for part in parts:
            if not isinstance(part, Polygon) or part.is_empty:
                continue
            element = self.dwg.polygon(points=self._coords(part.exterior), fill=fill, fill_opacity=fill_opacity,
                                       stroke=stroke, stroke_width=stroke_width)
            if css_class:
                element['class'] = css_class
            self.layer_objects.add(element)

    def draw_point(self, point: Point, color='white', radius=3, label=None):
        """
        Draw a point (circle).

        Args:
            point (Point): Position of the point
            color (str): Fill color (default: 'white')
            radius (float): Circle radius (default: 3)
            label (str or None): Optional text label to show near point
        """
        x = self._normalize_coord(point.x)
        y = self._normalize_coord(point.y)
        self.layer_objects.add(self.dwg.circle(center=(x, y), r=radius, fill=color))

        if label:
            vertical_offset = 8 * 0.35
            self.layer_labels.add(self.dwg.text(
                label,
                insert=(x + radius + 2, -(y - radius - 2) + vertical_offset),
                fill=color,
                font_size='8px',
                font_family='sans-serif',
                transform='scale(1, -1)'  # flip text back to be readable
            ))

    # =========================================================================
    # Model elements
    # =========================================================================

    def draw_optic(self, optic: 'Optic', show_axis=True, show_focal_points=True):
        """Draw an optic's outline, its optical axis and its focal points."""
        shapes = optic.shapes
        if show_axis:
            min_x, _, vb_width, _ = self.user_viewbox
            axis = LineString([(min_x, optic.position.y), (min_x + vb_width, optic.position.y)])
            self.draw_polyline(axis, color='gray', stroke_width=0.5, dasharray='20, 5, 5, 5', css_class='optical-axis')

        if optic.is_lens:
            self.draw_polygon(shapes.outline, fill='rgb(173, 216, 230)', fill_opacity=0.4, css_class='lens')
        else:
            self.draw_polygon(shapes.outline, fill='gray', fill_opacity=0.8, stroke='gray', css_class='mirror-backing')
            self.draw_polyline(shapes.front, color='white', stroke_width=1.5, css_class='mirror')

        if show_focal_points:
            for focal_point in (optic.left_focal_point, optic.right_focal_point):
                if focal_point is not None:
                    self.draw_point(focal_point, color='orange', radius=2)

    def draw_projection_screen(self, screen: 'ProjectionScreen'):
        self.draw_polygon(screen.get_screen_shape_translated(), fill='white', fill_opacity=0.9,
                          stroke='gray', css_class='projection-screen')

    def draw_light_spot(self, light_spot: 'LightSpot'):
        """Draw the light spot on the screen, with opacity given by its intensity."""
        self.draw_polygon(light_spot.shape, fill='yellow', fill_opacity=light_spot.intensity,
                          stroke='none', stroke_width=0, css_class='light-spot')

    def draw_light_rays(self, light_rays: 'LightRays', stroke_width=1.0):
        """Draw real segments as solid lines and virtual segments dashed."""
        for segment in light_rays.real_segments:
            self.draw_segment(segment, color=REAL_RAY_COLOR, stroke_width=stroke_width, css_class='real-ray')
        for segment in light_rays.virtual_segments:
            self.draw_segment(segment, color=VIRTUAL_RAY_COLOR, stroke_width=stroke_width,
                              dasharray=VIRTUAL_RAY_DASH, css_class='virtual-ray')

    def draw_optical_image(self, optical_image: 'OpticalImage', label=True):
        text = optical_image.image_type if label else None
        self.draw_point(optical_image.position, color='rgb(255, 0, 255)', radius=3, label=text)

    def draw_guides(self, guides: 'Guides', color='rgb(0, 200, 0)', stroke_width=1.0):
        """Draw the incident and transmitted arms of a pair of guides."""
        for guide in guides:
            self.draw_polyline(guide.incident_arm(), color=color, stroke_width=stroke_width, css_class='guide')
            self.draw_polyline(guide.transmitted_arm(), color=color, stroke_width=stroke_width, css_class='guide')
            self.draw_point(guide.fulcrum_position, color=color, radius=2)

    def draw_scene(self, scene: 'Scene', light_rays: Optional['LightRays'] = None, show_image: Optional[bool] = None,
                   show_guides=False):
        """
        Draw a complete scene, including the second object if there is one.

        Args:
            scene (Scene): The scene to draw
            light_rays (LightRays or None): Traced rays of the first object. If None,
                the rays of every object are traced.
            show_image (bool or None): Whether to draw the optical images. If None,
                each image is drawn once light has reached it.
            show_guides (bool): Whether to draw the guides (lens only)
        """
        bundles = scene.trace_all()
        if light_rays is not None:
            bundles[0] = light_rays

        self.draw_optic(scene.optic)

        if scene.projection_screen is not None:
            self.draw_projection_screen(scene.projection_screen)
            for light_spot, bundle in zip(scene.light_spots(), bundles):
                if bundle.is_image_visible:
                    self.draw_light_spot(light_spot)

        if show_guides:
            for guides in scene.guides():
                self.draw_guides(guides)

        labels = ['object', 'object 2']
        for label, position, optical_image, bundle in zip(labels, scene.object_positions,
                                                          scene.optical_images(), bundles):
            self.draw_point(position, color='white', radius=3, label=label)
            is_image_shown = bundle.is_image_visible if show_image is None else show_image
            if is_image_shown:
                self.draw_optical_image(optical_image)
            self.draw_light_rays(bundle)

    def draw_segments(self, segments: Iterable['LightRaySegment'], virtual=False):
        for segment in segments:
            if virtual:
                self.draw_segment(segment, color=VIRTUAL_RAY_COLOR, dasharray=VIRTUAL_RAY_DASH,
                                  css_class='virtual-ray')
            else:
                self.draw_segment(segment, css_class='real-ray')

    def save(self, filename: str = None):
        """
        Save the SVG to a file.

        Args:
            filename (str): Output filename (e.g., 'output.svg')
        """
        if filename is None:
            filename = "output.svg"
        self.dwg.saveas(filename)

    def to_string(self):
        """
        Get the SVG as a string.

        Returns:
            str: SVG content as XML string
        """
        return self.dwg.tostring()
