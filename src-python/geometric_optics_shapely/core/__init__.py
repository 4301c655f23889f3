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

from .geometry import geometry, Point, Line, Geometry
from . import constants
from .ray import GORay
from .intersection import intersect
from .optic_geometry import CONVEX, CONCAVE, FLAT, OpticShapes, compute_focal_length, compute_boundary_curves
from .optic import Optic, Lens, Mirror
from .optical_image import OpticalImage
from .projection_screen import ProjectionScreen
from .light_ray import LightRay, LightRaySegment, trace_ray
from .light_rays import LightRays, RaysMode, get_ray_directions
from .light_spot import LightSpot
from .guide import Guide, Guides
from .scene import Scene
from .svg_renderer import SVGRenderer

__all__ = [
    'geometry', 'Point', 'Line', 'Geometry',
    'constants',
    'GORay',
    'intersect',
    'CONVEX', 'CONCAVE', 'FLAT', 'OpticShapes', 'compute_focal_length', 'compute_boundary_curves',
    'Optic', 'Lens', 'Mirror',
    'OpticalImage',
    'ProjectionScreen',
    'LightRay', 'LightRaySegment', 'trace_ray',
    'LightRays', 'RaysMode', 'get_ray_directions',
    'LightSpot',
    'Guide', 'Guides',
    'Scene',
    'SVGRenderer'
]
