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

Geometric Optics Shapely
========================

Light rays through a lens or a mirror, for teaching geometric optics, using
Shapely for computational geometry.

Main modules:
- core: Optics, optical image, ray tracer, scene and SVG rendering
- analysis: Export of traced segments

Quick start:
    from geometric_optics_shapely import Scene, Lens
    from geometric_optics_shapely.core.geometry import geometry

    scene = Scene(Lens(), object_position=geometry.point(-100, 20))
    scene.step(1.0)
    light_rays = scene.trace()
"""

__version__ = "0.1.0"

# Convenience imports for common usage
from .core.scene import Scene
from .core.optic import Lens, Mirror
from .core.light_ray import LightRay, trace_ray
from .core.light_rays import LightRays

__all__ = [
    'Scene',
    'Lens',
    'Mirror',
    'LightRay',
    'trace_ray',
    'LightRays',
    '__version__',
]
