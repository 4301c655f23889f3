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
Lens Demo - Real and Virtual Images

Traces the marginal rays of a converging lens in three scenes:
- object outside the focal length: real, inverted image, light spot on a screen
- object inside the focal length: virtual image, rays extended backward
- two objects in front of a lens set by its focal length, with guides

Each run is written as an SVG frame sequence plus CSV/JSON segment exports
next to this script.
"""

import sys
import os
import logging

# Add parent directories to path to import geometric_optics_shapely
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from geometric_optics_shapely.core.geometry import geometry
from geometric_optics_shapely.core.optic import Lens
from geometric_optics_shapely.core.projection_screen import ProjectionScreen
from geometric_optics_shapely.core.scene import Scene
from geometric_optics_shapely.core.svg_renderer import SVGRenderer
from geometric_optics_shapely.analysis.saving import save_segments_csv, save_segments_json


FRAME_TIMES = [0.25, 0.5, 0.75, 1.0, 1.5]


def run(scene, output_dir, show_guides=False):
    os.makedirs(output_dir, exist_ok=True)

    print(f"\n{scene.name}")
    print("-" * 60)
    print(f"  {scene.optic!r}")
    print(f"  Focal length: {scene.optic.focal_length:.2f} cm")
    image = scene.optical_image()
    print(f"  {image!r}")

    light_rays = None
    for frame, t in enumerate(FRAME_TIMES):
        scene.reset_time()
        scene.step(t)
        light_rays = scene.trace()

        renderer = SVGRenderer(width=800, height=400, viewbox=(-250, -150, 550, 300))
        renderer.draw_scene(scene, light_rays, show_guides=show_guides)
        svg_file = os.path.join(output_dir, f'frame_{frame:02d}.svg')
        renderer.save(svg_file)
        print(f"  t={t:.2f} s: {len(light_rays.real_segments)} real, "
              f"{len(light_rays.virtual_segments)} virtual segments, "
              f"image visible={light_rays.is_image_visible}")

    light_spot = scene.light_spot()
    if light_spot is not None:
        print(f"  {light_spot!r}")

    csv_file = save_segments_csv(light_rays, output_dir)
    json_file = save_segments_json(light_rays, output_dir, scene=scene)
    print(f"  Segments exported to: {csv_file} and {json_file}")


def main():
    print("Lens Demo - Real and Virtual Images, Two Objects")
    print("=" * 60)

    base_dir = os.path.dirname(__file__)

    real_scene = Scene(
        Lens(radius_of_curvature=50, index_of_refraction=1.5, diameter=80),
        object_position=geometry.point(-100, 20),
        projection_screen=ProjectionScreen(geometry.point(150, 0)),
        verbose=1,
    )
    real_scene.name = 'Real image'
    run(real_scene, os.path.join(base_dir, 'output_real'))

    virtual_scene = Scene(
        Lens(radius_of_curvature=50, index_of_refraction=1.5, diameter=80),
        object_position=geometry.point(-40, 10),
        verbose=1,
    )
    virtual_scene.name = 'Virtual image'
    run(virtual_scene, os.path.join(base_dir, 'output_virtual'))

    two_objects_scene = Scene(
        Lens(focal_length_model=Lens.DIRECT, focal_length_magnitude=60),
        object_position=geometry.point(-170, 20),
        second_object_position=geometry.point(-170, -20),
        projection_screen=ProjectionScreen(geometry.point(200, 0)),
    )
    two_objects_scene.name = 'Two objects with guides'
    run(two_objects_scene, os.path.join(base_dir, 'output_two_objects'), show_guides=True)


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    main()
