"""
===============================================================================
OUTPUT TESTS - SVG rendering and segment export
===============================================================================

1. SVG RENDERER
   - Scene rendering with real and virtual rays
   - Y-up viewbox conversion
   - Non-finite segments are skipped
   - Second object and guides

2. SEGMENT EXPORT
   - CSV rows for real and virtual segments
   - JSON export with scene metadata
   - Segment statistics

Run with:
    pytest developer_tests/test_svg_and_saving.py -v
===============================================================================
"""

import sys
import csv
import json
from pathlib import Path

import pytest

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from geometric_optics_shapely.core.geometry import geometry
from geometric_optics_shapely.core.optic import Lens, Mirror
from geometric_optics_shapely.core.optic_geometry import FLAT
from geometric_optics_shapely.core.projection_screen import ProjectionScreen
from geometric_optics_shapely.core.light_ray import LightRaySegment
from geometric_optics_shapely.core.scene import Scene
from geometric_optics_shapely.core.svg_renderer import SVGRenderer
from geometric_optics_shapely.analysis.saving import (
    save_segments_csv,
    save_segments_json,
    get_segment_statistics,
)


def lens_scene(object_position=(-100, 0), **kwargs):
    lens = Lens(radius_of_curvature=50, index_of_refraction=1.5, diameter=80)
    return Scene(lens, object_position=geometry.point(*object_position), **kwargs)


# =============================================================================
# SVG RENDERER
# =============================================================================

def test_viewbox_is_flipped():
    renderer = SVGRenderer(width=400, height=300, viewbox=(-200, -100, 400, 300))
    assert renderer.viewbox == (-200, -200, 400, 300)


def test_render_scene_with_real_rays():
    scene = lens_scene(projection_screen=ProjectionScreen())
    scene.step(1.0)

    renderer = SVGRenderer()
    renderer.draw_scene(scene)
    svg = renderer.to_string()

    assert svg.startswith('<svg')
    assert 'real-ray' in svg
    assert 'virtual-ray' not in svg
    assert 'projection-screen' in svg
    assert 'light-spot' in svg
    assert 'real</text>' in svg


def test_render_scene_with_virtual_rays():
    scene = lens_scene(object_position=(-40, 10))
    scene.step(2.0)

    renderer = SVGRenderer()
    renderer.draw_scene(scene)
    svg = renderer.to_string()

    assert 'virtual-ray' in svg
    assert 'stroke-dasharray' in svg
    assert 'virtual</text>' in svg


def test_render_hides_image_before_light_arrives():
    scene = lens_scene()
    renderer = SVGRenderer()
    renderer.draw_scene(scene)
    assert 'real</text>' not in renderer.to_string()


def test_render_flat_mirror():
    scene = Scene(Mirror(surface_type=FLAT), object_position=geometry.point(-100, 20))
    scene.step(1.0)
    renderer = SVGRenderer()
    renderer.draw_scene(scene)
    svg = renderer.to_string()
    assert 'mirror' in svg
    assert 'virtual-ray' in svg


def test_non_finite_segment_is_skipped():
    renderer = SVGRenderer()
    before = renderer.to_string()
    renderer.draw_segment(LightRaySegment(geometry.point(0, 0), geometry.point(float('inf'), 0)))
    assert renderer.to_string() == before


def test_save_svg(tmp_path):
    scene = lens_scene()
    scene.step(1.0)
    renderer = SVGRenderer()
    renderer.draw_scene(scene)

    output_file = tmp_path / 'scene.svg'
    renderer.save(str(output_file))
    assert output_file.exists()
    assert '<svg' in output_file.read_text(encoding='utf-8')


def test_render_second_object_and_guides():
    scene = lens_scene(second_object_position=geometry.point(-120, -20), projection_screen=ProjectionScreen())
    scene.step(2.0)

    renderer = SVGRenderer()
    renderer.draw_scene(scene, show_guides=True)
    svg = renderer.to_string()

    assert 'object 2</text>' in svg
    assert svg.count('real</text>') == 2
    assert svg.count('class="light-spot"') == 2
    assert 'class="guide"' in svg


def test_render_hides_guides_by_default():
    renderer = SVGRenderer()
    renderer.draw_scene(lens_scene())
    svg = renderer.to_string()
    assert 'guide' not in svg
    assert 'object 2' not in svg


# =============================================================================
# SEGMENT EXPORT
# =============================================================================

def test_save_segments_csv(tmp_path):
    scene = lens_scene(object_position=(-40, 10))
    scene.step(2.0)
    light_rays = scene.trace()

    csv_file = save_segments_csv(light_rays, tmp_path / 'out')
    assert csv_file == tmp_path / 'out' / 'segments.csv'

    with open(csv_file, newline='', encoding='utf-8') as f:
        rows = list(csv.DictReader(f))

    assert len(rows) == len(light_rays.real_segments) + len(light_rays.virtual_segments)
    kinds = {row['kind'] for row in rows}
    assert kinds == {'real', 'virtual'}
    assert rows[0]['ray_index'] == '0'
    assert rows[0]['segment_index'] == '0'
    assert float(rows[0]['start_x']) == pytest.approx(-40)


def test_save_segments_json(tmp_path):
    scene = lens_scene()
    scene.name = 'converging lens'
    scene.step(1.0)
    light_rays = scene.trace()

    json_file = save_segments_json(light_rays, tmp_path, scene=scene)
    data = json.loads(json_file.read_text(encoding='utf-8'))

    assert data['is_image_visible'] is True
    assert len(data['light_rays']) == 3
    assert data['scene']['name'] == 'converging lens'
    assert data['scene']['uuid'] == scene.uuid
    assert data['scene']['focal_length'] == pytest.approx(50)
    assert data['scene']['rays_mode'] == 'marginal'
    assert data['scene']['focal_length_model'] == 'indirect'
    assert data['scene']['second_object_position'] is None


def test_save_segments_json_second_object(tmp_path):
    lens = Lens(focal_length_model=Lens.DIRECT, focal_length_magnitude=60)
    scene = Scene(lens, object_position=geometry.point(-100, 0), second_object_position=geometry.point(-150, -10))
    json_file = save_segments_json(scene.trace(), tmp_path, scene=scene)
    data = json.loads(json_file.read_text(encoding='utf-8'))
    assert data['scene']['focal_length_model'] == 'direct'
    assert data['scene']['focal_length'] == pytest.approx(60)
    assert data['scene']['second_object_position'] == {'x': -150, 'y': -10}


def test_save_segments_json_flat_mirror(tmp_path):
    scene = Scene(Mirror(surface_type=FLAT), object_position=geometry.point(-100, 20))
    json_file = save_segments_json(scene.trace(), tmp_path, scene=scene)
    data = json.loads(json_file.read_text(encoding='utf-8'))
    # an infinite focal length is exported as null
    assert data['scene']['focal_length'] is None


def test_segment_statistics():
    segments = [
        LightRaySegment(geometry.point(0, 0), geometry.point(3, 4)),
        LightRaySegment(geometry.point(0, 0), geometry.point(0, 2)),
    ]
    stats = get_segment_statistics(segments)
    assert stats['total_segments'] == 2
    assert stats['total_length'] == pytest.approx(7)
    assert stats['max_length'] == pytest.approx(5)

    assert get_segment_statistics([])['total_segments'] == 0
