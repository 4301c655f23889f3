"""
===============================================================================
LIGHT RAY TESTS - Ray tracing through a lens or a mirror
===============================================================================

Tests for GORay, the ray/curve intersection and the LightRay tracer:

1. GORAY AND INTERSECTION
   - Semi-infinite to finite transition, validation
   - Nearest intersection, misses, empty curves

2. REAL RAY COUNT
   - 1 (miss), 2 (mirror, principal mode), 3 (lens, back surface hit)
   - Lens back surface missed: transmitted from the front hit point

3. VIRTUAL RAY
   - Exists if and only if the image is virtual and the ray hit the optic
   - Ends at the image

4. ANIMATION
   - Segment emission is monotone in time
   - Target reached with and without a projection screen

5. SCENARIOS
   - A: real image from a converging lens
   - B: virtual image from a converging lens
   - C: ray missing the optic
   - D: flat mirror, no NaN
   - E: screen threshold is the horizontal distance to the screen

Run with:
    pytest developer_tests/test_light_ray.py -v
===============================================================================
"""

import sys
import math
from pathlib import Path

import pytest
from shapely.geometry import LineString, Point as ShapelyPoint

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from geometric_optics_shapely.core.geometry import geometry, Point
from geometric_optics_shapely.core.ray import GORay
from geometric_optics_shapely.core.intersection import intersect
from geometric_optics_shapely.core.optic import Lens, Mirror
from geometric_optics_shapely.core.optic_geometry import CONCAVE, FLAT
from geometric_optics_shapely.core.optical_image import OpticalImage
from geometric_optics_shapely.core.projection_screen import ProjectionScreen
from geometric_optics_shapely.core.light_ray import LightRay, trace_ray
from geometric_optics_shapely.core.light_rays import get_ray_directions


# =============================================================================
# TEST CONFIGURATION
# =============================================================================

TOLERANCE = 1e-6

# Lens of scenario A: radius 50, index 1.5, diameter 80, focal length 50
SCENARIO_RADIUS = 50.0

# Hollywooded half width of that lens
HALF_WIDTH = 0.5 * 40 * 40 / (SCENARIO_RADIUS + 100)

ALL_TIMES = [0.0, 0.01, 0.1, 0.3, 0.5, 1.0, 2.0, 10.0]


def scenario_lens():
    return Lens(radius_of_curvature=SCENARIO_RADIUS, index_of_refraction=1.5, diameter=80)


def trace(object_point, direction, optic, time, rays_mode='marginal', screen=None):
    """Trace one ray toward the image given by the thin lens / mirror equation."""
    image = OpticalImage(object_point, optic)
    return trace_ray(object_point, direction, optic, image.position, image.is_virtual, rays_mode, time,
                     projection_screen=screen)


def toward(source, target):
    return geometry.normalize_vec(geometry.subtract(target, source))


def total_length(segments):
    return sum(segment.length for segment in segments)


def assert_all_finite(light_ray):
    for segment in light_ray.real_segments + light_ray.virtual_segments:
        for value in (segment.start.x, segment.start.y, segment.end.x, segment.end.y):
            assert math.isfinite(value), f"non-finite coordinate in {segment}"


# =============================================================================
# GORAY AND INTERSECTION
# =============================================================================

def test_goray_is_semi_infinite_until_final_point():
    ray = GORay(geometry.point(0, 0), geometry.point(1, 0))
    assert math.isinf(ray.length)
    assert not ray.is_finite

    ray.set_final_point(geometry.point(10, 0))
    assert ray.length == pytest.approx(10)
    assert ray.is_finite

    end = ray.point_at_distance(4)
    assert (end.x, end.y) == pytest.approx((4, 0))


def test_goray_validation():
    ray = GORay(geometry.point(0, 0), geometry.point(0, 1))
    with pytest.raises(ValueError):
        ray.set_length(math.inf)
    with pytest.raises(ValueError):
        ray.set_length(-1)
    with pytest.raises(ValueError):
        ray.set_final_point(geometry.point(5, 5))
    with pytest.raises(ValueError):
        ray.set_final_point(geometry.point(0, -5))


def test_goray_point_along_ray_and_distance():
    ray = GORay(geometry.point(1, 1), toward(geometry.point(1, 1), geometry.point(4, 5)))
    assert ray.is_point_along_ray(geometry.point(7, 9))
    assert not ray.is_point_along_ray(geometry.point(-2, -3))
    assert not ray.is_point_along_ray(geometry.point(1, 1))
    assert ray.distance_to(geometry.point(4, 5)) == pytest.approx(5)
    assert ray.distance_to(geometry.point(-2, -3)) == pytest.approx(-5)


def test_intersect_nearest_point():
    ray = GORay(geometry.point(-10, 0), geometry.point(1, 0))
    curve = LineString([(0, 10), (0, -10)])
    hit = intersect(ray, curve)
    assert (hit.x, hit.y) == pytest.approx((0, 0))

    zigzag = LineString([(5, 10), (5, -10), (2, -10), (2, 10)])
    hit = intersect(ray, zigzag)
    assert (hit.x, hit.y) == pytest.approx((2, 0))


def test_shapely_points_round_trip():
    hits = geometry.shapely_points(ShapelyPoint(3.5, -2.0))
    assert len(hits) == 1
    assert isinstance(hits[0], Point)
    assert hits[0].to_tuple() == (3.5, -2.0)
    assert Point.from_shapely(hits[0].to_shapely()).to_tuple() == (3.5, -2.0)


def test_intersect_misses():
    curve = LineString([(0, 10), (0, -10)])
    assert intersect(GORay(geometry.point(-10, 20), geometry.point(1, 0)), curve) is None
    assert intersect(GORay(geometry.point(-10, 0), geometry.point(-1, 0)), curve) is None
    assert intersect(GORay(geometry.point(-10, 0), geometry.point(1, 0)), LineString()) is None

    short = GORay(geometry.point(-10, 0), geometry.point(1, 0))
    short.set_length(5)
    assert intersect(short, curve) is None

    # a ray never hits the curve it starts on
    assert intersect(GORay(geometry.point(0, 0), geometry.point(1, 0)), curve) is None


# =============================================================================
# REAL RAY COUNT
# =============================================================================

def test_lens_ray_has_three_real_rays():
    lens = scenario_lens()
    light_ray = trace(geometry.point(-100, 0), geometry.point(1, 0), lens, 1.0)
    assert len(light_ray.real_rays) == 3

    first, internal, transmitted = light_ray.real_rays
    assert (first.final_point.x, first.final_point.y) == pytest.approx((-HALF_WIDTH, 0))
    assert (internal.final_point.x, internal.final_point.y) == pytest.approx((HALF_WIDTH, 0))
    assert transmitted.origin is internal.final_point
    assert math.isinf(transmitted.length)


def test_principal_mode_has_two_real_rays():
    lens = scenario_lens()
    light_ray = trace(geometry.point(-100, 20), geometry.point(1, 0), lens, 1.0, rays_mode='principal')
    assert len(light_ray.real_rays) == 2
    # refracted at the vertical axis, toward the image at (100, -20)
    first = light_ray.real_rays[0].final_point
    assert (first.x, first.y) == pytest.approx((0, 20))
    assert light_ray.real_rays[1].is_point_along_ray(geometry.point(100, -20))


def test_mirror_has_two_real_rays():
    mirror = Mirror()
    light_ray = trace(geometry.point(-150, 0), geometry.point(1, 0), mirror, 1.0)
    assert len(light_ray.real_rays) == 2
    reflected = light_ray.real_rays[1]
    assert reflected.direction.x == pytest.approx(-1)
    assert not light_ray.virtual_segments


def test_lens_back_surface_miss_transmits_from_front_point():
    # a strongly diverging wide lens seen from far below the axis: rays aimed
    # near its top edge cannot find the back surface from the vertical axis
    lens = Lens(surface_type=CONCAVE, radius_of_curvature=30, index_of_refraction=1.9, diameter=130)
    object_point = geometry.point(-400, -80)
    image = OpticalImage(object_point, lens)
    assert image.is_virtual

    rays = [trace(object_point, direction, lens, 5.0, rays_mode='many')
            for direction in get_ray_directions(object_point, lens, 'many', image.position)]
    transmitted_from_front = [light_ray for light_ray in rays if len(light_ray.real_rays) == 2]
    assert transmitted_from_front

    for light_ray in transmitted_from_front:
        incident, transmitted = light_ray.real_rays
        assert transmitted.origin is incident.final_point
        assert transmitted.direction.x > 0
        assert len(light_ray.virtual_segments) == 1
        end = light_ray.virtual_segments[0].end
        assert (end.x, end.y) == pytest.approx((image.position.x, image.position.y), abs=TOLERANCE)
        assert_all_finite(light_ray)


def test_real_rays_point_away_from_optic():
    lens = scenario_lens()
    for y in (-30, -10, 0, 15, 35):
        object_point = geometry.point(-100, 10)
        light_ray = trace(object_point, toward(object_point, geometry.point(0, y)), lens, 1.0)
        assert light_ray.real_rays[-1].direction.x > 0

    mirror = Mirror()
    object_point = geometry.point(-150, 10)
    light_ray = trace(object_point, toward(object_point, geometry.point(0, -20)), mirror, 1.0)
    assert light_ray.real_rays[-1].direction.x < 0


# =============================================================================
# VIRTUAL RAY
# =============================================================================

@pytest.mark.parametrize("object_x, rays_mode", [
    (-100, 'marginal'), (-40, 'marginal'), (-40, 'principal'), (-45, 'many'), (-150, 'marginal'),
])
def test_virtual_ray_iff_virtual_image_and_refracted(object_x, rays_mode):
    lens = scenario_lens()
    object_point = geometry.point(object_x, 10)
    image = OpticalImage(object_point, lens)
    for target_y in (-60, -20, 0, 20, 60):
        light_ray = trace(object_point, toward(object_point, geometry.point(0, target_y)), lens, 10.0,
                          rays_mode=rays_mode)
        has_virtual = light_ray.virtual_ray is not None
        assert has_virtual == (image.is_virtual and len(light_ray.real_rays) > 1)
        assert len(light_ray.virtual_segments) == (1 if has_virtual else 0)


def test_virtual_ray_starts_with_last_real_ray():
    lens = scenario_lens()
    object_point = geometry.point(-40, 10)
    light_ray = trace(object_point, toward(object_point, lens.position), lens, 10.0)
    assert light_ray.virtual_ray.origin is light_ray.real_rays[-1].origin
    assert light_ray.virtual_ray.direction.x == pytest.approx(-light_ray.real_rays[-1].direction.x)


def test_no_virtual_segment_before_light_leaves_lens():
    lens = scenario_lens()
    object_point = geometry.point(-40, 0)
    light_ray = trace(object_point, geometry.point(1, 0), lens, 0.05)
    # 20 cm traveled, the lens is about 35 cm away
    assert len(light_ray.real_segments) == 1
    assert light_ray.virtual_segments == []


# =============================================================================
# ANIMATION
# =============================================================================

def test_no_segments_at_time_zero():
    light_ray = trace(geometry.point(-100, 0), geometry.point(1, 0), scenario_lens(), 0.0)
    assert light_ray.real_segments == []
    assert light_ray.virtual_segments == []
    assert not light_ray.has_reached_target


def test_negative_time_is_rejected():
    with pytest.raises(ValueError):
        trace(geometry.point(-100, 0), geometry.point(1, 0), scenario_lens(), -0.1)


@pytest.mark.parametrize("object_point, target", [
    ((-100, 0), (0, 0)),
    ((-100, 10), (0, 30)),
    ((-40, 10), (0, 0)),
    ((-80, -20), (0, 20)),
])
def test_segment_emission_is_monotone(object_point, target):
    lens = scenario_lens()
    source = geometry.point(*object_point)
    direction = toward(source, geometry.point(*target))

    previous = None
    for time in ALL_TIMES:
        light_ray = trace(source, direction, lens, time)
        assert total_length(light_ray.real_segments) == pytest.approx(light_ray.distance_traveled) \
            or len(light_ray.real_segments) == len(light_ray.real_rays)
        if previous is not None:
            assert len(light_ray.real_segments) >= len(previous.real_segments)
            assert total_length(light_ray.real_segments) >= total_length(previous.real_segments) - TOLERANCE
            assert total_length(light_ray.virtual_segments) >= total_length(previous.virtual_segments) - TOLERANCE
            # earlier segments are a prefix of later ones
            for old, new in zip(previous.real_segments[:-1], light_ray.real_segments):
                assert (old.end.x, old.end.y) == pytest.approx((new.end.x, new.end.y))
        previous = light_ray


# =============================================================================
# SCENARIOS
# =============================================================================

def test_scenario_a_real_image():
    lens = scenario_lens()
    assert lens.focal_length == pytest.approx(50)
    object_point = geometry.point(-100, 0)
    image = OpticalImage(object_point, lens)
    assert not image.is_virtual
    assert (image.position.x, image.position.y) == pytest.approx((100, 0))

    light_ray = trace(object_point, geometry.point(1, 0), lens, 1.0)
    assert len(light_ray.real_segments) == 3
    assert len(light_ray.virtual_segments) == 0
    assert light_ray.has_reached_target

    # 200 cm to the image along the axis, at 400 cm/s
    assert not trace(object_point, geometry.point(1, 0), lens, 0.49).has_reached_target
    assert trace(object_point, geometry.point(1, 0), lens, 0.51).has_reached_target


def test_scenario_a_all_directions():
    lens = scenario_lens()
    object_point = geometry.point(-100, 0)
    image = OpticalImage(object_point, lens)
    for target_y in (-35, -20, 0, 20, 35):
        light_ray = trace(object_point, toward(object_point, geometry.point(0, target_y)), lens, 2.0)
        assert len(light_ray.real_rays) == 3
        assert light_ray.has_reached_target
        assert light_ray.real_rays[-1].is_point_along_ray(image.position)


def test_scenario_b_virtual_image():
    lens = scenario_lens()
    object_point = geometry.point(-40, 10)
    image = OpticalImage(object_point, lens)
    assert image.is_virtual

    light_ray = trace(object_point, toward(object_point, lens.position), lens, 2.0)
    assert len(light_ray.real_rays) == 3
    assert len(light_ray.virtual_segments) == 1
    end = light_ray.virtual_segments[0].end
    assert (end.x, end.y) == pytest.approx((image.position.x, image.position.y), abs=1e-6)
    assert light_ray.has_reached_target


def test_scenario_c_ray_misses_optic():
    lens = scenario_lens()
    object_point = geometry.point(-100, 60)
    for time in ALL_TIMES[1:]:
        light_ray = trace(object_point, geometry.point(1, 0), lens, time)
        assert len(light_ray.real_rays) == 1
        assert len(light_ray.real_segments) == 1
        assert len(light_ray.virtual_segments) == 0
        assert not light_ray.has_reached_target
        assert light_ray.real_segments[0].length == pytest.approx(light_ray.distance_traveled)


@pytest.mark.parametrize("rays_mode", ['marginal', 'principal'])
def test_scenario_d_flat_mirror(rays_mode):
    mirror = Mirror(surface_type=FLAT)
    assert math.isinf(mirror.focal_length)
    object_point = geometry.point(-100, 20)
    image = OpticalImage(object_point, mirror)

    for direction in (geometry.point(1, 0), toward(object_point, mirror.position)):
        light_ray = trace(object_point, direction, mirror, 1.0, rays_mode=rays_mode)
        assert len(light_ray.real_rays) == 2
        assert_all_finite(light_ray)
        assert len(light_ray.virtual_segments) == 1
        end = light_ray.virtual_segments[0].end
        assert (end.x, end.y) == pytest.approx((image.position.x, image.position.y), abs=1e-6)

    # 100 cm to the mirror and 100 cm back along the virtual ray
    assert not trace(object_point, geometry.point(1, 0), mirror, 0.49).has_reached_target
    assert trace(object_point, geometry.point(1, 0), mirror, 0.51).has_reached_target


def test_scenario_e_screen_threshold():
    lens = scenario_lens()
    screen = ProjectionScreen(geometry.point(200, 0))
    object_point = geometry.point(-100, 0)
    threshold = (screen.position.x - object_point.x) / 400.0
    assert threshold == pytest.approx(0.75)

    # independent of the path actually traveled by the bent rays
    for target_y in (0, 30):
        direction = toward(object_point, geometry.point(0, target_y))
        assert not trace(object_point, direction, lens, threshold - 0.01, screen=screen).has_reached_target
        assert trace(object_point, direction, lens, threshold, screen=screen).has_reached_target
        assert trace(object_point, direction, lens, threshold + 0.01, screen=screen).has_reached_target


def test_screen_stops_transmitted_ray():
    lens = scenario_lens()
    screen = ProjectionScreen(geometry.point(200, 0))
    light_ray = trace(geometry.point(-100, 0), geometry.point(1, 0), lens, 10.0, screen=screen)
    last = light_ray.real_segments[-1]
    assert (last.end.x, last.end.y) == pytest.approx((200, 0))
    assert light_ray.real_rays[-1].length == pytest.approx(200 - HALF_WIDTH)


def test_light_ray_constructor_matches_trace_ray():
    lens = scenario_lens()
    object_point = geometry.point(-100, 10)
    image = OpticalImage(object_point, lens)
    direct = LightRay(object_point, geometry.point(1, 0), lens, image.position, image.is_virtual, 'many', 1.0)
    traced = trace(object_point, geometry.point(1, 0), lens, 1.0, rays_mode='many')
    assert [s.to_dict() for s in direct.real_segments] == [s.to_dict() for s in traced.real_segments]
    assert direct.to_dict()['has_reached_target'] == traced.has_reached_target
