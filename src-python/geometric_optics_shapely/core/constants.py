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
Constants used throughout the geometric optics model.

All lengths are in centimeters, all times in seconds. Collected here so that
the optics, the tracer and the scene can share them without circular imports.
"""

# Speed of light for the purpose of the ray animation, in cm/s
LIGHT_SPEED = 400.0

# Slowest light speed accepted by the scene configuration
MIN_LIGHT_SPEED = 100.0

# Minimum ray segment length to avoid numerical issues.
# Intersections closer than this to a ray's origin are ignored.
MIN_RAY_SEGMENT_LENGTH = 1e-9

# Tolerance used when checking that a point lies along a ray direction
POINT_ALONG_RAY_EPSILON = 1e-4

# Half length of the vertical axis through the optic, long enough for all zoom levels
VERTICAL_AXIS_HALF_LENGTH = 800.0

# Offset added to the radius of curvature when hollywooding the lens width
HOLLYWOOD_OFFSET_RADIUS = 100.0

# Thickness of the backing of a mirror
MIRROR_THICKNESS = 5.0

# Number of straight segments used to approximate a quadratic Bezier boundary curve
CURVE_SEGMENTS = 64

# Amount by which optic bounds are eroded vertically when picking extremum points
EXTREMUM_EROSION = 1e-6

# Stand-in for an infinite distance where a finite value is needed
# (object at the focal point, image on the optic's vertical line)
LARGE_DISTANCE = 10e6

# Placement constraints enforced by the scene
MIN_DISTANCE_FROM_OBJECT_TO_OPTIC = 40.0
MIN_DISTANCE_FROM_OPTIC_TO_PROJECTION_SCREEN = 20.0

# Projection screen dimensions. "Near" and "far" refer to the pseudo-3D perspective.
SCREEN_WIDTH = 42.0
SCREEN_NEAR_HEIGHT = 134.0
SCREEN_FAR_HEIGHT = 112.0

# Any light spot smaller than this diameter has full intensity when the optic diameter is at its maximum
FULL_INTENSITY_LIGHT_SPOT_DIAMETER = 14.0

# Number of rays in 'many' mode, and the half angle of the fan they cover (radians)
MANY_RAYS_COUNT = 15
MANY_RAYS_HALF_ANGLE = 0.7853981633974483  # pi / 4

# Length of each arm of a guide, drawn from its fulcrum
GUIDE_ARM_LENGTH = 70.0
