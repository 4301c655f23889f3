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

===============================================================================
Segment Export Utilities
===============================================================================
Export the segments of traced light rays to files:

- CSV: one row per segment, real and virtual
- JSON: the segments of each light ray, with the image and timing metadata
===============================================================================
"""

import csv
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union, TYPE_CHECKING

from ..core.light_ray import LightRaySegment

if TYPE_CHECKING:
    from ..core.light_rays import LightRays
    from ..core.scene import Scene


def save_segments_csv(
    light_rays: 'LightRays',
    output_path: Union[str, Path],
    filename: str = "segments.csv",
    precision_coords: int = 4,
) -> Path:
    """
    Export the real and virtual segments of traced light rays to a CSV file.

    Args:
        light_rays: Traced LightRays bundle.
        output_path: Directory path where the CSV file will be saved.
            Can be a string or Path object.
        filename: Name of the output CSV file (default: "segments.csv").
        precision_coords: Decimal places for coordinate values (default: 4).

    Returns:
        Path: Full path to the created CSV file.

    Raises:
        OSError: If the output directory cannot be created or file cannot be written.

    Example:
        >>> from geometric_optics_shapely.analysis import save_segments_csv
        >>> output_file = save_segments_csv(scene.trace(), "./output")
        >>> print(f"Saved to: {output_file}")
    """
    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)

    csv_file = output_dir / filename
    coord_fmt = f"{{:.{precision_coords}f}}"

    with open(csv_file, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)

        writer.writerow([
            'ray_index',
            'segment_index',
            'kind',
            'start_x',
            'start_y',
            'end_x',
            'end_y',
            'length',
            'has_reached_target',
        ])

        for ray_index, light_ray in enumerate(light_rays.light_rays):
            rows = [('real', segment) for segment in light_ray.real_segments]
            rows += [('virtual', segment) for segment in light_ray.virtual_segments]
            for segment_index, (kind, segment) in enumerate(rows):
                writer.writerow([
                    ray_index,
                    segment_index,
                    kind,
                    coord_fmt.format(segment.start.x),
                    coord_fmt.format(segment.start.y),
                    coord_fmt.format(segment.end.x),
                    coord_fmt.format(segment.end.y),
                    coord_fmt.format(segment.length),
                    light_ray.has_reached_target,
                ])

    return csv_file


def save_segments_json(
    light_rays: 'LightRays',
    output_path: Union[str, Path],
    filename: str = "segments.json",
    scene: Optional['Scene'] = None,
    indent: int = 2,
) -> Path:
    """
    Export traced light rays to a JSON file.

    Args:
        light_rays: Traced LightRays bundle.
        output_path: Directory path where the JSON file will be saved.
        filename: Name of the output JSON file (default: "segments.json").
        scene: Optional scene the rays were traced from. When given, its
            settings and optical image are included under "scene".
        indent: JSON indentation (default: 2).

    Returns:
        Path: Full path to the created JSON file.
    """
    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)

    data: Dict[str, Any] = {
        'is_image_visible': light_rays.is_image_visible,
        'light_rays': [light_ray.to_dict() for light_ray in light_rays.light_rays],
    }

    if scene is not None:
        data['scene'] = {
            'uuid': scene.uuid,
            'name': scene.name,
            'optic_type': scene.optic.type,
            'surface_type': scene.optic.surface_type,
            'focal_length': _finite_or_none(scene.optic.focal_length),
            'focal_length_model': scene.optic.focal_length_model,
            'object_position': scene.object_position.to_dict(),
            'second_object_position': (scene.second_object_position.to_dict()
                                       if scene.second_object_position is not None else None),
            'rays_mode': scene.rays_mode,
            'time': scene.time,
            'light_speed': scene.light_speed,
            'optical_image': scene.optical_image().to_dict(),
        }

    json_file = output_dir / filename
    with open(json_file, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=indent)

    return json_file


def _finite_or_none(value: float) -> Optional[float]:
    # JSON has no infinity
    return value if value not in (float('inf'), float('-inf')) else None


def get_segment_statistics(segments: List[LightRaySegment]) -> dict:
    """
    Compute statistics about a collection of segments.

    Returns:
        dict: total_segments, total_length and max_length
    """
    if not segments:
        return {'total_segments': 0, 'total_length': 0.0, 'max_length': 0.0}

    lengths = [segment.length for segment in segments]
    return {
        'total_segments': len(segments),
        'total_length': sum(lengths),
        'max_length': max(lengths),
    }
