"""
Star Picking (Ray Casting)
==========================
Resolves a pointer position on the render surface to the star under it.

Why is this file needed?
------------------------
1. Testability: The camera is described by a plain CameraPose, so picking can
   be verified without an OpenGL context.
2. Exactness: Stars are intersected as the spheres that are drawn
   (radius = AxisConfig.size_scale), not as screen-space points.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
import numpy.typing as npt

from hrdiagram.model.stars import PlotPoint, StarRecord
from hrdiagram.model.state import SceneContext

logger = logging.getLogger(__name__)


def to_ndc(pointer_x: float, pointer_y: float, width: float, height: float) -> Tuple[float, float]:
    """
    Screen pixels (origin top-left, y down) to normalized device coordinates.

    Raises:
        ValueError: If the viewport has no area.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Viewport must have a positive size, got {width}x{height}.")
    return (pointer_x / width) * 2 - 1, -(pointer_y / height) * 2 + 1


def display_to_pointer(display_x: float, display_y: float, height: int) -> Tuple[int, int]:
    """VTK display pixels (origin bottom-left, rows 0..height-1) to top-left pixels."""
    return int(display_x), int(height - 1 - display_y)


def pick_distance_limits(
    base_range: Tuple[float, float],
    camera_range: Tuple[float, float]
) -> Tuple[float, float]:
    """
    Ray distance limits for picking.

    The near limit stays at the configured value. VTK re-fits the camera's
    clipping range to the scene after zooming, so the far limit grows with it
    and everything still drawn stays pickable.
    """
    near, far = base_range
    return near, max(far, float(camera_range[1]))


def _normalized(v: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    norm = np.linalg.norm(v)
    if norm == 0:
        raise ValueError("Cannot normalize a zero-length vector.")
    return v / norm


@dataclass
class Ray:
    origin: npt.NDArray[np.float64]
    direction: npt.NDArray[np.float64]    # unit length


@dataclass
class Intersection:
    distance: float
    point: PlotPoint


@dataclass
class CameraPose:
    """The camera parameters needed to build a picking ray."""
    position: Tuple[float, float, float]
    focal_point: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    view_up: Tuple[float, float, float] = (0.0, 1.0, 0.0)
    view_angle: float = 30.0              # vertical field of view, degrees
    aspect: float = 1.0                   # width / height
    clipping_range: Tuple[float, float] = (0.0, math.inf)
    parallel_projection: bool = False
    parallel_scale: float = 1.0           # half of the view height in world units

    @classmethod
    def from_vtk(
        cls,
        camera,
        aspect: float,
        clipping_range: Tuple[float, float] = (0.0, math.inf)
    ) -> CameraPose:
        """
        Snapshot a pyvista/VTK camera.
        VTK clips by depth and re-fits its range to the scene bounds, so the
        ray distance limits are passed in explicitly.
        """
        return cls(
            position=tuple(camera.position),
            focal_point=tuple(camera.focal_point),
            view_up=tuple(camera.up),
            view_angle=float(camera.view_angle),
            aspect=aspect,
            clipping_range=clipping_range,
            parallel_projection=bool(camera.parallel_projection),
            parallel_scale=float(camera.parallel_scale),
        )

    def _basis(self) -> Tuple[npt.NDArray[np.float64], ...]:
        position = np.asarray(self.position, dtype=np.float64)
        forward = _normalized(np.asarray(self.focal_point, dtype=np.float64) - position)
        right = _normalized(np.cross(forward, np.asarray(self.view_up, dtype=np.float64)))
        up = np.cross(right, forward)
        return position, forward, right, up

    def ray_through(self, ndc_x: float, ndc_y: float) -> Ray:
        """Ray from the camera through a point given in NDC."""
        position, forward, right, up = self._basis()

        if self.parallel_projection:
            half_h = self.parallel_scale
            origin = position + right * (ndc_x * half_h * self.aspect) + up * (ndc_y * half_h)
            return Ray(origin=origin, direction=forward)

        tan_half = math.tan(math.radians(self.view_angle) / 2)
        direction = forward + right * (ndc_x * tan_half * self.aspect) + up * (ndc_y * tan_half)
        return Ray(origin=position, direction=_normalized(direction))


def intersect_spheres(
    ray: Ray,
    points: Sequence[PlotPoint],
    radius: float,
    near: float = 0.0,
    far: float = math.inf
) -> List[Intersection]:
    """
    Intersect a ray with one sphere per point.

    Returns:
        Hits within [near, far] along the ray, nearest first. Ties keep the
        collection order.
    """
    if not points:
        return []

    centers = np.array([p.position for p in points], dtype=np.float64)
    oc = centers - ray.origin
    t_ca = oc @ ray.direction
    d2 = np.einsum("ij,ij->i", oc, oc) - t_ca ** 2
    r2 = radius * radius

    hit = d2 <= r2
    thc = np.sqrt(np.clip(r2 - d2, 0.0, None))
    t_enter = t_ca - thc
    t_exit = t_ca + thc
    # Origin inside the sphere -> report the exit point
    distance = np.where(t_enter >= 0.0, t_enter, t_exit)
    hit &= (distance >= near) & (distance <= far)

    indices = np.flatnonzero(hit)
    order = indices[np.argsort(distance[indices], kind="stable")]
    return [Intersection(distance=float(distance[i]), point=points[i]) for i in order]


def pick(
    pointer_x: float,
    pointer_y: float,
    camera: CameraPose,
    pickable_points: Sequence[PlotPoint],
    viewport: Tuple[float, float],
    radius: float = 2.0
) -> Optional[StarRecord]:
    """
    Find the star under the pointer.

    Args:
        pointer_x, pointer_y: Pointer position in pixels, origin top-left.
        camera: Current camera pose.
        pickable_points: Stars that can be hit.
        viewport: (width, height) of the render surface in pixels.
        radius: Sphere radius of each star.

    Returns:
        Record of the nearest star hit by the ray, or None.
    """
    if not pickable_points:
        return None

    ndc_x, ndc_y = to_ndc(pointer_x, pointer_y, *viewport)
    ray = camera.ray_through(ndc_x, ndc_y)
    near, far = camera.clipping_range
    hits = intersect_spheres(ray, pickable_points, radius, near=near, far=far)
    if not hits:
        return None
    return hits[0].point.record


class StarPicker:
    """Binds picking to a SceneContext; updates the selection on a hit."""

    def __init__(self, context: SceneContext) -> None:
        self.context = context

    def pick(
        self,
        pointer_x: float,
        pointer_y: float,
        camera: CameraPose,
        viewport: Tuple[float, float]
    ) -> Optional[StarRecord]:
        record = pick(
            pointer_x,
            pointer_y,
            camera,
            self.context.pickable_points,
            viewport,
            radius=self.context.axis_config.size_scale,
        )
        if record is not None:
            logger.debug(f"Picked star HIP{record.hip}")
            self.context.selected = record
        return record
