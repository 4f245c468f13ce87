"""
Tests for ray-cast star picking.

The camera mirrors the viewer's default: 75 deg vertical field of view,
placed at z=400 looking at the origin.
"""
import math

import numpy as np
import pytest

from hrdiagram.controller.picking import (
    CameraPose,
    Ray,
    StarPicker,
    display_to_pointer,
    intersect_spheres,
    pick,
    pick_distance_limits,
    to_ndc,
)
from hrdiagram.model.colors import RGB
from hrdiagram.model.state import SceneContext
from hrdiagram.model.stars import PlotPoint, StarRecord

VIEWPORT = (800, 600)


def make_point(hip: str, x: float, y: float, z: float = 0.0) -> PlotPoint:
    return PlotPoint(
        position=(x, y, z),
        color=RGB(255, 255, 255),
        record=StarRecord(hip=hip, temperature=5000.0, luminosity=1.0),
    )


def default_camera() -> CameraPose:
    return CameraPose(
        position=(0.0, 0.0, 400.0),
        view_angle=75.0,
        aspect=VIEWPORT[0] / VIEWPORT[1],
        clipping_range=(0.1, 1000.0),
    )


def pointer_for(x: float, y: float, camera: CameraPose, viewport=VIEWPORT) -> tuple:
    """Project a world point on the z=0 plane to screen pixels."""
    depth = camera.position[2]
    tan_half = math.tan(math.radians(camera.view_angle) / 2)
    ndc_x = x / (depth * tan_half * camera.aspect)
    ndc_y = y / (depth * tan_half)
    width, height = viewport
    return (ndc_x + 1) / 2 * width, (1 - ndc_y) / 2 * height


class TestToNdc:

    def test_corners_and_center(self):
        assert to_ndc(0, 0, 800, 600) == pytest.approx((-1.0, 1.0))
        assert to_ndc(800, 600, 800, 600) == pytest.approx((1.0, -1.0))
        assert to_ndc(400, 300, 800, 600) == pytest.approx((0.0, 0.0))

    def test_display_rows_flip_to_top_left(self):
        # VTK rows run 0..height-1 from the bottom
        assert display_to_pointer(0, 0, 600) == (0, 599)
        assert display_to_pointer(799, 599, 600) == (799, 0)
        assert display_to_pointer(400, 300, 600) == (400, 299)

    def test_empty_viewport_raises(self):
        with pytest.raises(ValueError):
            to_ndc(10, 10, 0, 600)


class TestCameraPose:

    def test_center_ray_looks_at_focal_point(self):
        ray = default_camera().ray_through(0.0, 0.0)
        np.testing.assert_allclose(ray.origin, [0.0, 0.0, 400.0])
        np.testing.assert_allclose(ray.direction, [0.0, 0.0, -1.0], atol=1e-12)

    def test_top_edge_ray_matches_view_angle(self):
        ray = default_camera().ray_through(0.0, 1.0)
        angle = math.degrees(math.atan2(ray.direction[1], -ray.direction[2]))
        assert angle == pytest.approx(37.5)

    def test_parallel_projection(self):
        camera = CameraPose(position=(0.0, 0.0, 400.0), aspect=2.0, parallel_projection=True, parallel_scale=100.0)
        ray = camera.ray_through(0.5, -0.5)
        np.testing.assert_allclose(ray.origin, [100.0, -50.0, 400.0])
        np.testing.assert_allclose(ray.direction, [0.0, 0.0, -1.0], atol=1e-12)

    def test_degenerate_camera_raises(self):
        with pytest.raises(ValueError):
            CameraPose(position=(0.0, 0.0, 0.0)).ray_through(0.0, 0.0)

    def test_from_vtk(self):
        class FakeCamera:
            position = (1.0, 2.0, 300.0)
            focal_point = (1.0, 2.0, 0.0)
            up = (0.0, 1.0, 0.0)
            view_angle = 75.0
            parallel_projection = False
            parallel_scale = 1.0

        pose = CameraPose.from_vtk(FakeCamera(), aspect=1.5, clipping_range=(0.1, 1000.0))
        assert pose.position == (1.0, 2.0, 300.0)
        assert pose.view_up == (0.0, 1.0, 0.0)
        assert pose.aspect == 1.5
        assert pose.clipping_range == (0.1, 1000.0)


class TestIntersectSpheres:

    def test_sorted_nearest_first(self):
        ray = Ray(origin=np.array([0.0, 0.0, 400.0]), direction=np.array([0.0, 0.0, -1.0]))
        far = make_point("far", 0.0, 0.0, 0.0)
        near = make_point("near", 0.0, 0.0, 50.0)
        hits = intersect_spheres(ray, [far, near], radius=2.0)
        assert [h.point.record.hip for h in hits] == ["near", "far"]
        assert hits[0].distance == pytest.approx(348.0)
        assert hits[1].distance == pytest.approx(398.0)

    def test_grazing_hit_counts(self):
        ray = Ray(origin=np.array([2.0, 0.0, 400.0]), direction=np.array([0.0, 0.0, -1.0]))
        assert len(intersect_spheres(ray, [make_point("edge", 0.0, 0.0)], radius=2.0)) == 1

    def test_far_limit(self):
        ray = Ray(origin=np.array([0.0, 0.0, 400.0]), direction=np.array([0.0, 0.0, -1.0]))
        assert intersect_spheres(ray, [make_point("a", 0.0, 0.0)], radius=2.0, far=100.0) == []

    def test_empty(self):
        ray = Ray(origin=np.zeros(3), direction=np.array([0.0, 0.0, -1.0]))
        assert intersect_spheres(ray, [], radius=2.0) == []


class TestPick:

    def test_no_points_returns_none(self):
        camera = default_camera()
        for pointer in [(0, 0), (400, 300), (799, 599)]:
            assert pick(*pointer, camera, [], VIEWPORT) is None

    def test_single_point_under_pointer(self):
        camera = default_camera()
        star = make_point("71683", 152.21, 50.0)
        px, py = pointer_for(152.21, 50.0, camera)
        assert pick(px, py, camera, [star], VIEWPORT) == star.record

    def test_miss_returns_none(self):
        camera = default_camera()
        star = make_point("1", 0.0, 0.0)
        px, py = pointer_for(20.0, 0.0, camera)
        assert pick(px, py, camera, [star], VIEWPORT) is None

    def test_pointer_within_radius_hits(self):
        camera = default_camera()
        star = make_point("1", 100.0, -100.0)
        px, py = pointer_for(101.5, -100.5, camera)
        assert pick(px, py, camera, [star], VIEWPORT) == star.record

    def test_nearest_of_overlapping_points(self):
        camera = default_camera()
        back = make_point("back", 0.0, 0.0, 0.0)
        front = make_point("front", 0.0, 0.0, 10.0)
        assert pick(400, 300, camera, [back, front], VIEWPORT).hip == "front"

    def test_points_behind_camera_ignored(self):
        camera = default_camera()
        behind = make_point("behind", 0.0, 0.0, 500.0)
        assert pick(400, 300, camera, [behind], VIEWPORT) is None

    def test_picks_correct_star_among_many(self):
        camera = default_camera()
        points = [make_point(str(i), x, y) for i, (x, y) in enumerate([(-200, 100), (0, 0), (150, -80), (300, 200)])]
        px, py = pointer_for(150, -80, camera)
        assert pick(px, py, camera, points, VIEWPORT).hip == "2"


class TestStarPicker:

    def test_updates_selection_on_hit_only(self):
        context = SceneContext()
        star = make_point("42", 0.0, 0.0)
        context.register_point(star)
        picker = StarPicker(context)
        camera = default_camera()

        assert picker.pick(400, 300, camera, VIEWPORT) == star.record
        assert context.selected == star.record

        # A miss keeps the previous selection
        assert picker.pick(5, 5, camera, VIEWPORT) is None
        assert context.selected == star.record

    def test_uses_size_scale_as_radius(self):
        from hrdiagram.model.axis import AxisConfig
        context = SceneContext(axis_config=AxisConfig(size_scale=10.0))
        context.register_point(make_point("big", 0.0, 0.0))
        camera = default_camera()
        px, py = pointer_for(8.0, 0.0, camera)
        assert StarPicker(context).pick(px, py, camera, VIEWPORT).hip == "big"


class TestPickDistanceLimits:

    def test_default_range_kept(self):
        assert pick_distance_limits((0.1, 1000.0), (350.0, 450.0)) == (0.1, 1000.0)

    def test_far_limit_follows_zoomed_out_camera(self):
        assert pick_distance_limits((0.1, 1000.0), (1500.0, 2600.0)) == (0.1, 2600.0)

    def test_zoomed_out_star_pickable(self):
        star = make_point("far", 0.0, 0.0)
        camera = CameraPose(
            position=(0.0, 0.0, 1800.0),
            view_angle=75.0,
            aspect=VIEWPORT[0] / VIEWPORT[1],
            clipping_range=pick_distance_limits((0.1, 1000.0), (1700.0, 1900.0)),
        )
        assert pick(400, 300, camera, [star], VIEWPORT) == star.record
