"""
VTK and Geometry Utilities
Helper functions for turning diagram geometry into PyVista/VTK objects.
"""
from __future__ import annotations

import logging
import os
from typing import Optional, Sequence, Tuple

import numpy as np
import numpy.typing as npt
import pyvista as pv
from vtkmodules.vtkCommonCore import VTK_FONT_FILE
from vtkmodules.vtkRenderingCore import vtkTextActor3D

from hrdiagram.controller.scene_builder import LineSegment, TextLabel
from hrdiagram.model.stars import PlotPoint

logger = logging.getLogger(__name__)

# Text is rasterized at this pixel size and scaled down to the label size
TEXT_RESOLUTION = 48
STAR_SPHERE_RESOLUTION = 16

_TRUETYPE_MAGIC = (b"\x00\x01\x00\x00", b"OTTO", b"true", b"ttcf")


class LabelFontError(Exception):
    """The configured label font cannot be used."""


class VtkUtils:
    @staticmethod
    def segments_to_polydata(segments: Sequence[LineSegment]) -> pv.PolyData:
        """Convert independent line segments into one PolyData of 2-point lines."""
        n = len(segments)
        if n == 0:
            return pv.PolyData()

        points = np.empty((n * 2, 3), dtype=np.float64)
        cells = np.empty(n * 3, dtype=np.int_)
        for i, seg in enumerate(segments):
            points[2 * i] = seg.start
            points[2 * i + 1] = seg.end
            cells[3 * i:3 * i + 3] = (2, 2 * i, 2 * i + 1)

        return pv.PolyData(points, lines=cells)

    @staticmethod
    def star_colors(points: Sequence[PlotPoint]) -> npt.NDArray[np.uint8]:
        """(N, 3) uint8 RGB array."""
        return np.array([(p.color.r, p.color.g, p.color.b) for p in points], dtype=np.uint8).reshape(-1, 3)

    def stars_to_polydata(self, points: Sequence[PlotPoint], radius: float) -> pv.PolyData:
        """
        One sphere per star, merged into a single mesh.
        Each sphere carries its star color in the 'rgb' point array.
        """
        if not points:
            return pv.PolyData()

        sphere = pv.Sphere(
            radius=radius,
            theta_resolution=STAR_SPHERE_RESOLUTION,
            phi_resolution=STAR_SPHERE_RESOLUTION,
        ).triangulate()
        n_sphere_pts = sphere.n_points
        triangles = np.asarray(sphere.faces).reshape(-1, 4)[:, 1:]   # [3, i, j, k] rows

        centers = np.array([p.position for p in points], dtype=np.float64)
        n_stars = centers.shape[0]

        # (n_stars, n_sphere_pts, 3) -> flat point list, one sphere after another
        pts = (np.asarray(sphere.points)[None, :, :] + centers[:, None, :]).reshape(-1, 3)

        offsets = np.arange(n_stars, dtype=np.int_) * n_sphere_pts
        tri = (triangles[None, :, :] + offsets[:, None, None]).reshape(-1, 3)
        faces = np.hstack([np.full((tri.shape[0], 1), 3, dtype=np.int_), tri]).ravel()

        mesh = pv.PolyData(pts, faces=faces)
        mesh.point_data["rgb"] = np.repeat(self.star_colors(points), n_sphere_pts, axis=0)
        logger.debug(f"Star mesh: {n_stars} spheres, {mesh.n_points} points, {mesh.n_cells} cells")
        return mesh

    @staticmethod
    def load_label_font(font_path: Optional[str]) -> Optional[str]:
        """
        Check that the label font can be used.

        Args:
            font_path: Path to a TrueType/OpenType file, or None for VTK's
                built-in font.

        Returns:
            The validated path, or None for the built-in font.

        Raises:
            LabelFontError: If the file is missing, unreadable or not a font.
        """
        if font_path is None:
            return None

        if not os.path.isfile(font_path):
            raise LabelFontError(f"Label font not found: {font_path}")
        try:
            with open(font_path, "rb") as f:
                magic = f.read(4)
        except OSError as e:
            raise LabelFontError(f"Cannot read label font '{font_path}': {e}") from e

        if magic not in _TRUETYPE_MAGIC:
            raise LabelFontError(f"Not a TrueType/OpenType font: {font_path}")

        return font_path

    @staticmethod
    def make_text_actor(
        label: TextLabel,
        font_file: Optional[str] = None,
        color: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    ) -> vtkTextActor3D:
        """World-space text whose glyph height is `label.size` world units."""
        actor = vtkTextActor3D()
        actor.SetInput(label.text)

        prop = actor.GetTextProperty()
        prop.SetColor(*color)
        prop.SetFontSize(TEXT_RESOLUTION)
        if font_file:
            prop.SetFontFamily(VTK_FONT_FILE)
            prop.SetFontFile(font_file)

        scale = label.size / TEXT_RESOLUTION
        actor.SetScale(scale, scale, scale)
        actor.SetPosition(*label.position)
        actor.SetOrientation(0.0, 0.0, label.rotation_z)
        return actor
