from typing import Sequence

import numpy as np
import vtk
from vtkmodules.util.numpy_support import numpy_to_vtk


def ndc_to_xyz(ndc: Sequence[float]) -> np.ndarray:
    """
    Convert flat NDC coordinates (x0, y0, x1, y1, ...) to an (N, 3) array with z = 0.

    :return: float32 array suitable for vtkPoints
    """
    coords = np.asarray(ndc, dtype=np.float32)
    if coords.size % 2 != 0:
        raise ValueError(f"NDC array must have an even length, got {coords.size}.")
    coords = coords.reshape(-1, 2)
    xyz = np.zeros((coords.shape[0], 3), dtype=np.float32)
    xyz[:, :2] = coords
    return xyz


def update_line_loop(polydata: vtk.vtkPolyData, ndc: Sequence[float]) -> None:
    """
    Replace the points and lines of polydata with a closed line loop.

    A single polyline cell visits every point and returns to the first one.
    Fewer than two points produce no line cell.
    """
    xyz = ndc_to_xyz(ndc)
    count = xyz.shape[0]

    points = vtk.vtkPoints()
    if count:
        points.SetData(numpy_to_vtk(xyz, deep=True))

    lines = vtk.vtkCellArray()
    if count >= 2:
        lines.InsertNextCell(count + 1)
        for idx in range(count):
            lines.InsertCellPoint(idx)
        lines.InsertCellPoint(0)

    polydata.SetPoints(points)
    polydata.SetLines(lines)
    polydata.Modified()


def line_loop_polydata(ndc: Sequence[float]) -> vtk.vtkPolyData:
    """Build a vtkPolyData holding one closed line loop."""
    polydata = vtk.vtkPolyData()
    update_line_loop(polydata, ndc)
    return polydata


def make_line_loop_actor(
        polydata: vtk.vtkPolyData,
        color: tuple[float, float, float] = (1.0, 1.0, 1.0),
        line_width: float = 2.0,
) -> vtk.vtkActor2D:
    """
    Create a 2D actor drawing polydata whose points are in NDC.

    VTK's view coordinate system spans -1..1 on both axes, so the
    points are mapped onto the viewport without further transforms.
    """
    coord = vtk.vtkCoordinate()
    coord.SetCoordinateSystemToView()

    mapper = vtk.vtkPolyDataMapper2D()
    mapper.SetInputData(polydata)
    mapper.SetTransformCoordinate(coord)

    actor = vtk.vtkActor2D()
    actor.SetMapper(mapper)
    prop = actor.GetProperty()
    prop.SetColor(color)
    prop.SetLineWidth(line_width)
    return actor
