import numpy as np
import pytest
import vtk

from shclip.utils import vtk_helpers


def _cell_ids(polydata):
    lines = polydata.GetLines()
    lines.InitTraversal()
    ids = vtk.vtkIdList()
    cells = []
    while lines.GetNextCell(ids):
        cells.append([ids.GetId(i) for i in range(ids.GetNumberOfIds())])
    return cells


def test_ndc_to_xyz():
    xyz = vtk_helpers.ndc_to_xyz([-0.5, -0.5, 0.5, 0.25])
    assert xyz.shape == (2, 3)
    assert xyz.dtype == np.float32
    np.testing.assert_allclose(xyz, [[-0.5, -0.5, 0.0], [0.5, 0.25, 0.0]])


def test_ndc_to_xyz_odd_length():
    with pytest.raises(ValueError):
        vtk_helpers.ndc_to_xyz([0.1, 0.2, 0.3])


def test_line_loop_is_closed():
    ndc = [-0.5, -0.5, 0.5, -0.5, 0.5, 0.5, -0.5, 0.5]
    polydata = vtk_helpers.line_loop_polydata(ndc)
    assert polydata.GetNumberOfPoints() == 4
    assert polydata.GetNumberOfLines() == 1
    assert _cell_ids(polydata) == [[0, 1, 2, 3, 0]]
    assert polydata.GetPoint(2) == pytest.approx((0.5, 0.5, 0.0))


def test_update_line_loop_replaces_geometry():
    polydata = vtk_helpers.line_loop_polydata([0, 0, 0.5, 0, 0.5, 0.5])
    vtk_helpers.update_line_loop(polydata, [0, 0, 0.1, 0.1])
    assert polydata.GetNumberOfPoints() == 2
    assert _cell_ids(polydata) == [[0, 1, 0]]


@pytest.mark.parametrize("ndc", [[], [0.2, 0.3]])
def test_too_few_points_have_no_lines(ndc):
    polydata = vtk_helpers.line_loop_polydata(ndc)
    assert polydata.GetNumberOfPoints() == len(ndc) // 2
    assert polydata.GetNumberOfLines() == 0


def test_actor_uses_view_coordinates():
    polydata = vtk_helpers.line_loop_polydata([0, 0, 0.5, 0, 0.5, 0.5])
    actor = vtk_helpers.make_line_loop_actor(polydata, color=(1.0, 0.0, 0.0), line_width=3.0)
    mapper = actor.GetMapper()
    assert mapper.GetInput() is polydata
    assert mapper.GetTransformCoordinate().GetCoordinateSystemAsString() == "View"
    assert actor.GetProperty().GetLineWidth() == 3.0
    assert actor.GetProperty().GetColor() == pytest.approx((1.0, 0.0, 0.0))
