"""Tests for the mesh model and gmsh mesh loading."""

import matplotlib.pyplot as plt
import numpy as np
import pytest

from heatfem.analysis.node import Node
from heatfem.analysis.finite_elements import Quad4, Tri3
from heatfem.errors import MalformedMeshError
from heatfem.pre.boundary import BoundarySpec
from heatfem.pre.generate import write_rectangle_mesh
from heatfem.analysis.model import Model
from heatfem.pre import mesh as mesh_module
from heatfem.pre.mesh import Mesh
from heatfem.solvers.solver import Solver


# Node tags 1, 2, 4: not a contiguous range
GAPPED_MSH = """$MeshFormat
4.1 0 8
$EndMeshFormat
$Entities
0 0 1 0
1 0 0 0 1 1 0 0 0
$EndEntities
$Nodes
1 3 1 4
2 1 0 3
1
2
4
0 0 0
1 0 0
0 1 0
$EndNodes
$Elements
1 1 1 1
2 1 2 1
1 1 2 4
$EndElements
"""


# Nodes but no $Elements section
NODES_ONLY_MSH = """$MeshFormat
4.1 0 8
$EndMeshFormat
$Entities
0 0 1 0
1 0 0 0 1 1 0 0 0
$EndEntities
$Nodes
1 3 1 3
2 1 0 3
1
2
3
0 0 0
1 0 0
0 1 0
$EndNodes
"""

# A point and an edge, nothing to assemble
EDGES_ONLY_MSH = """$MeshFormat
4.1 0 8
$EndMeshFormat
$Entities
1 1 0 0
1 0 0 0 0
1 0 0 0 1 0 0 0 0
$EndEntities
$Nodes
1 2 1 2
1 1 0 2
1
2
0 0 0
1 0 0
$EndNodes
$Elements
2 2 1 2
0 1 15 1
1 1
1 1 1 1
2 1 2
$EndElements
"""


class TestNode:

    def test_coordinates(self):
        node = Node(3, [1.5, -2.0])
        assert node.uid == 3
        assert (node.x, node.y) == (1.5, -2.0)

    def test_read_only(self):
        node = Node(0, [0.0, 0.0])
        with pytest.raises(ValueError):
            node.coords[0] = 1.0

    def test_needs_two_coordinates(self):
        with pytest.raises(ValueError):
            Node(0, [0.0, 0.0, 0.0])


class TestMeshModel:

    def test_nodes_sorted_by_index(self):
        nodes = [Node(2, [0.0, 1.0]), Node(0, [0.0, 0.0]), Node(1, [1.0, 0.0])]
        mesh = Mesh(nodes=nodes, elements=[Tri3(index=0, nodes=[nodes[1], nodes[2], nodes[0]])])
        assert [node.uid for node in mesh.nodes] == [0, 1, 2]
        np.testing.assert_allclose(mesh.coordinates, [[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]])

    def test_node_gap(self):
        with pytest.raises(MalformedMeshError):
            Mesh(nodes=[Node(0, [0.0, 0.0]), Node(2, [1.0, 0.0])], elements=[])

    def test_element_outside_node_range(self):
        nodes = [Node(0, [0.0, 0.0]), Node(1, [1.0, 0.0]), Node(2, [0.0, 1.0])]
        stray = Node(7, [1.0, 1.0])
        with pytest.raises(MalformedMeshError):
            Mesh(nodes=nodes, elements=[Tri3(index=0, nodes=[nodes[0], nodes[1], stray])])

    def test_triangles_and_counts(self, mixed_mesh):
        assert mixed_mesh.number_of_nodes == 6
        assert mixed_mesh.number_of_elements == 3
        assert [element.id for element in mixed_mesh.triangles] == [0, 1]
        assert isinstance(mixed_mesh.elements[2], Quad4)
        assert mixed_mesh.max_nodes_per_element == 4

    def test_plot(self, mixed_mesh):
        mixed_mesh.plot()
        assert plt.gcf().axes[0].get_xlabel() == "X Coordinate"
        plt.close("all")

    def test_quad_not_implemented(self, mixed_mesh):
        with pytest.raises(NotImplementedError):
            mixed_mesh.elements[2].get_conductivity_matrix()

    def test_empty_mesh(self):
        mesh = Mesh(nodes=[], elements=[])
        assert mesh.number_of_nodes == 0
        assert mesh.max_nodes_per_element == 0
        assert mesh.coordinates.shape == (0, 2)


class TestMeshFromFile:

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Mesh.from_file(str(tmp_path / "missing.msh"))

    def test_square(self, square_files):
        mesh = Mesh.from_file(square_files[0])

        assert mesh.number_of_nodes == 9
        # The point and the two edges are not stored
        assert mesh.number_of_elements == 8
        assert [element.id for element in mesh.elements] == list(range(8))
        assert all(isinstance(element, Tri3) for element in mesh.elements)

        # gmsh tags are 1-based, indices 0-based
        assert mesh.elements[0].node_ids == (0, 1, 4)
        assert mesh.elements[-1].node_ids == (4, 8, 7)
        np.testing.assert_allclose(mesh.nodes[4].coords, [0.5, 0.5])
        assert mesh.filename == square_files[0]

    def test_non_contiguous_node_tags(self, tmp_path, gmsh_runtime):
        path = tmp_path / "gapped.msh"
        path.write_text(GAPPED_MSH)
        with pytest.raises(MalformedMeshError):
            Mesh.from_file(str(path))

    def test_unreadable_permissions(self, tmp_path, monkeypatch):
        path = tmp_path / "locked.msh"
        path.write_text("")
        monkeypatch.setattr(mesh_module.os, "access", lambda *args: False)
        with pytest.raises(FileNotFoundError):
            Mesh.from_file(str(path))

    @pytest.mark.parametrize("content", [NODES_ONLY_MSH, EDGES_ONLY_MSH], ids=["no-elements", "edges-only"])
    def test_no_surface_elements(self, tmp_path, gmsh_runtime, content):
        path = tmp_path / "flat.msh"
        path.write_text(content)
        with pytest.raises(MalformedMeshError):
            Mesh.from_file(str(path))

    def test_unreadable(self, tmp_path, gmsh_runtime):
        path = tmp_path / "garbage.msh"
        path.write_text("this is not a mesh\n")
        with pytest.raises(MalformedMeshError):
            Mesh.from_file(str(path))


class TestRectangleMesh:

    def test_invalid_cell_count(self, tmp_path):
        with pytest.raises(ValueError):
            write_rectangle_mesh(str(tmp_path / "r.msh"), n_x=0)

    def test_generated_mesh(self, tmp_path, gmsh_runtime):
        mesh_path = str(tmp_path / "rect.msh")
        boundary_path = str(tmp_path / "rect_boundary.txt")
        write_rectangle_mesh(mesh_path, width=2.0, height=1.0, n_x=4, n_y=3,
                             boundary_filename=boundary_path)

        mesh = Mesh.from_file(mesh_path)
        assert mesh.number_of_nodes == 5 * 4
        assert len(mesh.triangles) == 2 * 4 * 3
        assert len(BoundarySpec.from_file(boundary_path)) == 2 * (4 + 3)

    def test_linear_solution_on_generated_mesh(self, tmp_path, gmsh_runtime):
        def field(x, y):
            return 5.0 - x + 4.0 * y

        mesh_path = str(tmp_path / "rect.msh")
        boundary_path = str(tmp_path / "rect_boundary.txt")
        write_rectangle_mesh(mesh_path, width=1.0, height=2.0, n_x=5, n_y=6,
                             boundary_filename=boundary_path, boundary_value=field)

        mesh = Mesh.from_file(mesh_path)
        u = Solver(Model(mesh, BoundarySpec.from_file(boundary_path))).solve()

        coords = mesh.coordinates
        np.testing.assert_allclose(u, field(coords[:, 0], coords[:, 1]), rtol=0.0, atol=1e-9)
