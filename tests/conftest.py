"""Shared fixtures: small programmatic meshes and gmsh mesh files."""

import matplotlib
import numpy as np
import pytest

matplotlib.use("Agg")

from heatfem.analysis.node import Node
from heatfem.analysis.finite_elements import Quad4, Tri3
from heatfem.pre.mesh import Mesh


# 3x3 nodes on the unit square, 8 triangles, plus one point and two edge entities
SQUARE_MSH = """$MeshFormat
4.1 0 8
$EndMeshFormat
$Entities
1 1 1 0
1 0 0 0 0
1 0 0 0 1 0 0 0 0
1 0 0 0 1 1 0 0 0
$EndEntities
$Nodes
1 9 1 9
2 1 0 9
1
2
3
4
5
6
7
8
9
0 0 0
0.5 0 0
1 0 0
0 0.5 0
0.5 0.5 0
1 0.5 0
0 1 0
0.5 1 0
1 1 0
$EndNodes
$Elements
3 11 1 11
0 1 15 1
1 1
1 1 1 2
2 1 2
3 2 3
2 1 2 8
4 1 2 5
5 1 5 4
6 2 3 6
7 2 6 5
8 4 5 8
9 4 8 7
10 5 6 9
11 5 9 8
$EndElements
"""

# u = 10 + 20 x on the outline, listed out of order
SQUARE_BOUNDARY = """8
9 30
1 10
2 20
3 30
4 10
6 30
7 10
8 20
"""


def build_grid_mesh(n_x: int, n_y: int, width: float = 1.0, height: float = 1.0) -> Mesh:
    """Structured mesh of n_x by n_y cells, each cut into two triangles along its diagonal."""
    xs = np.linspace(0.0, width, n_x + 1)
    ys = np.linspace(0.0, height, n_y + 1)
    nodes = [Node(index=j * (n_x + 1) + i, coords=[x, y]) for j, y in enumerate(ys) for i, x in enumerate(xs)]

    elements = []
    for j in range(n_y):
        for i in range(n_x):
            ll = j * (n_x + 1) + i
            lr, ul, ur = ll + 1, ll + n_x + 1, ll + n_x + 2
            elements.append(Tri3(index=len(elements), nodes=[nodes[ll], nodes[lr], nodes[ur]]))
            elements.append(Tri3(index=len(elements), nodes=[nodes[ll], nodes[ur], nodes[ul]]))
    return Mesh(nodes=nodes, elements=elements)


def outline_nodes(mesh: Mesh, width: float = 1.0, height: float = 1.0) -> list[Node]:
    return [
        node for node in mesh.nodes
        if np.isclose(node.x, 0.0) or np.isclose(node.x, width)
        or np.isclose(node.y, 0.0) or np.isclose(node.y, height)
    ]


@pytest.fixture
def grid_mesh():
    """Factory for structured triangle meshes."""
    return build_grid_mesh


@pytest.fixture
def single_triangle_mesh():
    """One triangle (0,0), (2,0), (0,1), deliberately not isosceles."""
    nodes = [Node(0, [0.0, 0.0]), Node(1, [2.0, 0.0]), Node(2, [0.0, 1.0])]
    return Mesh(nodes=nodes, elements=[Tri3(index=0, nodes=nodes)])


@pytest.fixture
def mixed_mesh():
    """Two triangles and a quadrilateral sharing nodes."""
    nodes = [
        Node(0, [0.0, 0.0]), Node(1, [1.0, 0.0]), Node(2, [1.0, 1.0]),
        Node(3, [0.0, 1.0]), Node(4, [2.0, 0.0]), Node(5, [2.0, 1.0]),
    ]
    elements = [
        Tri3(index=0, nodes=[nodes[0], nodes[1], nodes[2]]),
        Tri3(index=1, nodes=[nodes[0], nodes[2], nodes[3]]),
        Quad4(index=2, nodes=[nodes[1], nodes[4], nodes[5], nodes[2]]),
    ]
    return Mesh(nodes=nodes, elements=elements)


@pytest.fixture
def gmsh_runtime():
    """The gmsh module, or skip when its shared library cannot be loaded."""
    try:
        import gmsh
    except (ImportError, OSError) as e:
        pytest.skip(f"gmsh runtime not available: {e}")
    return gmsh


@pytest.fixture
def square_files(tmp_path, gmsh_runtime):
    """Paths of the unit-square mesh and its boundary file."""
    mesh_path = tmp_path / "square.msh"
    mesh_path.write_text(SQUARE_MSH)
    boundary_path = tmp_path / "square_boundary.txt"
    boundary_path.write_text(SQUARE_BOUNDARY)
    return str(mesh_path), str(boundary_path)
