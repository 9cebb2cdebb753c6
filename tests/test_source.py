"""Tests for source terms and the nodal load vector."""

import numpy as np
import pytest

from heatfem.analysis.node import Node
from heatfem.pre.source import (
    ConstantSource,
    QuadraticSource,
    SourceKind,
    assemble_load_vector,
    source_from_config,
)


NODES = [Node(0, [0.0, 0.0]), Node(1, [2.0, 0.0]), Node(2, [1.0, 3.0])]


class TestSourceTerms:

    def test_constant(self):
        source = ConstantSource(2.5)
        assert source.kind is SourceKind.CONSTANT
        assert [source.evaluate(node) for node in NODES] == [2.5, 2.5, 2.5]

    def test_zero_by_default(self):
        assert ConstantSource().evaluate(NODES[2]) == 0.0

    def test_quadratic(self):
        source = QuadraticSource(a=0.0, b=3.0)
        assert source.kind is SourceKind.QUADRATIC
        assert source.evaluate(NODES[2]) == pytest.approx(27.0)
        assert QuadraticSource().evaluate(NODES[2]) == pytest.approx(10.0)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            ConstantSource(1.0).value = 2.0


class TestSourceFromConfig:

    def test_constant(self):
        assert source_from_config("constant", [4.0]) == ConstantSource(4.0)
        assert source_from_config("constant") == ConstantSource(0.0)

    def test_quadratic(self):
        assert source_from_config("quadratic", [0, 3]) == QuadraticSource(0.0, 3.0)
        assert source_from_config(SourceKind.QUADRATIC) == QuadraticSource(1.0, 1.0)

    @pytest.mark.parametrize(
        "kind, coefficients",
        [
            ("cubic", []),
            ("constant", [1.0, 2.0]),
            ("quadratic", [1.0]),
            ("quadratic", [1.0, 2.0, 3.0]),
        ],
    )
    def test_invalid(self, kind, coefficients):
        with pytest.raises(ValueError):
            source_from_config(kind, coefficients)


class TestLoadVector:

    def test_one_entry_per_node(self):
        f = assemble_load_vector(NODES, QuadraticSource(1.0, 1.0))
        np.testing.assert_allclose(f, [0.0, 4.0, 10.0])

    def test_boundary_rows_are_kept(self):
        """Every node gets an entry; reduction drops the boundary rows later."""
        f = assemble_load_vector(NODES, ConstantSource(1.0))
        assert f.shape == (3,)
        assert f.dtype == np.float64

    def test_empty(self):
        assert assemble_load_vector([], ConstantSource(1.0)).shape == (0,)
