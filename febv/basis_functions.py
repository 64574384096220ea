# -*- coding: utf-8 -*-

"""Module for describing sets of finite element basis functions (function
spaces) on reference shapes.
"""


import itertools as it
import numpy as np
import sympy as sym

from . import geometry as geo

_R = sym.Rational
_half = _R(1, 2)


def _nodal_basis(nodes, exponents, ndim):
    """Derive the nodal basis spanned by a set of monomials.

    Parameters
    ----------
    nodes : sequence
        Reference coordinates of the nodes (exact rationals).
    exponents : sequence of tuple of int
        Exponents of the monomials spanning the space; one tuple per node.
    ndim : int
        Number of reference coordinates.

    Returns
    -------
    value : callable
        Evaluates all basis functions at a point ``value(*xi)``.
    derivative : callable
        Evaluates the reference gradients of all basis functions at a point.
    """
    xi = sym.symbols('xi0:{}'.format(ndim))
    monomials = [sym.Mul(*[x**e for x, e in zip(xi, exps)])
                 for exps in exponents]
    assert len(monomials) == len(nodes)
    # Vandermonde matrix V[k, j] = m_j(node_k); the columns of its inverse
    # hold the monomial coefficients of each nodal basis function.
    vdm = sym.Matrix([[m.subs(dict(zip(xi, node))) for m in monomials]
                      for node in nodes])
    shape_funcs = (sym.Matrix([monomials]) * vdm.inv()).T
    shape_funcs = shape_funcs.applyfunc(sym.expand)
    grads = shape_funcs.jacobian(xi)
    return (sym.lambdify(xi, shape_funcs, 'numpy'),
            sym.lambdify(xi, grads, 'numpy'))


class FunctionSpace(object):
    """Common base class for nodal interpolation spaces on a reference shape.

    Subclasses supply `_node_tables`, which map ``(shape class, ndim,
    order)`` to the reference coordinates of the nodes and the local indices
    of the nodes on each facet (sorted, in the facet order of the reference
    shape), and `_exponents`, which gives the monomials spanning the space.
    """

    _node_tables = {}

    @property
    def ndim(self):
        """Number of dimensions of the reference shape."""
        return self._ndim

    @property
    def refshape(self):
        return self._refshape

    @property
    def order(self):
        return self._order

    @property
    def n_basefuncs(self):
        """Number of basis functions (and nodes) in the space."""
        return len(self._nodes)

    @property
    def n_boundary_nodes(self):
        """Number of nodes on each facet of the reference shape."""
        return len(self._boundary_list[0])

    @property
    def boundary_list(self):
        """Local node indices lying on each facet, sorted ascending."""
        return self._boundary_list

    @property
    def reference_coordinates(self):
        return self._nodes.copy()

    def __init__(self, ndim, refshape, order):
        key = (type(refshape), ndim, order)
        if key not in self._node_tables:
            raise NotImplementedError(
                "{} of order {} is not available on a {}D {}"
                .format(self.__class__.__name__, order, ndim, refshape.name))
        nodes, boundary_list = self._node_tables[key]
        self._ndim = ndim
        self._refshape = refshape
        self._order = order
        self._nodes = np.array(nodes, dtype=float)
        self._boundary_list = tuple(tuple(b) for b in boundary_list)
        assert len(self._boundary_list) == refshape.n_facets(ndim)
        self._value, self._derivative = _nodal_basis(
            nodes, self._exponents(), ndim)

    def _exponents(self):
        raise NotImplementedError()

    def _check_point(self, xi):
        xi = np.asarray(xi, dtype=float)
        if xi.shape != (self._ndim,):
            raise geo.DimensionMismatch(
                "Cannot evaluate {}-dimensional basis at point of shape {}"
                .format(self._ndim, xi.shape))
        return xi

    def value(self, xi):
        """
        Evaluate each basis function at the reference point `xi`.

        Returns
        -------
        numpy.ndarray
            Array of shape ``(n_basefuncs,)``.
        """
        xi = self._check_point(xi)
        values = np.array(self._value(*xi), dtype=float)
        return values.reshape(self.n_basefuncs)

    def derivative(self, xi):
        """
        Evaluate the gradient of each basis function with respect to the
        reference coordinates at `xi`.

        Returns
        -------
        numpy.ndarray
            Array of shape ``(n_basefuncs, ndim)``.
        """
        xi = self._check_point(xi)
        grads = np.array(self._derivative(*xi), dtype=float)
        return grads.reshape(self.n_basefuncs, self._ndim)

    def __repr__(self):
        return "{}(ndim={}, refshape={!r}, order={})".format(
            self.__class__.__name__, self._ndim, self._refshape, self._order)


_quad_q2_nodes = [(-1, -1), (1, -1), (1, 1), (-1, 1),
                  (0, -1), (1, 0), (0, 1), (-1, 0), (0, 0)]


class Lagrange(FunctionSpace):
    """Lagrange interpolation space of complete polynomials (simplices) or
    tensor product polynomials (cubes).

    Node numbering
    --------------
    Vertices first, in the order of the reference shape, then edge midpoints
    in facet order, then the center node::

        Q2:  3--6--2    P2:  1
             |     |         |\\
             7  8  5         4 3
             |     |         |  \\
             0--4--1         2-5-0
    """

    _node_tables = {
        (geo.RefCube, 2, 1): (
            _quad_q2_nodes[:4],
            [(0, 1), (1, 2), (2, 3), (0, 3)]),
        (geo.RefCube, 2, 2): (
            _quad_q2_nodes,
            [(0, 1, 4), (1, 2, 5), (2, 3, 6), (0, 3, 7)]),
        (geo.RefCube, 3, 1): (
            [(-1, -1, -1), (1, -1, -1), (1, 1, -1), (-1, 1, -1),
             (-1, -1, 1), (1, -1, 1), (1, 1, 1), (-1, 1, 1)],
            [(0, 1, 2, 3), (0, 1, 4, 5), (1, 2, 5, 6),
             (2, 3, 6, 7), (0, 3, 4, 7), (4, 5, 6, 7)]),
        (geo.RefTetrahedron, 2, 1): (
            [(1, 0), (0, 1), (0, 0)],
            [(0, 1), (1, 2), (0, 2)]),
        (geo.RefTetrahedron, 2, 2): (
            [(1, 0), (0, 1), (0, 0),
             (_half, _half), (0, _half), (_half, 0)],
            [(0, 1, 3), (1, 2, 4), (0, 2, 5)]),
        (geo.RefTetrahedron, 3, 1): (
            [(1, 0, 0), (0, 1, 0), (0, 0, 1), (0, 0, 0)],
            [(0, 1, 2), (0, 1, 3), (1, 2, 3), (0, 2, 3)]),
    }

    def _exponents(self):
        exps = it.product(range(self._order + 1), repeat=self._ndim)
        if isinstance(self._refshape, geo.RefTetrahedron):
            return [e for e in exps if sum(e) <= self._order]
        return list(exps)


class Serendipity(FunctionSpace):
    """Serendipity interpolation space on quadrilaterals (nodes on the
    element boundary only).  Node numbering follows `Lagrange`.
    """

    _node_tables = {
        (geo.RefCube, 2, 2): (
            _quad_q2_nodes[:8],
            [(0, 1, 4), (1, 2, 5), (2, 3, 6), (0, 3, 7)]),
    }

    def _exponents(self):
        # tensor product monomials less those of the highest superlinear
        # degree
        exps = it.product(range(self._order + 1), repeat=self._ndim)
        return [e for e in exps if sum(e) <= self._order + self._ndim - 1]
