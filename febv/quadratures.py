# -*- coding: utf-8 -*-
"""
Module for defining and using numerical quadratures on reference shapes, and
for placing lower dimensional quadratures on the facets of a reference shape.
"""

import logging

import numpy as np
from numpy.polynomial.legendre import Legendre, leggauss
import scipy.special as sf

from . import geometry as geo

logger = logging.getLogger(__name__)


class QuadratureRule(object):
    """ An `n`-point quadrature rule on a reference shape.

    Attributes
    ----------
    points : numpy.ndarray
        The `n` quadrature points, an array of shape ``(n, ndim)``.
    weights : numpy.ndarray
        The `n` quadrature weights.
    refshape : geometry.RefShape
        Reference shape over which the rule integrates.
    """

    @property
    def ndim(self):
        return self._points.shape[1]

    @property
    def n_points(self):
        return len(self._weights)

    @property
    def refshape(self):
        return self._refshape

    @property
    def points(self):
        return self._points

    @property
    def weights(self):
        return self._weights

    def __init__(self, weights, points, refshape):
        weights = np.array(weights, dtype=float)
        points = np.array(points, dtype=float)
        if points.ndim == 1:
            points = points[:, None]
        if weights.ndim != 1 or points.shape[0] != weights.size:
            raise ValueError("Need exactly one weight per quadrature point; "
                             "got {} weights for {} points"
                             .format(weights.size, points.shape[0]))
        self._weights = weights
        self._points = points
        self._refshape = refshape

    def integrate(self, values):
        """Weighted sum of `values` over their leading (quadrature point)
        axis; trailing axes are kept, so tensor valued integrands work.
        """
        values = np.asarray(values)
        if values.ndim == 0 or values.shape[0] != self.n_points:
            raise ValueError("Expected values at {} points, got an array of "
                             "shape {}".format(self.n_points, values.shape))
        return np.tensordot(self._weights, values, axes=(0, 0))[()]

    def xweight(self, f_vals):
        """Values at the quadrature points scaled by their weights, not
        summed.
        """
        f_vals = np.asarray(f_vals)
        return f_vals * self._weights.reshape((-1,) + (1,)*(f_vals.ndim - 1))

    def __repr__(self):
        return "{}(n={}, ndim={}, refshape={!r})".format(
            self.__class__.__name__, self.n_points, self.ndim, self._refshape)


def _check_n(n, n_min=1):
    int_n = int(n)
    if int_n != n or int_n < n_min:
        raise ValueError("n must be an integer >= {}".format(n_min))
    return int_n


def gauss_lobatto_1d(n):
    r"""
    Points and weights of the `n`-point Gauss-Lobatto rule on [-1, 1], exact
    for polynomials of degree ``2n - 3``.  Both end points are quadrature
    points; the ``n - 2`` interior points are the extrema of the Legendre
    polynomial :math:`L_{n-1}`, and

    .. math::
        w_i = \frac{2}{n(n-1)} \frac{1}{L_{n-1}(\xi_i)^2}
    """
    n = _check_n(n, 2)
    leg = Legendre.basis(n - 1)
    dleg = leg.deriv()

    interior = np.sort(dleg.roots().real) if n > 2 else np.empty(0)
    if n > 3:
        # one Newton step on the companion-matrix roots
        interior -= dleg(interior) / dleg.deriv()(interior)
    x = np.concatenate(([-1.], interior, [1.]))
    # enforce symmetry about 0
    x = (x - x[::-1]) / 2.

    wt = 2. / (n * (n - 1) * leg(x)**2)
    return x, wt


def _tensor_product(abscissa, weights, ndim):
    """Form an `ndim`-D rule on [-1, 1]^ndim from a 1-D rule."""
    pt_grid = np.meshgrid(*(abscissa,)*ndim, indexing='ij')
    wt_grid = np.meshgrid(*(weights,)*ndim, indexing='ij')
    points = np.stack([g.ravel() for g in pt_grid], axis=-1)
    weights = np.prod([g.ravel() for g in wt_grid], axis=0)
    return QuadratureRule(weights, points, geo.RefCube())


def gauss_legendre(n, ndim=1):
    """
    Tensor product Gauss-Legendre rule with `n` points in each of `ndim`
    directions on [-1, 1]^ndim.  Exact for polynomials of degree 2`n`-1 in
    each direction.
    """
    n = _check_n(n)
    abscissa, weights = leggauss(n)
    return _tensor_product(abscissa, weights, ndim)


def gauss_lobatto(n, ndim=1):
    """
    Tensor product Gauss-Lobatto rule with `n` points in each of `ndim`
    directions on [-1, 1]^ndim.
    """
    abscissa, weights = gauss_lobatto_1d(n)
    return _tensor_product(abscissa, weights, ndim)


def gauss_simplex(n, ndim):
    r"""
    Quadrature rule on the unit simplex using `n` points in each direction.

    In 1D this is Gauss-Legendre mapped to [0, 1].  In 2D the unit square is
    collapsed onto the unit triangle,

    .. math::
        \xi = u (1 - v), \quad \eta = v,

    and Gauss-Jacobi points with weight :math:`(1 - v)` absorb the Jacobian of
    the collapse.  Both are exact for polynomials of degree 2`n`-1.
    """
    n = _check_n(n)
    x, w = leggauss(n)
    u = 0.5*(x + 1.)
    if ndim == 1:
        return QuadratureRule(0.5*w, u, geo.RefTetrahedron())
    elif ndim == 2:
        s, ws = sf.roots_jacobi(n, 1., 0.)
        v = 0.5*(s + 1.)
        uu, vv = np.meshgrid(u, v, indexing='ij')
        wu, wv = np.meshgrid(w, ws, indexing='ij')
        points = np.stack(((uu*(1. - vv)).ravel(), vv.ravel()), axis=-1)
        weights = (wu*wv).ravel() / 8.
        return QuadratureRule(weights, points, geo.RefTetrahedron())
    raise NotImplementedError("Simplex quadratures are only available in 1D "
                              "and 2D")


def create_boundary_quad_rule(quad_rule, function_space):
    """
    Place a quadrature rule on each facet of the reference shape of a
    function space.

    Parameters
    ----------
    quad_rule : QuadratureRule
        Rule on the reference shape of dimension one lower than that of
        `function_space`.  E.g. for a 3D element, a 2D rule.
    function_space : basis_functions.FunctionSpace
        Space whose reference shape determines the facets.

    Returns
    -------
    list of QuadratureRule
        One rule per facet, in the facet ordering of the reference shape, with
        the same weights as `quad_rule` and points in the coordinates of the
        parent shape.
    """
    ndim = function_space.ndim
    if quad_rule.ndim != ndim - 1:
        raise geo.DimensionMismatch(
            "A {}D element needs a {}D boundary quadrature rule, not {}D"
            .format(ndim, ndim - 1, quad_rule.ndim))
    if quad_rule.refshape != function_space.refshape:
        raise geo.DimensionMismatch(
            "Quadrature rule on {!r} does not match function space on {!r}"
            .format(quad_rule.refshape, function_space.refshape))

    boundary_quad_rule = []
    for origin, tangents in function_space.refshape.facet_map(ndim):
        points = origin + np.dot(quad_rule.points, tangents.T)
        boundary_quad_rule.append(
            QuadratureRule(quad_rule.weights.copy(), points,
                           function_space.refshape))
    logger.debug("Placed %d-point rule on %d facets of %r", quad_rule.n_points,
                 len(boundary_quad_rule), function_space.refshape)
    return boundary_quad_rule


