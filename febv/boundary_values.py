#! /usr/bin/env python

'''
Values of shape functions, and of functions interpolated by them, on the
boundaries (facets) of finite elements.

A `BoundaryValues` object facilitates the evaluation of shape function values,
shape function gradients, values of nodal functions, gradients and divergences
of nodal functions etc. on the boundary of a finite element.  There are two
kinds: `BoundaryScalarValues` uses scalar shape functions and
`BoundaryVectorValues` uses vector valued shape functions, each scalar shape
function being expanded into one vector shape function per direction.  For a
scalar field, `BoundaryScalarValues` should be used; for a vector field either
may be used.

The quadrature rule handed to the constructor must be one dimension lower than
the element, e.g. a 2D rule for a 3D element.  It is placed on every facet of
the reference shape, and shape functions are tabulated there once.  Calling
`reinit` with the physical coordinates of an element and a facet number maps
the tabulated gradients to physical space and computes the integration weights
``detJdV`` for that facet only.  Mapped quantities of any other facet hold
whatever a previous call left there.

Example
-------
>>> from febv import gauss_legendre, Lagrange, RefCube
>>> bv = BoundaryScalarValues(gauss_legendre(2), Lagrange(2, RefCube(), 1))
>>> bv.reinit([[0., 0.], [1., 0.], [1., 1.], [0., 1.]], 0)
>>> print(round(bv.detJdV[:, 0].sum(), 12))
1.0

A `BoundaryValues` object holds mutable state.  Use one object per worker
when mapping concurrently; the tabulated reference values are read-only and
may be shared.
'''

import logging
import operator
import numpy as np

from . import linalg
from .geometry import DimensionMismatch
from .quadratures import create_boundary_quad_rule

logger = logging.getLogger(__name__)


class DegenerateGeometry(Exception):
    """Exception to be raised if the mapping of a finite element (facet) to
    physical space is singular or inverted, such that a positive surface
    Jacobian determinant cannot be computed.
    """
    pass


class BoundaryValues(object):
    """Common base of `BoundaryScalarValues` and `BoundaryVectorValues`.

    Parameters
    ----------
    quad_rule : quadratures.QuadratureRule
        Quadrature rule on the reference facet, of dimension one lower than
        `function_space`.
    function_space : basis_functions.FunctionSpace
        Space used to interpolate the approximated function.
    geometric_space : basis_functions.FunctionSpace, optional
        Space used to interpolate the geometry.  Defaults to
        `function_space`.
    dtype : data-type, optional
        Type the tabulated and mapped values are stored as.
    singular_rtol : float, optional
        Jacobians with ``|det J|`` at or below this fraction of the product of
        their column norms are treated as singular.
    """

    _option_keys = {'singular_rtol'}
    default_options = dict(singular_rtol=1e-12)

    def __init__(self, quad_rule, function_space, geometric_space=None,
                 dtype=float, **options):
        if geometric_space is None:
            geometric_space = function_space
        if function_space.ndim != geometric_space.ndim:
            raise DimensionMismatch(
                "Function space is {}D but geometric space is {}D"
                .format(function_space.ndim, geometric_space.ndim))
        if function_space.refshape != geometric_space.refshape:
            raise DimensionMismatch(
                "Function space on {!r} but geometric space on {!r}"
                .format(function_space.refshape, geometric_space.refshape))
        self._resolve_options(options)
        self._options = options
        self._function_space = function_space
        self._geometric_space = geometric_space
        self._dtype = np.dtype(dtype)
        self._quad_rule = create_boundary_quad_rule(quad_rule, function_space)
        self._facets = function_space.refshape.facet_map(function_space.ndim)
        self._current_boundary = None
        self._tabulate()
        logger.debug("%s: %d basis functions, %d quadrature points, "
                     "%d facets", self.__class__.__name__, self.n_basefuncs,
                     self.n_quad_points, len(self._quad_rule))

    def _resolve_options(self, options):
        """Check the keyword options and fill in default values."""
        bad_options = set(options) - self._option_keys
        if bad_options:
            raise ValueError('Unrecognized options {}.'.format(bad_options))
        for (key, default_value) in self.default_options.items():
            options.setdefault(key, default_value)

    def _tabulate(self):
        """Evaluate the values and reference gradients of the interpolation
        and geometry basis functions at the quadrature points of every facet.
        """
        fs = self._function_space
        gs = self._geometric_space
        ndim = self.ndim
        dtype = self._dtype
        n_qpoints = self._quad_rule[0].n_points
        n_bounds = len(self._quad_rule)

        # Function interpolation
        N = np.zeros((fs.n_basefuncs, n_qpoints, n_bounds), dtype)
        dNdxi = np.zeros((fs.n_basefuncs, n_qpoints, n_bounds, ndim), dtype)
        # Geometry interpolation
        M = np.zeros((gs.n_basefuncs, n_qpoints, n_bounds), dtype)
        dMdxi = np.zeros((gs.n_basefuncs, n_qpoints, n_bounds, ndim), dtype)

        for k, rule in enumerate(self._quad_rule):
            for i, xi in enumerate(rule.points):
                N[:, i, k] = fs.value(xi)
                dNdxi[:, i, k] = fs.derivative(xi)
                M[:, i, k] = gs.value(xi)
                dMdxi[:, i, k] = gs.derivative(xi)

        self._N, self._dNdxi = self._expand(N, dNdxi)
        self._M = M
        self._dMdxi = dMdxi
        for arr in (self._N, self._dNdxi, self._M, self._dMdxi):
            arr.flags.writeable = False

        self._dNdx = np.zeros_like(self._dNdxi)
        self._detJdV = np.zeros((n_qpoints, n_bounds), dtype)
        self._normals = np.zeros((n_qpoints, n_bounds, ndim), dtype)

    def _expand(self, N, dNdxi):
        """Turn tabulated scalar shape functions into the stored kind."""
        raise NotImplementedError()

    @property
    def ndim(self):
        return self._function_space.ndim

    @property
    def dtype(self):
        return self._dtype

    @property
    def options(self):
        return dict(self._options)

    @property
    def function_space(self):
        return self._function_space

    @property
    def geometric_space(self):
        return self._geometric_space

    @property
    def n_basefuncs(self):
        """Number of (possibly vector valued) shape functions."""
        return self._N.shape[0]

    @property
    def n_quad_points(self):
        """Number of quadrature points on the current boundary."""
        return self._detJdV.shape[0]

    @property
    def n_boundaries(self):
        return len(self._quad_rule)

    @property
    def current_boundary(self):
        """The boundary (facet) most recently mapped by `reinit`, or `None`."""
        return self._current_boundary

    def get_quad_rule(self, boundary=None):
        """Quadrature rule placed on a boundary (default: the current one)."""
        if boundary is None:
            return self._quad_rule[self._active_boundary()]
        return self._quad_rule[self._check_boundary(boundary)]

    # Tabulated and mapped arrays, indexed (basis, quad point, facet, ...)

    @property
    def N(self):
        return self._N

    @property
    def dNdxi(self):
        return self._dNdxi

    @property
    def dNdx(self):
        """Physical gradients; valid only for `current_boundary`."""
        return self._dNdx

    @property
    def M(self):
        return self._M

    @property
    def dMdxi(self):
        return self._dMdxi

    @property
    def detJdV(self):
        """Surface Jacobian determinant times quadrature weight, indexed
        (quadrature point, facet); valid only for `current_boundary`.
        """
        return self._detJdV

    @property
    def normals(self):
        return self._normals

    def _active_boundary(self):
        if self._current_boundary is None:
            raise ValueError("No boundary is active; call reinit() first.")
        return self._current_boundary

    def reinit(self, x, boundary):
        """Map the tabulated values to a physical element for one boundary.

        Parameters
        ----------
        x : array_like
            Physical coordinates of the nodes of the geometric space, shape
            ``(n_geom_basefuncs, ndim)``.
        boundary : int
            Facet of the reference shape, ``0 <= boundary < n_boundaries``.

        Raises
        ------
        DimensionMismatch
            If `x` has the wrong shape.
        TypeError
            If `boundary` is not an integer.
        IndexError
            If `boundary` is out of range.
        DegenerateGeometry
            If the Jacobian is singular or the surface Jacobian determinant
            is not positive at any quadrature point.  The stored values and
            `current_boundary` are then left as they were.
        """
        x = np.asarray(x, dtype=self._dtype)
        n_geom_basefuncs = self._geometric_space.n_basefuncs
        if x.shape != (n_geom_basefuncs, self.ndim):
            raise DimensionMismatch(
                "Expected coordinates of {} nodes in {}D, got an array of "
                "shape {}".format(n_geom_basefuncs, self.ndim, x.shape))

        cb = self._check_boundary(boundary)
        logger.debug("Mapping boundary %d", cb)
        tangents = self._facets[cb][1]

        # J = sum_j x[j] (outer) dMdxi[j] at each quadrature point
        jac = np.einsum('jk,jql->qkl', x, self._dMdxi[:, :, cb])
        det_jac, inv_jac = linalg.det_inv(jac)
        col_norms = np.linalg.norm(jac, axis=-2)
        tol = self._options['singular_rtol'] * np.prod(col_norms, axis=-1)
        singular = ~(np.abs(det_jac) > tol)
        if singular.any():
            q = int(np.argmax(singular))
            logger.warning("Singular Jacobian on boundary %d at quadrature "
                           "point %d: detJ = %g", cb, q, det_jac[q])
            raise DegenerateGeometry(
                "Jacobian is singular at quadrature point {}: detJ = {}"
                .format(q, det_jac[q]))

        n_dS = linalg.surface_vector(jac, tangents)
        dS = np.linalg.norm(n_dS, axis=-1)
        det_jac_bnd = np.sign(det_jac) * dS
        bad = ~(det_jac_bnd > 0)
        if bad.any():
            q = int(np.argmax(bad))
            logger.warning("Non-positive surface Jacobian on boundary %d at "
                           "quadrature point %d: detJ = %g", cb, q,
                           det_jac_bnd[q])
            raise DegenerateGeometry("detJ is not positive: detJ = {}"
                                     .format(det_jac_bnd[q]))

        # Nothing is stored until the mapping is known to be valid
        self._dNdx[:, :, cb] = np.einsum(
            'jq...k,qkl->jq...l', self._dNdxi[:, :, cb], inv_jac)
        self._detJdV[:, cb] = self._quad_rule[cb].xweight(det_jac_bnd)
        self._normals[:, cb] = n_dS / dS[:, None]
        self._current_boundary = cb

    def _check_boundary(self, boundary):
        boundary = operator.index(boundary)
        if not 0 <= boundary < self.n_boundaries:
            raise IndexError("Boundary {} is out of range for {} boundaries"
                             .format(boundary, self.n_boundaries))
        return boundary

    def get_detJdV(self, q_point):
        return self._detJdV[q_point, self._active_boundary()]

    def get_normal(self, q_point):
        """Unit outward normal at a quadrature point of the current
        boundary.
        """
        return self._normals[q_point, self._active_boundary()]

    def shape_value(self, q_point, base_func):
        return self._N[base_func, q_point, self._active_boundary()]

    def shape_gradient(self, q_point, base_func):
        return self._dNdx[base_func, q_point, self._active_boundary()]

    def _check_coeffs(self, u):
        u = np.asarray(u)
        if u.ndim == 0 or u.shape[0] != self.n_basefuncs:
            raise DimensionMismatch(
                "Expected {} nodal values, got an array of shape {}"
                .format(self.n_basefuncs, u.shape))
        return u

    def function_value(self, q_point, u):
        """Value of the function with nodal values `u` at a quadrature point.

        `u` has one entry per shape function.  With scalar shape functions
        the entries may also be vectors, giving a vector valued result.
        """
        u = self._check_coeffs(u)
        return np.tensordot(
            u, self._N[:, q_point, self._active_boundary()], axes=(0, 0))[()]

    def function_gradient(self, q_point, u):
        """Physical gradient of the function with nodal values `u`.

        For vector valued functions ``grad[i, j] = du_i/dx_j``.
        """
        u = self._check_coeffs(u)
        return np.tensordot(
            u, self._dNdx[:, q_point, self._active_boundary()], axes=(0, 0))

    def _function_tensor_gradient(self, q_point, u):
        grad = self.function_gradient(q_point, u)
        if grad.shape != (self.ndim, self.ndim):
            raise DimensionMismatch("The function must be vector valued")
        return grad

    def function_symmetric_gradient(self, q_point, u):
        return linalg.symmetric(self._function_tensor_gradient(q_point, u))

    def function_divergence(self, q_point, u):
        return np.trace(self._function_tensor_gradient(q_point, u))

    def spatial_coordinate(self, q_point, x):
        """Physical coordinates of a quadrature point of the current boundary
        given the coordinates `x` of the geometric nodes.
        """
        x = np.asarray(x)
        if x.shape != (self._geometric_space.n_basefuncs, self.ndim):
            raise DimensionMismatch(
                "Expected coordinates of {} nodes in {}D, got an array of "
                "shape {}".format(self._geometric_space.n_basefuncs,
                                  self.ndim, x.shape))
        return np.tensordot(
            self._M[:, q_point, self._active_boundary()], x, axes=(0, 0))

    def __repr__(self):
        return "{}({!r}, n_qpoints={})".format(
            self.__class__.__name__, self._function_space, self.n_quad_points)


class BoundaryScalarValues(BoundaryValues):
    """Boundary values of scalar shape functions.

    ``N[j, q, k]`` is a scalar and ``dNdxi[j, q, k]``/``dNdx[j, q, k]`` a
    vector, for shape function `j` at quadrature point `q` on facet `k`.
    """

    def _expand(self, N, dNdxi):
        return N, dNdxi


class BoundaryVectorValues(BoundaryValues):
    """Boundary values of vector valued shape functions.

    Each scalar shape function `b` of the function space is expanded into
    `ndim` vector shape functions, numbered ``b*ndim + c``, whose value is the
    scalar value in component `c` (zero elsewhere) and whose gradient is the
    scalar gradient in row `c` (zero elsewhere).  ``N[j, q, k]`` is thus a
    vector and ``dNdxi[j, q, k]``/``dNdx[j, q, k]`` a second order tensor.
    """

    def _expand(self, N, dNdxi):
        n_scalar, n_qpoints, n_bounds = N.shape
        ndim = self.ndim
        N_vec = np.zeros((n_scalar, ndim, n_qpoints, n_bounds, ndim),
                         N.dtype)
        dN_vec = np.zeros((n_scalar, ndim, n_qpoints, n_bounds, ndim, ndim),
                          N.dtype)
        for comp in range(ndim):
            N_vec[:, comp, :, :, comp] = N
            dN_vec[:, comp, :, :, comp, :] = dNdxi
        return (N_vec.reshape((n_scalar*ndim, n_qpoints, n_bounds, ndim)),
                dN_vec.reshape((n_scalar*ndim, n_qpoints, n_bounds, ndim,
                                ndim)))

    def shape_symmetric_gradient(self, q_point, base_func):
        return linalg.symmetric(self.shape_gradient(q_point, base_func))

    def shape_divergence(self, q_point, base_func):
        return np.trace(self.shape_gradient(q_point, base_func))
