#!/usr/bin/env python
# encoding: utf-8

"""
Classes describing the reference shapes of elements and the placement of
their facets (boundaries) within them.
"""

import numpy as np
import scipy.special as sf

from . import linalg


class DimensionMismatch(ValueError):
    """Exception to be raised if the dimensions or reference shapes of the
    objects handed to a routine do not agree with one another.
    """
    pass


class RefShape(object):
    """
    Describes a reference shape on which basis functions are defined.  The
    specific shapes are defined in subclasses.
    """
    # The following must be defined by the sub-classes:
    #
    # (dict) _facet_maps: maps the number of dimensions of the shape to an
    # ordered list of its facets.  Each facet is given as a pair (origin,
    # tangents) such that a point `p` on the (N-1)-D reference facet is placed
    # at ``origin + sum(p[a] * tangents[a])`` within the N-D shape.  The
    # tangents are ordered such that the clockwise perpendicular (2D) or the
    # cross product (3D) of the tangents points out of the shape.  Diagrams
    # are given in the sub-classes.

    _facet_maps = {}

    @property
    def name(self):
        return self.__class__.__name__

    def __eq__(self, other):
        return type(self) is type(other)

    def __hash__(self):
        return hash(type(self))

    def __repr__(self):
        return "{}()".format(self.name)

    def n_facets(self, ndim):
        """
        Number of (N-1)-dimensional facets on the boundary of the
        N-dimensional shape.
        """
        raise NotImplementedError()

    def facet_map(self, ndim):
        """
        Retrieve the placement of each facet of the `ndim`-dimensional shape.

        Parameters
        ----------
        ndim : int
            Number of dimensions of the parent shape.

        Returns
        -------
        list of (numpy.ndarray, numpy.ndarray)
            For each facet, the origin, of shape ``(ndim,)``, and the tangent
            matrix, of shape ``(ndim, ndim - 1)``, whose columns are the
            reference tangent vectors of the facet.
        """
        if ndim not in self._facet_maps:
            raise DimensionMismatch("No {}D facets are defined on a {}D {}"
                                    .format(ndim - 1, ndim, self.name))
        facets = []
        for origin, tangents in self._facet_maps[ndim]:
            facets.append((np.array(origin, dtype=float),
                           np.array(tangents, dtype=float).T))
        return facets

    def reference_normals(self, ndim):
        """Unit outward normals of each facet of the reference shape."""
        normals = []
        for origin, tangents in self.facet_map(ndim):
            n_dS = linalg.surface_vector(np.eye(ndim), tangents)
            normals.append(n_dS / np.linalg.norm(n_dS))
        return np.array(normals)


class RefCube(RefShape):
    """
    Orthotope-shaped reference elements (line-segments, quadrilaterals,
    hexahedra) spanning [-1, 1] in each direction.
    """

    # Enumeration of vertices and facets (2D)
    #
    #        3---(2)---2
    #        |         |
    # η     (3)   *   (1)
    # |      |         |
    # +--ξ   0---(0)---1
    #
    # Edges are traversed counter-clockwise.
    #
    # Enumeration of vertices (3D); the facets are
    # (0) ζ=-1, (1) η=-1, (2) ξ=1, (3) η=1, (4) ξ=-1, (5) ζ=1
    #
    #           7-------6
    #          /|      /|
    #         4-------5 |
    # ζ  η    | 3-----|-2
    # | /     |/      |/
    # +--ξ    0-------1

    _facet_maps = {
        2: [((0, -1), [(1, 0)]),
            ((1, 0), [(0, 1)]),
            ((0, 1), [(-1, 0)]),
            ((-1, 0), [(0, -1)])],
        3: [((0, 0, -1), [(0, 1, 0), (1, 0, 0)]),
            ((0, -1, 0), [(1, 0, 0), (0, 0, 1)]),
            ((1, 0, 0), [(0, 1, 0), (0, 0, 1)]),
            ((0, 1, 0), [(0, 0, 1), (1, 0, 0)]),
            ((-1, 0, 0), [(0, 0, 1), (0, 1, 0)]),
            ((0, 0, 1), [(1, 0, 0), (0, 1, 0)])],
    }

    def n_facets(self, ndim):
        dim = ndim - 1
        if dim < 0:
            raise ValueError("Dimension of the shape must be > 0")
        return int(2**(ndim - dim) * sf.comb(ndim, dim, exact=True))


class RefTetrahedron(RefShape):
    """
    Simplex-shaped reference elements (line-segments, triangles, tetrahedra)
    spanning the unit simplex, ``ξ_i >= 0`` and ``sum(ξ_i) <= 1``.
    """

    # Enumeration of vertices and facets (2D)
    #
    # η
    # 1
    # |\
    # | \
    # (1) (0)
    # |     \
    # 2-(2)--0--ξ
    #
    # Edges are traversed counter-clockwise (0 -> 1 -> 2).
    #
    # Vertices (3D): 0 = (1, 0, 0), 1 = (0, 1, 0), 2 = (0, 0, 1),
    # 3 = (0, 0, 0); the facets are
    # (0) ξ+η+ζ=1, (1) ζ=0, (2) ξ=0, (3) η=0

    _facet_maps = {
        2: [((1, 0), [(-1, 1)]),
            ((0, 1), [(0, -1)]),
            ((0, 0), [(1, 0)])],
        3: [((1, 0, 0), [(-1, 1, 0), (-1, 0, 1)]),
            ((0, 0, 0), [(0, 1, 0), (1, 0, 0)]),
            ((0, 0, 0), [(0, 0, 1), (0, 1, 0)]),
            ((0, 0, 0), [(1, 0, 0), (0, 0, 1)])],
    }

    def n_facets(self, ndim):
        dim = ndim - 1
        if dim < 0:
            raise ValueError("Dimension of the shape must be > 0")
        return int(sf.comb(ndim + 1, dim + 1, exact=True))
