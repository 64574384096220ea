#!/usr/bin/env python
# -*- coding: utf-8 -*-

r"""
Integrate the flux of a vector field through the boundary of a small mesh of
two quadrilaterals covering the rectangle :math:`[0, 2] \times [0, 1]`.

..math:: \oint \vec{u} \cdot \vec{n} \, dS = \int \nabla \cdot \vec{u} \, dV

For :math:`\vec{u} = (x, y)` the flux is twice the area, i.e. 4.

Example
-------
>>> mesh = two_cell_mesh()
>>> print(round(boundary_flux(mesh, lambda x: x), 12))
4.0
"""

import logging
import numpy as np

from febv import (Lagrange, RefCube, gauss_legendre, BoundaryScalarValues,
                  get_boundary_number)

logger = logging.getLogger(__name__)


def two_cell_mesh():
    """Node coordinates, cells and outer boundary edges of the mesh.

    ::

        3-----4-----5
        |     |     |
        0-----1-----2
    """
    coords = np.array([[0., 0.], [1., 0.], [2., 0.],
                       [0., 1.], [1., 1.], [2., 1.]])
    cells = np.array([[0, 1, 4, 3], [1, 2, 5, 4]])
    # each edge with the cell it belongs to
    boundary = [((0, 1), 0), ((1, 2), 1), ((2, 5), 1),
                ((5, 4), 1), ((4, 3), 0), ((3, 0), 0)]
    return coords, cells, boundary


def boundary_flux(mesh, field):
    """Sum of the integrals of ``field(x) . n`` over the boundary edges.

    `field` is interpolated from its nodal values with the shape functions of
    the cells.
    """
    coords, cells, boundary = mesh
    fs = Lagrange(2, RefCube(), 1)
    bv = BoundaryScalarValues(gauss_legendre(2), fs)
    flux = 0.
    for edge_nodes, cell in boundary:
        cell_nodes = cells[cell]
        k = get_boundary_number(edge_nodes, cell_nodes, fs)
        x = coords[cell_nodes]
        u = np.array([field(xj) for xj in x])
        bv.reinit(x, k)
        edge_flux = 0.
        for q in range(bv.n_quad_points):
            edge_flux += (bv.function_value(q, u).dot(bv.get_normal(q)) *
                          bv.get_detJdV(q))
        logger.info("Edge %s (cell %d, boundary %d): flux %g",
                    edge_nodes, cell, k, edge_flux)
        flux += edge_flux
    return flux


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    print("Flux: {}".format(boundary_flux(two_cell_mesh(), lambda x: x)))
