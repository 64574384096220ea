"""
Finite element shape function values, gradients and integration weights on
element boundaries.
"""

import logging

from .geometry import DimensionMismatch, RefCube, RefTetrahedron
from .quadratures import (QuadratureRule, gauss_legendre, gauss_lobatto,
                          gauss_simplex, create_boundary_quad_rule)
from .basis_functions import Lagrange, Serendipity
from .boundary_values import (BoundaryScalarValues, BoundaryVectorValues,
                              DegenerateGeometry)
from .topology import (get_boundary_number, get_boundary_nodes,
                       TopologyError, NodeNotInCell, InvalidTopology)

__version__ = '0.1.0'

logging.getLogger(__name__).addHandler(logging.NullHandler())
