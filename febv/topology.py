#!/usr/bin/env python
# encoding: utf-8

"""
Relating the global node numbers of a mesh to the facets of the reference
shape of its cells.
"""

import operator

import numpy as np

from .geometry import DimensionMismatch


class TopologyError(Exception):
    """Exception to be raised if the nodes of a boundary are inconsistent with
    those of the cell it supposedly belongs to.
    """
    pass


class NodeNotInCell(TopologyError):
    """A boundary node is not one of the nodes of the cell."""
    pass


class InvalidTopology(TopologyError):
    """The boundary nodes do not make up any facet of the cell."""
    pass


def get_boundary_number(boundary_nodes, cell_nodes, function_space):
    """
    The boundary number of a cell, typically used to get the boundary number
    which is needed to `reinit` a `BoundaryValues` object for boundary
    integration.

    Parameters
    ----------
    boundary_nodes : sequence of int
        The node numbers of the nodes on the boundary of the cell, in any
        order.
    cell_nodes : sequence of int
        The node numbers of the cell, in the local order of `function_space`.
    function_space : basis_functions.FunctionSpace
        The function space of the cell.

    Returns
    -------
    int
        The facet of the reference shape formed by `boundary_nodes`.

    Raises
    ------
    DimensionMismatch
        If the number of boundary or cell nodes does not fit the function
        space.
    NodeNotInCell
        If a boundary node is not a node of the cell.
    InvalidTopology
        If the boundary nodes lie on the cell but do not form a facet.
    """
    boundary_nodes = np.asarray(boundary_nodes).ravel()
    cell_nodes = np.asarray(cell_nodes).ravel()
    if boundary_nodes.size != function_space.n_boundary_nodes:
        raise DimensionMismatch(
            "Expected {} boundary nodes, got {}"
            .format(function_space.n_boundary_nodes, boundary_nodes.size))
    if cell_nodes.size != function_space.n_basefuncs:
        raise DimensionMismatch(
            "Expected {} cell nodes, got {}"
            .format(function_space.n_basefuncs, cell_nodes.size))

    local_ind = np.empty(boundary_nodes.size, dtype=int)
    for i, node in enumerate(boundary_nodes):
        found = np.flatnonzero(cell_nodes == node)
        if found.size == 0:
            raise NodeNotInCell(
                "at least one boundary node: {} not in cell nodes: {}"
                .format(boundary_nodes.tolist(), cell_nodes.tolist()))
        local_ind[i] = found[0]

    local_ind.sort()
    boundary_nodes_sorted = tuple(int(i) for i in local_ind)
    for i, boundary in enumerate(function_space.boundary_list):
        if boundary_nodes_sorted == boundary:
            return i

    raise InvalidTopology(
        "invalid node numbers for boundary: {} (local nodes {})"
        .format(boundary_nodes.tolist(), boundary_nodes_sorted))


def get_boundary_nodes(cell_nodes, boundary, function_space):
    """The node numbers of a cell lying on one of its boundaries.

    Inverse of `get_boundary_number`; the nodes are returned in ascending
    local order.  `boundary` must satisfy
    ``0 <= boundary < len(function_space.boundary_list)``, otherwise an
    `IndexError` is raised.
    """
    cell_nodes = np.asarray(cell_nodes).ravel()
    if cell_nodes.size != function_space.n_basefuncs:
        raise DimensionMismatch(
            "Expected {} cell nodes, got {}"
            .format(function_space.n_basefuncs, cell_nodes.size))
    boundary = operator.index(boundary)
    n_boundaries = len(function_space.boundary_list)
    if not 0 <= boundary < n_boundaries:
        raise IndexError("Boundary {} is out of range for {} boundaries"
                         .format(boundary, n_boundaries))
    return cell_nodes[list(function_space.boundary_list[boundary])]
