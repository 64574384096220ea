#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
File: test_geometry.py
Description: Tests for reference shapes and their facet tables.
"""

import numpy as np
import unittest
from febv.geometry import RefCube, RefTetrahedron, DimensionMismatch

centroids = {
    (RefCube, 2): np.zeros(2),
    (RefCube, 3): np.zeros(3),
    (RefTetrahedron, 2): np.full(2, 1/3.),
    (RefTetrahedron, 3): np.full(3, 1/4.),
}


class TestRefShapes(unittest.TestCase):

    def test_equality(self):
        self.assertEqual(RefCube(), RefCube())
        self.assertNotEqual(RefCube(), RefTetrahedron())
        self.assertEqual(len({RefCube(), RefCube(), RefTetrahedron()}), 2)

    def test_n_facets(self):
        self.assertEqual(RefCube().n_facets(2), 4)
        self.assertEqual(RefCube().n_facets(3), 6)
        self.assertEqual(RefTetrahedron().n_facets(2), 3)
        self.assertEqual(RefTetrahedron().n_facets(3), 4)

    def test_facet_map_matches_facet_count(self):
        for (cls, ndim) in centroids:
            shape = cls()
            facets = shape.facet_map(ndim)
            self.assertEqual(len(facets), shape.n_facets(ndim))
            for origin, tangents in facets:
                self.assertEqual(origin.shape, (ndim,))
                self.assertEqual(tangents.shape, (ndim, ndim - 1))

    def test_normals_point_outward(self):
        for (cls, ndim), centroid in centroids.items():
            shape = cls()
            normals = shape.reference_normals(ndim)
            for (origin, tangents), normal in zip(shape.facet_map(ndim),
                                                  normals):
                self.assertTrue(np.isclose(np.linalg.norm(normal), 1.))
                self.assertTrue(np.allclose(np.dot(normal, tangents), 0.))
                self.assertGreater(np.dot(normal, origin - centroid), 0.)

    def test_quadrilateral_normals(self):
        normals = RefCube().reference_normals(2)
        expected = [[0, -1], [1, 0], [0, 1], [-1, 0]]
        self.assertTrue(np.allclose(normals, expected))

    def test_triangle_normals(self):
        normals = RefTetrahedron().reference_normals(2)
        expected = [[np.sqrt(.5), np.sqrt(.5)], [-1, 0], [0, -1]]
        self.assertTrue(np.allclose(normals, expected))

    def test_hexahedron_normals(self):
        normals = RefCube().reference_normals(3)
        expected = [[0, 0, -1], [0, -1, 0], [1, 0, 0],
                    [0, 1, 0], [-1, 0, 0], [0, 0, 1]]
        self.assertTrue(np.allclose(normals, expected))

    def test_no_point_facets(self):
        with self.assertRaises(DimensionMismatch):
            RefCube().facet_map(1)
        with self.assertRaises(DimensionMismatch):
            RefTetrahedron().facet_map(4)


if __name__ == '__main__':
    unittest.main()
