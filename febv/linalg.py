#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Small dense tensor operations on stacks of 2x2 and 3x3 matrices.  The
matrices occupy the two trailing axes of the arrays passed in.
"""

import numpy as np


def det_inv_2x2(mat):
    """Compute the determinant and inverse of a 2x2 matrix (or matricies)."""
    # Compute the determinant and inverse using the closed-form expression.
    det = mat[..., 0, 0]*mat[..., 1, 1] - mat[..., 0, 1]*mat[..., 1, 0]
    inv = np.empty_like(mat)
    inv[..., 0, 0] = mat[..., 1, 1]
    inv[..., 0, 1] = -mat[..., 0, 1]
    inv[..., 1, 0] = -mat[..., 1, 0]
    inv[..., 1, 1] = mat[..., 0, 0]
    with np.errstate(divide='ignore', invalid='ignore'):
        inv /= det[..., None, None]
    return det, inv


def det_inv_3x3(mat):
    """Compute the determinant and inverse of a 3x3 matrix (or matricies)."""
    a, b, c = mat[..., 0, 0], mat[..., 0, 1], mat[..., 0, 2]
    d, e, f = mat[..., 1, 0], mat[..., 1, 1], mat[..., 1, 2]
    g, h, i = mat[..., 2, 0], mat[..., 2, 1], mat[..., 2, 2]
    # adjugate (transposed matrix of cofactors)
    inv = np.empty_like(mat)
    inv[..., 0, 0] = e*i - f*h
    inv[..., 0, 1] = c*h - b*i
    inv[..., 0, 2] = b*f - c*e
    inv[..., 1, 0] = f*g - d*i
    inv[..., 1, 1] = a*i - c*g
    inv[..., 1, 2] = c*d - a*f
    inv[..., 2, 0] = d*h - e*g
    inv[..., 2, 1] = b*g - a*h
    inv[..., 2, 2] = a*e - b*d
    det = a*inv[..., 0, 0] + b*inv[..., 1, 0] + c*inv[..., 2, 0]
    with np.errstate(divide='ignore', invalid='ignore'):
        inv /= det[..., None, None]
    return det, inv


def det_inv(mat):
    """Compute the determinant and inverse of 2x2 or 3x3 matricies.

    Parameters
    ----------
    mat : array_like
        Matrices stored in the two trailing axes.

    Returns
    -------
    det : numpy.ndarray
        Determinants, with the shape of the leading axes of `mat`.
    inv : numpy.ndarray
        Inverses, with the same shape as `mat`.  Entries are not finite where
        `det` vanishes; it is up to the caller to check `det`.
    """
    mat = np.asarray(mat)
    mat = mat.astype(np.result_type(mat.dtype, float))
    if mat.shape[-2:] == (2, 2):
        return det_inv_2x2(mat)
    elif mat.shape[-2:] == (3, 3):
        return det_inv_3x3(mat)
    raise NotImplementedError("Only 2x2 and 3x3 matrices are supported, not "
                              "{}".format(mat.shape[-2:]))


def surface_vector(jac, tangents):
    """Compute the area-weighted normal vector, `n dS`, of a facet.

    Parameters
    ----------
    jac : array_like
        Jacobian matrices of the parent element, ``J[..., i, j] = dx_i/dξ_j``.
    tangents : array_like
        Reference tangent vectors of the facet stored as the columns of an
        ``(ndim, ndim - 1)`` matrix.

    Returns
    -------
    numpy.ndarray
        Vectors normal to the facet whose magnitude is the length (2D) or
        area (3D) element of the facet.
    """
    tangent_vecs = np.matmul(jac, tangents)
    ndim = tangent_vecs.shape[-2]
    if ndim == 2:
        # simply compute the perpendicular vector, which is trivial in 2-D
        t = tangent_vecs[..., 0]
        return np.stack((t[..., 1], -t[..., 0]), axis=-1)
    elif ndim == 3:
        return np.cross(tangent_vecs[..., 0], tangent_vecs[..., 1])
    # TODO: could generalize to higher dimensions using the
    # wedge/exterior product.
    raise NotImplementedError("only 1D and 2D facets are supported.")


def symmetric(tensor):
    """Symmetric part of a second order tensor (or tensors)."""
    tensor = np.asarray(tensor)
    return 0.5*(tensor + np.swapaxes(tensor, -1, -2))
