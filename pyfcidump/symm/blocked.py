#!/usr/bin/env python
# Copyright 2014-2022 The PySCF Developers. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

'''
Irrep blocked square matrices.

A symmetry-respecting one-electron operator has no elements between orbitals
of different irreps.  Only the diagonal blocks are stored, one per irrep, in
the order of the irreps.
'''

import numpy
import scipy.linalg
from pyfcidump.lib.exceptions import PointGroupSymmetryError
from pyfcidump.symm import addons
from pyfcidump import __config__

CHECK_TOL = getattr(__config__, 'symm_blocked_check_tol', 1e-7)


class SymmBlockMatrix:
    '''Square matrix stored as a list of irrep blocks

    Attributes:
        blocks : list of 2D arrays
            blocks[h] is the (rowdim(h), rowdim(h)) block of irrep h
    '''
    def __init__(self, blocks):
        self.blocks = [numpy.asarray(b, dtype=numpy.double) for b in blocks]
        for h, b in enumerate(self.blocks):
            if b.ndim != 2 or b.shape[0] != b.shape[1]:
                raise ValueError('Block %d of shape %s is not square' % (h, b.shape))

    @property
    def nirrep(self):
        return len(self.blocks)

    def rowdim(self, h=None):
        '''Dimension of block h.  All dimensions when h is None'''
        if h is None:
            return numpy.array([b.shape[0] for b in self.blocks], dtype=int)
        return self.blocks[h].shape[0]

    def get(self, h, m, n):
        return self.blocks[h][m,n]

    def view(self, dims, offsets):
        '''The sub-blocks [offsets[h]:offsets[h]+dims[h]] of every irrep.
        This is the way to restrict an operator to the active window.'''
        assert len(dims) == len(offsets) == self.nirrep
        blocks = []
        for h, b in enumerate(self.blocks):
            p0, p1 = offsets[h], offsets[h] + dims[h]
            if p1 > b.shape[0]:
                raise ValueError('Window %d:%d exceeds block %d of size %d'
                                 % (p0, p1, h, b.shape[0]))
            blocks.append(b[p0:p1,p0:p1])
        return SymmBlockMatrix(blocks)

    def to_dense(self):
        '''Block-diagonal dense matrix, irreps in Pitzer order'''
        if self.nirrep == 0:
            return numpy.zeros((0,0))
        return scipy.linalg.block_diag(*self.blocks)

    @classmethod
    def from_dense(cls, mat, dims, check=True, tol=CHECK_TOL):
        '''Split a dense Pitzer-ordered matrix into irrep blocks.

        Kwargs:
            check : bool
                Whether to verify that the elements between different irreps
                vanish.
        '''
        mat = numpy.asarray(mat)
        dims = numpy.asarray(dims, dtype=int)
        n = dims.sum()
        if mat.shape != (n, n):
            raise ValueError('Matrix shape %s does not match irrep dimensions %s'
                             % (mat.shape, dims))
        offsets = addons.irrep_offsets(dims)
        blocks = [mat[p0:p0+d,p0:p0+d] for p0, d in zip(offsets, dims)]
        if check and n > 0:
            orbsym = addons.orbsym_from_dims(dims)
            mask = orbsym[:,None] != orbsym
            if mask.any() and abs(mat[mask]).max() > tol:
                raise PointGroupSymmetryError(
                    'Matrix elements between different irreps found (max %g)'
                    % abs(mat[mask]).max())
        return cls(blocks)

    def __repr__(self):
        return '<%s rowdim=%s>' % (self.__class__.__name__, list(self.rowdim()))
