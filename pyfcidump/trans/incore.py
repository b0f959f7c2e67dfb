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
Symmetry packed two-electron integrals

For every pair irrep h the integrals (pq|rs) with sym(p)^sym(q) == h are kept
in a matrix whose rows run over the orbital pairs p>=q of irrep h and whose
columns run over the pairs r>=s of the same irrep.  The pair tables
``roworb[h]`` and ``colorb[h]`` decode a packed row/column index into the
orbital pair.  Orbital indices are 0-based positions in the active space.
'''

import contextlib
import numpy
from pyfcidump.lib.exceptions import IntegralStorageError
from pyfcidump import symm

# Spin blocks of the two-electron integrals
AAAA = 'AA|AA'
aaaa = 'aa|aa'
AAaa = 'AA|aa'
SPIN_BLOCKS = (AAAA, aaaa, AAaa)


def pair_tables(orbsym, nirrep):
    '''Pair tables of the [p>=q] packing.

    Returns:
        A list of (npair, 2) int arrays, one per pair irrep.  Pairs are
        ordered by p then q.

    Examples:

    >>> pair_tables([0,0,1], 2)
    [array([[0, 0], [1, 0], [1, 1], [2, 2]]), array([[2, 0], [2, 1]])]
    '''
    orbsym = numpy.asarray(orbsym, dtype=int)
    symm.check_nirrep(nirrep)
    p, q = numpy.tril_indices(orbsym.size)
    pair_sym = symm.direct_prod(orbsym[p], orbsym[q])
    pairs = numpy.vstack((p, q)).T
    return [pairs[pair_sym == h] for h in range(nirrep)]


class PackedERI:
    '''Two-electron integrals of one spin block, packed by pair irrep.

    Attributes:
        label : str
            Spin block, one of 'AA|AA', 'aa|aa', 'AA|aa'.
        roworb, colorb : list of (npair, 2) int arrays
            Pair tables of the bra and ket pairs for each pair irrep.
        storage : a mapping from str(h) to the (nrow, ncol) block of irrep h
            Either a dict of numpy arrays or an h5py Group.  Blocks of
            irreps without pairs need not be stored.
    '''
    def __init__(self, label, roworb, colorb, storage):
        if len(roworb) != len(colorb):
            raise ValueError('Inconsistent number of irreps in the pair tables')
        self.label = label
        self.roworb = [numpy.asarray(x, dtype=int).reshape(-1,2) for x in roworb]
        self.colorb = [numpy.asarray(x, dtype=int).reshape(-1,2) for x in colorb]
        self.storage = storage

    @property
    def nirrep(self):
        return len(self.roworb)

    def rowtot(self, h):
        return self.roworb[h].shape[0]

    def coltot(self, h):
        return self.colorb[h].shape[0]

    def block_size(self, h):
        return self.rowtot(h) * self.coltot(h)

    @contextlib.contextmanager
    def irrep_block(self, h):
        '''Load the block of irrep h into memory for the duration of the
        context.  Only one irrep block is held at a time by the writers.'''
        shape = (self.rowtot(h), self.coltot(h))
        key = str(h)
        if key in self.storage:
            buf = numpy.asarray(self.storage[key][()])
        elif shape[0] * shape[1] == 0:
            buf = numpy.zeros(shape)
        else:
            raise IntegralStorageError('Block %d of %s is missing' % (h, self.label))
        if buf.shape != shape:
            raise IntegralStorageError('Block %d of %s has shape %s, expected %s'
                                       % (h, self.label, buf.shape, shape))
        try:
            yield buf
        finally:
            del buf


def pack(eri, orbsym, nirrep, label=AAAA, orbsym2=None):
    '''Pack a dense (n1,n1,n2,n2) array of (pq|rs) into a :class:`PackedERI`.

    Args:
        eri : 4D array
            Chemist's notation integrals of the active orbitals.
        orbsym : 1D int array
            0-based irrep of each bra orbital (p, q).

    Kwargs:
        orbsym2 : 1D int array
            Irreps of the ket orbitals (r, s).  Same as orbsym by default.
    '''
    if orbsym2 is None:
        orbsym2 = orbsym
    n1, n2 = len(orbsym), len(orbsym2)
    eri = numpy.asarray(eri)
    if eri.shape != (n1, n1, n2, n2):
        raise ValueError('eri shape %s does not match %d x %d orbitals'
                         % (eri.shape, n1, n2))
    roworb = pair_tables(orbsym, nirrep)
    colorb = pair_tables(orbsym2, nirrep)
    storage = {}
    for h in range(nirrep):
        rows, cols = roworb[h], colorb[h]
        if rows.size == 0 or cols.size == 0:
            continue
        storage[str(h)] = eri[rows[:,0,None], rows[:,1,None], cols[:,0], cols[:,1]]
    return PackedERI(label, roworb, colorb, storage)
