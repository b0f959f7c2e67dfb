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

import numpy
from pyfcidump.lib.exceptions import PointGroupSymmetryError

# D2h and its subgroups
SUPPORTED_NIRREP = (1, 2, 4, 8)

def check_nirrep(nirrep):
    if nirrep not in SUPPORTED_NIRREP:
        raise PointGroupSymmetryError(
            'Number of irreps %s is not an abelian subgroup of D2h' % nirrep)
    return nirrep

def irrep_offsets(dims):
    '''Offset of the first orbital of each irrep in Pitzer order'''
    dims = numpy.asarray(dims, dtype=int)
    offsets = numpy.zeros(len(dims), dtype=int)
    if len(dims) > 1:
        offsets[1:] = numpy.cumsum(dims)[:-1]
    return offsets

def orbsym_from_dims(dims):
    '''0-based irrep label of every orbital, Pitzer order

    Examples:

    >>> orbsym_from_dims([2,0,1])
    array([0, 0, 2])
    '''
    dims = numpy.asarray(dims, dtype=int)
    return numpy.repeat(numpy.arange(len(dims)), dims)

def direct_prod(orbsym1, orbsym2):
    '''Irrep of the product of two irreps.  In Cotton ordering the direct
    product of the irreps of D2h and its subgroups is the bitwise XOR of the
    irrep ids.'''
    return numpy.bitwise_xor(orbsym1, orbsym2)

def split_by_irrep(vec, dims):
    '''Split a Pitzer ordered vector into one array per irrep'''
    vec = numpy.asarray(vec)
    dims = numpy.asarray(dims, dtype=int)
    if vec.shape[0] != dims.sum():
        raise ValueError('Vector of length %d does not match irrep dimensions %s'
                         % (vec.shape[0], dims))
    return numpy.split(vec, numpy.cumsum(dims)[:-1])
