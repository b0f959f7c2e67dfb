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
HDF5 backing storage of packed two-electron integrals

Each spin block is an HDF5 group named after its label ('AA|AA', 'aa|aa',
'AA|aa') holding::

    roworb/<h>   colorb/<h>   pair tables of irrep h
    <h>                       packed block of irrep h

Empty pair tables and empty blocks are not stored.
'''

import numpy
import h5py
from pyfcidump.lib import logger
from pyfcidump.lib.exceptions import IntegralStorageError
from pyfcidump.trans.incore import PackedERI


def dump(erifile, eri, verbose=logger.WARN):
    '''Write a :class:`PackedERI` to erifile.  An existing group of the same
    label is overwritten.

    Args:
        erifile : h5py File or Group object
    '''
    log = logger.new_logger(None, verbose)
    if eri.label in erifile:
        del (erifile[eri.label])
    g = erifile.create_group(eri.label)
    g.attrs['nirrep'] = eri.nirrep
    for h in range(eri.nirrep):
        if eri.rowtot(h) > 0:
            g['roworb/%d' % h] = eri.roworb[h]
        if eri.coltot(h) > 0:
            g['colorb/%d' % h] = eri.colorb[h]
        if eri.block_size(h) == 0:
            continue
        with eri.irrep_block(h) as buf:
            g[str(h)] = buf
        del buf
        log.debug1('%s irrep %d: %d x %d integrals stored',
                   eri.label, h, eri.rowtot(h), eri.coltot(h))
    return g

def load(erifile, label):
    '''Return a :class:`PackedERI` whose blocks are read from erifile on
    demand, one irrep at a time.  erifile must stay open while the blocks
    are consumed.'''
    if label not in erifile:
        raise IntegralStorageError('Spin block %s not found in %s'
                                   % (label, getattr(erifile, 'filename', erifile)))
    g = erifile[label]
    if not isinstance(g, h5py.Group) or 'nirrep' not in g.attrs:
        raise IntegralStorageError('%s is not a packed integral group' % label)
    nirrep = int(g.attrs['nirrep'])
    def pairs(key):
        if key in g:
            return g[key][()]
        return numpy.zeros((0,2), dtype=int)
    roworb = [pairs('roworb/%d' % h) for h in range(nirrep)]
    colorb = [pairs('colorb/%d' % h) for h in range(nirrep)]
    return PackedERI(label, roworb, colorb, g)
