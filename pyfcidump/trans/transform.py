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
MO integrals of a reference, arranged the way the FCIDUMP writer consumes
them

The MO integrals themselves come from elsewhere.  This module folds the
frozen core orbitals into an effective one-electron operator and a scalar
energy, cuts the active window out of the two-electron integrals and stores
them, packed by pair irrep, in an HDF5 file.
'''

import contextlib
import numpy
import h5py
from pyfcidump import lib
from pyfcidump.lib import logger
from pyfcidump.lib.exceptions import IntegralStorageError
from pyfcidump.symm import SymmBlockMatrix
from pyfcidump.trans import incore
from pyfcidump.trans import outcore
from pyfcidump import __config__

ERIFILE = getattr(__config__, 'trans_erifile', None)


def frozen_core_rhf(h1e, eri, core_idx):
    '''Frozen core operator and frozen core energy of a closed shell core

    F_pq = h_pq + sum_c [2(pq|cc) - (pc|cq)]
    E_fc = sum_c [2 h_cc + (F-h)_cc]
    '''
    core_idx = numpy.asarray(core_idx, dtype=int)
    if core_idx.size == 0:
        return h1e.copy(), 0.
    vj = eri[:,:,core_idx,core_idx].sum(axis=2)
    vk = eri[:,core_idx,core_idx,:].sum(axis=1)
    vhf = 2 * vj - vk
    e_core = 2 * h1e[core_idx,core_idx].sum() + vhf[core_idx,core_idx].sum()
    return h1e + vhf, e_core

def frozen_core_uhf(h1e, eri, core_idx):
    '''Frozen core operators (alpha, beta) and frozen core energy for
    unrestricted orbitals.  eri = (eri_aa, eri_bb, eri_ab) where eri_ab holds
    (pq|rs) with p,q alpha and r,s beta.'''
    core_idx = numpy.asarray(core_idx, dtype=int)
    h1a, h1b = h1e
    eri_aa, eri_bb, eri_ab = eri
    if core_idx.size == 0:
        return (h1a.copy(), h1b.copy()), 0.
    c = core_idx
    vhfa = (eri_aa[:,:,c,c].sum(axis=2) - eri_aa[:,c,c,:].sum(axis=1)
            + eri_ab[:,:,c,c].sum(axis=2))
    vhfb = (eri_bb[:,:,c,c].sum(axis=2) - eri_bb[:,c,c,:].sum(axis=1)
            + eri_ab[c,c,:,:].sum(axis=0))
    e_core = h1a[c,c].sum() + h1b[c,c].sum()
    e_core += (vhfa[c,c].sum() + vhfb[c,c].sum()) * .5
    return (h1a + vhfa, h1b + vhfb), e_core


class IntegralTransform(lib.StreamObject):
    '''MO integrals for the FCIDUMP writer

    Args:
        ref : :class:`Reference`
        h1e : 2D array, or (h1a, h1b) for unrestricted orbitals
            Core Hamiltonian in the full MO basis (Pitzer order).
        eri : 4D array, or (eri_aa, eri_bb, eri_ab) for unrestricted orbitals
            (pq|rs) in the full MO basis.  Can be None if :attr:`erifile`
            already holds the packed integrals.

    Attributes:
        erifile : str or None
            HDF5 file to keep the packed integrals.  A temporary file under
            lib.param.TMPDIR is used if not given.  The temporary file is
            removed once the integrals have been read by :meth:`open_eri`.
        frozen_core_energy : float
            Electronic energy of the frozen core, available after
            :meth:`transform_oei`.

    Examples:

    >>> ints = IntegralTransform(ref, h1e, eri)
    >>> ints.transform_tei()
    >>> with ints.open_eri() as feri:
    ...     eri = trans.outcore.load(feri, 'AA|AA')
    '''

    erifile = ERIFILE
    max_memory = lib.param.MAX_MEMORY

    _keys = {'ref', 'h1e', 'eri', 'restricted', 'frozen_core_energy', 'erifile'}

    def __init__(self, ref, h1e, eri=None):
        self.ref = ref
        self.stdout = ref.stdout
        self.verbose = ref.verbose
        self.restricted = bool(ref.same_a_b_orbs)
        self.h1e = h1e
        self.eri = eri
        self.frozen_core_energy = None
        self._moH = None
        self._feri = None

    def _spin_inputs(self):
        nmo = self.ref.nmo
        if self.restricted:
            h1e = numpy.asarray(self.h1e, dtype=numpy.double).reshape(nmo,nmo)
            eri = self.eri
            if eri is not None:
                eri = numpy.asarray(eri, dtype=numpy.double).reshape((nmo,)*4)
        else:
            if len(self.h1e) != 2:
                raise ValueError('Unrestricted reference needs (h1a, h1b)')
            h1e = [numpy.asarray(x, dtype=numpy.double).reshape(nmo,nmo)
                   for x in self.h1e]
            eri = self.eri
            if eri is not None:
                if len(eri) != 3:
                    raise ValueError('Unrestricted reference needs '
                                     '(eri_aa, eri_bb, eri_ab)')
                eri = [numpy.asarray(x, dtype=numpy.double).reshape((nmo,)*4)
                       for x in eri]
        return h1e, eri

    def transform_oei(self):
        '''Fold the frozen core into the one-electron operator'''
        log = logger.new_logger(self)
        ref = self.ref
        h1e, eri = self._spin_inputs()
        core_idx = ref.core_index()
        if core_idx.size > 0 and eri is None:
            raise IntegralStorageError('Dense MO integrals are needed to '
                                       'freeze %d core orbitals' % core_idx.size)
        if eri is None:
            eri = [None] * 3
        if self.restricted:
            fock, e_core = frozen_core_rhf(h1e, eri, core_idx)
            self._moH = {'a': SymmBlockMatrix.from_dense(fock, ref.nmopi)}
        else:
            fock, e_core = frozen_core_uhf(h1e, eri, core_idx)
            self._moH = {'a': SymmBlockMatrix.from_dense(fock[0], ref.nmopi),
                         'b': SymmBlockMatrix.from_dense(fock[1], ref.nmopi)}
        self.frozen_core_energy = e_core
        log.debug('Frozen core energy = %.15g', e_core)
        return self._moH

    def transform_tei(self):
        '''Pack the active space two-electron integrals by pair irrep and
        store them in :attr:`erifile`.  The frozen core operator is built as
        well.'''
        log = logger.new_logger(self)
        cput0 = (logger.process_clock(), logger.perf_counter())
        ref = self.ref
        self.transform_oei()
        h1e, eri = self._spin_inputs()
        if eri is None:
            if self.erifile is None or not h5py.is_hdf5(self.erifile):
                raise IntegralStorageError('No two-electron integrals given')
            log.info('Packed integrals are taken from %s', self.erifile)
            return self

        act = ref.active_index()
        orbsym = ref.active_orbsym()
        nirrep = ref.nirrep
        def active(x):
            return x[numpy.ix_(act,act,act,act)]
        if self.restricted:
            blocks = [(incore.AAAA, eri)]
        else:
            blocks = [(incore.AAAA, eri[0]), (incore.aaaa, eri[1]),
                      (incore.AAaa, eri[2])]

        if self.erifile is None:
            feri = lib.H5TmpFile()
        else:
            mode = 'a' if h5py.is_hdf5(self.erifile) else 'w'
            feri = lib.H5FileWrap(self.erifile, mode)
        try:
            for label, v in blocks:
                packed = incore.pack(active(v), orbsym, nirrep, label)
                blksize = max(packed.block_size(h) for h in range(nirrep))
                if blksize * 8e-6 > self.max_memory:
                    log.warn('Largest irrep block of %s takes %.0f MB, '
                             'max_memory is %d MB', label, blksize*8e-6,
                             self.max_memory)
                outcore.dump(feri, packed, self.verbose)
                log.timer_debug1('pack %s' % label, *cput0)
        except BaseException:
            feri.close()
            raise
        if self.erifile is None:
            self._feri = feri
        else:
            feri.close()
        log.timer('transform_tei', *cput0)
        return self

    kernel = transform_tei

    def get_oei(self, spin='a'):
        '''Frozen core operator in the full MO space, blocked by irrep.
        spin is 'a' or 'b'.'''
        if self._moH is None:
            self.transform_oei()
        if self.restricted:
            spin = 'a'
        return self._moH[spin]

    def get_frozen_core_energy(self):
        if self.frozen_core_energy is None:
            self.transform_oei()
        return self.frozen_core_energy

    @contextlib.contextmanager
    def open_eri(self):
        '''Open the backing storage of the packed integrals.  It is closed
        when the context exits; a temporary file is deleted at that point.'''
        if self._feri is not None:
            feri, self._feri = self._feri, None
        elif self.erifile is not None and h5py.is_hdf5(self.erifile):
            feri = h5py.File(self.erifile, 'r')
        else:
            raise IntegralStorageError('Two-electron integrals have not been '
                                       'transformed')
        try:
            yield feri
        finally:
            feri.close()
