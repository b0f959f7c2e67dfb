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
Converged reference wavefunction as seen by the FCIDUMP writer

The SCF itself is done elsewhere.  A :class:`Reference` only carries what the
dump needs: orbital dimensions per irrep, the frozen core/virtual windows,
occupations, orbital energies, orbital coefficients, the nuclear repulsion
energy and optionally the AO property integrals.  All per-orbital arrays are
in Pitzer order (orbitals grouped by irrep, irreps in Cotton order).
'''

import sys
import numpy
from pyfcidump import lib
from pyfcidump.lib import logger
from pyfcidump import symm
from pyfcidump import __config__

REFERENCES = ('RHF', 'UHF', 'ROHF')


class Reference(lib.StreamObject):
    '''Reference wavefunction

    Attributes:
        nmopi : 1D int array
            Number of molecular orbitals in each irrep.
        doccpi, soccpi : 1D int array
            Doubly and singly occupied orbitals in each irrep.
        frzcpi, frzvpi : 1D int array
            Frozen core and frozen virtual orbitals in each irrep.  Frozen
            core orbitals are the lowest orbitals of an irrep, frozen virtual
            orbitals the highest.
        mo_energy : 1D array or (2, nmo) array
            Orbital energies.  Alpha and beta energies for UHF.
        mo_coeff : 2D array or (2, nao, nmo) array
            Orbital coefficients.  Only needed for property integrals.
        reference : str
            'RHF', 'UHF' or 'ROHF'.
        same_a_b_orbs : bool
            Whether alpha and beta orbitals are identical.
        converged : bool
        e_nuc : float
            Nuclear repulsion energy.
        ao_dipole : (3, nao, nao) array or None
            Dipole integrals (x, y, z) in the basis of mo_coeff.
        ao_quadrupole : (6, nao, nao) array or None
            Traceless quadrupole integrals (xx, xy, xz, yy, yz, zz).
        nuc_dipole, nuc_quadrupole : arrays or None
            Nuclear contributions to the dipole and the traceless quadrupole.
    '''

    verbose = getattr(__config__, 'VERBOSE', logger.NOTE)

    _keys = {
        'nmopi', 'doccpi', 'soccpi', 'frzcpi', 'frzvpi', 'mo_energy',
        'mo_coeff', 'reference', 'same_a_b_orbs', 'converged', 'e_nuc',
        'nalpha', 'nbeta', 'ao_dipole', 'ao_quadrupole', 'nuc_dipole',
        'nuc_quadrupole',
    }

    def __init__(self, nmopi, doccpi, soccpi=None, frzcpi=None, frzvpi=None,
                 mo_energy=None, mo_coeff=None, reference=None,
                 nalpha=None, nbeta=None, e_nuc=0., converged=True,
                 same_a_b_orbs=None):
        self.stdout = sys.stdout
        self.nmopi = numpy.asarray(nmopi, dtype=int)
        nirrep = self.nmopi.size
        def dims(x):
            if x is None:
                return numpy.zeros(nirrep, dtype=int)
            return numpy.asarray(x, dtype=int)
        self.doccpi = dims(doccpi)
        self.soccpi = dims(soccpi)
        self.frzcpi = dims(frzcpi)
        self.frzvpi = dims(frzvpi)
        self.mo_energy = None if mo_energy is None else numpy.asarray(mo_energy)
        self.mo_coeff = None if mo_coeff is None else numpy.asarray(mo_coeff)
        if reference is None:
            if self.mo_energy is not None and self.mo_energy.ndim == 2:
                reference = 'UHF'
            else:
                reference = 'RHF'
        self.reference = reference.upper()
        if same_a_b_orbs is None:
            same_a_b_orbs = self.reference != 'UHF'
        self.same_a_b_orbs = same_a_b_orbs
        if nalpha is None:
            nalpha = int(self.doccpi.sum() + self.soccpi.sum())
        if nbeta is None:
            nbeta = int(self.doccpi.sum())
        self.nalpha = nalpha
        self.nbeta = nbeta
        self.e_nuc = e_nuc
        self.converged = converged

        self.ao_dipole = None
        self.ao_quadrupole = None
        self.nuc_dipole = None
        self.nuc_quadrupole = None

    @property
    def nirrep(self):
        return self.nmopi.size

    @property
    def nmo(self):
        return int(self.nmopi.sum())

    @property
    def active_mopi(self):
        return self.nmopi - self.frzcpi - self.frzvpi

    @property
    def nelec_active(self):
        '''Number of electrons outside the frozen core'''
        active_docc = self.doccpi - self.frzcpi
        return int(2 * active_docc.sum() + self.soccpi.sum())

    def energy_nuc(self):
        return self.e_nuc

    def orbsym(self):
        '''0-based irrep of every molecular orbital'''
        return symm.orbsym_from_dims(self.nmopi)

    def active_orbsym(self):
        '''0-based irrep of every active orbital'''
        return symm.orbsym_from_dims(self.active_mopi)

    def active_index(self):
        '''Pitzer indices of the active orbitals in the full MO space'''
        offsets = symm.irrep_offsets(self.nmopi)
        return numpy.hstack([numpy.arange(p0+nc, p0+nc+na, dtype=int)
                             for p0, nc, na in zip(offsets, self.frzcpi,
                                                   self.active_mopi)]
                            + [numpy.zeros(0, dtype=int)])

    def core_index(self):
        '''Pitzer indices of the frozen core orbitals in the full MO space'''
        offsets = symm.irrep_offsets(self.nmopi)
        return numpy.hstack([numpy.arange(p0, p0+nc, dtype=int)
                             for p0, nc in zip(offsets, self.frzcpi)]
                            + [numpy.zeros(0, dtype=int)])

    def epsilon_a(self):
        '''Alpha orbital energies split by irrep'''
        if self.mo_energy is None:
            raise ValueError('Orbital energies are not available')
        e = self.mo_energy[0] if self.mo_energy.ndim == 2 else self.mo_energy
        return symm.split_by_irrep(e, self.nmopi)

    def epsilon_b(self):
        '''Beta orbital energies split by irrep'''
        if self.mo_energy is None:
            raise ValueError('Orbital energies are not available')
        e = self.mo_energy[1] if self.mo_energy.ndim == 2 else self.mo_energy
        return symm.split_by_irrep(e, self.nmopi)

    def Ca(self):
        if self.mo_coeff is None:
            raise ValueError('Orbital coefficients are not available')
        if self.mo_coeff.ndim == 3:
            return self.mo_coeff[0]
        return self.mo_coeff

    def check_sanity(self):
        lib.StreamObject.check_sanity(self)
        if self.reference not in REFERENCES:
            raise ValueError('Unknown reference %s' % self.reference)
        symm.check_nirrep(self.nirrep)
        for key in ('doccpi', 'soccpi', 'frzcpi', 'frzvpi'):
            if getattr(self, key).shape != self.nmopi.shape:
                raise ValueError('%s has %d irreps, nmopi has %d'
                                 % (key, getattr(self, key).size, self.nirrep))
        if (self.active_mopi < 0).any():
            raise ValueError('Frozen orbitals %s + %s exceed nmopi %s'
                             % (self.frzcpi, self.frzvpi, self.nmopi))
        if (self.frzcpi > self.doccpi).any():
            raise ValueError('Frozen core %s exceeds doubly occupied orbitals %s'
                             % (self.frzcpi, self.doccpi))
        if self.mo_energy is not None and self.mo_energy.shape[-1] != self.nmo:
            raise ValueError('mo_energy has %d orbitals, nmopi sums to %d'
                             % (self.mo_energy.shape[-1], self.nmo))
        return self

    def dump_flags(self, verbose=None):
        log = logger.new_logger(self, verbose)
        log.info('\n')
        log.info('******** %s ********', self.__class__)
        log.info('reference = %s', self.reference)
        log.info('nirrep = %d', self.nirrep)
        log.info('nmopi  = %s', self.nmopi)
        log.info('doccpi = %s', self.doccpi)
        log.info('soccpi = %s', self.soccpi)
        log.info('frzcpi = %s', self.frzcpi)
        log.info('frzvpi = %s', self.frzvpi)
        log.info('nalpha = %d  nbeta = %d', self.nalpha, self.nbeta)
        return self
