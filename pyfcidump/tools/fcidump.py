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
FCIDUMP functions (write, read) for symmetry blocked real Hamiltonians

Orbitals are numbered in the active space, irrep by irrep.  For unrestricted
references the alpha and beta spin orbitals are interleaved: alpha orbital i
becomes 2i+1, beta orbital i becomes 2i+2.
'''

import os
import re
import contextlib
from functools import reduce
import numpy
from pyfcidump.lib import logger
from pyfcidump.lib.exceptions import (ReferenceNotConvergedError,
                                      UnsupportedReferenceError)
from pyfcidump import symm
from pyfcidump import scf
from pyfcidump import trans
from pyfcidump import __config__

INTEGRALS_FILE = getattr(__config__, 'fcidump_integrals_file', 'INTDUMP')
TOL = getattr(__config__, 'fcidump_write_tol', 1e-14)
PRINT_EIGENVALUES = getattr(__config__, 'fcidump_print_eigenvalues', True)
DIPOLE_INTEGRALS = getattr(__config__, 'fcidump_dipole_integrals', False)
QUADRUPOLE_COMPONENTS = getattr(__config__, 'fcidump_quadrupole_components', ('ZZ',))
MOLPRO_ORBSYM = getattr(__config__, 'fcidump_molpro_orbsym', False)

ERI_FORMAT = '%28.20E%4d%4d%4d%4d\n'
OEI_FORMAT = '%29.20E%4d%4d%4d%4d\n'
PROP_FORMAT = '%29.20E%4d%4d\n'

DIPOLE_FILES = ('DIPOLES_X', 'DIPOLES_Y', 'DIPOLES_Z')
# Order of the traceless quadrupole components
TRQUAD_COMPONENTS = ('XX', 'XY', 'XZ', 'YY', 'YZ', 'ZZ')

# Mapping irreps in Cotton order to Molpro symmetry numbering.
# https://www.molpro.net/info/current/doc/manual/node36.html
ORBSYM_MAP = {
    'D2h': (1,         # Ag
            4,         # B1g
            6,         # B2g
            7,         # B3g
            8,         # Au
            5,         # B1u
            3,         # B2u
            2),        # B3u
    'C2v': (1,         # A1
            4,         # A2
            2,         # B1
            3),        # B2
    'C2h': (1,         # Ag
            4,         # Bg
            2,         # Au
            3),        # Bu
    'D2' : (1,         # A
            4,         # B1
            3,         # B2
            2),        # B3
    'Cs' : (1,         # A'
            2),        # A"
    'C2' : (1,         # A
            2),        # B
    'Ci' : (1,         # Ag
            2),        # Au
    'C1' : (1,)
}


def mo_index(i):
    '''Zero-based molecular orbital index [0,1,...] to one-based [1,2,...]'''
    return i + 1

def alpha_index(i):
    '''Zero-based alpha orbital index [0,1,...] to the one-based spin orbital
    index [1,3,...], interleaved with the beta orbitals'''
    return 2 * i + 1

def beta_index(i):
    '''Zero-based beta orbital index [0,1,...] to the one-based spin orbital
    index [2,4,...], interleaved with the alpha orbitals'''
    return 2 * (i + 1)


def orbsym_labels(active_mopi, uhf=False, groupname=None):
    '''One-based irrep label of every active orbital.  Each orbital is listed
    twice (alpha, beta) for unrestricted references.

    Kwargs:
        groupname : str
            If given, the labels follow the Molpro numbering of the point
            group, see :data:`ORBSYM_MAP`.
    '''
    if groupname is None:
        irlabels = range(1, len(active_mopi)+1)
    else:
        irlabels = ORBSYM_MAP[groupname]
        if len(irlabels) != len(active_mopi):
            raise ValueError('Point group %s has %d irreps, got %d'
                             % (groupname, len(irlabels), len(active_mopi)))
    nspin = 2 if uhf else 1
    orbsym = []
    for ir, n in zip(irlabels, active_mopi):
        orbsym.extend([ir] * (n * nspin))
    return orbsym

def write_head(fout, nmo, nelec, ms2=0, uhf=False, orbsym=None):
    fout.write('&FCI\n')
    fout.write('NORB=%d,\n' % nmo)
    fout.write('NELEC=%d,\n' % nelec)
    fout.write('MS2=%d,\n' % ms2)
    if uhf:
        fout.write('UHF=.TRUE.,\n')
    else:
        fout.write('UHF=.FALSE.,\n')
    if orbsym is None:
        orbsym = [1] * nmo
    fout.write('ORBSYM=%s\n' % ''.join(['%d,' % x for x in orbsym]))
    fout.write('&END\n')

def _write_eri_block(fout, eri, h, tol, indx1, indx2):
    with eri.irrep_block(h) as buf:
        pq, rs = numpy.nonzero(abs(buf) > tol)
        p, q = eri.roworb[h][pq].T
        r, s = eri.colorb[h][rs].T
        for v, i, j, k, l in zip(buf[pq,rs], indx1(p), indx1(q),
                                 indx2(r), indx2(s)):
            fout.write(ERI_FORMAT % (v, i, j, k, l))
    return pq.size

def write_eri(fout, eri, tol=TOL, indx1=mo_index, indx2=mo_index):
    '''Write the packed two-electron integrals of one spin block.

    The blocks are read from the backing storage one irrep at a time and
    each block is released before the next one is read.  indx1 maps the bra
    orbitals (p, q), indx2 the ket orbitals (r, s).

    Returns:
        Number of records written
    '''
    nrec = 0
    for h in range(eri.nirrep):
        if eri.block_size(h) == 0:
            continue
        nrec += _write_eri_block(fout, eri, h, tol, indx1, indx2)
    return nrec

def write_hcore(fout, h, tol=TOL, indx=mo_index):
    '''Write the lower triangle of each irrep block of a
    :class:`SymmBlockMatrix`.

    Returns:
        Number of records written
    '''
    nrec = 0
    offset = 0
    for ir in range(h.nirrep):
        blk = h.blocks[ir]
        m, n = numpy.tril_indices(blk.shape[0])
        v = blk[m,n]
        mask = abs(v) > tol
        for val, i, j in zip(v[mask], indx(m[mask]+offset), indx(n[mask]+offset)):
            fout.write(OEI_FORMAT % (val, i, j, 0, 0))
        nrec += numpy.count_nonzero(mask)
        offset += h.rowdim(ir)
    return nrec

def write_eigv(fout, frzcpi, active_mopi, eigv, indx=mo_index):
    '''Write the energies of the active orbitals.  eigv[h][i] is the energy
    of orbital i of irrep h.  No threshold is applied.

    Returns:
        Number of records written
    '''
    iorb = 0
    for h in range(len(active_mopi)):
        for i in range(frzcpi[h], frzcpi[h]+active_mopi[h]):
            fout.write(ERI_FORMAT % (eigv[h][i], indx(iorb), 0, 0, 0))
            iorb += 1
    return iorb

def write_ecore(fout, ecore):
    fout.write(ERI_FORMAT % (ecore, 0, 0, 0, 0))

def write_prop(fout, mo_coeff, prop_ao, nmopi, frzcpi, active_mopi,
               tol=TOL, indx=mo_index):
    '''Transform a one-electron property to the MO basis and write the
    active-active elements.

    Within one irrep only the elements m1 <= m2 are written, between two
    irreps h1 < h2 all elements.  Orbitals are numbered as in the integrals
    file: Pitzer order over the active orbitals, frozen core skipped.

    Returns:
        The frozen core contribution 2 * sum_i <i|O|i> (closed shell core)
    '''
    nmopi = numpy.asarray(nmopi)
    mo_coeff = numpy.asarray(mo_coeff)
    if mo_coeff.shape[1] != nmopi.sum():
        raise ValueError('mo_coeff has %d orbitals, nmopi sums to %d'
                         % (mo_coeff.shape[1], nmopi.sum()))
    prop_mo = reduce(numpy.dot, (mo_coeff.T, prop_ao, mo_coeff))

    nirrep = len(nmopi)
    mo_off = symm.irrep_offsets(nmopi)
    act_off = symm.irrep_offsets(active_mopi)
    for h1 in range(nirrep):
        for h2 in range(h1, nirrep):
            for m1 in range(frzcpi[h1], frzcpi[h1]+active_mopi[h1]):
                m2_init = m1 if h1 == h2 else frzcpi[h2]
                for m2 in range(m2_init, frzcpi[h2]+active_mopi[h2]):
                    v = prop_mo[mo_off[h1]+m1, mo_off[h2]+m2]
                    if abs(v) > tol:
                        fout.write(PROP_FORMAT % (v, indx(act_off[h1]+m1-frzcpi[h1]),
                                                  indx(act_off[h2]+m2-frzcpi[h2])))

    frz_contrib = 0.
    for h in range(nirrep):
        for m in range(frzcpi[h]):
            iorb = mo_off[h] + m
            frz_contrib += 2 * prop_mo[iorb,iorb]  # 2* for RHF
    return frz_contrib


@contextlib.contextmanager
def _output(filename):
    '''Open filename for writing.  The file is removed if anything fails
    before it is completely written.'''
    fout = open(filename, 'w')
    try:
        yield fout
    except BaseException:
        fout.close()
        if os.path.exists(filename):
            os.remove(filename)
        raise
    fout.close()

def dump_rhf(ref, ints, filename, tol=TOL, print_eigenvalues=PRINT_EIGENVALUES,
             dipole_integrals=DIPOLE_INTEGRALS, orbsym=None, verbose=None):
    '''Write the FCIDUMP of a restricted reference in spatial orbitals'''
    log = logger.new_logger(ref, verbose)
    frzcpi = ref.frzcpi
    active_mopi = ref.active_mopi
    nbf = int(active_mopi.sum())
    if orbsym is None:
        orbsym = orbsym_labels(active_mopi)

    with _output(filename) as fout:
        write_head(fout, nbf, ref.nelec_active, ref.nalpha - ref.nbeta,
                   False, orbsym)

        cput0 = (logger.process_clock(), logger.perf_counter())
        ints.transform_tei()
        log.info('    Transformation complete.')
        log.info('  Generating %s integral file..', filename)

        # Only the permutationally unique integrals [p>=q], see trans.incore
        with ints.open_eri() as feri:
            eri = trans.outcore.load(feri, trans.AAAA)
            nrec = write_eri(fout, eri, tol, mo_index, mo_index)
        log.debug('%d integrals (AA|AA)', nrec)

        # Frozen core operator on the active orbitals
        moH = ints.get_oei('a').view(active_mopi, frzcpi)
        nrec = write_hcore(fout, moH, tol, mo_index)
        log.debug('%d one-electron integrals', nrec)

        if print_eigenvalues:
            write_eigv(fout, frzcpi, active_mopi, ref.epsilon_a(), mo_index)

        write_ecore(fout, ints.get_frozen_core_energy() + ref.energy_nuc())
        log.timer('FCIDUMP integrals', *cput0)

    if dipole_integrals:
        dump_properties(ref, os.path.dirname(filename), tol, verbose=log)
    return filename

def dump_uhf(ref, ints, filename, tol=TOL, print_eigenvalues=PRINT_EIGENVALUES,
             orbsym=None, verbose=None):
    '''Write the FCIDUMP of an unrestricted reference in spin orbitals'''
    log = logger.new_logger(ref, verbose)
    frzcpi = ref.frzcpi
    active_mopi = ref.active_mopi
    # spin orbitals rather than molecular orbitals
    nbf = int(active_mopi.sum()) * 2
    if orbsym is None:
        orbsym = orbsym_labels(active_mopi, uhf=True)

    with _output(filename) as fout:
        write_head(fout, nbf, ref.nelec_active, ref.nalpha - ref.nbeta,
                   True, orbsym)

        cput0 = (logger.process_clock(), logger.perf_counter())
        ints.transform_tei()
        log.info('    Transformation complete.')
        log.info('  Generating %s integral file..', filename)

        with ints.open_eri() as feri:
            for label, indx1, indx2 in ((trans.AAAA, alpha_index, alpha_index),
                                        (trans.aaaa, beta_index, beta_index),
                                        (trans.AAaa, alpha_index, beta_index)):
                eri = trans.outcore.load(feri, label)
                nrec = write_eri(fout, eri, tol, indx1, indx2)
                log.debug('%d integrals (%s)', nrec, label)

        moH = ints.get_oei('a').view(active_mopi, frzcpi)
        write_hcore(fout, moH, tol, alpha_index)
        moHb = ints.get_oei('b').view(active_mopi, frzcpi)
        write_hcore(fout, moHb, tol, beta_index)

        if print_eigenvalues:
            write_eigv(fout, frzcpi, active_mopi, ref.epsilon_a(), alpha_index)
            write_eigv(fout, frzcpi, active_mopi, ref.epsilon_b(), beta_index)

        write_ecore(fout, ints.get_frozen_core_energy() + ref.energy_nuc())
        log.timer('FCIDUMP integrals', *cput0)
    return filename

def dump_properties(ref, dirname='', tol=TOL,
                    quadrupole_components=QUADRUPOLE_COMPONENTS, verbose=None):
    '''Write the dipole integrals (DIPOLES_X, DIPOLES_Y, DIPOLES_Z) and the
    requested traceless quadrupole components (TRQUAD_ZZ, ...) of a
    restricted reference in the active MO basis.  Each file ends with the
    nuclear plus frozen core contribution.

    Returns:
        A list of the files written
    '''
    log = logger.new_logger(ref, verbose)
    _check_prop_ints(ref, quadrupole_components)
    mo_coeff = ref.Ca()
    args = (ref.nmopi, ref.frzcpi, ref.active_mopi, tol, mo_index)

    files = []
    nuc_dip = numpy.asarray(ref.nuc_dipole).ravel()
    for i, fname in enumerate(DIPOLE_FILES):
        fname = os.path.join(dirname, fname)
        with _output(fname) as fout:
            frz_contrib = write_prop(fout, mo_coeff, ref.ao_dipole[i], *args)
            fout.write(PROP_FORMAT % (nuc_dip[i]+frz_contrib, 0, 0))
        files.append(fname)

    if quadrupole_components:
        nuc_quad = numpy.asarray(ref.nuc_quadrupole).ravel()
        for comp in quadrupole_components:
            ij = TRQUAD_COMPONENTS.index(comp.upper())
            fname = os.path.join(dirname, 'TRQUAD_' + comp.upper())
            with _output(fname) as fout:
                frz_contrib = write_prop(fout, mo_coeff, ref.ao_quadrupole[ij], *args)
                fout.write(PROP_FORMAT % (nuc_quad[ij]+frz_contrib, 0, 0))
            files.append(fname)
    log.info('Property integrals written to %s', ' '.join(files))
    return files

def _check_prop_ints(ref, quadrupole_components):
    if ref.ao_dipole is None or ref.nuc_dipole is None:
        raise ValueError('Dipole integrals are not available in the reference')
    if ref.mo_coeff is None:
        raise ValueError('Orbital coefficients are needed for property integrals')
    if quadrupole_components:
        if ref.ao_quadrupole is None or ref.nuc_quadrupole is None:
            raise ValueError('Quadrupole integrals are not available in the reference')
        for comp in quadrupole_components:
            if comp.upper() not in TRQUAD_COMPONENTS:
                raise ValueError('Unknown quadrupole component %s' % comp)


def from_reference(ref, ints, filename=INTEGRALS_FILE, tol=TOL,
                   print_eigenvalues=PRINT_EIGENVALUES,
                   dipole_integrals=DIPOLE_INTEGRALS,
                   molpro_orbsym=MOLPRO_ORBSYM, groupname=None, verbose=None):
    '''Write the integrals of a converged reference to FCIDUMP.

    Args:
        ref : :class:`Reference`
        ints : :class:`IntegralTransform`
            MO integrals of ref.

    Kwargs:
        tol : float
            Integrals with magnitude not larger than tol are skipped.
        print_eigenvalues : bool
            Whether to write the orbital energies.
        dipole_integrals : bool
            Whether to write the dipole and quadrupole integrals to separate
            files next to filename (restricted references only).
        molpro_orbsym (bool): Whether to dump the orbsym in Molpro orbsym
            convention of the point group groupname, as documented in
            https://www.molpro.net/info/current/doc/manual/node36.html

    Returns:
        filename
    '''
    log = logger.new_logger(ref, verbose)
    if ref is None or not ref.converged:
        log.error('SCF has not been run yet!')
        raise ReferenceNotConvergedError('SCF has not been run yet!')
    ref.check_sanity()

    log.note('Generating FCIDUMP.')
    if ref.reference == 'ROHF':
        log.error('FCIDUMP not implemented for ROHF references.')
        raise UnsupportedReferenceError('FCIDUMP not implemented for ROHF references.')
    restricted = bool(ref.same_a_b_orbs)
    if ints.restricted != restricted:
        log.error('Integrals and reference disagree on restricted orbitals')
        raise ValueError('Integrals and reference disagree on restricted orbitals')
    if print_eigenvalues and ref.mo_energy is None:
        log.error('Orbital energies are not available for print_eigenvalues')
        raise ValueError('Orbital energies are not available for print_eigenvalues')
    if restricted:
        log.note('Found RHF')
    else:
        log.note('Found UHF')

    if molpro_orbsym:
        if groupname is None:
            raise ValueError('molpro_orbsym requires the point group name')
        orbsym = orbsym_labels(ref.active_mopi, not restricted, groupname)
    else:
        orbsym = None

    if restricted:
        if dipole_integrals:
            _check_prop_ints(ref, QUADRUPOLE_COMPONENTS)
        dump_rhf(ref, ints, filename, tol, print_eigenvalues, dipole_integrals,
                 orbsym, log)
    else:
        if dipole_integrals:
            log.warn('Property integrals are only available for restricted '
                     'references.  They are not written.')
        dump_uhf(ref, ints, filename, tol, print_eigenvalues, orbsym, log)
    log.note('Done generating FCIDUMP.')
    return filename

def from_chkfile(filename, chkfile, tol=TOL, print_eigenvalues=PRINT_EIGENVALUES,
                 dipole_integrals=DIPOLE_INTEGRALS, molpro_orbsym=MOLPRO_ORBSYM,
                 groupname=None, erifile=None, verbose=None):
    '''Read the reference and its MO integrals from a chkfile written by
    :func:`scf.chkfile.dump_scf` and :func:`scf.chkfile.dump_mo_ints`, then
    dump them to FCIDUMP.
    '''
    ref = scf.chkfile.load_scf(chkfile)
    if verbose is not None:
        ref.verbose = verbose
    h1e, eri = scf.chkfile.load_mo_ints(chkfile)
    ints = trans.IntegralTransform(ref, h1e, eri)
    ints.erifile = erifile
    return from_reference(ref, ints, filename, tol, print_eigenvalues,
                          dipole_integrals, molpro_orbsym, groupname)


def read(filename, verbose=True):
    '''Parse FCIDUMP.  Return a dictionary to hold the integrals and
    parameters with keys:  H1, H2, EIGVAL, ECORE, NORB, NELEC, MS2, UHF,
    ORBSYM, ISYM

    For UHF dumps the indices are spin orbital indices and NORB counts spin
    orbitals.  H2 is stored with 8-fold permutation symmetry.

    Kwargs:
        verbose (bool): Whether to print debugging information
    '''
    if verbose:
        print('Parsing %s' % filename)
    with open(filename, 'r') as finp:
        data = []
        for i in range(10):
            line = finp.readline().upper()
            data.append(line)
            if '&END' in line:
                break
        else:
            raise RuntimeError('Problematic FCIDUMP header')

        result = {}
        tokens = ','.join(data).replace('&FCI', '').replace('&END', '')
        tokens = tokens.replace(' ', '').replace('\n', '').replace(',,', ',')
        for token in re.split(',(?=[a-zA-Z])', tokens):
            if not token.strip(','):
                continue
            key, val = token.split('=')
            if key in ('NORB', 'NELEC', 'MS2', 'ISYM'):
                result[key] = int(val.replace(',', ''))
            elif key in ('ORBSYM',):
                result[key] = [int(x) for x in val.replace(',', ' ').split()]
            elif key in ('UHF',):
                result[key] = val.strip(',') in ('.TRUE.', 'T', 'TRUE')
            else:
                result[key] = val

        norb = result['NORB']
        norb_pair = norb * (norb+1) // 2
        h1e = numpy.zeros((norb,norb))
        h2e = numpy.zeros(norb_pair*(norb_pair+1)//2)
        eigval = numpy.zeros(norb)
        dat = finp.readline().split()
        while dat:
            i, j, k, l = [int(x) for x in dat[1:5]]
            if k != 0:
                if i >= j:
                    ij = i * (i-1) // 2 + j-1
                else:
                    ij = j * (j-1) // 2 + i-1
                if k >= l:
                    kl = k * (k-1) // 2 + l-1
                else:
                    kl = l * (l-1) // 2 + k-1
                if ij >= kl:
                    h2e[ij*(ij+1)//2+kl] = float(dat[0])
                else:
                    h2e[kl*(kl+1)//2+ij] = float(dat[0])
            elif j != 0:
                h1e[i-1,j-1] = float(dat[0])
            elif i != 0:
                eigval[i-1] = float(dat[0])
            else:
                result['ECORE'] = float(dat[0])
            dat = finp.readline().split()

    idx, idy = numpy.tril_indices(norb, -1)
    if numpy.linalg.norm(h1e[idy,idx]) == 0:
        h1e[idy,idx] = h1e[idx,idy]
    elif numpy.linalg.norm(h1e[idx,idy]) == 0:
        h1e[idx,idy] = h1e[idy,idx]
    result['H1'] = h1e
    result['H2'] = h2e
    result['EIGVAL'] = eigval
    return result

def read_prop(filename, norb):
    '''Parse a property file written by :func:`dump_properties`.

    Returns:
        The symmetric (norb, norb) property matrix of the active orbitals and
        the nuclear plus frozen core contribution.
    '''
    prop = numpy.zeros((norb,norb))
    core = 0.
    with open(filename, 'r') as finp:
        for line in finp:
            dat = line.split()
            if not dat:
                continue
            i, j = int(dat[1]), int(dat[2])
            if i == 0 and j == 0:
                core = float(dat[0])
            else:
                prop[i-1,j-1] = prop[j-1,i-1] = float(dat[0])
    return prop, core


if __name__ == '__main__':
    import argparse
    parser = argparse.ArgumentParser(description='Convert chkfile to FCIDUMP')
    parser.add_argument('chkfile', help='pyfcidump chkfile')
    parser.add_argument('fcidump', nargs='?', default=INTEGRALS_FILE,
                        help='FCIDUMP file (default %s)' % INTEGRALS_FILE)
    parser.add_argument('--tol', type=float, default=TOL,
                        help='Integrals not larger than tol are skipped')
    parser.add_argument('--no-eigenvalues', dest='print_eigenvalues',
                        action='store_false', default=PRINT_EIGENVALUES,
                        help='Do not write the orbital energies')
    parser.add_argument('--dipoles', dest='dipole_integrals',
                        action='store_true', default=DIPOLE_INTEGRALS,
                        help='Also write dipole and quadrupole integrals')
    parser.add_argument('--molpro-orbsym', metavar='GROUP', default=None,
                        help='Write ORBSYM in Molpro numbering of point group GROUP')
    parser.add_argument('-v', '--verbose', type=int, default=None)
    args = parser.parse_args()

    from_chkfile(args.fcidump, args.chkfile, tol=args.tol,
                 print_eigenvalues=args.print_eigenvalues,
                 dipole_integrals=args.dipole_integrals,
                 molpro_orbsym=args.molpro_orbsym is not None,
                 groupname=args.molpro_orbsym, verbose=args.verbose)
