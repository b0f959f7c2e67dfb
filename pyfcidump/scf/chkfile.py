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
Save and load a :class:`Reference` and its MO integrals in HDF5 chkfiles

Layout::

    scf/        nmopi doccpi soccpi frzcpi frzvpi mo_energy mo_coeff
                reference nalpha nbeta e_nuc converged
    scf/prop/   ao_dipole ao_quadrupole nuc_dipole nuc_quadrupole
    mo_ints/    h1e eri      (lists of arrays for UHF)
'''

import numpy
from pyfcidump.lib.chkfile import load, dump
from pyfcidump.scf.reference import Reference

_PROP_KEYS = ('ao_dipole', 'ao_quadrupole', 'nuc_dipole', 'nuc_quadrupole')

def _to_str(s):
    if isinstance(s, bytes):
        return s.decode()
    return str(s)

def dump_scf(chkfile, ref):
    '''Save the reference in chkfile under the key "scf"'''
    scf_dic = {'nmopi'    : ref.nmopi,
               'doccpi'   : ref.doccpi,
               'soccpi'   : ref.soccpi,
               'frzcpi'   : ref.frzcpi,
               'frzvpi'   : ref.frzvpi,
               'mo_energy': ref.mo_energy,
               'mo_coeff' : ref.mo_coeff,
               'reference': ref.reference,
               'nalpha'   : ref.nalpha,
               'nbeta'    : ref.nbeta,
               'e_nuc'    : ref.e_nuc,
               'converged': ref.converged}
    prop = {k: getattr(ref, k) for k in _PROP_KEYS
            if getattr(ref, k) is not None}
    if prop:
        scf_dic['prop'] = prop
    dump(chkfile, 'scf', scf_dic)

def load_scf(chkfile):
    '''Load the reference saved by :func:`dump_scf`'''
    dic = load(chkfile, 'scf')
    if dic is None:
        raise KeyError('No reference found in %s' % chkfile)
    ref = Reference(dic['nmopi'], dic['doccpi'], dic.get('soccpi'),
                    dic.get('frzcpi'), dic.get('frzvpi'),
                    mo_energy=dic.get('mo_energy'),
                    mo_coeff=dic.get('mo_coeff'),
                    reference=_to_str(dic['reference']),
                    nalpha=int(dic['nalpha']), nbeta=int(dic['nbeta']),
                    e_nuc=float(dic['e_nuc']),
                    converged=bool(dic['converged']))
    prop = dic.get('prop') or {}
    for k in _PROP_KEYS:
        if prop.get(k) is not None:
            setattr(ref, k, numpy.asarray(prop[k]))
    return ref

def dump_mo_ints(chkfile, h1e, eri):
    '''Save MO integrals.  For UHF, h1e = (h1a, h1b) and
    eri = (eri_aa, eri_bb, eri_ab)'''
    if isinstance(h1e, numpy.ndarray):
        h1e = [h1e]
        eri = [eri]
    dump(chkfile, 'mo_ints', {'h1e': list(h1e), 'eri': list(eri)})

def load_mo_ints(chkfile):
    dic = load(chkfile, 'mo_ints')
    if dic is None:
        raise KeyError('No MO integrals found in %s' % chkfile)
    h1e, eri = dic['h1e'], dic['eri']
    if len(h1e) == 1:
        return h1e[0], eri[0]
    return tuple(h1e), tuple(eri)
