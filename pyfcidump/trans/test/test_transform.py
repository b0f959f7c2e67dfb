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

import os
import unittest
import tempfile
import numpy
from pyfcidump import lib
from pyfcidump import scf
from pyfcidump import symm
from pyfcidump import trans
from pyfcidump.lib.exceptions import IntegralStorageError, PointGroupSymmetryError


def random_ints(orbsym, seed, symmetric=True):
    rng = numpy.random.RandomState(seed)
    orbsym = numpy.asarray(orbsym)
    n = orbsym.size
    h1e = rng.random_sample((n,n))
    h1e = h1e + h1e.T
    h1e[orbsym[:,None] != orbsym] = 0
    eri = rng.random_sample((n,n,n,n))
    eri = eri + eri.transpose(1,0,2,3)
    eri = eri + eri.transpose(0,1,3,2)
    if symmetric:
        eri = eri + eri.transpose(2,3,0,1)
    pq = orbsym[:,None] ^ orbsym
    eri[pq[:,:,None,None] != pq] = 0
    return h1e, eri

def setUpModule():
    global nmopi, orbsym, ref, h1e, eri
    nmopi = [3, 1, 2, 0]
    orbsym = symm.orbsym_from_dims(nmopi)
    ref = scf.Reference(nmopi, [2,0,1,0], frzcpi=[1,0,1,0], frzvpi=[1,0,0,0])
    ref.verbose = 0
    h1e, eri = random_ints(orbsym, 8)

def tearDownModule():
    global nmopi, orbsym, ref, h1e, eri
    del nmopi, orbsym, ref, h1e, eri

class KnownValues(unittest.TestCase):
    def test_frozen_core_rhf(self):
        core = [0, 4]
        fock, e_core = trans.transform.frozen_core_rhf(h1e, eri, core)
        n = h1e.shape[0]
        fock_ref = h1e.copy()
        e_ref = 0
        for c in core:
            e_ref += 2 * h1e[c,c]
            for p in range(n):
                for q in range(n):
                    fock_ref[p,q] += 2 * eri[p,q,c,c] - eri[p,c,c,q]
            for d in core:
                e_ref += 2 * eri[c,c,d,d] - eri[c,d,d,c]
        self.assertTrue(numpy.allclose(fock, fock_ref))
        self.assertAlmostEqual(e_core, e_ref, 12)

        fock, e_core = trans.transform.frozen_core_rhf(h1e, eri, [])
        self.assertTrue(numpy.allclose(fock, h1e))
        self.assertEqual(e_core, 0)

    def test_frozen_core_uhf(self):
        h1a, eri_aa = random_ints(orbsym, 9)
        h1b, eri_bb = random_ints(orbsym, 10)
        eri_ab = random_ints(orbsym, 11, symmetric=False)[1]
        core = [0, 4]
        (focka, fockb), e_core = trans.transform.frozen_core_uhf(
            (h1a, h1b), (eri_aa, eri_bb, eri_ab), core)
        e_ref = 0
        for c in core:
            e_ref += h1a[c,c] + h1b[c,c]
            for d in core:
                e_ref += .5 * (eri_aa[c,c,d,d] - eri_aa[c,d,d,c])
                e_ref += .5 * (eri_bb[c,c,d,d] - eri_bb[c,d,d,c])
                e_ref += eri_ab[c,c,d,d]
        self.assertAlmostEqual(e_core, e_ref, 12)
        fockb_ref = h1b + sum(eri_bb[:,:,c,c] - eri_bb[:,c,c,:] + eri_ab[c,c]
                              for c in core)
        self.assertTrue(numpy.allclose(fockb, fockb_ref))
        focka_ref = h1a + sum(eri_aa[:,:,c,c] - eri_aa[:,c,c,:] + eri_ab[:,:,c,c]
                              for c in core)
        self.assertTrue(numpy.allclose(focka, focka_ref))

        # restricted orbitals reduce to the closed shell expressions
        (focka, fockb), e_core = trans.transform.frozen_core_uhf(
            (h1e, h1e), (eri, eri, eri), core)
        fock, e_rhf = trans.transform.frozen_core_rhf(h1e, eri, core)
        self.assertTrue(numpy.allclose(focka, fock))
        self.assertTrue(numpy.allclose(fockb, fock))
        self.assertAlmostEqual(e_core, e_rhf, 12)

    def test_transform_oei(self):
        ints = trans.IntegralTransform(ref, h1e, eri)
        moH = ints.get_oei()
        self.assertEqual(moH.rowdim().tolist(), nmopi)
        fock, e_core = trans.transform.frozen_core_rhf(h1e, eri, ref.core_index())
        self.assertTrue(numpy.allclose(moH.to_dense(), fock))
        self.assertAlmostEqual(ints.get_frozen_core_energy(), e_core, 12)
        self.assertTrue(ints.get_oei('b') is moH)

        act = moH.view(ref.active_mopi, ref.frzcpi)
        self.assertEqual(act.rowdim().tolist(), [1,1,1,0])
        self.assertAlmostEqual(act.get(2, 0, 0), fock[5,5], 12)

    def test_symmetry_broken(self):
        h1 = h1e.copy()
        h1[0,3] = h1[3,0] = .5
        ints = trans.IntegralTransform(ref, h1, eri)
        self.assertRaises(PointGroupSymmetryError, ints.transform_oei)

    def test_frozen_core_needs_eri(self):
        ints = trans.IntegralTransform(ref, h1e)
        self.assertRaises(IntegralStorageError, ints.transform_oei)

    def test_transform_tei_tmpfile(self):
        ints = trans.IntegralTransform(ref, h1e, eri).run()
        act = ref.active_index()
        eri_act = eri[numpy.ix_(act,act,act,act)]
        with ints.open_eri() as feri:
            filename = feri.filename
            self.assertTrue(os.path.exists(filename))
            packed = trans.outcore.load(feri, trans.AAAA)
            self.assertEqual(packed.nirrep, 4)
            for h in range(4):
                with packed.irrep_block(h) as buf:
                    for pq, (p, q) in enumerate(packed.roworb[h]):
                        for rs, (r, s) in enumerate(packed.colorb[h]):
                            self.assertEqual(buf[pq,rs], eri_act[p,q,r,s])
        self.assertFalse(os.path.exists(filename))
        self.assertRaises(IntegralStorageError, ints.open_eri().__enter__)

    def test_transform_tei_erifile(self):
        ftmp = tempfile.NamedTemporaryFile(dir=lib.param.TMPDIR)
        ints = trans.IntegralTransform(ref, h1e, eri)
        ints.erifile = ftmp.name
        ints.transform_tei()
        for i in range(2):
            with ints.open_eri() as feri:
                self.assertEqual(list(feri.keys()), [trans.AAAA])
        self.assertTrue(os.path.exists(ftmp.name))

        # packed integrals are taken from the existing erifile
        ref0 = scf.Reference(nmopi, [2,0,1,0])
        ref0.verbose = 0
        ints1 = trans.IntegralTransform(ref0, h1e)
        ints1.erifile = ftmp.name
        ints1.transform_tei()
        with ints.open_eri() as feri0, ints1.open_eri() as feri1:
            a = trans.outcore.load(feri0, trans.AAAA)
            b = trans.outcore.load(feri1, trans.AAAA)
            with a.irrep_block(0) as buf0, b.irrep_block(0) as buf1:
                self.assertTrue(numpy.array_equal(buf0, buf1))

    def test_uhf(self):
        uref = scf.Reference([2, 1], [1, 0], soccpi=[0, 1], frzcpi=[1, 0],
                             mo_energy=numpy.zeros((2,3)))
        uref.verbose = 0
        self.assertEqual(uref.reference, 'UHF')
        osym = uref.orbsym()
        h1a, eri_aa = random_ints(osym, 1)
        h1b, eri_bb = random_ints(osym, 2)
        eri_ab = random_ints(osym, 3, symmetric=False)[1]
        ints = trans.IntegralTransform(uref, (h1a, h1b), (eri_aa, eri_bb, eri_ab))
        self.assertFalse(ints.restricted)
        ints.transform_tei()
        (focka, fockb), e_core = trans.transform.frozen_core_uhf(
            (h1a, h1b), (eri_aa, eri_bb, eri_ab), [0])
        self.assertTrue(numpy.allclose(ints.get_oei('a').to_dense(), focka))
        self.assertTrue(numpy.allclose(ints.get_oei('b').to_dense(), fockb))
        self.assertAlmostEqual(ints.get_frozen_core_energy(), e_core, 12)
        with ints.open_eri() as feri:
            self.assertEqual(sorted(feri.keys()), sorted(trans.SPIN_BLOCKS))
            ab = trans.outcore.load(feri, trans.AAaa)
            with ab.irrep_block(1) as buf:
                # pairs (1,0) of the active orbitals 0 (irrep 0) and 1 (irrep 1)
                self.assertEqual(buf[0,0], eri_ab[2,1,2,1])

        ints = trans.IntegralTransform(uref, h1a, eri_aa)
        self.assertRaises(ValueError, ints.transform_oei)


if __name__ == "__main__":
    print("Full Tests for trans.transform")
    unittest.main()
