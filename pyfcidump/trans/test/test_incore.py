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

import unittest
import numpy
from pyfcidump import trans
from pyfcidump.lib.exceptions import IntegralStorageError


def setUpModule():
    global orbsym, eri
    orbsym = numpy.array([0, 0, 1, 3, 2, 2])
    n = orbsym.size
    numpy.random.seed(12)
    eri = numpy.random.random((n,n,n,n))
    eri = eri + eri.transpose(1,0,2,3)
    eri = eri + eri.transpose(0,1,3,2)
    eri = eri + eri.transpose(2,3,0,1)

def tearDownModule():
    global orbsym, eri
    del orbsym, eri

class KnownValues(unittest.TestCase):
    def test_pair_tables(self):
        roworb = trans.pair_tables([0,0,1], 2)
        self.assertEqual(roworb[0].tolist(), [[0,0], [1,0], [1,1], [2,2]])
        self.assertEqual(roworb[1].tolist(), [[2,0], [2,1]])

        tabs = trans.pair_tables(orbsym, 4)
        n = orbsym.size
        self.assertEqual(sum(len(x) for x in tabs), n*(n+1)//2)
        for h, tab in enumerate(tabs):
            for p, q in tab:
                self.assertTrue(p >= q)
                self.assertEqual(orbsym[p] ^ orbsym[q], h)

    def test_pack(self):
        packed = trans.pack(eri, orbsym, 4)
        self.assertEqual(packed.label, trans.AAAA)
        self.assertEqual(packed.nirrep, 4)
        for h in range(4):
            with packed.irrep_block(h) as buf:
                self.assertEqual(buf.shape, (packed.rowtot(h), packed.coltot(h)))
                for pq, (p, q) in enumerate(packed.roworb[h]):
                    for rs, (r, s) in enumerate(packed.colorb[h]):
                        self.assertEqual(buf[pq,rs], eri[p,q,r,s])

    def test_pack_mixed_spin(self):
        orbsym2 = numpy.array([0, 1, 1])
        eri_ab = numpy.random.random((6,6,3,3))
        packed = trans.pack(eri_ab, orbsym, 4, trans.AAaa, orbsym2)
        self.assertEqual(packed.coltot(0), 4)
        self.assertEqual(packed.coltot(1), 2)
        self.assertEqual(packed.coltot(2), 0)
        self.assertEqual(packed.block_size(2), 0)
        with packed.irrep_block(2) as buf:
            self.assertEqual(buf.shape, (packed.rowtot(2), 0))
        with packed.irrep_block(1) as buf:
            p, q = packed.roworb[1][0]
            r, s = packed.colorb[1][1]
            self.assertEqual(buf[0,1], eri_ab[p,q,r,s])
        self.assertRaises(ValueError, trans.pack, eri_ab, orbsym, 4)

    def test_missing_block(self):
        roworb = trans.pair_tables([0,0], 1)
        packed = trans.PackedERI(trans.AAAA, roworb, roworb, {})
        with self.assertRaises(IntegralStorageError):
            with packed.irrep_block(0):
                pass
        packed = trans.PackedERI(trans.AAAA, roworb, roworb,
                                 {'0': numpy.zeros((2,2))})
        with self.assertRaises(IntegralStorageError):
            with packed.irrep_block(0):
                pass


if __name__ == "__main__":
    print("Full Tests for trans.incore")
    unittest.main()
