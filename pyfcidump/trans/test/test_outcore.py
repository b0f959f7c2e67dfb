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
import tempfile
import numpy
import h5py
from pyfcidump import lib
from pyfcidump import trans
from pyfcidump.lib.exceptions import IntegralStorageError


def setUpModule():
    global orbsym, eri
    orbsym = numpy.array([0, 1, 1, 2, 3])
    n = orbsym.size
    numpy.random.seed(3)
    eri = numpy.random.random((n,n,n,n))

def tearDownModule():
    global orbsym, eri
    del orbsym, eri

class KnownValues(unittest.TestCase):
    def test_dump_load(self):
        packed = trans.pack(eri, orbsym, 4, trans.aaaa)
        ftmp = tempfile.NamedTemporaryFile(dir=lib.param.TMPDIR)
        with h5py.File(ftmp.name, 'w') as feri:
            trans.outcore.dump(feri, packed, 0)
            # overwrite an existing group
            trans.outcore.dump(feri, packed, 0)
        with h5py.File(ftmp.name, 'r') as feri:
            self.assertEqual(list(feri.keys()), [trans.aaaa])
            eri1 = trans.outcore.load(feri, trans.aaaa)
            self.assertEqual(eri1.nirrep, 4)
            for h in range(4):
                self.assertEqual(eri1.roworb[h].tolist(), packed.roworb[h].tolist())
                with eri1.irrep_block(h) as buf, packed.irrep_block(h) as ref:
                    self.assertTrue(numpy.array_equal(buf, ref))

    def test_empty_irreps(self):
        # no pair of the orbitals belongs to irreps 1 and 3
        packed = trans.pack(eri[:1,:1,:1,:1], orbsym[:1], 4)
        with lib.H5TmpFile() as feri:
            trans.outcore.dump(feri, packed, 0)
            self.assertEqual(sorted(feri[trans.AAAA].keys()), ['0', 'colorb', 'roworb'])
            eri1 = trans.outcore.load(feri, trans.AAAA)
            self.assertEqual(eri1.rowtot(1), 0)
            with eri1.irrep_block(3) as buf:
                self.assertEqual(buf.shape, (0,0))

    def test_load_missing(self):
        with lib.H5TmpFile() as feri:
            self.assertRaises(IntegralStorageError, trans.outcore.load, feri, trans.AAaa)
            feri['AA|aa'] = numpy.zeros(3)
            self.assertRaises(IntegralStorageError, trans.outcore.load, feri, trans.AAaa)


if __name__ == "__main__":
    print("Full Tests for trans.outcore")
    unittest.main()
