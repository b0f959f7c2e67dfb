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
Packed MO integrals: pair tables, HDF5 storage, frozen core folding

Simple usage::

    >>> from pyfcidump import trans
    >>> ints = trans.IntegralTransform(ref, h1e, eri).run()
    >>> with ints.open_eri() as feri:
    ...     eri = trans.outcore.load(feri, trans.AAAA)
    ...     with eri.irrep_block(0) as buf:
    ...         print(buf.shape)
'''

from pyfcidump.trans import incore
from pyfcidump.trans import outcore
from pyfcidump.trans import transform
from pyfcidump.trans.incore import AAAA, aaaa, AAaa, SPIN_BLOCKS
from pyfcidump.trans.incore import PackedERI, pair_tables, pack
from pyfcidump.trans.transform import IntegralTransform
