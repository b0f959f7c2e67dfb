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
*************************************************
pyfcidump: FCIDUMP export of symmetry-blocked
molecular orbital integrals
*************************************************

How to use
----------
The integrals of a converged reference are handed over as a
:class:`pyfcidump.scf.Reference` plus an
:class:`pyfcidump.trans.IntegralTransform`, then written to disk::

    >>> import pyfcidump
    >>> ref = pyfcidump.scf.Reference(nmopi=[2,1], doccpi=[1,0],
    ...                               mo_energy=mo_energy, e_nuc=0.7)
    >>> ints = pyfcidump.trans.IntegralTransform(ref, h1e, eri)
    >>> pyfcidump.tools.fcidump.from_reference(ref, ints, 'FCIDUMP')

'''

__version__ = '0.3.0'

from pyfcidump import __config__
from pyfcidump import lib
from pyfcidump import symm
from pyfcidump import scf
from pyfcidump import trans
from pyfcidump import tools

# Whether to enable debug mode. When this flag is set, some modules may run
# extra debug code.
DEBUG = __config__.DEBUG
