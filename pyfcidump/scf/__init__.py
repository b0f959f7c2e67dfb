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
Reference wavefunctions (RHF, UHF, ROHF) consumed by the FCIDUMP writer

Simple usage::

    >>> from pyfcidump import scf
    >>> ref = scf.Reference(nmopi=[4,0,1,2], doccpi=[3,0,1,1], frzcpi=[1,0,0,0],
    ...                     mo_energy=mo_energy, e_nuc=9.19)
'''

from pyfcidump.scf import reference
from pyfcidump.scf import chkfile
from pyfcidump.scf.reference import Reference
