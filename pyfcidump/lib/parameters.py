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
Environment variables of pyfcidump.


Scratch directory
-----------------

Packed two-electron blocks are staged in HDF5 files under :data:`TMPDIR`.
Its default value is the system-wide temporary directory.  It can be
overwritten by the environment variable ``PYFCIDUMP_TMPDIR`` or in the global
configuration file ``.pyfcidump_conf.py``.


Maximum memory
--------------

:data:`MAX_MEMORY` (in MB) is the memory the caller allows for one irrep
block of packed integrals.  It is only used to emit a warning when the
largest irrep block does not fit.
'''

from pyfcidump import __config__

MAX_MEMORY = getattr(__config__, 'MAX_MEMORY', 4000)  # MB
TMPDIR = getattr(__config__, 'TMPDIR', '.')

# Extra keyword arguments passed to h5py.File when a file is opened for writing
H5F_WRITE_KWARGS = getattr(__config__, 'H5F_WRITE_KWARGS', {})

VERBOSE_DEBUG  = 5
VERBOSE_INFO   = 4
VERBOSE_NOTICE = 3
VERBOSE_WARN   = 2
VERBOSE_ERR    = 1
VERBOSE_QUIET  = 0
VERBOSE_CRIT   = -1
VERBOSE_ALERT  = -2
VERBOSE_PANIC  = -3
