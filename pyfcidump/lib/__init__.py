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
Fundamental helpers: logging, HDF5 files, chkfile I/O and exceptions
'''

from pyfcidump.lib import parameters
param = parameters
from pyfcidump.lib import logger
from pyfcidump.lib import misc
from pyfcidump.lib import exceptions
from pyfcidump.lib.misc import *
from pyfcidump.lib import chkfile
from pyfcidump.lib.misc import StreamObject
