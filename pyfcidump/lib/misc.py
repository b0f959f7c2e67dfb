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
Driver base class and HDF5 files for the packed integrals
'''

import os
import sys
import tempfile
import weakref
import h5py

from pyfcidump.lib import parameters as param
from pyfcidump.lib import logger


class StreamObject:
    '''Base class of :class:`Reference` and :class:`IntegralTransform`.

    ``set`` updates attributes and ``run`` calls ``kernel``; both return the
    object itself, so that

    >>> ints = IntegralTransform(ref, h1e, eri).set(erifile='eri.h5').run()

    transforms the integrals into eri.h5.
    '''

    verbose = 0
    stdout = sys.stdout
    # Public attributes a subclass may carry, see check_sanity
    _keys = {'verbose', 'stdout', 'max_memory'}

    def kernel(self, *args):
        raise NotImplementedError

    def run(self, *args, **kwargs):
        self.set(**kwargs)
        self.kernel(*args)
        return self

    def set(self, **kwargs):
        for k, v in kwargs.items():
            setattr(self, k, v)
        return self

    def check_sanity(self):
        '''Warn about public attributes that are not declared in the _keys
        of the class or of one of its bases (a misspelled ref.frzc_pi = ...
        would otherwise be silently ignored).'''
        known = set()
        for cls in type(self).__mro__:
            known.update(getattr(cls, '_keys', ()))
        unknown = sorted(k for k in self.__dict__
                         if not k.startswith('_') and k not in known
                         and not hasattr(type(self), k))
        if unknown:
            logger.warn(self, '%s does not have attributes %s',
                        type(self).__name__, ' '.join(unknown))
        return self


class H5FileWrap(h5py.File):
    '''h5py.File with the keyword arguments of lib.param.H5F_WRITE_KWARGS
    (set in .pyfcidump_conf.py) applied whenever the file is writable.'''
    def __init__(self, filename, mode, **kwargs):
        if mode != 'r':
            kwargs = dict(param.H5F_WRITE_KWARGS, **kwargs)
        super().__init__(filename, mode, **kwargs)


def _remove(filename):
    if os.path.exists(filename):
        os.remove(filename)

class H5TmpFile(H5FileWrap):
    '''Scratch HDF5 file of the packed integrals.

    Without a filename, a new file is created under lib.param.TMPDIR and
    removed on :meth:`close` or when the object is garbage collected.  A
    given filename is opened with mode and kept.

    Examples:

    >>> from pyfcidump import lib
    >>> with lib.H5TmpFile() as feri:
    ...     feri['AA|AA/0'] = buf
    '''
    def __init__(self, filename=None, mode='a', dir=None, **kwargs):
        if filename is None:
            fd, filename = tempfile.mkstemp(suffix='.h5', dir=dir or param.TMPDIR)
            os.close(fd)
            super().__init__(filename, 'w', **kwargs)
            self._finalizer = weakref.finalize(self, _remove, filename)
        else:
            super().__init__(filename, mode, **kwargs)
            self._finalizer = None

    def close(self):
        super().close()
        if self._finalizer is not None:
            self._finalizer()
