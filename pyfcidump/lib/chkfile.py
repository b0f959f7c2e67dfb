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
Nested Python containers in HDF5 chkfiles

A dict is stored as a group, a list or tuple as a group named
``<key>__from_list__`` with members ``000000``, ``000001``, ..., anything
else (arrays, numbers, strings) as a dataset.  None values are not stored,
:func:`load` gives them back as missing keys.
'''

import h5py
from pyfcidump.lib.misc import H5FileWrap

LIST_SUFFIX = '__from_list__'


def _save(group, key, value):
    if value is None:
        return
    if isinstance(value, dict):
        sub = group.create_group(key)
        for k, v in value.items():
            _save(sub, k, v)
    elif isinstance(value, (list, tuple)):
        sub = group.create_group(key + LIST_SUFFIX)
        for i, v in enumerate(value):
            _save(sub, '%06d' % i, v)
    else:
        group[key] = value

def _restore(node):
    if not isinstance(node, h5py.Group):
        return node[()]
    if node.name.endswith(LIST_SUFFIX):
        return [_restore(node[k]) for k in sorted(node)]
    return {k[:-len(LIST_SUFFIX)] if k.endswith(LIST_SUFFIX) else k: _restore(v)
            for k, v in node.items()}

def load(chkfile, key):
    '''Read key from chkfile.  Groups come back as dicts (or lists, see the
    module doc), datasets as numpy arrays or scalars.  None if key is not in
    the file.

    Examples:

    >>> from pyfcidump import lib
    >>> lib.chkfile.load('h2o.chk', 'scf/nmopi')
    array([4, 0, 1, 2])
    '''
    with h5py.File(chkfile, 'r') as fh5:
        for name in (key, key + LIST_SUFFIX):
            if name in fh5:
                return _restore(fh5[name])
    return None

def dump(chkfile, key, value):
    '''Write value under key, replacing what was stored there before.
    chkfile is created if it is not an HDF5 file yet.'''
    mode = 'r+' if h5py.is_hdf5(chkfile) else 'w'
    with H5FileWrap(chkfile, mode) as fh5:
        for name in (key, key + LIST_SUFFIX):
            if name in fh5:
                del fh5[name]
        _save(fh5, key, value)
