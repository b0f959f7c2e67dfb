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
Output of the FCIDUMP driver

A message is printed when the verbose level of the :class:`Logger` is at
least the level of the message:

======= ======
Level   number
------- ------
DEBUG1  6
DEBUG   5   record counts per spin block, frozen core energy, timings
INFO    4   transformation and file progress
NOTE    3   "Generating FCIDUMP." and the reference kind (default)
WARN    2
ERROR   1
QUIET   0
======= ======

Errors are always echoed to stderr, warnings too when the Logger writes to
a file other than sys.stdout.  :class:`Reference` and
:class:`IntegralTransform` carry ``stdout`` and ``verbose``, so they can be
handed to :func:`new_logger` or to the module level functions directly:

>>> from pyfcidump.lib import logger
>>> log = logger.new_logger(ref)
>>> log.note('Found %s', ref.reference)
Found RHF
'''

import sys
import time

from pyfcidump.lib import parameters as param
import pyfcidump.__config__

process_clock = time.process_time
perf_counter = time.perf_counter

DEBUG1 = param.VERBOSE_DEBUG + 1
DEBUG  = param.VERBOSE_DEBUG
INFO   = param.VERBOSE_INFO
NOTE   = param.VERBOSE_NOTICE
WARN   = param.VERBOSE_WARN
ERROR  = param.VERBOSE_ERR
QUIET  = param.VERBOSE_QUIET

# Timings of the transformation and of the writers are printed from this level
TIMER_LEVEL = getattr(pyfcidump.__config__, 'TIMER_LEVEL', DEBUG)


class Logger:
    '''
    Attributes:
        stdout : file object
            Where the messages go.
        verbose : int
            Messages of a level above verbose are dropped.
    '''
    def __init__(self, stdout=sys.stdout, verbose=NOTE):
        self.stdout = stdout
        self.verbose = verbose
        self._t0 = process_clock()
        self._w0 = perf_counter()

    def _write(self, level, msg, args, prefix=''):
        if args:
            msg = msg % args
        if self.verbose >= level:
            self.stdout.write(prefix + msg + '\n')
            self.stdout.flush()
        return msg

    def error(self, msg, *args):
        msg = self._write(ERROR, msg, args, '\nERROR: ')
        sys.stderr.write('ERROR: %s\n' % msg)

    def warn(self, msg, *args):
        msg = self._write(WARN, msg, args, '\nWARN: ')
        if self.verbose >= WARN and self.stdout is not sys.stdout:
            sys.stderr.write('WARN: %s\n' % msg)

    def note(self, msg, *args):
        self._write(NOTE, msg, args)

    def info(self, msg, *args):
        self._write(INFO, msg, args)

    def debug(self, msg, *args):
        self._write(DEBUG, msg, args)

    def debug1(self, msg, *args):
        self._write(DEBUG1, msg, args)

    def timer(self, msg, cpu0=None, wall0=None, level=None):
        '''Print the CPU (and wall) time elapsed since cpu0 (wall0), or since
        the previous timer call.  Returns the new time stamp(s) so that calls
        can be chained.'''
        if level is None:
            level = TIMER_LEVEL
        if cpu0 is None:
            cpu0 = self._t0
        self._t0 = process_clock()
        if wall0 is None:
            self._write(level, '    CPU time for %s %9.2f sec',
                        (msg, self._t0-cpu0))
            return self._t0
        self._w0 = perf_counter()
        self._write(level, '    CPU time for %s %9.2f sec, wall time %9.2f sec',
                    (msg, self._t0-cpu0, self._w0-wall0))
        return self._t0, self._w0

    def timer_debug1(self, msg, cpu0=None, wall0=None):
        return self.timer(msg, cpu0, wall0, level=max(DEBUG1, TIMER_LEVEL))


def new_logger(rec=None, verbose=None):
    '''Return a :class:`Logger` for rec.

    Args:
        rec : an object with the attributes stdout and verbose, or None

        verbose : a Logger, an int or None
            A Logger is returned as is.  An int overrides rec.verbose.
    '''
    if isinstance(verbose, Logger):
        return verbose
    stdout = getattr(rec, 'stdout', None)
    if stdout is None:
        stdout = sys.stdout
    if verbose is None:
        verbose = getattr(rec, 'verbose', NOTE)
    return Logger(stdout, verbose)

def error(rec, msg, *args):
    new_logger(rec).error(msg, *args)

def warn(rec, msg, *args):
    new_logger(rec).warn(msg, *args)

def note(rec, msg, *args):
    new_logger(rec).note(msg, *args)

def info(rec, msg, *args):
    new_logger(rec).info(msg, *args)

def debug(rec, msg, *args):
    new_logger(rec).debug(msg, *args)
