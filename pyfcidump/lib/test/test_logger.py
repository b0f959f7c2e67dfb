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

import io
import unittest
from pyfcidump.lib import logger


class StdoutRec:
    def __init__(self, verbose):
        self.stdout = io.StringIO()
        self.verbose = verbose

class KnownValues(unittest.TestCase):
    def test_levels(self):
        rec = StdoutRec(logger.NOTE)
        log = logger.new_logger(rec)
        log.note('Generating %s.', 'FCIDUMP')
        log.info('not shown')
        log.debug('not shown')
        self.assertEqual(rec.stdout.getvalue(), 'Generating FCIDUMP.\n')

        log = logger.new_logger(rec, logger.DEBUG1)
        log.debug1('%d integrals', 12)
        self.assertTrue(rec.stdout.getvalue().endswith('12 integrals\n'))

    def test_new_logger(self):
        log = logger.Logger(io.StringIO(), logger.WARN)
        self.assertTrue(logger.new_logger(None, log) is log)
        log = logger.new_logger(None, logger.INFO)
        self.assertEqual(log.verbose, logger.INFO)
        log = logger.new_logger()
        self.assertEqual(log.verbose, logger.NOTE)

    def test_warn(self):
        rec = StdoutRec(logger.WARN)
        logger.warn(rec, 'max_memory is %d MB', 4000)
        self.assertTrue('WARN: max_memory is 4000 MB' in rec.stdout.getvalue())
        rec = StdoutRec(logger.QUIET)
        logger.warn(rec, 'hidden')
        self.assertEqual(rec.stdout.getvalue(), '')

    def test_timer(self):
        rec = StdoutRec(logger.DEBUG)
        log = logger.new_logger(rec)
        t0 = (logger.process_clock(), logger.perf_counter())
        t1 = log.timer('pack', *t0)
        self.assertEqual(len(t1), 2)
        self.assertTrue('CPU time for pack' in rec.stdout.getvalue())
        rec.verbose = logger.INFO
        log = logger.new_logger(rec)
        log.timer_debug1('hidden', *t0)
        self.assertFalse('hidden' in rec.stdout.getvalue())


if __name__ == "__main__":
    print("Full Tests for logger")
    unittest.main()
