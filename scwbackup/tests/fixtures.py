# All Rights Reserved.
#
#    Licensed under the Apache License, Version 2.0 (the "License"); you may
#    not use this file except in compliance with the License. You may obtain
#    a copy of the License at
#
#         http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
#    WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
#    License for the specific language governing permissions and limitations
#    under the License.

"""Fixtures for scwbackup tests."""

import logging as std_logging
import os

import fixtures

_TRUE_VALUES = ('True', 'true', '1', 'yes')


class NullHandler(std_logging.Handler):
    """custom default NullHandler to attempt to format the record.

    Used to detect formatting errors in debug level logs without saving the
    logs.
    """
    def handle(self, record):
        self.format(record)

    def emit(self, record):
        pass

    def createLock(self):
        self.lock = None


class StandardLogging(fixtures.Fixture):
    """Setup Logging redirection for tests.

    The root logger defaults to INFO and a Null handler at DEBUG lets debug
    messages be formatted, and so checked, without keeping the output.

    OS_DEBUG=True in the environment prints the full debug logging.
    """

    def setUp(self):
        super(StandardLogging, self).setUp()

        root = std_logging.getLogger()
        root.setLevel(std_logging.INFO)

        if os.environ.get('OS_DEBUG') in _TRUE_VALUES:
            level = std_logging.DEBUG
        else:
            level = std_logging.INFO

        fs = '%(asctime)s %(levelname)s [%(name)s] %(message)s'
        self.logger = self.useFixture(
            fixtures.FakeLogger(format=fs, level=None))
        root.handlers[0].setLevel(level)

        if level > std_logging.DEBUG:
            handler = NullHandler()
            self.useFixture(fixtures.LogHandler(handler, nuke_handlers=False))
            handler.setLevel(std_logging.DEBUG)

        def fake_logging_setup(*args):
            pass

        self.useFixture(
            fixtures.MonkeyPatch('oslo_log.log.setup', fake_logging_setup))


class ScalewayEnvironment(fixtures.Fixture):
    """Clear every SCW_* variable, then set the given ones."""

    def __init__(self, **variables):
        super(ScalewayEnvironment, self).__init__()
        self.variables = variables

    def setUp(self):
        super(ScalewayEnvironment, self).setUp()
        for name in [n for n in os.environ if n.startswith('SCW_')]:
            self.useFixture(fixtures.EnvironmentVariable(name))
        for name, value in self.variables.items():
            self.useFixture(fixtures.EnvironmentVariable(name, value))
