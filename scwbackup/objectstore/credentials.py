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

"""botocore credential provider backed by the Scaleway environment."""

import os

from botocore import credentials
from oslo_log import log as logging

from scwbackup import exception


LOG = logging.getLogger(__name__)


class ScalewayCredentialsProvider(credentials.CredentialProvider):
    """Serve the Scaleway access and secret keys to botocore.

    Scaleway keys don't expire, so plain (non refreshable) credentials are
    returned.
    """

    METHOD = 'scaleway-env'
    CANONICAL_NAME = 'ScalewayEnv'

    def __init__(self, access_key_env_var, secret_key_env_var,
                 environ=None):
        super(ScalewayCredentialsProvider, self).__init__()
        self.access_key_env_var = access_key_env_var
        self.secret_key_env_var = secret_key_env_var
        self._environ = environ

    @property
    def environ(self):
        return os.environ if self._environ is None else self._environ

    def retrieve(self):
        """Return the credentials or raise CredentialsNotAvailable."""
        access_key = self.environ.get(self.access_key_env_var)
        secret_key = self.environ.get(self.secret_key_env_var)

        if not access_key or not secret_key:
            raise exception.CredentialsNotAvailable(
                access_key_env_var=self.access_key_env_var,
                secret_key_env_var=self.secret_key_env_var)

        return credentials.Credentials(access_key, secret_key,
                                       method=self.METHOD)

    def load(self):
        # botocore moves on to the next provider when this returns None
        try:
            return self.retrieve()
        except exception.CredentialsNotAvailable:
            LOG.debug("Scaleway credentials not found in %(ak)s/%(sk)s",
                      {'ak': self.access_key_env_var,
                       'sk': self.secret_key_env_var})
            return None
