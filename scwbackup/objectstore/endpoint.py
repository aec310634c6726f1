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

"""Endpoint resolution for Scaleway services exposed through botocore."""

import collections
import os

from scwbackup import exception
from scwbackup.scw import validation


S3_SERVICE = 's3'
S3_URL_TEMPLATE = 'https://s3.%(region)s.scw.cloud'

Endpoint = collections.namedtuple('Endpoint', ['url', 'signing_region'])


class ScalewayEndpointResolver(object):
    """Map a (service, region) pair to a Scaleway endpoint.

    The S3 endpoint can be overridden with the environment variable named by
    url_env_var.
    """

    def __init__(self, url_env_var, environ=None):
        self.url_env_var = url_env_var
        self._environ = environ

    @property
    def environ(self):
        return os.environ if self._environ is None else self._environ

    def resolve_endpoint(self, service, region):
        if not validation.is_region(region):
            raise exception.UnsupportedRegion(region=region)

        if service != S3_SERVICE:
            raise exception.UnsupportedService(service=service)

        url = self.environ.get(self.url_env_var)
        if not url:
            url = S3_URL_TEMPLATE % {'region': region}

        return Endpoint(url=url, signing_region=region)
