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

"""Assembly of an S3 client for Scaleway Object Storage.

Credentials and the endpoint come from ScalewayCredentialsProvider and
ScalewayEndpointResolver, so the object store is configured from the same
SCW_* environment as the block storage client.
"""

import collections

import boto3
from botocore.config import Config
import botocore.session
from oslo_log import log as logging

from scwbackup import exception
from scwbackup.objectstore import credentials
from scwbackup.objectstore import endpoint
from scwbackup import utils


LOG = logging.getLogger(__name__)

ACCESS_KEY_ENV_VAR = 'SCW_ACCESS_KEY'
SECRET_KEY_ENV_VAR = 'SCW_SECRET_KEY'
S3_ENDPOINT_ENV_VAR = 'SCW_S3_ENDPOINT'

ObjectStoreConfig = collections.namedtuple(
    'ObjectStoreConfig', ['session', 'region', 'endpoint'])


class ConfigBuilder(object):

    def __init__(self, logger=None, environ=None):
        self.log = logger or LOG
        self.environ = environ
        self.region = None
        self.credentials_provider = None
        self.endpoint_resolver = None
        self.check_credentials = False

    def with_scw_credentials(self):
        self.credentials_provider = credentials.ScalewayCredentialsProvider(
            ACCESS_KEY_ENV_VAR, SECRET_KEY_ENV_VAR, environ=self.environ)
        self.check_credentials = True
        return self

    def with_scw_url(self):
        self.endpoint_resolver = endpoint.ScalewayEndpointResolver(
            S3_ENDPOINT_ENV_VAR, environ=self.environ)
        return self

    def with_region(self, region):
        self.region = region
        return self

    def build(self):
        session = botocore.session.get_session()
        if self.credentials_provider is not None:
            resolver = session.get_component('credential_provider')
            resolver.insert_before('env', self.credentials_provider)
            if self.check_credentials:
                # fail now rather than on the first request
                self.credentials_provider.retrieve()

        resolved = None
        if self.endpoint_resolver is not None:
            resolved = self.endpoint_resolver.resolve_endpoint(
                endpoint.S3_SERVICE, self.region)
            self.log.debug("Using S3 endpoint %s", resolved.url)

        return ObjectStoreConfig(session=session, region=self.region,
                                 endpoint=resolved)


def new_s3_client(store_config, url=None, force_path_style=False):
    """Return a boto3 S3 client for a built ObjectStoreConfig.

    An explicit url takes precedence over the resolved endpoint.
    """
    if url:
        if not utils.is_valid_s3_url_scheme(url):
            raise exception.InvalidS3URL(url=url)
    elif store_config.endpoint is not None:
        url = store_config.endpoint.url

    addressing_style = 'path' if force_path_style else 'auto'
    session = boto3.session.Session(
        botocore_session=store_config.session,
        region_name=store_config.region)
    return session.client(
        's3',
        endpoint_url=url,
        config=Config(s3={'addressing_style': addressing_style}))
