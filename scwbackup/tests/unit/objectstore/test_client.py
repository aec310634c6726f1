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

from unittest import mock

import botocore.session

from scwbackup import exception
from scwbackup.objectstore import client
from scwbackup.objectstore import endpoint
from scwbackup.tests.unit import fake_constants as fake
from scwbackup.tests.unit import test


ENVIRON = {
    'SCW_ACCESS_KEY': fake.ACCESS_KEY,
    'SCW_SECRET_KEY': fake.SECRET_KEY,
}


class ConfigBuilderTestCase(test.TestCase):

    def test_build(self):
        store_config = (client.ConfigBuilder(environ=ENVIRON)
                        .with_scw_credentials()
                        .with_scw_url()
                        .with_region(fake.REGION)
                        .build())

        self.assertEqual(fake.REGION, store_config.region)
        self.assertEqual(endpoint.Endpoint('https://s3.fr-par.scw.cloud',
                                           fake.REGION),
                         store_config.endpoint)
        creds = store_config.session.get_credentials()
        self.assertEqual(fake.ACCESS_KEY, creds.access_key)
        self.assertEqual(fake.SECRET_KEY, creds.secret_key)
        self.assertEqual('scaleway-env', creds.method)

    def test_build_with_endpoint_override(self):
        environ = dict(ENVIRON, SCW_S3_ENDPOINT='http://localhost:9000')

        store_config = (client.ConfigBuilder(environ=environ)
                        .with_scw_url()
                        .with_region(fake.OTHER_REGION)
                        .build())

        self.assertEqual('http://localhost:9000', store_config.endpoint.url)
        self.assertEqual(fake.OTHER_REGION,
                         store_config.endpoint.signing_region)

    def test_build_missing_credentials(self):
        builder = (client.ConfigBuilder(environ={})
                   .with_scw_credentials()
                   .with_region(fake.REGION))

        self.assertRaises(exception.CredentialsNotAvailable, builder.build)

    def test_build_unsupported_region(self):
        builder = (client.ConfigBuilder(environ=ENVIRON)
                   .with_scw_url()
                   .with_region('eu-west-1'))

        self.assertRaises(exception.UnsupportedRegion, builder.build)

    def test_build_plain(self):
        store_config = client.ConfigBuilder(environ={}).build()

        self.assertIsNone(store_config.region)
        self.assertIsNone(store_config.endpoint)

    def test_provider_inserted_before_env(self):
        session = botocore.session.get_session()
        resolver = mock.Mock()
        self.mock_object(session, 'get_component', return_value=resolver)
        self.mock_object(botocore.session, 'get_session',
                         return_value=session)

        builder = client.ConfigBuilder(environ=ENVIRON).with_scw_credentials()
        builder.build()

        session.get_component.assert_called_once_with('credential_provider')
        resolver.insert_before.assert_called_once_with(
            'env', builder.credentials_provider)


class NewS3ClientTestCase(test.TestCase):

    def setUp(self):
        super(NewS3ClientTestCase, self).setUp()
        self.store_config = (client.ConfigBuilder(environ=ENVIRON)
                             .with_scw_credentials()
                             .with_scw_url()
                             .with_region(fake.REGION)
                             .build())

    def test_resolved_endpoint(self):
        s3 = client.new_s3_client(self.store_config)

        self.assertEqual('https://s3.fr-par.scw.cloud', s3.meta.endpoint_url)
        self.assertEqual(fake.REGION, s3.meta.region_name)
        self.assertEqual('auto', s3.meta.config.s3['addressing_style'])

    def test_explicit_url(self):
        s3 = client.new_s3_client(self.store_config,
                                  url='http://localhost:9000',
                                  force_path_style=True)

        self.assertEqual('http://localhost:9000', s3.meta.endpoint_url)
        self.assertEqual('path', s3.meta.config.s3['addressing_style'])

    def test_invalid_url(self):
        exc = self.assertRaises(exception.InvalidS3URL,
                                client.new_s3_client, self.store_config,
                                url='localhost:9000')
        self.assertEqual('localhost:9000', exc.kwargs['url'])
