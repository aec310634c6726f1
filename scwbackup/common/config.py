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

"""Global options shared by the snapshotter, the API client and the CLI.

Credentials are not options here: they are resolved per client
from the Scaleway profile file and the environment, see scwbackup.scw.client.
"""

from oslo_config import cfg
from oslo_log import log as logging


CONF = cfg.CONF
logging.register_options(CONF)

scw_opts = [
    cfg.URIOpt('scw_api_url',
               default='https://api.scaleway.com',
               schemes=['http', 'https'],
               help='Base URL of the Scaleway API. Overridden by the '
                    'api_url profile key or the SCW_API_URL environment '
                    'variable.'),
    cfg.IntOpt('scw_api_timeout',
               min=1,
               help='Timeout in seconds for a single request to the '
                    'Scaleway API. Requests block until the API answers '
                    'when unset.'),
    cfg.StrOpt('scw_user_agent',
               default='velero-plugin-scaleway',
               help='User agent prefix sent with every Scaleway API '
                    'request.'),
    cfg.StrOpt('sbs_csi_driver',
               default='sbs-default.csi.scaleway.com',
               help='Name of the CSI driver provisioning Scaleway Block '
                    'Storage persistent volumes.'),
]

CONF.register_opts(scw_opts)


def list_opts():
    return [(None, scw_opts)]
