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

"""Client for the Scaleway Block Storage (SBS) API, v1alpha1.

Only the calls needed to snapshot and restore volumes are implemented. Each
call is a single blocking request; nothing is retried.
"""

import functools

from oslo_config import cfg
from oslo_log import log as logging
from oslo_serialization import jsonutils
from oslo_utils import uuidutils
import requests

from scwbackup.common import config  # noqa Need to register global opts
from scwbackup import exception


LOG = logging.getLogger(__name__)

CONF = cfg.CONF

API_PATH = '/block/v1alpha1/zones/%(zone)s'

_NOT_FOUND_EXCEPTIONS = {
    'snapshot': exception.SnapshotNotFound,
    'volume': exception.VolumeNotFound,
}


class VolumeSpecs(object):
    def __init__(self, perf_iops=None, volume_class=None):
        self.perf_iops = perf_iops
        self.volume_class = volume_class

    @classmethod
    def from_dict(cls, data):
        if data is None:
            return None
        return cls(perf_iops=data.get('perf_iops'),
                   volume_class=data.get('class'))


class Volume(object):
    def __init__(self, id, name, zone, type=None, tags=None, specs=None,
                 size=None, status=None):
        self.id = id
        self.name = name
        self.zone = zone
        self.type = type
        self.tags = list(tags or [])
        self.specs = specs
        self.size = size
        self.status = status

    @classmethod
    def from_dict(cls, data):
        return cls(id=data['id'],
                   name=data.get('name', ''),
                   zone=data.get('zone'),
                   type=data.get('type'),
                   tags=data.get('tags'),
                   specs=VolumeSpecs.from_dict(data.get('specs')),
                   size=data.get('size'),
                   status=data.get('status'))


class Snapshot(object):
    def __init__(self, id, name, zone, tags=None, parent_volume_id=None,
                 size=None, status=None):
        self.id = id
        self.name = name
        self.zone = zone
        self.tags = list(tags or [])
        self.parent_volume_id = parent_volume_id
        self.size = size
        self.status = status

    @classmethod
    def from_dict(cls, data):
        parent = data.get('parent_volume') or {}
        return cls(id=data['id'],
                   name=data.get('name', ''),
                   zone=data.get('zone'),
                   tags=data.get('tags'),
                   parent_volume_id=parent.get('id'),
                   size=data.get('size'),
                   status=data.get('status'))


def _wrap_transport_errors(func):
    @functools.wraps(func)
    def func_wrapper(self, method, path, **kwargs):
        try:
            return func(self, method, path, **kwargs)
        except requests.exceptions.RequestException as err:
            LOG.exception("Scaleway API not responding at '%s'",
                          self.api_url)
            raise exception.BlockStorageAPIException(
                method=method, path=path, status=None, reason=err)

    return func_wrapper


class BlockStorageAPI(object):
    """Thin REST client bound to a validated ClientConfig."""

    def __init__(self, client_config, session=None):
        self.client_config = client_config
        self.api_url = client_config.api_url.rstrip('/')
        self.timeout = CONF.scw_api_timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'X-Auth-Token': client_config.secret_key,
            'User-Agent': client_config.user_agent,
            'Content-Type': 'application/json',
        })

    def _zone_path(self, zone, suffix):
        return (API_PATH % {'zone': zone or self.client_config.zone}) + suffix

    @_wrap_transport_errors
    def _request(self, method, path, body=None):
        url = self.api_url + path
        data = jsonutils.dumps(body) if body is not None else None
        LOG.debug('Req: %(method)s %(url)s Body: %(body)s',
                  {'method': method, 'url': url, 'body': data})
        response = self.session.request(method, url, data=data,
                                        timeout=self.timeout)
        LOG.debug('Resp: %(method)s %(url)s Status: %(status)s',
                  {'method': method, 'url': url,
                   'status': response.status_code})

        if response.status_code >= 400:
            self._raise_for_response(method, path, response)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    @staticmethod
    def _raise_for_response(method, path, response):
        try:
            error = response.json()
        except ValueError:
            error = {}
        if not isinstance(error, dict):
            error = {}

        if (response.status_code == 404 and
                error.get('type') == 'not_found'):
            resource = error.get('resource', 'resource')
            exc_class = _NOT_FOUND_EXCEPTIONS.get(resource,
                                                  exception.ResourceNotFound)
            raise exc_class(resource=resource,
                            resource_id=error.get('resource_id'))

        reason = error.get('message') or response.text or response.reason
        raise exception.BlockStorageAPIException(
            method=method, path=path, status=response.status_code,
            reason=reason)

    def get_snapshot(self, snapshot_id, zone=None):
        path = self._zone_path(zone, '/snapshots/%s' % snapshot_id)
        return Snapshot.from_dict(self._request('GET', path))

    def get_volume(self, volume_id, zone=None):
        path = self._zone_path(zone, '/volumes/%s' % volume_id)
        return Volume.from_dict(self._request('GET', path))

    def create_volume_from_snapshot(self, snapshot_id, zone=None, name=None,
                                    perf_iops=None, tags=None):
        body = {
            'name': name or 'vol-%s' % uuidutils.generate_uuid(dashed=False),
            'project_id': self.client_config.project_id,
            'from_snapshot': {'snapshot_id': snapshot_id},
            'tags': list(tags or []),
        }
        if perf_iops is not None:
            body['perf_iops'] = perf_iops
        path = self._zone_path(zone, '/volumes')
        return Volume.from_dict(self._request('POST', path, body=body))

    def create_snapshot(self, volume_id, name, zone=None, tags=None):
        body = {
            'volume_id': volume_id,
            'name': name,
            'project_id': self.client_config.project_id,
            'tags': list(tags or []),
        }
        path = self._zone_path(zone, '/snapshots')
        return Snapshot.from_dict(self._request('POST', path, body=body))

    def delete_snapshot(self, snapshot_id, zone=None):
        path = self._zone_path(zone, '/snapshots/%s' % snapshot_id)
        self._request('DELETE', path)
