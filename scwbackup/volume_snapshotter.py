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

"""Volume snapshotter for Scaleway Block Storage.

Backs the volume snapshot operations of a backup orchestrator: snapshots are
taken from volumes, volumes are restored from snapshots and the SBS volume ID
is read from and written to PersistentVolume documents. The snapshotter keeps
no state besides its API client; every operation fetches the remote resource
it works on.
"""

import os
import re

from oslo_config import cfg
from oslo_log import log as logging
from oslo_utils import excutils

from scwbackup.common import config  # noqa Need to register global opts
from scwbackup import exception
from scwbackup import persistent_volume
from scwbackup.scw import block
from scwbackup.scw import client
from scwbackup import tags as scw_tags


LOG = logging.getLogger(__name__)

CONF = cfg.CONF

REGION_KEY = 'region'
CONFIG_PATH_KEY = 'configPath'
CREDENTIAL_PROFILE_KEY = 'profile'

VALID_CONFIG_KEYS = (REGION_KEY, CONFIG_PATH_KEY, CREDENTIAL_PROFILE_KEY)

CLUSTER_NAME_ENV_VAR = 'SCW_CLUSTER_NAME'

VOLUME_ID_REGEX = re.compile(r'vol-.*')


def validate_config_keys(config, *valid_keys):
    invalid = sorted(set(config) - set(valid_keys))
    if invalid:
        raise exception.InvalidConfigKeys(invalid=', '.join(invalid),
                                          valid=', '.join(valid_keys))


class VolumeSnapshotter(object):

    def __init__(self, logger=None, environ=None, block_api=None):
        self.log = logger or LOG
        self.environ = dict(os.environ if environ is None else environ)
        self.block_api = block_api

    def init(self, config):
        """Resolve the client configuration from the plugin config keys."""
        validate_config_keys(config, *VALID_CONFIG_KEYS)

        region = config.get(REGION_KEY)
        config_path = config.get(CONFIG_PATH_KEY)
        profile_name = config.get(CREDENTIAL_PROFILE_KEY)

        if not region:
            raise exception.MissingConfigKey(key=REGION_KEY)

        client_config = (client.ClientBuilder(self.log)
                         .with_user_agent(CONF.scw_user_agent)
                         .with_env_profile(self.environ)
                         .with_region(region)
                         .build(config_path, profile_name))

        self.block_api = block.BlockStorageAPI(client_config)

    def create_volume_from_snapshot(self, snapshot_id, volume_az, iops=None):
        # describe the snapshot, so we can apply its tags to the volume
        try:
            snapshot = self.block_api.get_snapshot(snapshot_id,
                                                   zone=volume_az)
        except exception.SCWBackupException as e:
            with excutils.save_and_reraise_exception():
                self.log.info("failed to describe snapshot %(id)s: %(err)s",
                              {'id': snapshot_id, 'err': e})

        volume_tags = []
        if snapshot.tags:
            volume_tags = scw_tags.get_tags_for_cluster(
                snapshot.tags, self.environ.get(CLUSTER_NAME_ENV_VAR))

        volume = self.block_api.create_volume_from_snapshot(
            snapshot_id, zone=volume_az, perf_iops=iops, tags=volume_tags)
        self.log.info("Created volume %(vol)s from snapshot %(snap)s",
                      {'vol': volume.id, 'snap': snapshot_id})
        return volume.id

    def get_volume_info(self, volume_id, volume_az=None):
        """Return the volume type and its IOPS, None when not set."""
        volume = self._describe_volume(volume_id, volume_az)

        iops = None
        if volume.specs is not None and volume.specs.perf_iops is not None:
            iops = int(volume.specs.perf_iops)

        return volume.type, iops

    def _describe_volume(self, volume_id, volume_az=None):
        try:
            return self.block_api.get_volume(volume_id, zone=volume_az)
        except exception.SCWBackupException as e:
            with excutils.save_and_reraise_exception():
                self.log.info("failed to describe volume %(id)s: %(err)s",
                              {'id': volume_id, 'err': e})

    def create_snapshot(self, volume_id, snapshot_name, tags=None):
        # describe the volume, so we can copy its tags to the snapshot
        volume = self._describe_volume(volume_id)

        merged_tags = scw_tags.Tags(volume.tags).merge(tags)
        snapshot = self.block_api.create_snapshot(
            volume.id,
            'vol-%s-snap-%s' % (volume.name, snapshot_name),
            zone=volume.zone,
            tags=merged_tags)
        self.log.info("Created snapshot %(snap)s of volume %(vol)s",
                      {'snap': snapshot.id, 'vol': volume.id})
        return snapshot.id

    def delete_snapshot(self, snapshot_id):
        try:
            self.block_api.delete_snapshot(snapshot_id)
        except exception.SnapshotNotFound:
            # already gone
            self.log.info("Snapshot %s not found, nothing to delete",
                          snapshot_id)

    def get_volume_id(self, pv_document):
        pv = persistent_volume.PersistentVolume.from_unstructured(
            pv_document)
        if pv.csi is None:
            return ''

        if pv.csi.driver == CONF.sbs_csi_driver:
            match = VOLUME_ID_REGEX.search(pv.csi.volume_handle or '')
            return match.group(0) if match else ''

        self.log.info("Unable to handle CSI driver: %s", pv.csi.driver)
        return ''

    def set_volume_id(self, pv_document, volume_id):
        pv = persistent_volume.PersistentVolume.from_unstructured(
            pv_document)
        if pv.csi is None:
            raise exception.CSISpecNotFound()

        if pv.csi.driver != CONF.sbs_csi_driver:
            raise exception.UnsupportedCSIDriver(driver=pv.csi.driver)

        pv.csi.volume_handle = volume_id
        return pv.to_unstructured()
