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

"""Typed view of a Kubernetes PersistentVolume document.

The orchestrator hands persistent volumes over as generic nested mappings.
Only ``spec.csi.driver`` and ``spec.csi.volumeHandle`` matter here; every
other part of the document is carried through untouched. All handling of the
unknown document shape is confined to from_unstructured/to_unstructured.
"""

import copy

from scwbackup import exception
from scwbackup.i18n import _


class CSISource(object):
    def __init__(self, driver, volume_handle):
        self.driver = driver
        self.volume_handle = volume_handle


class PersistentVolume(object):

    def __init__(self, document, csi=None):
        self._document = document
        self.csi = csi

    @classmethod
    def from_unstructured(cls, document):
        if not isinstance(document, dict):
            raise exception.InvalidPersistentVolume(
                reason=_('expected a mapping, got %s') %
                type(document).__name__)

        spec = document.get('spec')
        if spec is None:
            return cls(copy.deepcopy(document))
        if not isinstance(spec, dict):
            raise exception.InvalidPersistentVolume(
                reason=_('spec must be a mapping'))

        csi = spec.get('csi')
        if csi is None:
            return cls(copy.deepcopy(document))
        if not isinstance(csi, dict):
            raise exception.InvalidPersistentVolume(
                reason=_('spec.csi must be a mapping'))

        return cls(copy.deepcopy(document),
                   CSISource(csi.get('driver', ''),
                             csi.get('volumeHandle', '')))

    def to_unstructured(self):
        document = copy.deepcopy(self._document)
        if self.csi is not None:
            csi = document.setdefault('spec', {}).setdefault('csi', {})
            csi['driver'] = self.csi.driver
            csi['volumeHandle'] = self.csi.volume_handle
        return document
