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

"""Tags attached to Scaleway volumes and snapshots."""

CLUSTER_TAG_PREFIX = 'kubernetes.io/cluster/'
CLUSTER_NAME_TAG_KEY = 'KubernetesCluster'


class Tags(list):
    """A list of tags, unique by full string value."""

    def unique(self):
        """Drop repeated tags, keeping the first occurrence of each."""
        seen = set()
        result = Tags()
        for tag in self:
            if tag not in seen:
                seen.add(tag)
                result.append(tag)
        return result

    def merge(self, other):
        return Tags(list(self) + list(other or [])).unique()


def is_ownership_tag(tag):
    return (tag.startswith(CLUSTER_TAG_PREFIX) or
            tag == CLUSTER_NAME_TAG_KEY or
            tag.startswith(CLUSTER_NAME_TAG_KEY + ':'))


def get_tags_for_cluster(snapshot_tags, cluster_name=None):
    """Rewrite ownership tags so a restored volume belongs to this cluster.

    Without a cluster name the tags are returned unchanged. With one, the two
    ownership tags of the current cluster come first and any ownership tag
    copied from the source is dropped.
    """
    if cluster_name is None:
        return list(snapshot_tags)

    result = [
        '%s%s:owned' % (CLUSTER_TAG_PREFIX, cluster_name),
        '%s:%s' % (CLUSTER_NAME_TAG_KEY, cluster_name),
    ]
    result.extend(tag for tag in snapshot_tags if not is_ownership_tag(tag))
    return result
