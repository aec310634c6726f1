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

"""Format checks for Scaleway client settings."""

import re
from urllib import parse as urlparse


REGION_FR_PAR = 'fr-par'
REGION_NL_AMS = 'nl-ams'
REGION_PL_WAW = 'pl-waw'

ALL_REGIONS = (REGION_FR_PAR, REGION_NL_AMS, REGION_PL_WAW)

ALL_ZONES = tuple('%s-%d' % (region, index)
                  for region in ALL_REGIONS
                  for index in (1, 2, 3))

ACCESS_KEY_FORMAT = 'SCWXXXXXXXXXXXXXXXXX'
UUID_FORMAT = 'xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx'
API_URL_FORMAT = 'http://host or https://host'

_ACCESS_KEY_RE = re.compile(r'^SCW[A-Z0-9]{17}$')
_UUID_RE = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$')


def _matches(pattern, value):
    if not isinstance(value, str):
        return False
    return pattern.match(value) is not None


def is_uuid(value):
    return _matches(_UUID_RE, value)


def is_access_key(value):
    """Access keys are SCW followed by 17 upper-case alphanumerics."""
    return _matches(_ACCESS_KEY_RE, value)


def is_secret_key(value):
    return is_uuid(value)


def is_organization_id(value):
    return is_uuid(value)


def is_project_id(value):
    return is_uuid(value)


def is_zone(value):
    return value in ALL_ZONES


def is_region(value):
    return value in ALL_REGIONS


def is_api_url(value):
    """API URLs are absolute http or https URLs with a host."""
    if not isinstance(value, str):
        return False
    try:
        parsed = urlparse.urlparse(value)
    except ValueError:
        return False
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)
