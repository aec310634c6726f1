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

"""Scaleway profiles.

A profile is a bundle of client settings. Profiles come from two sources: the
YAML config file written by ``scw init`` and the ``SCW_*`` environment
variables. The config file holds a default profile at its top level and any
number of named profiles under ``profiles``::

    access_key: SCWXXXXXXXXXXXXXXXXX
    secret_key: 11111111-1111-1111-1111-111111111111
    default_organization_id: 22222222-2222-2222-2222-222222222222
    default_zone: fr-par-1
    profiles:
      prod:
        default_zone: nl-ams-1
"""

import errno
import os

from oslo_log import log as logging
import yaml

from scwbackup import exception
from scwbackup.i18n import _


LOG = logging.getLogger(__name__)

ENV_CONFIG_PATH = 'SCW_CONFIG_PATH'

PROFILE_FIELDS = (
    'access_key',
    'secret_key',
    'default_organization_id',
    'default_project_id',
    'default_zone',
    'default_region',
    'api_url',
)

# profile field -> environment variable
ENV_VARS = {
    'access_key': 'SCW_ACCESS_KEY',
    'secret_key': 'SCW_SECRET_KEY',
    'default_organization_id': 'SCW_DEFAULT_ORGANIZATION_ID',
    'default_project_id': 'SCW_DEFAULT_PROJECT_ID',
    'default_zone': 'SCW_DEFAULT_ZONE',
    'default_region': 'SCW_DEFAULT_REGION',
    'api_url': 'SCW_API_URL',
}

_SECRET_FIELDS = ('secret_key',)


class Profile(object):
    """Optional client settings; an empty string counts as unset."""

    __slots__ = PROFILE_FIELDS

    def __init__(self, **kwargs):
        unknown = set(kwargs) - set(PROFILE_FIELDS)
        if unknown:
            raise TypeError('unexpected profile fields: %s' %
                            ', '.join(sorted(unknown)))
        for field in PROFILE_FIELDS:
            setattr(self, field, kwargs.get(field) or None)

    @classmethod
    def from_dict(cls, data):
        """Build a profile from a config file mapping, ignoring other keys."""
        values = {}
        for field in PROFILE_FIELDS:
            value = data.get(field)
            if value is not None:
                values[field] = str(value)
        return cls(**values)

    def to_dict(self):
        return {field: getattr(self, field) for field in PROFILE_FIELDS
                if getattr(self, field)}

    def copy(self, **overrides):
        values = self.to_dict()
        values.update(overrides)
        return Profile(**values)

    def is_empty(self):
        return not self.to_dict()

    def __eq__(self, other):
        if not isinstance(other, Profile):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __repr__(self):
        shown = {}
        for field, value in self.to_dict().items():
            shown[field] = '***' if field in _SECRET_FIELDS else value
        return 'Profile(%s)' % ', '.join(
            '%s=%r' % item for item in sorted(shown.items()))


def merge_profiles(high, low):
    """Merge two profiles field by field.

    A non-empty field of ``high`` wins, otherwise the field of ``low`` is
    used.
    """
    merged = {}
    for field in PROFILE_FIELDS:
        merged[field] = getattr(high, field) or getattr(low, field)
    return Profile(**merged)


class ConfigFile(object):
    """A loaded Scaleway config file."""

    def __init__(self, path, default_profile=None, profiles=None):
        self.path = path
        self.default_profile = default_profile or Profile()
        self.profiles = profiles or {}

    @classmethod
    def from_dict(cls, path, data):
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise exception.ConfigFileError(
                path=path, reason=_('expected a mapping at the top level'))

        named = data.get('profiles') or {}
        if not isinstance(named, dict):
            raise exception.ConfigFileError(
                path=path, reason=_('"profiles" must be a mapping'))

        profiles = {}
        for name, values in named.items():
            if not isinstance(values, dict):
                raise exception.ConfigFileError(
                    path=path,
                    reason=_('profile %s must be a mapping') % name)
            profiles[str(name)] = Profile.from_dict(values)

        return cls(path, Profile.from_dict(data), profiles)

    def get_profile(self, name):
        """Return the named profile merged over the default profile.

        An empty name selects the default profile.
        """
        if not name:
            return self.default_profile
        try:
            profile = self.profiles[name]
        except KeyError:
            raise exception.ProfileNotFound(profile=name)
        return merge_profiles(profile, self.default_profile)


def get_config_path(environ):
    """Return the default config file path for an environment snapshot.

    Priority order:
    * $SCW_CONFIG_PATH
    * $XDG_CONFIG_HOME/scw/config.yaml
    * $HOME/.config/scw/config.yaml
    """
    path = environ.get(ENV_CONFIG_PATH)
    if path:
        return path

    xdg_config_home = environ.get('XDG_CONFIG_HOME')
    if xdg_config_home:
        return os.path.join(xdg_config_home, 'scw', 'config.yaml')

    home = environ.get('HOME') or os.path.expanduser('~')
    return os.path.join(home, '.config', 'scw', 'config.yaml')


def load_config_from_path(path):
    """Load a config file.

    :raises ConfigFileNotFound: the file does not exist
    :raises ConfigFileError: the file exists but can't be read or parsed
    """
    try:
        with open(path, encoding='utf-8') as config_file:
            data = yaml.safe_load(config_file)
    except (IOError, OSError) as e:
        if e.errno == errno.ENOENT:
            raise exception.ConfigFileNotFound(path=path)
        raise exception.ConfigFileError(path=path, reason=e)
    except (UnicodeDecodeError, yaml.YAMLError) as e:
        raise exception.ConfigFileError(path=path, reason=e)

    LOG.debug("Loaded Scaleway config file %s", path)
    return ConfigFile.from_dict(path, data)


def load_env_profile(environ):
    """Build a profile from the SCW_* variables of an environment snapshot."""
    values = {}
    for field, env_var in ENV_VARS.items():
        value = environ.get(env_var)
        if value:
            values[field] = value
    return Profile(**values)
