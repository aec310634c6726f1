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

"""Resolution of the Scaleway client configuration.

The resolver merges, from highest to lowest priority:

* the explicit region given by the caller (region only),
* the ``SCW_*`` environment variables,
* the selected profile of the Scaleway config file.

Unset fields are never guessed, except that a missing region is derived from
the zone when the zone names a known region. The result is a ClientConfig
whose mandatory fields have all been validated, or an exception.
"""

import collections
import os

from oslo_config import cfg
from oslo_log import log as logging
from oslo_utils import strutils

from scwbackup.common import config  # noqa Need to register global opts
from scwbackup import exception
from scwbackup.scw import profile as scw_profile
from scwbackup.scw import validation


LOG = logging.getLogger(__name__)

CONF = cfg.CONF

_UUID_EXPECTED = 'a UUID: ' + validation.UUID_FORMAT


_ClientConfig = collections.namedtuple(
    '_ClientConfig',
    ['access_key', 'secret_key', 'organization_id', 'zone', 'region',
     'project_id', 'api_url', 'user_agent'])


class ClientConfig(_ClientConfig):
    """Validated, read-only settings of a Scaleway API client."""

    __slots__ = ()

    def __repr__(self):
        fields = strutils.mask_dict_password(self._asdict())
        return 'ClientConfig(%s)' % ', '.join(
            '%s=%s' % (name, fields[name]) for name in self._fields)


# Mandatory fields in check order:
# (profile field, label, config key, predicate, invalid exception,
#  expected format)
_MANDATORY_FIELDS = (
    ('access_key', 'access key', 'access_key',
     validation.is_access_key, exception.InvalidAccessKey,
     validation.ACCESS_KEY_FORMAT + ' format'),
    ('secret_key', 'secret key', 'secret_key',
     validation.is_secret_key, exception.InvalidSecretKey,
     _UUID_EXPECTED),
    ('default_organization_id', 'organization ID',
     'default_organization_id',
     validation.is_organization_id, exception.InvalidOrganizationID,
     _UUID_EXPECTED),
    ('default_zone', 'default zone', 'default_zone',
     validation.is_zone, exception.InvalidZone, None),
    ('default_region', 'default region', 'default_region',
     validation.is_region, exception.InvalidRegion, None),
)


def _invalid_field(label, value, exc_class, expected):
    if exc_class is exception.InvalidZone:
        return exc_class(field=label, value=value,
                         accepted=', '.join(validation.ALL_ZONES))
    if exc_class is exception.InvalidRegion:
        return exc_class(field=label, value=value,
                         accepted=', '.join(validation.ALL_REGIONS))
    return exc_class(field=label, value=value, expected=expected)


def _validate_optional_fields(profile):
    # project ID defaults to the organization ID, API URL to scw_api_url
    if (profile.default_project_id and
            not validation.is_project_id(profile.default_project_id)):
        raise exception.InvalidProjectID(
            field='project ID', value=profile.default_project_id,
            expected=_UUID_EXPECTED)
    if profile.api_url and not validation.is_api_url(profile.api_url):
        raise exception.InvalidAPIURL(
            field='API URL', value=profile.api_url,
            expected=validation.API_URL_FORMAT)


def validate_profile(profile):
    """Check that every field a profile sets is well formed.

    Missing fields are fine here; this is the check run on a config file
    profile before it is merged with the environment.
    """
    for field, label, _key, is_valid, exc_class, expected in (
            _MANDATORY_FIELDS):
        value = getattr(profile, field)
        if value and not is_valid(value):
            raise _invalid_field(label, value, exc_class, expected)
    _validate_optional_fields(profile)


def validate_client_profile(profile, config_path):
    """Check that a merged profile holds every mandatory setting.

    Fields are checked in a fixed order and the first missing or malformed
    one is reported.
    """
    for field, label, config_key, is_valid, exc_class, expected in (
            _MANDATORY_FIELDS):
        value = getattr(profile, field)
        if not value:
            raise exception.ClientConfigFieldRequired(
                field=label,
                config_key=config_key,
                env_var=scw_profile.ENV_VARS[field],
                config_path=config_path)
        if not is_valid(value):
            raise _invalid_field(label, value, exc_class, expected)
    _validate_optional_fields(profile)


def guess_region(profile):
    """Fill a missing region from the zone, when that names a real region."""
    if not profile.default_zone or profile.default_region:
        return profile

    zone = profile.default_zone
    LOG.debug("guess region from %s zone", zone)
    region = zone[:-2]
    if validation.is_region(region):
        return profile.copy(default_region=region)

    LOG.debug("invalid guessed region '%s'", region)
    return profile


class ClientConfigResolver(object):
    """Builds a ClientConfig from a config file and an environment snapshot.

    The resolver only reads the environment mapping it was created with, so
    the same inputs always resolve to the same configuration.
    """

    def __init__(self, environ, user_agent=None, api_url=None):
        self.environ = dict(environ)
        self.user_agent = user_agent or CONF.scw_user_agent
        self.api_url = api_url or CONF.scw_api_url

    def resolve(self, config_path=None, profile_name=None, region=None):
        profile = scw_profile.load_env_profile(self.environ)
        config_path = config_path or scw_profile.get_config_path(
            self.environ)

        try:
            config_file = scw_profile.load_config_from_path(config_path)
        except exception.ConfigFileNotFound:
            # no config file was found, the environment is all we have
            LOG.debug("No Scaleway config file at %s", config_path)
        else:
            active_profile = config_file.get_profile(profile_name)
            validate_profile(active_profile)
            profile = scw_profile.merge_profiles(profile, active_profile)

        profile = guess_region(profile)

        if region:
            profile = profile.copy(default_region=region)

        validate_client_profile(profile, config_path)

        client_config = ClientConfig(
            access_key=profile.access_key,
            secret_key=profile.secret_key,
            organization_id=profile.default_organization_id,
            zone=profile.default_zone,
            region=profile.default_region,
            project_id=(profile.default_project_id or
                        profile.default_organization_id),
            api_url=profile.api_url or self.api_url,
            user_agent=self.user_agent)
        LOG.debug("Resolved Scaleway client configuration: %r",
                  client_config)
        return client_config


class ClientBuilder(object):
    """Fluent front-end to ClientConfigResolver."""

    def __init__(self, logger=None):
        self.log = logger or LOG
        self._environ = None
        self._user_agent = None
        self._region = None

    def with_env_profile(self, environ=None):
        self._environ = dict(os.environ if environ is None else environ)
        return self

    def with_user_agent(self, user_agent):
        self._user_agent = user_agent
        return self

    def with_region(self, region):
        self._region = region
        return self

    def build(self, config_path=None, profile_name=None):
        """Resolve the client configuration.

        Without with_env_profile() the process environment is read here.
        """
        environ = os.environ if self._environ is None else self._environ
        resolver = ClientConfigResolver(environ, user_agent=self._user_agent)
        client_config = resolver.resolve(config_path, profile_name,
                                         region=self._region)
        self.log.info("Scaleway client configured for zone %(zone)s, "
                      "region %(region)s",
                      {'zone': client_config.zone,
                       'region': client_config.region})
        return client_config
