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

"""scwbackup base exception handling.

Every error raised by this package derives from SCWBackupException. Subclasses
define a 'message' template which is printf'd with the keyword arguments given
to the constructor; those arguments stay available on 'exc.kwargs' so callers
can render remediation text or inspect the offending value without parsing
the message.
"""

from oslo_log import log as logging

from scwbackup.i18n import _


LOG = logging.getLogger(__name__)


class SCWBackupException(Exception):
    """Base scwbackup Exception

    To correctly use this class, inherit from it and define
    a 'message' property. That message will get printf'd
    with the keyword arguments provided to the constructor.

    """
    message = _("An unknown exception occurred.")
    code = 500

    def __init__(self, message=None, **kwargs):
        self.kwargs = kwargs
        self.kwargs['message'] = message

        if 'code' not in self.kwargs:
            self.kwargs['code'] = self.code

        for k, v in self.kwargs.items():
            if isinstance(v, Exception):
                self.kwargs[k] = str(v)

        if self._should_format():
            try:
                message = self.message % kwargs
            except Exception:
                self._log_exception()
                message = self.message
        elif isinstance(message, Exception):
            message = str(message)

        # NOTE: the rendered message is kept in 'msg' because 'message' is
        # shadowed by the class attribute.
        self.msg = message
        super(SCWBackupException, self).__init__(message)
        self.kwargs.pop('message', None)

    def _log_exception(self):
        # kwargs doesn't match a variable in the message
        # log the issue and the kwargs
        LOG.exception('Exception in string format operation:')
        for name, value in self.kwargs.items():
            LOG.error("%(name)s: %(value)s",
                      {'name': name, 'value': value})

    def _should_format(self):
        return self.kwargs['message'] is None or '%(message)' in self.message


class NotFound(SCWBackupException):
    message = _("Resource could not be found.")
    code = 404


class ConfigFileNotFound(NotFound):
    message = _("Config file %(path)s could not be found.")


class ResourceNotFound(NotFound):
    message = _("%(resource)s %(resource_id)s could not be found.")


class SnapshotNotFound(ResourceNotFound):
    message = _("Snapshot %(resource_id)s could not be found.")


class VolumeNotFound(ResourceNotFound):
    message = _("Volume %(resource_id)s could not be found.")


class ConfigurationError(SCWBackupException):
    message = _("Configuration error: %(reason)s")


class ClientConfigFieldRequired(ConfigurationError):
    """A mandatory client setting is missing from every source.

    Carries the recognized config file key, the environment variable and the
    config file path so 'details' can tell the operator how to provide it.
    """
    message = _("%(field)s is required")
    details_template = _(
        '%(config_key)s can be initialised using the command "scw init".\n'
        '\n'
        'After initialisation, there are two ways to provide '
        '%(config_key)s:\n'
        '- with the Scaleway config file, in the %(config_key)s key: '
        '%(config_path)s;\n'
        '- with the %(env_var)s environment variable;\n'
        '\n'
        'Note that the last method has the highest priority.\n'
        '\n'
        'More info: '
        'https://github.com/scaleway/scaleway-sdk-go/tree/master/scw'
        '#scaleway-config')

    @property
    def details(self):
        return self.details_template % {
            'config_key': self.kwargs.get('config_key'),
            'config_path': self.kwargs.get('config_path'),
            'env_var': self.kwargs.get('env_var'),
        }


class ProfileNotFound(ConfigurationError):
    message = _("Given profile %(profile)s does not exist.")


class ConfigFileError(ConfigurationError):
    message = _("Failed to load config file %(path)s: %(reason)s")


class InvalidConfigKeys(ConfigurationError):
    message = _("Config has invalid keys %(invalid)s; valid keys are "
                "%(valid)s")


class MissingConfigKey(ConfigurationError):
    message = _("Missing %(key)s in scw configuration")


class ValidationError(SCWBackupException):
    message = _("Invalid value: %(reason)s")
    code = 400


class InvalidClientConfigField(ValidationError):
    message = _("Invalid %(field)s format '%(value)s', expected "
                "%(expected)s")


class InvalidAccessKey(InvalidClientConfigField):
    pass


class InvalidSecretKey(InvalidClientConfigField):
    pass


class InvalidOrganizationID(InvalidClientConfigField):
    pass


class InvalidProjectID(InvalidClientConfigField):
    pass


class InvalidAPIURL(InvalidClientConfigField):
    pass


class InvalidZone(InvalidClientConfigField):
    message = _("Invalid %(field)s format '%(value)s', available zones are: "
                "%(accepted)s")


class InvalidRegion(InvalidClientConfigField):
    message = _("Invalid %(field)s format '%(value)s', available regions "
                "are: %(accepted)s")


class InvalidS3URL(ValidationError):
    message = _("Invalid s3 url %(url)s, URL must be valid according to "
                "https://docs.python.org/3/library/urllib.parse.html and "
                "start with http:// or https://")


class InvalidTags(ValidationError):
    message = _("Invalid tags: %(reason)s")


class InvalidPersistentVolume(ValidationError):
    message = _("Invalid persistent volume: %(reason)s")


class CSISpecNotFound(InvalidPersistentVolume):
    message = _("spec.csi not found")


class UnsupportedError(SCWBackupException):
    message = _("Unsupported: %(reason)s")
    code = 501


class UnsupportedCSIDriver(UnsupportedError):
    message = _("Unable to handle CSI driver: %(driver)s")


class UnsupportedService(UnsupportedError):
    message = _("Service %(service)s is not supported")


class UnsupportedRegion(UnsupportedError):
    message = _("Region %(region)s is not supported for Scaleway")


class RemoteError(SCWBackupException):
    message = _("Remote API failure: %(reason)s")


class BlockStorageAPIException(RemoteError):
    message = _("Bad or unexpected response from the block storage API "
                "(%(method)s %(path)s, status %(status)s): %(reason)s")


class CredentialsNotAvailable(SCWBackupException):
    message = _("Credentials not available from environment variables "
                "%(access_key_env_var)s and %(secret_key_env_var)s")
    code = 401
