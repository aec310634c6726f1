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

"""Utilities and helper functions."""

from urllib import parse as urlparse

from scwbackup import exception
from scwbackup.i18n import _


MAX_OBJECT_TAGS = 10
MAX_TAG_KEY_LENGTH = 128
MAX_TAG_VALUE_LENGTH = 248


def is_valid_s3_url_scheme(url):
    """Return True if the url parses and its scheme is http or https."""
    try:
        parsed = urlparse.urlparse(url)
    except (TypeError, ValueError, AttributeError):
        return False
    return parsed.scheme in ('http', 'https')


def check_tags(tagging):
    """Validate an S3 object tagging string such as ``a=1&b=2``.

    The string must hold at least two ``key=value`` pairs joined by ``&``.

    :raises InvalidTags: if the string breaks the S3 tagging rules
    """
    tags = tagging.split('&')
    if len(tags) == 1:
        raise exception.InvalidTags(
            reason=_('tags are not separated with an &'))
    if len(tags) > MAX_OBJECT_TAGS:
        raise exception.InvalidTags(
            reason=_('SCW S3 allows only %d tags per object') %
            MAX_OBJECT_TAGS)

    for tag in tags:
        parts = tag.split('=')
        if len(parts) != 2:
            raise exception.InvalidTags(
                reason=_("'%s' is not of the form key=value") % tag)
        key, value = parts
        if len(key) > MAX_TAG_KEY_LENGTH:
            raise exception.InvalidTags(
                reason=_('an S3 tag key can not be more than %d Unicode '
                         'characters in length') % MAX_TAG_KEY_LENGTH)
        if len(value) > MAX_TAG_VALUE_LENGTH:
            raise exception.InvalidTags(
                reason=_('an S3 tag value can not be more than %d Unicode '
                         'characters in length') % MAX_TAG_VALUE_LENGTH)
