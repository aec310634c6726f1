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

"""
  CLI interface for scwbackup management.

  Checks the Scaleway client configuration and drives the snapshot
  operations by hand:

    scwbackup-manage config show --region fr-par
    scwbackup-manage snapshot create --region fr-par <volume_id> <name>
    scwbackup-manage snapshot delete --region fr-par <snapshot_id>
    scwbackup-manage volume info --region fr-par <volume_id>
    scwbackup-manage volume restore --region fr-par <snapshot_id> <zone>
"""

import logging as python_logging
import sys

from oslo_config import cfg
from oslo_log import log as logging
from oslo_serialization import jsonutils
import prettytable

from scwbackup.common import config  # noqa Need to register global opts
from scwbackup import exception
from scwbackup.i18n import _
from scwbackup.scw import client
from scwbackup import volume_snapshotter


CONF = cfg.CONF


# Decorators for actions
def args(*args, **kwargs):
    def _decorator(func):
        func.__dict__.setdefault('args', []).insert(0, (args, kwargs))
        return func
    return _decorator


_region_arg = args('--region', required=True, help='Scaleway region')
_config_path_arg = args('--config-path', dest='config_path', default=None,
                        help='Scaleway config file, defaults to '
                             '$SCW_CONFIG_PATH or ~/.config/scw/config.yaml')
_profile_arg = args('--profile', default=None,
                    help='Profile of the config file to use')


def _snapshotter(region, config_path, profile):
    snapshotter = volume_snapshotter.VolumeSnapshotter()
    plugin_config = {volume_snapshotter.REGION_KEY: region}
    if config_path:
        plugin_config[volume_snapshotter.CONFIG_PATH_KEY] = config_path
    if profile:
        plugin_config[volume_snapshotter.CREDENTIAL_PROFILE_KEY] = profile
    snapshotter.init(plugin_config)
    return snapshotter


class ConfigCommands(object):
    """Class for exposing the resolved client configuration."""

    @_region_arg
    @_config_path_arg
    @_profile_arg
    def show(self, region, config_path=None, profile=None):
        """Show the resolved Scaleway client configuration."""
        client_config = (client.ClientBuilder()
                         .with_user_agent(CONF.scw_user_agent)
                         .with_env_profile()
                         .with_region(region)
                         .build(config_path, profile))
        table = prettytable.PrettyTable([_('Setting'), _('Value')])
        for name, value in client_config._asdict().items():
            if name == 'secret_key':
                value = '***'
            table.add_row([name, value])
        print(table)


class SnapshotCommands(object):
    """Methods for managing Scaleway Block Storage snapshots."""

    @_region_arg
    @_config_path_arg
    @_profile_arg
    @args('volume_id', help='Volume to snapshot')
    @args('name', help='Snapshot name suffix')
    @args('--tag', dest='tags', action='append', default=[],
          help='Extra tag for the snapshot, may be repeated')
    def create(self, region, volume_id, name, config_path=None, profile=None,
               tags=None):
        """Snapshot a volume, copying its tags."""
        snapshotter = _snapshotter(region, config_path, profile)
        print(snapshotter.create_snapshot(volume_id, name, tags or []))

    @_region_arg
    @_config_path_arg
    @_profile_arg
    @args('snapshot_id', help='Snapshot to delete')
    def delete(self, region, snapshot_id, config_path=None, profile=None):
        """Delete a snapshot; deleting a missing snapshot succeeds."""
        snapshotter = _snapshotter(region, config_path, profile)
        snapshotter.delete_snapshot(snapshot_id)


class VolumeCommands(object):
    """Methods for inspecting and restoring volumes."""

    @_region_arg
    @_config_path_arg
    @_profile_arg
    @args('volume_id', help='Volume to describe')
    @args('--zone', default=None, help='Zone of the volume')
    def info(self, region, volume_id, config_path=None, profile=None,
             zone=None):
        """Print the volume type and IOPS as JSON."""
        snapshotter = _snapshotter(region, config_path, profile)
        volume_type, iops = snapshotter.get_volume_info(volume_id, zone)
        print(jsonutils.dumps({'type': volume_type, 'iops': iops}))

    @_region_arg
    @_config_path_arg
    @_profile_arg
    @args('snapshot_id', help='Snapshot to restore')
    @args('zone', help='Zone of the snapshot')
    @args('--iops', type=int, default=None, help='IOPS of the new volume')
    def restore(self, region, snapshot_id, zone, config_path=None,
                profile=None, iops=None):
        """Create a volume from a snapshot."""
        snapshotter = _snapshotter(region, config_path, profile)
        print(snapshotter.create_volume_from_snapshot(snapshot_id, zone,
                                                      iops))


CATEGORIES = {
    'config': ConfigCommands,
    'snapshot': SnapshotCommands,
    'volume': VolumeCommands,
}


def methods_of(obj):
    """Return non-private methods from an object.

    Get all callable methods of an object that don't start with underscore
    :return: a list of tuples of the form (method_name, method)
    """
    result = []
    for i in dir(obj):
        if callable(getattr(obj, i)) and not i.startswith('_'):
            result.append((i, getattr(obj, i)))
    return result


def add_command_parsers(subparsers):
    for category in sorted(CATEGORIES):
        command_object = CATEGORIES[category]()

        parser = subparsers.add_parser(category)
        parser.set_defaults(command_object=command_object)

        category_subparsers = parser.add_subparsers(dest='action')
        category_subparsers.required = True

        for (action, action_fn) in methods_of(command_object):
            parser = category_subparsers.add_parser(action)

            for args, kwargs in getattr(action_fn, 'args', []):
                parser.add_argument(*args, **kwargs)

            parser.set_defaults(action_fn=action_fn)


category_opt = cfg.SubCommandOpt('category',
                                 title='Command categories',
                                 handler=add_command_parsers)


def get_arg_string(args):
    if args[0] == '-':
        # optional arg, strip the prefix chars
        if args[1] == '-':
            args = args[2:]
        else:
            args = args[1:]

    # We convert dashes to underscores so we can have cleaner optional arg
    # names
    if args:
        args = args.replace('-', '_')

    return args


def fetch_func_args(func):
    fn_kwargs = {}
    for args, kwargs in getattr(func, 'args', []):
        # Argparser `dest` configuration option takes precedence for the name
        arg = kwargs.get('dest') or get_arg_string(args[0])
        fn_kwargs[arg] = getattr(CONF.category, arg)

    return fn_kwargs


def main():
    """Parse options and call the appropriate class/method."""
    CONF.register_cli_opt(category_opt)
    script_name = sys.argv[0]
    if len(sys.argv) < 2:
        print(script_name + " category action [<args>]")
        print(_("Available categories:"))
        for category in CATEGORIES:
            print(_("\t%s") % category)
        sys.exit(2)

    try:
        CONF(sys.argv[1:], project='scwbackup')
        logging.setup(CONF, "scwbackup")
        python_logging.captureWarnings(True)
    except cfg.ConfigFilesNotFoundError as e:
        cfg_files = e.config_files
        print(_("Failed to read configuration file(s): %s") % cfg_files)
        sys.exit(2)

    fn = CONF.category.action_fn
    fn_kwargs = fetch_func_args(fn)
    try:
        fn(**fn_kwargs)
    except exception.ClientConfigFieldRequired as e:
        print(e.msg)
        print(e.details)
        sys.exit(1)
    except exception.SCWBackupException as e:
        print(e.msg)
        sys.exit(1)
