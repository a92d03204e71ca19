"""
Mount reference counting for iSCSI targets.

Every attached filesystem volume owns a directory

    <plugin_dir>/iface-<iface>/<portal>-<target>-lun-<lun>

so the number of such directories for a portal and target tells whether other
volumes still use the session. The tree is only read here, never modified, and
the count is a point-in-time snapshot: attach or detach racing with the scan
may be missed.
"""

import logging
import os
from typing import Optional

from .constants import ISCSIConstants
from .exceptions import FilesystemError, MalformedDeviceError
from .filesystem import LocalFilesystem
from .paths import extract_portal_and_iqn


class RefCounter:
    """Counts mount directories that reference a portal and target."""

    def __init__(self, filesystem: Optional[LocalFilesystem] = None):
        self.filesystem = filesystem or LocalFilesystem()
        self.logger = logging.getLogger(__name__)

    def get_vol_count(self, root_dir: str, portal: str, target: str) -> int:
        """Count mount directories for a portal and target across all ifaces.

        Any LUN matches. Block volumes live under the volumeDevices directory
        and are not counted. Entries whose names are not device descriptors are
        skipped. An iface directory removed while the tree is scanned counts as
        empty.

        Args:
            root_dir: Plugin directory holding one iface-<name> directory per iface
            portal: Target portal as host:port
            target: Target IQN or EUI

        Returns:
            Number of matching mount directories, 0 if root_dir does not exist

        Raises:
            FilesystemError: If a directory in the tree exists but cannot be read
        """
        if not self.filesystem.exists(root_dir):
            return 0

        count = 0
        for iface_dir in self.filesystem.list_directory(root_dir):
            if iface_dir == ISCSIConstants.VOLUME_DEVICES_DIR:
                continue
            iface_path = os.path.join(root_dir, iface_dir)
            if not self.filesystem.is_directory(iface_path):
                continue

            try:
                entries = self.filesystem.list_directory(iface_path)
            except FilesystemError:
                if self.filesystem.exists(iface_path):
                    raise
                self.logger.debug("iface directory %s removed during scan", iface_path)
                continue

            for entry in entries:
                if not self.filesystem.is_directory(os.path.join(iface_path, entry)):
                    continue
                try:
                    entry_portal, entry_target = extract_portal_and_iqn(entry)
                except MalformedDeviceError:
                    self.logger.debug("Skipping non-device entry %s/%s", iface_dir, entry)
                    continue
                if entry_portal == portal and entry_target == target:
                    count += 1

        self.logger.debug("Found %d reference(s) to %s %s under %s", count, portal, target, root_dir)
        return count
