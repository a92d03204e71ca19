"""
High-level iSCSI initiator interface.

This module provides the ISCSIInitiator class, which wires the path parser,
record parser, device waiter, iface manager and reference counter together in
the way a volume attach/detach flow uses them.
"""

import logging
from typing import List, Optional

from .config import ISCSIDevice
from .constants import ISCSIConstants
from .filesystem import LocalFilesystem
from .iface import IfaceManager
from .iscsiadm import CommandExecutor
from .parser import IscsiadmShowParser
from .paths import make_device_by_path, normalize_portal, parse_mount_path, remove_duplicate
from .refcount import RefCounter
from .waiter import DevicePathWaiter


class ISCSIInitiator:
    """Main interface for iSCSI device path reconciliation.

    Key capabilities:
    - iface cloning for per-volume multipath logins
    - Waiting for by-path device links on every distinct portal
    - Decomposing plugin mount paths into portal, target, LUN and iface
    - Counting remaining mount references before logout

    Both collaborators (command execution and filesystem access) can be
    injected, which is how the test suite runs without iscsiadm or devices.
    """

    def __init__(self,
                 plugin_dir: str = ISCSIConstants.PLUGIN_DIR,
                 executor: Optional[CommandExecutor] = None,
                 filesystem: Optional[LocalFilesystem] = None,
                 timeout: int = ISCSIConstants.COMMAND_TIMEOUT,
                 max_retries: int = ISCSIConstants.DEVICE_MAX_RETRIES,
                 poll_interval: float = ISCSIConstants.DEVICE_POLL_INTERVAL,
                 log_level: str = "WARNING"):
        self.plugin_dir = plugin_dir
        self.max_retries = max_retries
        self.executor = executor or CommandExecutor(timeout)
        self.filesystem = filesystem or LocalFilesystem()
        self.parser = IscsiadmShowParser()
        self.iface_manager = IfaceManager(self.executor, self.parser)
        self.waiter = DevicePathWaiter(self.filesystem, poll_interval)
        self.ref_counter = RefCounter(self.filesystem)

        # Create library-specific logger that doesn't interfere with calling app
        self.logger = logging.getLogger('iscsiattach')
        self.logger.setLevel(getattr(logging, log_level.upper(), logging.WARNING))

        # Only add NullHandler if no handlers exist (prevents duplicate handlers)
        if not self.logger.handlers:
            self.logger.addHandler(logging.NullHandler())

    def get_iface_transport_name(self, iface: str) -> str:
        """Return the transport of an iface, tcp if unset"""
        return self.iface_manager.get_transport_name(iface)

    def prepare_iface(self, source_iface: str, portal: str, volume_name: str,
                      initiator_name: Optional[str] = None) -> str:
        """Clone source_iface into a per-volume iface named <portal>:<volume_name>.

        Args:
            source_iface: iface to copy settings from
            portal: First portal of the volume
            volume_name: Volume name used to make the iface unique
            initiator_name: Optional initiator IQN for the new iface

        Returns:
            Name of the created iface

        Raises:
            ExternalToolError: If any iscsiadm step fails; no iface is left behind
        """
        new_iface = f"{normalize_portal(portal)}:{volume_name}"
        overrides = {}
        if initiator_name:
            overrides[ISCSIConstants.INITIATOR_NAME_KEY] = initiator_name
        self.logger.info("Preparing iface %s from %s", new_iface, source_iface)
        return self.iface_manager.clone_iface(source_iface, new_iface, overrides)

    def wait_for_devices(self, portals: List[str], target: str, lun,
                         transport_name: str = ISCSIConstants.DEFAULT_TRANSPORT) -> List[str]:
        """Wait for the by-path device of a LUN on each distinct portal.

        Args:
            portals: Target portals, duplicates and missing ports allowed
            target: Target IQN or EUI
            lun: LUN number
            transport_name: iface transport used for the logins

        Returns:
            Concrete device paths that appeared, in portal order
        """
        devices = []
        for portal in remove_duplicate([normalize_portal(p) for p in portals]):
            pattern = make_device_by_path(portal, target, lun, transport_name)
            device = self.waiter.find_path(pattern, self.max_retries, transport_name)
            if device is None:
                self.logger.warning("Device for %s lun %s not found on portal %s (transport %s)",
                                    target, lun, portal, transport_name)
                continue
            devices.append(device)
        return devices

    def parse_mount_path(self, mount_path: str) -> ISCSIDevice:
        """Decompose a plugin mount path into its iSCSI identifiers"""
        return parse_mount_path(mount_path)

    def get_target_ref_count(self, mount_path: str) -> int:
        """Count mount directories that use the same portal and target as mount_path"""
        device = parse_mount_path(mount_path)
        return self.ref_counter.get_vol_count(self.plugin_dir, device.portal, device.target)

    def is_safe_to_logout(self, mount_path: str) -> bool:
        """Return True if no mount directory references the target any more.

        Call after the volume's own mount directory has been removed.
        """
        count = self.get_target_ref_count(mount_path)
        if count:
            self.logger.info("Target of %s still has %d reference(s), keeping session", mount_path, count)
        return count == 0
