"""
Device path polling.

After a login the kernel creates the SCSI disk and udev adds its
/dev/disk/by-path link asynchronously. DevicePathWaiter polls for that link
with a fixed backoff and a bounded number of attempts. Running out of attempts
is an expected outcome and is reported as None/False, not as an exception.
"""

import logging
import time
from typing import Optional

from .constants import ISCSIConstants
from .exceptions import FilesystemError
from .filesystem import LocalFilesystem


class DevicePathWaiter:
    """Polls the filesystem until a device path exists.

    For the default tcp transport the path is checked literally. Any other
    transport gets a vendor 'pci-*' segment from udev, so the path is treated as
    a glob pattern and the first match is the device.

    Attributes:
        filesystem: Filesystem collaborator used for probing
        poll_interval: Seconds to sleep between attempts
    """

    def __init__(self, filesystem: Optional[LocalFilesystem] = None,
                 poll_interval: float = ISCSIConstants.DEVICE_POLL_INTERVAL):
        self.filesystem = filesystem or LocalFilesystem()
        self.poll_interval = poll_interval
        self.logger = logging.getLogger(__name__)

    def _probe(self, path_pattern: str, transport_name: str) -> Optional[str]:
        """Single existence check, returning the concrete path if found"""
        try:
            if transport_name == ISCSIConstants.DEFAULT_TRANSPORT:
                if self.filesystem.exists(path_pattern):
                    return path_pattern
                return None

            matches = self.filesystem.glob(path_pattern)
            if matches:
                return matches[0]
        except FilesystemError as e:
            self.logger.debug("Probe of %s failed: %s", path_pattern, e)
        return None

    def find_path(self, path_pattern: str,
                  max_retries: int = ISCSIConstants.DEVICE_MAX_RETRIES,
                  transport_name: str = ISCSIConstants.DEFAULT_TRANSPORT) -> Optional[str]:
        """Wait for a device path and return the path that appeared.

        Args:
            path_pattern: Literal path (tcp) or glob pattern (other transports)
            max_retries: Number of attempts, at least one is always made
            transport_name: iface transport of the session

        Returns:
            The existing path (first glob match for non-tcp transports), or None
            if nothing appeared within the retry budget
        """
        attempts = max(max_retries, 1)
        for attempt in range(1, attempts + 1):
            found = self._probe(path_pattern, transport_name)
            if found is not None:
                self.logger.info("Device path %s found after %d attempt(s)", found, attempt)
                return found

            self.logger.debug("Device path %s not present (attempt %d/%d)",
                              path_pattern, attempt, attempts)
            if attempt < attempts:
                time.sleep(self.poll_interval)

        self.logger.warning("Device path %s did not appear after %d attempt(s)", path_pattern, attempts)
        return None

    def wait_for_path(self, path_pattern: str,
                      max_retries: int = ISCSIConstants.DEVICE_MAX_RETRIES,
                      transport_name: str = ISCSIConstants.DEFAULT_TRANSPORT) -> bool:
        """Return True once the device path exists, False when the budget runs out"""
        return self.find_path(path_pattern, max_retries, transport_name) is not None
