"""
Constants for iSCSI initiator path handling and iface management.

This module contains all the constants used throughout the iscsiattach library,
including timeouts, retry budgets, on-disk layout names and iscsiadm record keys.
"""


class ISCSIConstants:
    """Constants for iSCSI initiator operation."""

    # Transport and portal defaults
    DEFAULT_TRANSPORT = "tcp"  # open-iscsi software transport
    DEFAULT_PORT = "3260"  # IANA iSCSI port

    # External tool
    ISCSIADM = "iscsiadm"
    COMMAND_TIMEOUT = 30  # Timeout for a single iscsiadm invocation (seconds)

    # Device polling
    DEVICE_POLL_INTERVAL = 1  # Fixed backoff between attempts (seconds)
    DEVICE_MAX_RETRIES = 10  # Attempts before a device is reported missing

    # Plugin mount layout
    PLUGIN_DIR = "/var/lib/kubelet/plugins/kubernetes.io/iscsi"
    IFACE_DIR_PREFIX = "iface-"
    VOLUME_DEVICES_DIR = "volumeDevices"  # Block volume tree, not counted as an iface
    LUN_MARKER = "-lun-"

    # Udev persistent device names
    DEVICE_BY_PATH_ROOT = "/dev/disk/by-path"

    # iscsiadm record format
    EMPTY_VALUE = "<empty>"  # Sentinel printed for unset values
    TRANSPORT_NAME_KEY = "iface.transport_name"
    INITIATOR_NAME_KEY = "iface.initiatorname"
    IFACE_NAME_KEY = "iface.iscsi_ifacename"

    # Keys that cannot be changed once an iface exists
    IMMUTABLE_IFACE_KEYS = {IFACE_NAME_KEY}
