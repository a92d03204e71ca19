"""
iSCSI Initiator Attachment Library

This module provides a Python interface for reconciling iSCSI sessions with
the device and mount paths they produce on a Linux initiator.

Main Classes:
    ISCSIInitiator: High-level interface combining all components
    IscsiadmShowParser: Parser for iscsiadm record output
    DevicePathWaiter: Bounded polling for by-path device links
    IfaceManager: iscsiadm iface creation, cloning and rollback
    RefCounter: Mount reference counting per portal and target
    LocalFilesystem: Filesystem collaborator
    CommandExecutor: External command collaborator

Exceptions:
    ISCSIError: Base exception for iscsiattach operations

Enums:
    CloneState: Progress of an iface clone
    IscsiadmExitCode: iscsiadm exit statuses
"""

from .constants import ISCSIConstants
from .exceptions import (
    ISCSIError, MalformedPathError, MalformedDeviceError, InvalidRecordLineError,
    ExternalToolError, FilesystemError
)
from .config import ISCSIDevice, CloneState, IscsiadmExitCode
from .filesystem import LocalFilesystem
from .iscsiadm import CommandExecutor
from .parser import IscsiadmShowParser
from .paths import (
    extract_device_and_prefix, extract_iface, extract_portal_and_iqn, remove_duplicate,
    normalize_portal, make_pd_name, make_vdpd_name, make_device_by_path, parse_mount_path
)
from .waiter import DevicePathWaiter
from .iface import IfaceManager
from .refcount import RefCounter
from .initiator import ISCSIInitiator

__version__ = "1.0.0"

__all__ = [
    'ISCSIInitiator',
    'IscsiadmShowParser',
    'DevicePathWaiter',
    'IfaceManager',
    'RefCounter',
    'LocalFilesystem',
    'CommandExecutor',
    'ISCSIConstants',
    'ISCSIDevice',
    'CloneState',
    'IscsiadmExitCode',
    'ISCSIError',
    'MalformedPathError',
    'MalformedDeviceError',
    'InvalidRecordLineError',
    'ExternalToolError',
    'FilesystemError',
    'extract_device_and_prefix',
    'extract_iface',
    'extract_portal_and_iqn',
    'remove_duplicate',
    'normalize_portal',
    'make_pd_name',
    'make_vdpd_name',
    'make_device_by_path',
    'parse_mount_path',
]
