"""
iSCSI Initiator Attachment Package

A Python library for reconciling iSCSI sessions with the device nodes and
mount directories they produce: path parsing, iscsiadm record parsing, device
polling, iface cloning with rollback and mount reference counting.
"""

from .iscsiattach import (
    ISCSIInitiator,
    IscsiadmShowParser,
    DevicePathWaiter,
    IfaceManager,
    RefCounter,
    LocalFilesystem,
    CommandExecutor,
    ISCSIConstants,
    ISCSIDevice,
    CloneState,
    IscsiadmExitCode,
    ISCSIError
)

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
    'ISCSIError'
]
