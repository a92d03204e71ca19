"""
Data structures for iSCSI initiator operations.

This module defines the structured views the library derives from opaque
paths and tool output, and the enums used to classify iscsiadm results and
track iface cloning.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class IscsiadmExitCode(Enum):
    """iscsiadm exit statuses the library interprets.

    Attributes:
        SESS_EXISTS: A session is already logged in with the object (ISCSI_ERR_SESS_EXISTS)
        NO_OBJS_FOUND: No records matched the request (ISCSI_ERR_NO_OBJS_FOUND)
    """

    SESS_EXISTS = 15
    NO_OBJS_FOUND = 21


class CloneState(Enum):
    """Progress of an iface clone operation.

    A clone walks INITIAL -> SHOWN -> CREATED -> UPDATED -> DONE. Any failure
    once the new iface has been CREATED moves to ROLLING_BACK, which deletes the
    new iface before the original error is raised.
    """

    INITIAL = "initial"
    SHOWN = "shown"  # Source record read and parsed
    CREATED = "created"  # New iface exists, not yet configured
    UPDATED = "updated"  # All settings applied
    DONE = "done"
    ROLLING_BACK = "rolling_back"


@dataclass
class ISCSIDevice:
    """A mount path decomposed into its iSCSI identifiers.

    Example, for the path
    /var/lib/kubelet/plugins/kubernetes.io/iscsi/iface-default/127.0.0.1:3260-iqn.2014-12.com.example:tgt-lun-0:

        device: 127.0.0.1:3260-iqn.2014-12.com.example:tgt-lun-0
        prefix: .../iface-default/127.0.0.1:3260-iqn.2014-12.com.example:tgt
        portal: 127.0.0.1:3260
        target: iqn.2014-12.com.example:tgt
        lun:    0
        iface:  default
    """

    path: str
    device: str
    prefix: str
    portal: str
    target: str
    lun: str
    iface: Optional[str] = None

    def __post_init__(self):
        if not self.portal:
            raise ValueError("Device portal cannot be empty")
        if not self.target:
            raise ValueError("Device target cannot be empty")
