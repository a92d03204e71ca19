"""
Identifier parsing for iSCSI mount and device paths.

The volume plugin lays out one directory per attached LUN:

    <plugin_dir>/iface-<iface>/<portal>-<target>-lun-<lun>

Target names may be IQNs (iqn.2014-12.com.example:test.tgt00), which contain
'-', ':' and '.', or EUIs (eui.02004567A425678D). Splitting therefore anchors on
the last '-lun-' marker and on the leading host:port portal rather than on
delimiter counts.
"""

import logging
import os
import re
from typing import List, Tuple

from .config import ISCSIDevice
from .constants import ISCSIConstants
from .exceptions import MalformedDeviceError, MalformedPathError

logger = logging.getLogger(__name__)

# Shortest host:port prefix followed by '-'. The host may be a bracketed IPv6 address.
_PORTAL_RE = re.compile(r'^(?P<portal>.+?:\d+)-(?P<target>.+)$')
_IFACE_RE = re.compile(r'.+/' + re.escape(ISCSIConstants.IFACE_DIR_PREFIX) + r'([^/]+)/.+')


def extract_device_and_prefix(path: str) -> Tuple[str, str]:
    """Split a mount path into its device descriptor and prefix.

    The device is the last path segment. The prefix is the path up to the last
    '-lun-' marker of that segment, so that
    prefix + device[device.rfind('-lun-'):] == path.

    Args:
        path: Mount path ending in <portal>-<target>-lun-<n>

    Returns:
        Tuple of (device, prefix)

    Raises:
        MalformedPathError: If the path has no '/' or its last segment has no '-lun-' marker
    """
    ind = path.rfind('/')
    if ind < 0:
        raise MalformedPathError(f"Malformed mount path, no directory separator: {path}")
    device = path[ind + 1:]

    lun_ind = device.rfind(ISCSIConstants.LUN_MARKER)
    if lun_ind < 0:
        raise MalformedPathError(f"Malformed mount path, no lun marker: {path}")
    prefix = path[:ind + 1 + lun_ind]
    return device, prefix


def extract_iface(path: str) -> Tuple[str, bool]:
    """Return the iface name from an 'iface-<name>/' path segment.

    Returns:
        Tuple of (iface name, True) when the segment is present, ("", False) otherwise
    """
    match = _IFACE_RE.match(path)
    if match:
        return match.group(1), True
    return "", False


def _split_device(device: str) -> Tuple[str, str, str]:
    ind = device.rfind(ISCSIConstants.LUN_MARKER)
    if ind < 0:
        raise MalformedDeviceError(f"No lun marker in device: {device}")
    connection = device[:ind]
    lun = device[ind + len(ISCSIConstants.LUN_MARKER):]
    if not lun.isdigit():
        raise MalformedDeviceError(f"Invalid lun in device: {device}")

    match = _PORTAL_RE.match(connection)
    if not match:
        raise MalformedDeviceError(f"No portal in device: {device}")
    return match.group('portal'), match.group('target'), lun


def extract_portal_and_iqn(device: str) -> Tuple[str, str]:
    """Split a device descriptor into portal and target name.

    Example:
        "127.0.0.1:3260-iqn.2014-12.com.example:test.tgt00-lun-0"
        -> ("127.0.0.1:3260", "iqn.2014-12.com.example:test.tgt00")

    Raises:
        MalformedDeviceError: If there is no '-lun-<digits>' suffix or no host:port portal
    """
    portal, target, _ = _split_device(device)
    return portal, target


def remove_duplicate(portals: List[str]) -> List[str]:
    """Deduplicate portals keeping first-seen order"""
    seen = set()
    result = []
    for portal in portals:
        if portal not in seen:
            seen.add(portal)
            result.append(portal)
    return result


def normalize_portal(portal: str) -> str:
    """Append the default iSCSI port to a portal that has none.

    "10.0.0.1" -> "10.0.0.1:3260", "[fe80::1]" -> "[fe80::1]:3260".
    """
    portal = portal.strip()
    if portal.endswith(']') or ':' not in portal:
        return f"{portal}:{ISCSIConstants.DEFAULT_PORT}"
    return portal


def make_pd_name(plugin_dir: str, portal: str, target: str, lun, iface: str) -> str:
    """Global mount directory for a filesystem volume"""
    return os.path.join(plugin_dir, f"{ISCSIConstants.IFACE_DIR_PREFIX}{iface}",
                        f"{portal}-{target}{ISCSIConstants.LUN_MARKER}{lun}")


def make_vdpd_name(plugin_dir: str, portal: str, target: str, lun, iface: str) -> str:
    """Global map directory for a block volume"""
    return make_pd_name(os.path.join(plugin_dir, ISCSIConstants.VOLUME_DEVICES_DIR),
                        portal, target, lun, iface)


def make_device_by_path(portal: str, target: str, lun, transport_name: str) -> str:
    """Build the udev by-path name of a LUN.

    Hardware transports (e.g. cxgb4i, be2iscsi) get a 'pci-<addr>-' prefix from
    udev that is not known in advance, so for any transport other than tcp a glob
    pattern is returned instead of a literal path.
    """
    name = f"ip-{portal}-iscsi-{target}{ISCSIConstants.LUN_MARKER}{lun}"
    if transport_name != ISCSIConstants.DEFAULT_TRANSPORT:
        name = f"pci-*-{name}"
    return os.path.join(ISCSIConstants.DEVICE_BY_PATH_ROOT, name)


def parse_mount_path(path: str) -> ISCSIDevice:
    """Decompose a mount path into an ISCSIDevice.

    Raises:
        MalformedPathError: If the path lacks a separator or lun marker
        MalformedDeviceError: If the last segment has no portal
    """
    device, prefix = extract_device_and_prefix(path)
    portal, target, lun = _split_device(device)
    iface, found = extract_iface(path)
    logger.debug("Parsed mount path %s: portal=%s target=%s lun=%s iface=%s",
                 path, portal, target, lun, iface if found else None)
    return ISCSIDevice(
        path=path,
        device=device,
        prefix=prefix,
        portal=portal,
        target=target,
        lun=lun,
        iface=iface if found else None,
    )
