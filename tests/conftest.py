"""
Pytest configuration and shared fixtures for iscsiattach tests.
"""

import pytest
import sys
from pathlib import Path

# Add the package to Python path for testing
test_dir = Path(__file__).parent
package_root = test_dir.parent
sys.path.insert(0, str(package_root))


@pytest.fixture
def tcp_iface_record():
    """Return 'iscsiadm -m iface -o show' output for the default tcp iface."""
    return (
        "# BEGIN RECORD 2.0-873\n"
        "iface.iscsi_ifacename = default\n"
        "iface.transport_name = tcp\n"
        "iface.initiatorname = <empty>\n"
        "iface.mtu = 0\n"
        "# END RECORD"
    )


@pytest.fixture
def offload_iface_record():
    """Return iface output for a Chelsio offload iface."""
    return (
        "# BEGIN RECORD 2.0-873\n"
        "iface.iscsi_ifacename = default\n"
        "iface.transport_name = cxgb4i\n"
        "iface.initiatorname = <empty>\n"
        "iface.mtu = 0\n"
        "# END RECORD"
    )


@pytest.fixture
def unset_transport_record():
    """Return iface output where the transport is printed as <empty>."""
    return (
        "# BEGIN RECORD 2.0-873\n"
        "iface.iscsi_ifacename = custom\n"
        "iface.transport_name = <empty>\n"
        "iface.initiatorname = <empty>\n"
        "iface.mtu = 0\n"
        "# END RECORD"
    )


@pytest.fixture
def clone_source_record():
    """Return the short show output iscsiadm prints for a fresh iface."""
    return "iface.ipaddress = <empty>\niface.transport_name = tcp\niface.initiatorname = <empty>\n"


@pytest.fixture
def plugin_dir(tmp_path):
    """Build a mount reference tree like the volume plugin leaves behind.

    <tmp>/iscsi
    ├── iface-127.0.0.1:3260:pv1
    │   └── 127.0.0.1:3260-iqn.2003-01.io.k8s:e2e.volume-1-lun-3
    └── iface-127.0.0.1:3260:pv2
        ├── 127.0.0.1:3260-iqn.2003-01.io.k8s:e2e.volume-1-lun-2
        └── 192.168.0.1:3260-iqn.2003-01.io.k8s:e2e.volume-1-lun-1
    """
    root = tmp_path / "iscsi"
    subdirs = [
        "iface-127.0.0.1:3260:pv1/127.0.0.1:3260-iqn.2003-01.io.k8s:e2e.volume-1-lun-3",
        "iface-127.0.0.1:3260:pv2/127.0.0.1:3260-iqn.2003-01.io.k8s:e2e.volume-1-lun-2",
        "iface-127.0.0.1:3260:pv2/192.168.0.1:3260-iqn.2003-01.io.k8s:e2e.volume-1-lun-1",
    ]
    for subdir in subdirs:
        (root / subdir).mkdir(parents=True)
    return root
