#!/usr/bin/env python3
"""
Unit tests for device path polling.

Test Strategy:
- Mock the filesystem collaborator to script when a device appears
- Patch time.sleep so the retry budget is observable without waiting
- Use tmp_path with the real LocalFilesystem for literal and glob lookups
"""

from unittest.mock import Mock, patch

from iscsiattach.waiter import DevicePathWaiter
from iscsiattach.filesystem import LocalFilesystem
from iscsiattach.exceptions import FilesystemError

TCP_PATH = "/dev/disk/by-path/ip-127.0.0.1:3260-iscsi-iqn.2014-12.com.example:test.tgt00-lun-0"
GLOB_PATH = "/dev/disk/by-path/pci-*-ip-127.0.0.1:3260-iscsi-iqn.2014-12.com.example:test.tgt00-lun-0"
RESOLVED_PATH = "/dev/disk/by-path/pci-0000:00:00.0-ip-127.0.0.1:3260-iscsi-iqn.2014-12.com.example:test.tgt00-lun-0"


@patch("iscsiattach.waiter.time.sleep")
class TestDevicePathWaiter:

    def test_tcp_uses_literal_stat(self, mock_sleep):
        fs = Mock(spec=LocalFilesystem)
        fs.exists.return_value = True
        waiter = DevicePathWaiter(fs)

        assert waiter.wait_for_path(TCP_PATH, 1, "tcp") is True
        fs.exists.assert_called_once_with(TCP_PATH)
        fs.glob.assert_not_called()
        mock_sleep.assert_not_called()

    def test_tcp_does_not_expand_globs(self, mock_sleep):
        fs = Mock(spec=LocalFilesystem)
        fs.exists.return_value = False
        fs.glob.return_value = [RESOLVED_PATH]
        waiter = DevicePathWaiter(fs)

        assert waiter.wait_for_path(GLOB_PATH, 1, "tcp") is False
        fs.glob.assert_not_called()

    def test_other_transport_uses_glob(self, mock_sleep):
        fs = Mock(spec=LocalFilesystem)
        fs.exists.return_value = True
        fs.glob.return_value = []
        waiter = DevicePathWaiter(fs)

        assert waiter.wait_for_path(TCP_PATH, 1, "fake_iface") is False
        fs.exists.assert_not_called()
        fs.glob.assert_called_once_with(TCP_PATH)

    def test_glob_returns_first_match(self, mock_sleep):
        fs = Mock(spec=LocalFilesystem)
        fs.glob.return_value = [RESOLVED_PATH, RESOLVED_PATH.replace("0000:00:00.0", "0000:00:01.0")]
        waiter = DevicePathWaiter(fs)

        assert waiter.find_path(GLOB_PATH, 1, "cxgb4i") == RESOLVED_PATH

    def test_retries_until_found(self, mock_sleep):
        fs = Mock(spec=LocalFilesystem)
        fs.exists.side_effect = [False, False, True]
        waiter = DevicePathWaiter(fs, poll_interval=2)

        assert waiter.find_path(TCP_PATH, 5, "tcp") == TCP_PATH
        assert fs.exists.call_count == 3
        assert mock_sleep.call_count == 2
        mock_sleep.assert_called_with(2)

    def test_budget_exhausted(self, mock_sleep):
        """No sleep follows the final attempt."""
        fs = Mock(spec=LocalFilesystem)
        fs.exists.return_value = False
        waiter = DevicePathWaiter(fs)

        assert waiter.find_path(TCP_PATH, 3, "tcp") is None
        assert fs.exists.call_count == 3
        assert mock_sleep.call_count == 2

    def test_zero_retries_still_checks_once(self, mock_sleep):
        fs = Mock(spec=LocalFilesystem)
        fs.exists.return_value = True
        waiter = DevicePathWaiter(fs)

        assert waiter.wait_for_path(TCP_PATH, 0, "tcp") is True
        fs.exists.assert_called_once_with(TCP_PATH)

    def test_existing_path_is_idempotent(self, mock_sleep):
        fs = Mock(spec=LocalFilesystem)
        fs.exists.return_value = True
        waiter = DevicePathWaiter(fs)

        assert waiter.wait_for_path(TCP_PATH, 10, "tcp") is True
        assert waiter.wait_for_path(TCP_PATH, 10, "tcp") is True
        assert fs.exists.call_count == 2
        mock_sleep.assert_not_called()

    def test_filesystem_error_counts_as_missing(self, mock_sleep):
        fs = Mock(spec=LocalFilesystem)
        fs.exists.side_effect = [FilesystemError("Error checking", TCP_PATH), True]
        waiter = DevicePathWaiter(fs)

        assert waiter.find_path(TCP_PATH, 2, "tcp") == TCP_PATH
        assert mock_sleep.call_count == 1

    def test_real_filesystem_literal_path(self, mock_sleep, tmp_path):
        device = tmp_path / "ip-127.0.0.1:3260-iscsi-iqn.2014-12.com.example:test.tgt00-lun-0"
        device.touch()
        waiter = DevicePathWaiter(LocalFilesystem())

        assert waiter.wait_for_path(str(device), 1, "tcp") is True
        assert waiter.wait_for_path(str(tmp_path / "missing"), 1, "tcp") is False

    def test_real_filesystem_glob_resolves_vendor_segment(self, mock_sleep, tmp_path):
        name = "ip-127.0.0.1:3260-iscsi-iqn.2014-12.com.example:test.tgt00-lun-0"
        device = tmp_path / f"pci-0000:00:00.0-{name}"
        device.touch()
        waiter = DevicePathWaiter(LocalFilesystem())

        assert waiter.find_path(str(tmp_path / f"pci-*-{name}"), 1, "cxgb4i") == str(device)
        assert waiter.find_path(str(tmp_path / f"pci-*-{name}"), 1, "tcp") is None
