"""
iscsiadm record parser.

This module provides the IscsiadmShowParser class for decoding the output of
'iscsiadm -m iface -o show' (and the other record-printing modes) into a flat
mapping of dotted parameter names to values.

The format is line oriented:

    # BEGIN RECORD 2.0-873
    iface.iscsi_ifacename = default
    iface.transport_name = tcp
    iface.initiatorname = <empty>
    # END RECORD

Features:
- Record markers and other '#' lines are skipped
- Strict 'key = value' validation with line numbers in errors
- '<empty>' values are dropped, so an unset key and a missing key look the same
- iface.iscsi_ifacename is dropped; it names the record and cannot be updated
"""

import logging
import re
from typing import Dict

from .constants import ISCSIConstants
from .exceptions import InvalidRecordLineError

_RECORD_LINE_RE = re.compile(r'^(?P<key>[^\s=]+)\s+=\s+(?P<value>[^=\s][^=]*)$')


class IscsiadmShowParser:
    """Parser for iscsiadm record output.

    Each interior line must be exactly 'key = value': a key without whitespace,
    a single '=' surrounded by whitespace and a non-empty value. Lines such as
    'iface.iscsi_ifacename=error', 'iface.iscsi_ifacename + error' or
    'iface.mtu = 0 = 1' are rejected rather than guessed at.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def parse_iscsiadm_show(self, output: str) -> Dict[str, str]:
        """Parse iscsiadm record output into a key -> value mapping.

        Args:
            output: Raw text printed by iscsiadm

        Returns:
            Dict of parameter names to values, without '<empty>' entries and
            without the immutable iface name (iface.iscsi_ifacename)

        Raises:
            InvalidRecordLineError: On the first line that is not 'key = value'
        """
        params = {}
        for line_number, raw_line in enumerate(output.splitlines(), 1):
            line = raw_line.strip()
            if not line or line.startswith('#'):
                continue

            match = _RECORD_LINE_RE.match(line)
            if not match:
                self.logger.error("Invalid iscsiadm record line %s: '%s'", line_number, line)
                raise InvalidRecordLineError(line_number, line)

            key = match.group('key')
            value = match.group('value').strip()
            if value == ISCSIConstants.EMPTY_VALUE or key in ISCSIConstants.IMMUTABLE_IFACE_KEYS:
                continue
            params[key] = value

        self.logger.debug("Parsed %d iscsiadm record entries", len(params))
        return params

    def extract_transport_name(self, record: Dict[str, str]) -> str:
        """Return the iface transport, defaulting to tcp when unset"""
        return record.get(ISCSIConstants.TRANSPORT_NAME_KEY, ISCSIConstants.DEFAULT_TRANSPORT)
