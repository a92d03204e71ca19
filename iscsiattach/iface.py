"""
iface profile lifecycle management.

Multipath logins use one iscsiadm iface per connection. A new iface is made by
copying the settings of an existing one (usually 'default' or a hardware
offload iface) and overriding the initiator name. This module drives the
iscsiadm '-m iface' operations needed for that and guarantees that a clone
either completes or leaves no iface behind.

Operations on the same iface name mutate shared iscsiadm state and must be
serialized by the caller. This module does no locking of its own.
"""

import logging
from typing import Dict, Optional

from .config import CloneState, IscsiadmExitCode
from .exceptions import ExternalToolError
from .iscsiadm import CommandExecutor
from .parser import IscsiadmShowParser


class IfaceManager:
    """Creates, updates, clones and deletes iscsiadm iface profiles.

    Attributes:
        executor: Command collaborator used to run iscsiadm
        parser: Parser for 'iscsiadm -o show' output
    """

    def __init__(self, executor: Optional[CommandExecutor] = None,
                 parser: Optional[IscsiadmShowParser] = None):
        self.executor = executor or CommandExecutor()
        self.parser = parser or IscsiadmShowParser()
        self.logger = logging.getLogger(__name__)

    def show_iface(self, iface: str) -> Dict[str, str]:
        """Read and parse the settings of an iface.

        Raises:
            ExternalToolError: If iscsiadm fails
            InvalidRecordLineError: If the output cannot be parsed
        """
        output = self.executor.iscsiadm("-m", "iface", "-I", iface, "-o", "show")
        return self.parser.parse_iscsiadm_show(output)

    def get_transport_name(self, iface: str) -> str:
        """Return the transport of an iface, tcp if unset"""
        return self.parser.extract_transport_name(self.show_iface(iface))

    def create_iface(self, iface: str) -> None:
        """Create an empty iface profile.

        An existing session on the iface (exit status 15) means the profile is
        already in place and is not treated as a failure.
        """
        try:
            self.executor.iscsiadm("-m", "iface", "-I", iface, "-o", "new")
        except ExternalToolError as e:
            if e.returncode != IscsiadmExitCode.SESS_EXISTS.value:
                raise
            self.logger.info("There is a session already logged in with iface %s", iface)
            return
        self.logger.info("Created iface %s", iface)

    def update_iface(self, iface: str, key: str, value: str) -> None:
        """Set a single iface parameter"""
        self.executor.iscsiadm("-m", "iface", "-I", iface, "-o", "update", "-n", key, "-v", value)

    def delete_iface(self, iface: str) -> None:
        """Delete an iface profile, succeeding if it is already gone (exit status 21)"""
        try:
            self.executor.iscsiadm("-m", "iface", "-I", iface, "-o", "delete")
        except ExternalToolError as e:
            if e.returncode != IscsiadmExitCode.NO_OBJS_FOUND.value:
                raise
            self.logger.debug("iface %s does not exist, nothing to delete", iface)
            return
        self.logger.info("Deleted iface %s", iface)

    def _set_state(self, iface: str, current: CloneState, state: CloneState) -> CloneState:
        self.logger.debug("iface clone %s: %s -> %s", iface, current.value, state.value)
        return state

    def _clone_settings(self, record: Dict[str, str],
                        overrides: Optional[Dict[str, str]]) -> Dict[str, str]:
        """Settings to apply to the new iface, in record then override order"""
        settings = dict(record)
        for key, value in (overrides or {}).items():
            if value:
                settings[key] = value
        return settings

    def _rollback(self, iface: str, state: CloneState, error: ExternalToolError) -> None:
        """Delete a partially configured iface, keeping the original error as the cause"""
        self._set_state(iface, state, CloneState.ROLLING_BACK)
        try:
            self.delete_iface(iface)
        except ExternalToolError as e:
            self.logger.warning("Failed to delete iface %s after clone failure: %s", iface, e)
            error.rollback_error = e

    def clone_iface(self, source_iface: str, new_iface: str,
                    overrides: Optional[Dict[str, str]] = None) -> str:
        """Create new_iface with the settings of source_iface.

        The steps run in a fixed order: show the source, create the new iface,
        then update one setting at a time. If any update fails the new iface is
        deleted before the update error is raised, so on failure no new iface
        exists. A failed delete is logged and attached to the raised error as
        rollback_error.

        The clone state lives only for the duration of the call. Every
        transition is logged at debug level.

        Args:
            source_iface: Existing iface to copy settings from
            new_iface: Name of the iface to create
            overrides: Settings applied after the copied ones, e.g.
                {'iface.initiatorname': 'iqn.1994-05.com.redhat:node1'}.
                Empty values are ignored.

        Returns:
            The name of the new iface

        Raises:
            ValueError: If source and new iface names are the same
            ExternalToolError: If any iscsiadm step fails
            InvalidRecordLineError: If the source iface record cannot be parsed
        """
        if source_iface == new_iface:
            raise ValueError(f"Cannot clone iface onto itself: {source_iface}")

        state = CloneState.INITIAL
        record = self.show_iface(source_iface)
        state = self._set_state(new_iface, state, CloneState.SHOWN)

        settings = self._clone_settings(record, overrides)

        self.create_iface(new_iface)
        state = self._set_state(new_iface, state, CloneState.CREATED)

        try:
            for key, value in settings.items():
                self.update_iface(new_iface, key, value)
        except ExternalToolError as e:
            self.logger.error("Failed to update iface %s, %s will be used: %s", new_iface, source_iface, e)
            self._rollback(new_iface, state, e)
            raise
        state = self._set_state(new_iface, state, CloneState.UPDATED)

        self._set_state(new_iface, state, CloneState.DONE)
        self.logger.info("Cloned iface %s into %s with %d setting(s)", source_iface, new_iface, len(settings))
        return new_iface
