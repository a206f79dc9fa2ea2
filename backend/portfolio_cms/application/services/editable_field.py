"""Editable Field Controller — per-field view/edit state machine.

A field is either remote-backed (constructed with ``on_commit``; the owning
page persists the value upstream) or local-backed (no callback; commits are
written to the Local Persistence Store under ``storage_key``).
"""

import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from portfolio_cms.application.interfaces import LocalStore

logger = logging.getLogger(__name__)

CommitCallback = Callable[[str], Awaitable[object]]


class FieldState(str, Enum):
    VIEWING = "viewing"
    EDITING = "editing"


class EditableField:
    """State machine for one editable text field.

    The edit buffer is created on ``begin_edit`` and only changes through
    ``input`` while editing. External value changes (``sync``) refresh the
    buffer only while viewing, so a concurrent reload never clobbers an
    in-progress edit.
    """

    def __init__(
        self,
        value: str,
        *,
        on_commit: CommitCallback | None = None,
        storage_key: str | None = None,
        local_store: LocalStore | None = None,
        can_edit: Callable[[], bool] | None = None,
        multiline: bool = False,
    ) -> None:
        if on_commit is None and storage_key is not None and local_store is None:
            raise ValueError("A local-backed field needs a local_store")
        self._value = value
        self._on_commit = on_commit
        self._storage_key = storage_key
        self._local = local_store
        self._can_edit = can_edit or (lambda: False)
        self.multiline = multiline
        self.state = FieldState.VIEWING
        self._buffer = self._resolved_value()

    # ── Queries ─────────────────────────────────────────────────────

    @property
    def is_remote_backed(self) -> bool:
        return self._on_commit is not None

    @property
    def editable(self) -> bool:
        """Whether edit affordances should be shown right now."""
        return self._can_edit()

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def display_value(self) -> str:
        """What the page shows: the buffer, or the external value when empty."""
        return self._buffer or self._value

    def _saved_local(self) -> str | None:
        if self._storage_key is None or self._local is None:
            return None
        return self._local.get(self._storage_key) or None

    def _resolved_value(self) -> str:
        """Last committed value: remote/prop value, else local saved, else prop."""
        if self.is_remote_backed:
            return self._value
        return self._saved_local() or self._value

    # ── Transitions ─────────────────────────────────────────────────

    def begin_edit(self) -> bool:
        """Viewing → Editing. Returns False when editing is not unlocked."""
        if self.state is FieldState.EDITING:
            return True
        if not self._can_edit():
            return False
        self._buffer = self._resolved_value()
        self.state = FieldState.EDITING
        return True

    def input(self, text: str) -> None:
        """Replace the buffer with the current editor contents."""
        if self.state is not FieldState.EDITING:
            logger.debug("Ignoring input outside of editing state")
            return
        self._buffer = text

    async def commit(self) -> bool:
        """Editing → Viewing, persisting the buffer. Returns True if a write was made.

        The buffer is shown immediately; a failing commit callback propagates
        to the caller, who is responsible for alerting the user.
        """
        if self.state is not FieldState.EDITING:
            return False
        self.state = FieldState.VIEWING
        new_value = self._buffer

        if self._on_commit is not None:
            if new_value == self._value:
                return False
            self._value = new_value
            await self._on_commit(new_value)
            return True

        if self._storage_key is not None and self._local is not None:
            self._local.set(self._storage_key, new_value)
            return True
        return False

    def cancel(self) -> None:
        """Editing → Viewing, discarding the buffer."""
        self._buffer = self._resolved_value()
        self.state = FieldState.VIEWING

    async def handle_key(self, key: str) -> bool:
        """Enter commits single-line fields; Escape cancels. Returns True if handled."""
        if self.state is not FieldState.EDITING:
            return False
        if key == "Enter" and not self.multiline:
            await self.commit()
            return True
        if key == "Escape":
            self.cancel()
            return True
        return False

    def sync(self, value: str) -> None:
        """Accept a freshly loaded external value."""
        self._value = value
        if self.state is FieldState.VIEWING:
            self._buffer = self._resolved_value()
