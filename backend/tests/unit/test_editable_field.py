"""Unit tests for the EditableField state machine."""

import pytest

from portfolio_cms.application.services import EditableField, FieldState


class RecordingCommit:
    def __init__(self, fail: bool = False):
        self.values: list[str] = []
        self.fail = fail

    async def __call__(self, value: str) -> None:
        self.values.append(value)
        if self.fail:
            raise RuntimeError("save failed")


def _editable() -> bool:
    return True


def test_begin_edit_refused_while_locked():
    field = EditableField("Jane", on_commit=RecordingCommit())
    assert field.begin_edit() is False
    assert field.state is FieldState.VIEWING
    assert field.editable is False


@pytest.mark.asyncio
async def test_remote_commit_calls_back_once_with_new_value():
    commit = RecordingCommit()
    field = EditableField("Jane", on_commit=commit, can_edit=_editable)

    field.begin_edit()
    field.input("Jane Doe")
    wrote = await field.commit()

    assert wrote is True
    assert commit.values == ["Jane Doe"]
    assert field.display_value == "Jane Doe"
    assert field.state is FieldState.VIEWING


@pytest.mark.asyncio
async def test_unchanged_remote_commit_makes_no_write():
    commit = RecordingCommit()
    field = EditableField("Jane", on_commit=commit, can_edit=_editable)
    field.begin_edit()
    assert await field.commit() is False
    assert commit.values == []


@pytest.mark.asyncio
async def test_failing_commit_propagates():
    field = EditableField("Jane", on_commit=RecordingCommit(fail=True), can_edit=_editable)
    field.begin_edit()
    field.input("Other")
    with pytest.raises(RuntimeError):
        await field.commit()


@pytest.mark.asyncio
async def test_local_commit_writes_storage_key(local_store):
    field = EditableField(
        "Default subtitle", storage_key="blog-subtitle", local_store=local_store, can_edit=_editable
    )
    field.begin_edit()
    field.input("My research notes")
    await field.commit()
    assert local_store.get("blog-subtitle") == "My research notes"


def test_local_saved_value_wins_over_prop(local_store):
    local_store.set("blog-subtitle", "Saved")
    field = EditableField("Default", storage_key="blog-subtitle", local_store=local_store)
    assert field.display_value == "Saved"


def test_local_field_requires_store():
    with pytest.raises(ValueError):
        EditableField("x", storage_key="k")


def test_sync_does_not_clobber_in_progress_edit():
    field = EditableField("Jane", on_commit=RecordingCommit(), can_edit=_editable)
    field.begin_edit()
    field.input("Half typed")
    field.sync("Reloaded from server")
    assert field.buffer == "Half typed"


def test_sync_refreshes_buffer_while_viewing():
    field = EditableField("Jane", on_commit=RecordingCommit())
    field.sync("Reloaded")
    assert field.display_value == "Reloaded"


def test_input_ignored_outside_editing():
    field = EditableField("Jane", on_commit=RecordingCommit(), can_edit=_editable)
    field.input("Sneaky")
    assert field.buffer == "Jane"


def test_cancel_discards_buffer():
    field = EditableField("Jane", on_commit=RecordingCommit(), can_edit=_editable)
    field.begin_edit()
    field.input("Discard me")
    field.cancel()
    assert field.display_value == "Jane"
    assert field.state is FieldState.VIEWING


@pytest.mark.asyncio
async def test_enter_commits_single_line_field():
    commit = RecordingCommit()
    field = EditableField("Jane", on_commit=commit, can_edit=_editable)
    field.begin_edit()
    field.input("Janet")
    assert await field.handle_key("Enter") is True
    assert commit.values == ["Janet"]


@pytest.mark.asyncio
async def test_enter_is_not_handled_in_multiline_field():
    commit = RecordingCommit()
    field = EditableField("Bio", on_commit=commit, can_edit=_editable, multiline=True)
    field.begin_edit()
    assert await field.handle_key("Enter") is False
    assert field.state is FieldState.EDITING


@pytest.mark.asyncio
async def test_escape_cancels():
    field = EditableField("Jane", on_commit=RecordingCommit(), can_edit=_editable)
    field.begin_edit()
    field.input("Nope")
    assert await field.handle_key("Escape") is True
    assert field.display_value == "Jane"
