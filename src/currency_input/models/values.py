"""Values exchanged between the engine and the host input surface."""

from __future__ import annotations

import builtins

from pydantic import BaseModel, ConfigDict, Field


class CursorState(BaseModel):
    """Selection offsets into the current display string."""

    model_config = ConfigDict(frozen=True)

    start: int = 0
    end: int = 0

    @classmethod
    def collapsed(cls, position: int) -> CursorState:
        return cls(start=position, end=position)


class OnChangeValues(BaseModel):
    """The externally observable result of one accepted change.

    ``float`` is None exactly when ``value`` is a mid-entry state
    (empty, a bare sign or a bare decimal separator).
    """

    float: builtins.float | None = None
    formatted: str = ""
    value: str = ""


class RepositionResult(BaseModel):
    """Raw text and caret after the pre-format cursor adjustment."""

    modified_value: str
    cursor_position: int | None = None


class EditState(BaseModel):
    """Per-field editing state owned by the host.

    Passed into every pipeline call and replaced (never mutated) by the
    result.
    """

    model_config = ConfigDict(frozen=True)

    display: str = ""
    dirty: bool = False
    selection: CursorState = Field(default_factory=CursorState)
    last_key: str | None = None


class ChangeResult(BaseModel):
    """Output of one pipeline run.

    ``accepted`` is False for soft-rejected keystrokes; the state is then
    the previous one (apart from the dirty flag) and ``values`` is None.
    ``values`` is also None when a change must not be reported.
    """

    state: EditState
    values: OnChangeValues | None = None
    accepted: bool = True
    cursor: CursorState | None = None
