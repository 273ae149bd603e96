# region Docstring
"""
copyholder.models.engine
In-memory state and value models used by the history engine.
Contents:
- Enumerations:
    - EngineStatus: Phase of the polling state machine (idle, polling,
        evaluating, suppressed).
    - TickResult: Outcome of one polling tick.
- Pydantic models:
    - EngineState:
        The engine's process-wide, non-persisted state: the last clipboard text
        it reacted to, the self-write suppression flag, the entry shown in the
        detail view, and the current status.
    - Toast:
        A transient confirmation message and how long it stays visible.
Design Notes:
- Enumerations inherit from both str and enum.Enum so values compare and log
    as plain strings.
"""
# endregion
# region Imports
import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# endregion
# region Enumerations
class EngineStatus(str, enum.Enum):
    IDLE = "idle"
    POLLING = "polling"
    EVALUATING = "evaluating"
    SUPPRESSED = "suppressed"


class TickResult(str, enum.Enum):
    SUPPRESSED = "suppressed"
    EMPTY = "empty"
    UNCHANGED = "unchanged"
    DUPLICATE = "duplicate"
    INSERTED = "inserted"
    FAILED = "failed"


# endregion
# region Pydantic Models
class EngineState(BaseModel):
    """
    Mutable state owned by a single HistoryEngine instance.

    Attributes:
        last_observed_content (Optional[str]): Most recent clipboard text the engine reacted to.
        suppress_writes (bool): True while the engine ignores its own clipboard write.
        selected_entry_id (Optional[str]): Entry shown in the detail view (non-owning).
        status (EngineStatus): Current phase of the polling state machine.
    """

    last_observed_content: Optional[str] = Field(
        None, description="Most recent clipboard text the engine already reacted to"
    )
    suppress_writes: bool = Field(
        False, description="Set while the engine ignores its own clipboard write"
    )
    selected_entry_id: Optional[str] = Field(
        None, description="Entry currently shown in the detail view"
    )
    status: EngineStatus = Field(
        EngineStatus.IDLE, description="Current phase of the polling state machine"
    )

    model_config = ConfigDict(validate_assignment=True)


class Toast(BaseModel):
    message: str = Field(..., description="Text shown to the user")
    duration: float = Field(..., ge=0, description="Seconds the message stays visible")

    model_config = ConfigDict(frozen=True)


# endregion

__all__ = ["EngineState", "EngineStatus", "TickResult", "Toast"]
