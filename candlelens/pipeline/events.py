"""Progress events emitted while an analysis runs."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable


class Stage(str, Enum):
    """Pipeline stages in execution order."""
    LOAD = "load"
    EXTRACT = "extract"
    PATTERNS = "patterns"
    INDICATORS = "indicators"
    FUSION = "fusion"

    @property
    def percent(self) -> int:
        return _STAGE_PERCENT[self]


_STAGE_PERCENT = {
    Stage.LOAD: 15,
    Stage.EXTRACT: 35,
    Stage.PATTERNS: 55,
    Stage.INDICATORS: 80,
    Stage.FUSION: 100,
}


@dataclass(frozen=True)
class ProgressEvent:
    """A completed stage."""

    stage: Stage
    percent: int
    message: str = ""

    @classmethod
    def for_stage(cls, stage: Stage, message: str = "") -> "ProgressEvent":
        return cls(stage=stage, percent=stage.percent, message=message)

    def to_dict(self) -> dict:
        return {"stage": self.stage.value, "percent": self.percent, "message": self.message}


ProgressCallback = Callable[[ProgressEvent], None]
