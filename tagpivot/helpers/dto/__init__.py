"""
DTO package - cross-layer data contracts.
"""

from .config_dto import AnalysisConfig, InternalInfo
from .events_dto import DailyAgg, Probe, StoreMeta, TagEvent
from .metrics_dto import (
    BizarroResult,
    BridgeResult,
    MeanStd,
    PolarizationDebug,
    PolarizationOut,
    PolState,
    RollingSample,
    TempState,
    TrendReading,
    WindowAgg,
    WindowChoice,
)
from .workflow_dto import BridgesResult, FieldStateResult, PolarizationStateResult, RecordEventResult

__all__ = [
    "AnalysisConfig",
    "BizarroResult",
    "BridgeResult",
    "BridgesResult",
    "DailyAgg",
    "FieldStateResult",
    "InternalInfo",
    "MeanStd",
    "PolState",
    "PolarizationDebug",
    "PolarizationOut",
    "PolarizationStateResult",
    "Probe",
    "RecordEventResult",
    "RollingSample",
    "StoreMeta",
    "TagEvent",
    "TempState",
    "TrendReading",
    "WindowAgg",
    "WindowChoice",
]
