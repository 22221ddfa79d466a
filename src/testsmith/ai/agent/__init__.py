from .driver import MultiFrameworkDriver
from .graph import RepairLoopAgent
from .state import AttemptRecord, FailureKind, RepairState, RepairStatus

__all__ = ["AttemptRecord", "FailureKind", "MultiFrameworkDriver", "RepairLoopAgent", "RepairState", "RepairStatus"]
