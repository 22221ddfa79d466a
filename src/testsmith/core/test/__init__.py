from .models import ExecutionResult
from .run import run_script

__all__ = ["ExecutionResult", "run_script"]
