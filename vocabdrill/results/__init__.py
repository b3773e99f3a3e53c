from .schema import MODES, DTYPES, AnswerRow
from .metrics import compute_summary
from .result_manager import EXPORT_FORMATS, ResultManager

__all__ = [
    "MODES",
    "DTYPES",
    "AnswerRow",
    "compute_summary",
    "EXPORT_FORMATS",
    "ResultManager",
]
