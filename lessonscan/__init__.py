"""lessonscan - analysis pipeline for lessons-learned markdown documents."""

__version__ = "0.1.0"

from .config import PipelineConfig, load_config
from .errors import ConfigError, LessonScanError
from .models import BatchResult, LessonAnalysis, LessonDocument, LessonRecord, ValidationResult
from .pipeline import analyze_content, execute_pipeline, run_pipeline

__all__ = [
    "__version__",
    "BatchResult",
    "ConfigError",
    "LessonAnalysis",
    "LessonDocument",
    "LessonRecord",
    "LessonScanError",
    "PipelineConfig",
    "ValidationResult",
    "analyze_content",
    "execute_pipeline",
    "load_config",
    "run_pipeline",
]
