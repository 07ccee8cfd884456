"""Application use cases."""

from .generate_caster_report import (
    GenerateCasterReportRequest,
    GenerateCasterReportResult,
    GenerateCasterReportUseCase,
)

__all__ = [
    "GenerateCasterReportRequest",
    "GenerateCasterReportResult",
    "GenerateCasterReportUseCase",
]
