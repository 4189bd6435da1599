from .catalog_service import CatalogService
from .movement_service import MovementService
from .reporting_service import ReportingService
from .export_service import ExportService
from .notification_service import LoggingNotifier, RecordingNotifier

__all__ = [
    "CatalogService",
    "MovementService",
    "ReportingService",
    "ExportService",
    "LoggingNotifier",
    "RecordingNotifier",
]
