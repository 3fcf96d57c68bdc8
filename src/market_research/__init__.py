from .errors import MalformedResponseError, ResearchError, ServiceError, ValidationError
from .extractor import ReportExtractor, extract_report
from .models import ConversationTurn, Report, ResearchRequest, ToolInvocation
from .orchestrator import SessionOrchestrator
from .prompts import PRESET_QUERIES

__all__ = [
    "ConversationTurn",
    "MalformedResponseError",
    "PRESET_QUERIES",
    "Report",
    "ReportExtractor",
    "ResearchError",
    "ResearchRequest",
    "ServiceError",
    "SessionOrchestrator",
    "ToolInvocation",
    "ValidationError",
    "extract_report",
]
