from .chat import ChatService, ChatTurn
from .orchestrator import ROUTING_FAILURE_MESSAGE, OrchestrationResult, Orchestrator
from .router import DirectorRouter
from .session import ActivityEntry, ActivityLog, SessionBusyError, SessionRegistry, SessionState

__all__ = [
    "ActivityEntry",
    "ActivityLog",
    "ChatService",
    "ChatTurn",
    "DirectorRouter",
    "OrchestrationResult",
    "Orchestrator",
    "ROUTING_FAILURE_MESSAGE",
    "SessionBusyError",
    "SessionRegistry",
    "SessionState",
]
