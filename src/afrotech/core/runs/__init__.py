from .schemas import InvalidTaskTransition, Task
from .store import TaskStore

__all__ = ["InvalidTaskTransition", "Task", "TaskStore"]
