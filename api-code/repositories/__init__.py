from .demo_data import build_demo_repository
from .errors import DuplicateEmailError
from .in_memory import InMemoryStudentRepository
from .students import StudentRepository

__all__ = [
    "DuplicateEmailError",
    "InMemoryStudentRepository",
    "StudentRepository",
    "build_demo_repository",
]
