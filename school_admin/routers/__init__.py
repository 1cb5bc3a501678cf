from . import health, data_import, students, classes, reports

__all__ = [
    "health",
    "data_import",
    "students",
    "classes",
    "reports"
]
