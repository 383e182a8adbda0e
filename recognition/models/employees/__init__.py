# Local application imports
from recognition.models.employees.employee import Employee

__all__ = ["Employee"]
