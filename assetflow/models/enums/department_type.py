# assetflow/models/enums/department_type.py
import enum

class DepartmentType(str, enum.Enum):
    major = "major"
    academic = "academic"
    service = "service"
