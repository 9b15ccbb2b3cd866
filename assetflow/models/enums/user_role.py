# assetflow/models/enums/user_role.py
import enum

class UserRole(str, enum.Enum):
    officer = "officer"
    admin = "admin"
