from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    STUDENT = "student"


class CopyType(str, Enum):
    WEEK = "week"
    MONTH = "month"
