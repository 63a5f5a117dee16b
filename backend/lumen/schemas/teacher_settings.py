"""
Schema das configurações do professor (registro único, nunca excluído).
"""

from typing import Optional

from pydantic import Field

from lumen.config import settings
from lumen.schemas.base import LumenModel


class TeacherSettings(LumenModel):
    teacher_name: str = Field(default_factory=lambda: settings.DEFAULT_TEACHER_NAME, alias="teacherName")
    school_name: str = Field(default_factory=lambda: settings.DEFAULT_SCHOOL_NAME, alias="schoolName")
    bonus_value: float = Field(default_factory=lambda: settings.DEFAULT_BONUS_VALUE, alias="bonusValue")
    min_students: int = Field(default_factory=lambda: settings.DEFAULT_MIN_STUDENTS, alias="minAlunos")
    show_attendance_values: bool = Field(default=False, alias="showFrequenciaValues")
    hourly_rate: float = Field(default_factory=lambda: settings.DEFAULT_HOURLY_RATE, alias="valorHoraAula")
    school_logo_url: Optional[str] = Field(default="", alias="schoolLogoUrl")


class TeacherSettingsUpdate(LumenModel):
    teacher_name: Optional[str] = Field(default=None, alias="teacherName")
    school_name: Optional[str] = Field(default=None, alias="schoolName")
    bonus_value: Optional[float] = Field(default=None, alias="bonusValue")
    min_students: Optional[int] = Field(default=None, alias="minAlunos")
    show_attendance_values: Optional[bool] = Field(default=None, alias="showFrequenciaValues")
    hourly_rate: Optional[float] = Field(default=None, alias="valorHoraAula")
    school_logo_url: Optional[str] = Field(default=None, alias="schoolLogoUrl")
