"""
Utility modules for Smart Calendar Assistant
"""

from .logger import SmartCalendarLogger
from .validators import RequestValidator, DataSanitizer
from .calendar_slot_analyzer import CalendarSlotAnalyzer

__all__ = ['SmartCalendarLogger', 'RequestValidator', 'DataSanitizer', 'CalendarSlotAnalyzer']
