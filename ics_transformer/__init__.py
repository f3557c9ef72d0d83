"""Transformer module for converting schedules to and from iCalendar text."""

from .base import BaseTransformer
from .ical_importer import ICalImporter
from .ical_transformer import ICalTransformer

__all__ = ["BaseTransformer", "ICalImporter", "ICalTransformer"]
