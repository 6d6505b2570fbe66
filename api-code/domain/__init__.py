from .subjects import SUBJECT_CHOICES, Subject, parse_subject
from .widget_phases import WidgetPhase, is_valid_transition

__all__ = ["SUBJECT_CHOICES", "Subject", "parse_subject", "WidgetPhase", "is_valid_transition"]
