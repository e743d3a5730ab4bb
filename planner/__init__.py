"""Schedule synthesis: data model, synthesizer, block operations and plan producers."""
from .blocks import (
    adjust_block,
    create_personal_event,
    filter_visible_blocks,
    is_block_visible,
    toggle_course_access,
)
from .models import Assignment, Course, PersonalEvent, PlanInputs, Preferences, ScheduleBlock
from .producers import GenerativeProducer, PlanProducer, SynthesizerProducer, get_producer
from .synthesizer import describe_reminder, synthesize

__all__ = [
    "Assignment",
    "Course",
    "GenerativeProducer",
    "PersonalEvent",
    "PlanInputs",
    "PlanProducer",
    "Preferences",
    "ScheduleBlock",
    "SynthesizerProducer",
    "adjust_block",
    "create_personal_event",
    "describe_reminder",
    "filter_visible_blocks",
    "get_producer",
    "is_block_visible",
    "synthesize",
    "toggle_course_access",
]
