"""Pure text transformations for push notifications."""

from .escape import escape_output, unescape_output
from .models import DEFAULT_ABBREV, NotificationRecord, branch_from_ref, short_sha
from .render import MESSAGE_TEMPLATE, render_message

__all__ = [
    "DEFAULT_ABBREV",
    "MESSAGE_TEMPLATE",
    "NotificationRecord",
    "branch_from_ref",
    "escape_output",
    "render_message",
    "short_sha",
    "unescape_output",
]
