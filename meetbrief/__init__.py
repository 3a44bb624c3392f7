"""MeetBrief: meeting transcript summarization with provider fallback."""

__version__ = "0.1.0"
