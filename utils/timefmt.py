from datetime import time


def format_time(value: time) -> str:
    """
    Formats 13:30 as "1:30 PM"; midnight is "12:00 AM".
    """
    hour = value.hour
    minute = f"{value.minute:02d}"
    if hour == 0:
        return f"12:{minute} AM"
    if hour < 12:
        return f"{hour}:{minute} AM"
    if hour == 12:
        return f"12:{minute} PM"
    return f"{hour - 12}:{minute} PM"


def slot_label(start: time, end: time) -> str:
    return f"{format_time(start)} - {format_time(end)}"
