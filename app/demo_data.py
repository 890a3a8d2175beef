"""
Demo staff and jobs for the schedule board.

Served instead of database rows when the caller asks for demo data or the
database integration is switched off, so the dashboard is never empty on a
fresh install.
"""

from datetime import date, datetime, time

DEMO_STAFF = [
    {"id": "s1", "name": "Harvey Washington", "role": "Owner", "avatarInitials": "HW", "color": "cyan"},
    {"id": "s2", "name": "Sarah Mitchell", "role": "Staff", "avatarInitials": "SM", "color": "violet"},
    {"id": "s3", "name": "James Cole", "role": "Staff", "avatarInitials": "JC", "color": "amber"},
    {"id": "s4", "name": "Priya Patel", "role": "Staff", "avatarInitials": "PP", "color": "emerald"},
    {"id": "s5", "name": "Tom Barker", "role": "Contractor", "avatarInitials": "TB", "color": "rose"},
]

# (id, title, staff_id, start, end, status, location)
_DEMO_JOB_ROWS = [
    ("j-001", "Regular Clean – Mrs. Patterson", "s1", "08:30", "10:00", "completed", "14 Riverside Rd, NR1"),
    ("j-002", "Deep Clean – Dr. Okonkwo", "s1", "10:30", "13:00", "in_progress", "7 Cathedral Close, NR1"),
    ("j-003", "Regular Clean – The Rose & Crown", "s1", "14:00", "15:30", "upcoming", "Crown Rd, NR2"),
    ("j-004", "End of Tenancy – 18 Colman Rd", "s2", "09:00", "12:00", "in_progress", "18 Colman Rd, NR4"),
    ("j-005", "Deep Clean – Blyth & Sons Ltd", "s2", "13:30", "15:30", "upcoming", "Unit 4, Wherry Rd, NR1"),
    ("j-006", "Regular Clean – Mr. & Mrs. Chen", "s3", "08:00", "09:30", "completed", "22 Eaton Rd, NR4"),
    ("j-007", "Window Clean – Norwich Cathedral", "s3", "10:00", "12:30", "in_progress", "The Close, NR1 4DH"),
    ("j-008", "Carpet Clean – Ms. Adebayo", "s3", "14:00", "16:00", "upcoming", "5 Bracondale, NR1"),
    # Priya is off - no jobs
    ("j-009", "Commercial Clean – Anglia Square", "s5", "07:00", "09:30", "completed", "Anglia Square, NR3"),
    ("j-010", "Regular Clean – Mr. Nguyen", "s5", "11:00", "12:30", "upcoming", "44 Unthank Rd, NR2"),
]


def _at(day: date, clock: str) -> datetime:
    hours, minutes = (int(part) for part in clock.split(":"))
    return datetime.combine(day, time(hours, minutes))


def demo_jobs(day: date) -> list[dict]:
    """The demo jobs placed on `day`"""
    return [
        {
            "id": job_id,
            "title": title,
            "staff_id": staff_id,
            "start_time": _at(day, start),
            "end_time": _at(day, end),
            "status": status,
            "location": location,
        }
        for job_id, title, staff_id, start, end, status, location in _DEMO_JOB_ROWS
    ]

