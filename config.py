"""
Configuration and shared constants for the hackathon manager.
"""

import os
import yaml
from datetime import date, timedelta
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field
from dotenv import load_dotenv

load_dotenv()

# Storage
DATA_DIR = Path(os.environ.get("HACKATHON_DATA_DIR", "data"))
STORAGE_BACKEND = os.environ.get("HACKATHON_BACKEND", "json")  # 'json' | 'memory'
EVENT_FILE = Path(os.environ.get("HACKATHON_EVENT_FILE", "event.yaml"))

# Calendar rules (days, inclusive)
EVENT_DURATION_DAYS = 5
REGISTRATION_WINDOW_DAYS = 2
REGISTRATION_CLOSE_OFFSET_DAYS = 3  # last registration day is start - 3

# Capacity rules
MAX_TEAMS = 20
MAX_DOCUMENTS_PER_DAY = 3
JUDGE_PANEL_SIZE = 3
MIN_TEAMS_TO_START = 3

# Scoring
MIN_VOTE = 0
MAX_VOTE = 10
MIN_DOCUMENT_SCORE = 1
MAX_DOCUMENT_SCORE = 10
FINAL_VOTE_WEIGHT = 0.70
PROGRESS_WEIGHT = 0.30


@dataclass
class OrganizerSettings:
    id: int = 1
    first_name: str = "Ada"
    last_name: str = "Lovelace"
    password: str = "changeme"


@dataclass
class EventSettings:
    """
    Event definition loaded from event.yaml.

    Only the start date is configured - the end date is always derived from
    EVENT_DURATION_DAYS so a config file can't describe an invalid event.
    """
    title: str = "Hackathon"
    venue: str = "ROMA"
    start_date: Optional[date] = None
    max_team_size: int = 4
    organizer: OrganizerSettings = field(default_factory=OrganizerSettings)

    @property
    def end_date(self) -> Optional[date]:
        if self.start_date is None:
            return None
        return self.start_date + timedelta(days=EVENT_DURATION_DAYS - 1)


def load_event_settings(path: Path = None) -> EventSettings:
    """Load event settings from YAML. Missing file means defaults."""
    path = path or EVENT_FILE
    if not path.exists():
        return EventSettings()

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    start = data.get("start_date")
    if isinstance(start, str):
        start = date.fromisoformat(start)

    return EventSettings(
        title=data.get("title", "Hackathon"),
        venue=str(data.get("venue", "ROMA")).upper(),
        start_date=start,
        max_team_size=int(data.get("max_team_size", 4)),
        organizer=OrganizerSettings(**(data.get("organizer") or {})),
    )
