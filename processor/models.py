"""Data models for fixture extraction and calendar generation."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple, Type


@dataclass
class Fixture:
    """Upcoming match parsed from a fixtures table."""
    date: str
    time: str
    home_team: str
    away_team: str
    venue: str


@dataclass
class Result(Fixture):
    """Completed match; a fixture plus its outcome string."""
    result: str = ''


@dataclass
class Event:
    """Calendar-ready representation of a Fixture or Result."""
    uid: str
    summary: str
    location: str
    dtstamp: datetime
    start: datetime
    end: datetime
    description: Optional[str] = None


@dataclass
class RawCell:
    """One table cell: rendered text and inner markup."""
    text: str
    markup: str


@dataclass
class RawRow:
    """Ordered cells of one table row."""
    index: int
    cells: List[RawCell]


@dataclass(frozen=True)
class RowSchema:
    """Declarative positional layout of a source table row."""
    name: str
    row_selector: str
    min_cells: int
    datetime_cell: int
    fields: Dict[int, str]
    record_type: Type[Fixture]
    compact_fields: Tuple[str, ...] = ()


@dataclass
class Team:
    """Team entry from the teams file."""
    name: str
    url: str
    results_url: Optional[str] = None


@dataclass
class PipelineConfig:
    """Settings for one batch run."""
    bucket_name: str
    key_prefix: str = ''
    teams_key: str = 'teams.json'
    location_map_key: str = 'location_mapper.json'
    log_level: str = 'INFO'
    timeout_seconds: int = 30
    persist_records: bool = False
    allow_empty_calendar: bool = False
    stable_uids: bool = False


@dataclass
class PublishResult:
    """Result of a batch run."""
    teams_processed: int = 0
    calendars_published: int = 0
    events_written: int = 0
    errors: List[str] = field(default_factory=list)
