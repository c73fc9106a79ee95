"""
Sport-specific logic (Strategy Pattern) and the league registry
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Dict, Optional, Tuple

from config import Config


class Sport(ABC):
    """
    Abstract base class for sport-family rules.

    Subclasses describe how to read the free-text clock (is the game late,
    did it go to overtime) and how margins translate into "close" or
    "blowout" for ratings and recaps.
    """

    LATE_PATTERN: Optional[re.Pattern] = None
    # (pattern, recap phrase), checked in order
    OVERTIME_PATTERNS: List[Tuple[re.Pattern, str]] = []
    # (max margin, rating bonus), checked in order; beyond the last band the
    # blowout penalty applies
    MARGIN_BANDS: List[Tuple[int, float]] = []
    BLOWOUT_PENALTY = -2.0
    CLOSE_MARGIN = 3
    COMFORTABLE_MARGIN = 10
    TENSION_MARGIN: Optional[int] = None

    @abstractmethod
    def get_name(self) -> str:
        """Return the display name of this sport"""
        pass

    @abstractmethod
    def has_draw_option(self) -> bool:
        """Return whether this sport has draw/tie outcomes"""
        pass

    def is_late(self, clock: Optional[str]) -> bool:
        """Whether the clock text points at the final period or beyond"""
        if not clock or self.LATE_PATTERN is None:
            return False
        return bool(self.LATE_PATTERN.search(clock))

    def overtime_phrase(self, clock: Optional[str]) -> Optional[str]:
        """Recap phrase for a game that went past regulation, else None"""
        if not clock:
            return None
        for pattern, phrase in self.OVERTIME_PATTERNS:
            if pattern.search(clock):
                return phrase
        return None

    def is_overtime(self, clock: Optional[str]) -> bool:
        return self.overtime_phrase(clock) is not None

    def margin_bonus(self, margin: int) -> float:
        for max_margin, bonus in self.MARGIN_BANDS:
            if margin <= max_margin:
                return bonus
        return self.BLOWOUT_PENALTY

    def result_verb(self, margin: int) -> str:
        if margin == 0:
            return 'drew'
        if margin <= self.CLOSE_MARGIN:
            return 'edged'
        if margin <= self.COMFORTABLE_MARGIN:
            return 'beat'
        return 'defeated'


_OT = (re.compile(r'\b\d?OT\b|overtime', re.IGNORECASE), 'in overtime')
_SHOOTOUT = (re.compile(r'\bSO\b|shoot-?out', re.IGNORECASE), 'in a shootout')
_PENALTIES = (re.compile(r'\bpens?\b|penalt|\bPSO\b', re.IGNORECASE), 'after penalties')
_EXTRA_TIME = (re.compile(r'\bA?ET\b|extra time', re.IGNORECASE), 'after extra time')


class BasketballSport(Sport):
    """NBA-style four quarters plus overtime"""

    LATE_PATTERN = re.compile(r'\b(Q4|4th|\d?OT)\b|overtime', re.IGNORECASE)
    OVERTIME_PATTERNS = [_OT]
    MARGIN_BANDS = [(3, 3.0), (6, 2.0), (10, 1.0), (15, 0.0)]
    CLOSE_MARGIN = 3
    COMFORTABLE_MARGIN = 10

    def get_name(self) -> str:
        return "Basketball"

    def has_draw_option(self) -> bool:
        return False


class FootballSport(Sport):
    """American football, four quarters plus overtime"""

    LATE_PATTERN = re.compile(r'\b(Q4|4th|\d?OT)\b|overtime', re.IGNORECASE)
    OVERTIME_PATTERNS = [_OT]
    MARGIN_BANDS = [(3, 3.0), (8, 2.0), (14, 0.5), (21, 0.0)]
    CLOSE_MARGIN = 3
    COMFORTABLE_MARGIN = 14

    def get_name(self) -> str:
        return "Football"

    def has_draw_option(self) -> bool:
        return False


class HockeySport(Sport):
    """NHL Hockey, three periods plus overtime and shootout"""

    LATE_PATTERN = re.compile(r'\b(P3|3rd|\d?OT|SO)\b|overtime|shoot-?out', re.IGNORECASE)
    OVERTIME_PATTERNS = [_SHOOTOUT, _OT]
    MARGIN_BANDS = [(0, 2.0), (1, 1.5), (2, 0.5), (3, 0.0)]
    BLOWOUT_PENALTY = -1.5
    CLOSE_MARGIN = 1
    COMFORTABLE_MARGIN = 2
    TENSION_MARGIN = 1

    def get_name(self) -> str:
        return "Hockey"

    def has_draw_option(self) -> bool:
        return False


class SoccerSport(Sport):
    """Soccer/Football, minute-mark clock with extra time and penalties"""

    LATE_PATTERN = re.compile(r'\bA?ET\b|extra time|\bpens?\b|penalt', re.IGNORECASE)
    OVERTIME_PATTERNS = [_PENALTIES, _EXTRA_TIME]
    MARGIN_BANDS = [(0, 2.0), (1, 1.5), (2, 0.5), (3, -0.5)]
    CLOSE_MARGIN = 1
    COMFORTABLE_MARGIN = 2
    TENSION_MARGIN = 1

    # "72'", "90+3'", "72:15", "72 min"
    MINUTE_PATTERN = re.compile(r"(\d{1,3})\s*(?:\+\s*\d+)?\s*(?:'|:|min\b)", re.IGNORECASE)

    def get_name(self) -> str:
        return "Soccer"

    def has_draw_option(self) -> bool:
        return True

    def get_minute(self, clock: Optional[str]) -> Optional[int]:
        if not clock:
            return None
        match = self.MINUTE_PATTERN.search(clock)
        if match:
            return int(match.group(1))
        stripped = clock.strip()
        if stripped.isdigit():
            return int(stripped)
        return None

    def is_late(self, clock: Optional[str]) -> bool:
        if super().is_late(clock):
            return True
        minute = self.get_minute(clock)
        return minute is not None and minute >= Config.SOCCER_LATE_MINUTE


class GenericSport(Sport):
    """Fallback for unconfigured leagues: union of every family's markers"""

    LATE_PATTERN = re.compile(
        r'\b(Q4|4th|P3|\d?OT|SO|A?ET)\b|overtime|shoot-?out|extra time|penalt',
        re.IGNORECASE
    )
    OVERTIME_PATTERNS = [_SHOOTOUT, _PENALTIES, _EXTRA_TIME, _OT]
    MARGIN_BANDS = [(0, 2.0), (3, 1.5), (7, 1.0), (14, 0.0)]

    def get_name(self) -> str:
        return "Other"

    def has_draw_option(self) -> bool:
        return False


SPORTS: Dict[str, Sport] = {
    'basketball': BasketballSport(),
    'football': FootballSport(),
    'hockey': HockeySport(),
    'soccer': SoccerSport(),
}
DEFAULT_SPORT = GenericSport()


@dataclass(frozen=True)
class League:
    """Configuration record for one tracked league"""
    name: str
    slug: str
    sport: Sport
    tension_margin: int

    @property
    def is_soccer(self) -> bool:
        return isinstance(self.sport, SoccerSport)


def _build_league(name: str, slug: str) -> League:
    sport = SPORTS.get(Config.LEAGUE_SPORTS.get(name, ''), DEFAULT_SPORT)
    default_margin = sport.TENSION_MARGIN
    if default_margin is None:
        default_margin = Config.DEFAULT_TENSION_MARGIN
    return League(
        name=name,
        slug=slug,
        sport=sport,
        tension_margin=Config.TENSION_MARGINS.get(name, default_margin)
    )


def build_leagues() -> List[League]:
    """Tracked leagues in the configured enumeration order"""
    return [_build_league(name, Config.LEAGUE_SLUGS[name]) for name in Config.LEAGUE_ORDER]


LEAGUES: List[League] = build_leagues()


def get_league(key: Optional[str]) -> League:
    """
    Look up a league by display name or feed slug.
    Unknown leagues get the generic sport rules and the default tension margin.
    """
    key = key or ''
    for league in LEAGUES:
        if key == league.name or key.lower() == league.slug:
            return league
    return League(
        name=key,
        slug=key.lower(),
        sport=DEFAULT_SPORT,
        tension_margin=Config.DEFAULT_TENSION_MARGIN
    )
