import attrs

from src.platform.exception.exceptions import MissingContextError


@attrs.define(frozen=True)
class ScanContext:
    """Event/season pair every store call is scoped to."""

    event_id: str
    season_id: str

    @classmethod
    def of(cls, *, event_id: str | None, season_id: str | None) -> 'ScanContext':
        event = (event_id or '').strip()
        season = (season_id or '').strip()
        if not event or not season:
            raise MissingContextError('Missing event context')
        return cls(event_id=event, season_id=season)
