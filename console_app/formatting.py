"""Plain-text table rendering for link listings."""

from typing import List, Sequence

from .views import EventView, LinkView

LINK_COLUMNS = ("Short", "Original", "Created", "Expires", "Remaining(min)", "Visits")
MAX_CELL_WIDTH = 40


def truncate(text: str, width: int = MAX_CELL_WIDTH) -> str:
    """Shorten text to ``width`` characters, ending with an ellipsis when cut."""
    if len(text) <= width:
        return text
    return text[:width - 1] + "…"


def render_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Render rows as left-aligned columns separated by two spaces."""
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))
    
    def line(cells: Sequence[str]) -> str:
        return "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(cells)).rstrip()
    
    out = [line(headers), line(["-" * w for w in widths])]
    out.extend(line(row) for row in rows)
    return "\n".join(out)


def render_links(links: List[LinkView]) -> str:
    if not links:
        return "No live links."
    
    rows = [
        [
            link.short_url,
            truncate(link.original_url),
            link.created_at.astimezone().strftime("%Y-%m-%d %H:%M:%S"),
            link.expires_at.astimezone().strftime("%Y-%m-%d %H:%M:%S"),
            str(link.remaining_minutes),
            str(link.visits),
        ]
        for link in links
    ]
    return render_table(LINK_COLUMNS, rows)


def render_events(events: List[EventView]) -> str:
    if not events:
        return "No events recorded."
    
    rows = [[e.t, e.level.upper(), e.msg, truncate(str(e.data or {}), 60)] for e in events]
    return render_table(("Time", "Level", "Event", "Data"), rows)
