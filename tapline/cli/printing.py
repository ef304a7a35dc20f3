"""Human-readable tables of Untappd results, printed to stdout."""

from collections.abc import Iterable, Sequence
from datetime import datetime

import click

from ..api.untappd import Badge, Beer, Brewery, Checkin, User, Venue


def print_table(header: Sequence[str], rows: Iterable[Sequence[object]]) -> None:
    lines = [[str(cell) for cell in header], *([str(cell) for cell in row] for row in rows)]
    widths = [max(len(line[i]) for line in lines) for i in range(len(header))]
    for line in lines:
        click.echo("  ".join(cell.ljust(width) for cell, width in zip(line, widths)).rstrip())


def fmt_date(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d") if value is not None else ""


def print_badges(badges: Iterable[Badge | None]) -> None:
    rows = []
    for badge in badges:
        if badge is None:
            continue
        # Each badge is followed by its levels
        for b in (badge, *(level for level in badge.levels if level is not None)):
            rows.append((b.id, b.name, fmt_date(b.earned), b.checkin_id))
    print_table(("ID", "Name", "Earned", "CheckinID"), rows)


def print_beers(beers: Iterable[Beer | None]) -> None:
    print_table(
        ("ID", "Name", "Brewery", "Style", "ABV", "IBU"),
        (
            (b.id, b.name, b.brewery.name if b.brewery else "", b.style, f"{b.abv:0.1f}", f"{b.ibu:03d}")
            for b in beers
            if b is not None
        ),
    )


def print_breweries(breweries: Iterable[Brewery | None]) -> None:
    print_table(
        ("ID", "Name", "Location", "Country"),
        (
            (b.id, b.name, ", ".join(filter(None, (b.location.city, b.location.state))), b.country)
            for b in breweries
            if b is not None
        ),
    )


def print_checkins(checkins: Iterable[Checkin | None]) -> None:
    print_table(
        ("ID", "Beer", "Brewery", "User", "Venue", "Rating"),
        (
            (
                c.id,
                c.beer.name if c.beer else "",
                c.brewery.name if c.brewery else "",
                c.user.user_name if c.user else "",
                c.venue.name if c.venue else "",
                f"{c.user_rating:0.2f}",
            )
            for c in checkins
            if c is not None
        ),
    )


def print_users(users: Iterable[User | None]) -> None:
    print_table(
        ("UID", "Username", "Name", "Location"),
        ((u.uid, u.user_name, f"{u.first_name} {u.last_name}".strip(), u.location) for u in users if u is not None),
    )


def print_venues(venues: Iterable[Venue | None]) -> None:
    print_table(
        ("ID", "Name", "Category", "City", "Country"),
        ((v.id, v.name, v.category, v.location.city, v.location.country) for v in venues if v is not None),
    )
