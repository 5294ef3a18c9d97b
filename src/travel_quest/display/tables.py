"""Rich tables and panels for trips, itineraries, POIs and stats."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from travel_quest.models.poi import POI
from travel_quest.models.trip import Trip
from travel_quest.models.user import User
from travel_quest.services.rewards import LevelProgress

console = Console()


def _fmt_duration(seconds: float) -> str:
    minutes = int(round(seconds / 60))
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes:02d}m" if hours else f"{minutes}m"


def render_trips_table(trips: list[Trip], title: str = "Trips") -> None:
    table = Table(
        title=f"[bold cyan]{title}[/bold cyan]",
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    table.add_column("#", style="bold", width=3, justify="center")
    table.add_column("Name", min_width=16)
    table.add_column("Destination", min_width=16)
    table.add_column("Dates")
    table.add_column("POIs", justify="right")
    table.add_column("Done", justify="right")
    table.add_column("Points", justify="right")

    for i, trip in enumerate(trips, start=1):
        poi_count = len(trip.itinerary.points_of_interest) if trip.itinerary else 0
        pct = trip.completion_percentage
        pct_color = "green" if pct >= 0.75 else ("yellow" if pct > 0 else "dim")
        table.add_row(
            str(i),
            trip.name + (" [dim](completed)[/dim]" if trip.is_completed else ""),
            trip.destination,
            f"{trip.start_date:%Y-%m-%d} → {trip.end_date:%Y-%m-%d}\n{trip.duration} days",
            str(poi_count),
            f"[{pct_color}]{pct:.0%}[/{pct_color}]",
            f"{trip.earned_points:,}",
        )

    console.print()
    console.print(table)


def render_itinerary(trip: Trip) -> None:
    """Render the trip's itinerary with visit state and badges."""
    pois = trip.itinerary.points_of_interest if trip.itinerary else []
    table = Table(show_header=True, header_style="bold", border_style="dim", show_lines=True)
    table.add_column("#", width=3, justify="center")
    table.add_column("Place", min_width=20)
    table.add_column("Category")
    table.add_column("Rating", justify="right")
    table.add_column("Visit", justify="right")
    table.add_column("Visited", justify="center")

    for i, poi in enumerate(pois):
        table.add_row(
            str(i),
            f"{poi.name}\n[dim]{poi.address}[/dim]",
            poi.category.label,
            f"{poi.rating:.1f}",
            _fmt_duration(poi.estimated_visit_duration),
            "[green]✔[/green]" if poi.is_visited else "",
        )

    total = trip.itinerary.total_estimated_duration if trip.itinerary else 0.0
    badges = ", ".join(b.name for b in trip.badges) or "—"
    console.print(
        Panel(
            table,
            title=f"[bold]{trip.name}[/bold] · {trip.destination}",
            subtitle=(
                f"Total {_fmt_duration(total)} | {trip.completion_percentage:.0%} complete | "
                f"{trip.earned_points} pts | Badges: {badges}"
            ),
            border_style="blue",
        )
    )


def render_poi_table(pois: list[POI], title: str = "Nearby Places") -> None:
    table = Table(
        title=f"[bold cyan]{title}[/bold cyan]",
        header_style="bold magenta",
        border_style="dim",
    )
    table.add_column("#", width=3, justify="center")
    table.add_column("Name", min_width=18)
    table.add_column("Category")
    table.add_column("Price", justify="center")
    table.add_column("Rating", justify="right")
    table.add_column("Visit", justify="right")
    table.add_column("AR", justify="center")

    for i, poi in enumerate(pois):
        rating_color = "green" if poi.rating >= 4.5 else ("yellow" if poi.rating >= 3.5 else "red")
        table.add_row(
            str(i),
            poi.name,
            poi.category.label,
            poi.price_level.value,
            f"[{rating_color}]{poi.rating:.1f}[/{rating_color}]",
            _fmt_duration(poi.estimated_visit_duration),
            "✦" if poi.ar_content_available else "",
        )

    console.print()
    console.print(table)


def render_stats(user: User, progress: LevelProgress) -> None:
    stats = user.travel_stats
    bar_width = 20
    filled = int(progress.progress * bar_width)
    bar = "█" * filled + "░" * (bar_width - filled)
    favorite = stats.favorite_category.label if stats.favorite_category else "—"
    to_next = f"{progress.points_to_next} pts to next" if progress.points_to_next else "max level"
    lines = [
        f"  [bold]Level {progress.level}[/bold]  {bar}  {to_next}",
        f"  Points: {stats.total_points:,}  |  Trips: {stats.total_trips}  |  Places: {stats.total_places_visited}",
        f"  Distance: {stats.total_distance_traveled:.1f} km  |  Longest trip: {stats.longest_trip} days",
        f"  Countries: {', '.join(sorted(stats.countries_visited)) or '—'}",
        f"  Favorite category: {favorite}",
        f"  Badges: {', '.join(b.name for b in stats.badges_earned) or '—'}",
    ]
    title = f"[bold]{user.name or 'Traveler'}[/bold]"
    console.print(Panel("\n".join(lines), title=title, border_style="yellow"))
