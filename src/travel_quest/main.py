"""Entry point: command-line front end for Travel Quest."""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel

from travel_quest.app import TravelQuestApp, build_app
from travel_quest.config import settings
from travel_quest.display.tables import (
    render_itinerary,
    render_poi_table,
    render_stats,
    render_trips_table,
)
from travel_quest.models.poi import POI, Coordinate, POICategory
from travel_quest.models.preferences import BudgetRange, TransportMode, TravelStyle
from travel_quest.models.trip import NewTripRequest, Trip

console = Console()

# Discovery is regenerated on every invocation; a fixed seed keeps the
# candidate list stable between `discover` and `add`.
_DEFAULT_CLI_SEED = 7


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Travel Quest — plan trips, visit places, earn badges"
    )
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory holding trips.json and user.json")
    parser.add_argument("--lat", type=float, default=None, help="Simulated current latitude")
    parser.add_argument("--lon", type=float, default=None, help="Simulated current longitude")
    parser.add_argument("--seed", type=int, default=None, help="Seed for generated places")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("trips", help="List upcoming, current and past trips")

    new = sub.add_parser("new", help="Create a trip")
    new.add_argument("name")
    new.add_argument("destination", help='e.g. "Lisbon, Portugal"')
    new.add_argument("start", type=datetime.fromisoformat, help="YYYY-MM-DD")
    new.add_argument("end", type=datetime.fromisoformat, help="YYYY-MM-DD")
    new.add_argument("--description", default="")

    show = sub.add_parser("show", help="Show a trip's itinerary")
    show.add_argument("trip", type=int, help="Trip number from `trips`")

    discover = sub.add_parser("discover", help="List places near the current location")
    discover.add_argument("--query", default="", help="Filter by name, description or category")

    add = sub.add_parser("add", help="Add a discovered place to a trip")
    add.add_argument("trip", type=int)
    add.add_argument("poi", type=int, help="Place number from `discover`")
    add.add_argument("--query", default="")

    remove = sub.add_parser("remove", help="Remove a place from a trip's itinerary")
    remove.add_argument("trip", type=int)
    remove.add_argument("poi", type=int, help="Itinerary position from `show`")

    move = sub.add_parser("move", help="Move itinerary positions before another position")
    move.add_argument("trip", type=int)
    move.add_argument("to", type=int)
    move.add_argument("positions", type=int, nargs="+")

    visit = sub.add_parser("visit", help="Mark an itinerary place as visited")
    visit.add_argument("trip", type=int)
    visit.add_argument("poi", type=int)

    complete = sub.add_parser("complete", help="Complete a trip and add it to your stats")
    complete.add_argument("trip", type=int)

    delete = sub.add_parser("delete", help="Delete a trip")
    delete.add_argument("trip", type=int)

    sub.add_parser("stats", help="Show level, points and badges")

    prefs = sub.add_parser("prefs", help="Update your profile and preferences")
    prefs.add_argument("--name")
    prefs.add_argument("--style", choices=[s.value for s in TravelStyle])
    prefs.add_argument("--budget", choices=[b.value for b in BudgetRange])
    prefs.add_argument("--favorite", action="append", choices=[c.value for c in POICategory], default=[])
    prefs.add_argument("--unfavorite", action="append", choices=[c.value for c in POICategory], default=[])
    prefs.add_argument("--interest", action="append", default=[])
    prefs.add_argument("--transport", nargs="+", choices=[t.value for t in TransportMode])
    prefs.add_argument("--toggle-notifications", action="store_true")
    prefs.add_argument("--toggle-ar", action="store_true")
    prefs.add_argument("--onboarded", action="store_true", help="Mark onboarding as completed")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    app_settings = settings.model_copy(
        update={
            "data_dir": args.data_dir or settings.data_dir,
            "discovery_seed": args.seed if args.seed is not None else (
                settings.discovery_seed if settings.discovery_seed is not None else _DEFAULT_CLI_SEED
            ),
        }
    )
    location = Coordinate(latitude=args.lat, longitude=args.lon) if args.lat is not None and args.lon is not None else None
    app = build_app(app_settings, current_location=location)
    _show_advisory(app)
    app.store.clear_error()

    handler = _COMMANDS[args.command]
    try:
        handler(app, args)
    except _UsageError as exc:
        console.print(f"[red]{exc}[/red]")
        sys.exit(1)
    _show_advisory(app)


class _UsageError(Exception):
    pass


def _show_advisory(app: TravelQuestApp) -> None:
    if app.error_message:
        console.print(f"[yellow]⚠ {app.error_message}[/yellow]")


def _trip_at(app: TravelQuestApp, number: int) -> Trip:
    trips = app.trips.trips
    if not 1 <= number <= len(trips):
        raise _UsageError(f"No trip #{number} — run `travel-quest trips` to list them.")
    return trips[number - 1]


def _itinerary_poi_at(trip: Trip, position: int) -> POI:
    pois = trip.itinerary.points_of_interest if trip.itinerary else []
    if not 0 <= position < len(pois):
        raise _UsageError(f"No place at position {position} in {trip.name}.")
    return pois[position]


def _discover(app: TravelQuestApp, query: str) -> list[POI]:
    if app.location.current_location is None:
        raise _UsageError("Location unavailable — pass --lat and --lon to discover places.")
    if query:
        return app.discovery.search(query)
    return app.discovery.nearby()


def _cmd_trips(app: TravelQuestApp, args: argparse.Namespace) -> None:
    if not app.trips.trips:
        console.print("[dim]No trips yet. Create one with `travel-quest new`.[/dim]")
        return
    render_trips_table(app.trips.trips, title="All Trips")
    for title, trips in (
        ("Current", app.trips.current_trips()),
        ("Upcoming", app.trips.upcoming_trips()),
        ("Past", app.trips.past_trips()),
    ):
        if trips:
            console.print(f"[bold]{title}:[/bold] " + ", ".join(t.name for t in trips))


def _cmd_new(app: TravelQuestApp, args: argparse.Namespace) -> None:
    try:
        request = NewTripRequest(
            name=args.name,
            destination=args.destination,
            start_date=args.start,
            end_date=args.end,
            description=args.description,
        )
    except ValidationError as exc:
        messages = "; ".join(err["msg"].removeprefix("Value error, ") for err in exc.errors())
        raise _UsageError(messages) from exc
    trip = app.trips.create_trip_from_request(request)
    console.print(f"[green]Created trip [bold]{trip.name}[/bold] ({trip.duration} days).[/green]")


def _cmd_show(app: TravelQuestApp, args: argparse.Namespace) -> None:
    render_itinerary(_trip_at(app, args.trip))


def _cmd_discover(app: TravelQuestApp, args: argparse.Namespace) -> None:
    pois = _discover(app, args.query)
    if not pois:
        console.print(f"[dim]No places match “{args.query}”.[/dim]")
        return
    render_poi_table(pois, title=f"Results for “{args.query}”" if args.query else "Nearby Places")


def _cmd_add(app: TravelQuestApp, args: argparse.Namespace) -> None:
    trip = _trip_at(app, args.trip)
    pois = _discover(app, args.query)
    if not 0 <= args.poi < len(pois):
        raise _UsageError(f"No place #{args.poi} in the discovery list.")
    poi = pois[args.poi]
    app.trips.add_poi_to_trip(poi, trip)
    console.print(f"[green]Added {poi.name} to {trip.name}.[/green]")


def _cmd_remove(app: TravelQuestApp, args: argparse.Namespace) -> None:
    trip = _trip_at(app, args.trip)
    poi = _itinerary_poi_at(trip, args.poi)
    app.trips.remove_poi_from_trip(poi.id, trip)
    console.print(f"[green]Removed {poi.name} from {trip.name}.[/green]")


def _cmd_move(app: TravelQuestApp, args: argparse.Namespace) -> None:
    trip = _trip_at(app, args.trip)
    render_itinerary(app.trips.reorder_pois_in_trip(args.positions, args.to, trip))


def _cmd_visit(app: TravelQuestApp, args: argparse.Namespace) -> None:
    trip = _trip_at(app, args.trip)
    poi = _itinerary_poi_at(trip, args.poi)
    updated = app.trips.mark_poi_visited(poi, trip)
    if updated is trip:
        console.print(f"[dim]{poi.name} was already visited.[/dim]")
        return
    gained = updated.earned_points - trip.earned_points
    console.print(f"[green]Visited {poi.name}: +{gained} pts[/green]")
    for badge in updated.badges[len(trip.badges):]:
        console.print(Panel(f"[bold]{badge.name}[/bold]\n{badge.description}", title="🏅 Badge unlocked", border_style="yellow"))


def _cmd_complete(app: TravelQuestApp, args: argparse.Namespace) -> None:
    trip = _trip_at(app, args.trip)
    if trip.is_completed:
        raise _UsageError(f"{trip.name} is already completed.")
    completed = app.trips.complete_trip(trip)
    app.preferences.update_travel_stats(completed)
    render_stats(app.preferences.user, app.preferences.level_progress())


def _cmd_delete(app: TravelQuestApp, args: argparse.Namespace) -> None:
    trip = _trip_at(app, args.trip)
    app.trips.delete_trip(trip)
    console.print(f"[green]Deleted {trip.name}.[/green]")


def _cmd_stats(app: TravelQuestApp, args: argparse.Namespace) -> None:
    render_stats(app.preferences.user, app.preferences.level_progress())
    recommended = ", ".join(c.label for c in app.preferences.recommended_categories())
    console.print(f"[dim]Recommended for you: {recommended}[/dim]")


def _cmd_prefs(app: TravelQuestApp, args: argparse.Namespace) -> None:
    prefs = app.preferences
    if args.name is not None:
        prefs.update_user_name(args.name)
    if args.style:
        prefs.update_travel_style(TravelStyle(args.style))
    if args.budget:
        prefs.update_budget_range(BudgetRange(args.budget))
    for value in args.favorite:
        prefs.add_favorite_category(POICategory(value))
    for value in args.unfavorite:
        prefs.remove_favorite_category(POICategory(value))
    for interest in args.interest:
        prefs.add_interest(interest)
    if args.transport:
        prefs.update_preferred_transport(TransportMode(t) for t in args.transport)
    if args.toggle_notifications:
        prefs.toggle_notifications()
    if args.toggle_ar:
        prefs.toggle_ar_features()
    if args.onboarded:
        prefs.complete_onboarding()

    p = prefs.user.preferences
    console.print(
        Panel(
            f"  Style: {p.travel_style.value} — {p.travel_style.description}\n"
            f"  Budget: {p.budget_range.value} ({p.budget_range.daily_range} / day)\n"
            f"  Favorites: {', '.join(sorted(c.label for c in p.favorite_categories)) or '—'}\n"
            f"  Transport: {', '.join(sorted(t.value for t in p.preferred_transport))}\n"
            f"  Interests: {', '.join(p.interests) or '—'}\n"
            f"  Notifications: {'on' if p.notifications_enabled else 'off'}  |  "
            f"AR: {'on' if p.ar_features_enabled else 'off'}",
            title="[bold]Preferences[/bold]",
            border_style="cyan",
        )
    )


_COMMANDS = {
    "trips": _cmd_trips,
    "new": _cmd_new,
    "show": _cmd_show,
    "discover": _cmd_discover,
    "add": _cmd_add,
    "remove": _cmd_remove,
    "move": _cmd_move,
    "visit": _cmd_visit,
    "complete": _cmd_complete,
    "delete": _cmd_delete,
    "stats": _cmd_stats,
    "prefs": _cmd_prefs,
}


if __name__ == "__main__":
    main()
