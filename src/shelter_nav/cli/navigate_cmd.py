"""Navigation CLI commands: region lookup, nearest shelters, and session simulation."""

import asyncio

import typer

from shelter_nav.lib.geo import Coordinate
from shelter_nav.schemas.navigation import NavigationViewModel, SessionState


def _parse_coordinate(value: str) -> Coordinate:
    """Parse a ``LAT,LNG`` option value into a Coordinate."""
    try:
        lat_str, lng_str = value.split(",")
        return Coordinate(lat=float(lat_str), lng=float(lng_str))
    except ValueError as e:
        msg = f"Expected LAT,LNG with valid ranges, got {value!r}"
        raise typer.BadParameter(msg) from e


def region(
    lat: float = typer.Option(..., "--lat", help="Latitude (-90 to 90)", min=-90, max=90),  # noqa: B008
    lng: float = typer.Option(..., "--lng", help="Longitude (-180 to 180)", min=-180, max=180),  # noqa: B008
) -> None:
    """Resolve a coordinate to its region code."""
    code = asyncio.run(_resolve_region(lat, lng))
    if code is None:
        typer.echo("Region could not be determined.", err=True)
        raise typer.Exit(code=1)
    typer.echo(code)


def nearest(
    lat: float = typer.Option(..., "--lat", help="Latitude (-90 to 90)", min=-90, max=90),  # noqa: B008
    lng: float = typer.Option(..., "--lng", help="Longitude (-180 to 180)", min=-180, max=180),  # noqa: B008
    count: int | None = typer.Option(None, "--count", help="Number of shelters (defaults to settings)", min=1),
) -> None:
    """List the shelters nearest to a coordinate."""
    code, ranked = asyncio.run(_nearest_shelters(lat, lng, count))
    typer.echo(f"Region: {code}")
    if not ranked:
        typer.echo("No shelters found.")
        raise typer.Exit(code=1)
    for rank, line in enumerate(ranked, start=1):
        typer.echo(f"  {rank}. {line}")


def simulate(
    lat: float = typer.Option(..., "--lat", help="Initial latitude (-90 to 90)", min=-90, max=90),  # noqa: B008
    lng: float = typer.Option(..., "--lng", help="Initial longitude (-180 to 180)", min=-180, max=180),  # noqa: B008
    headings: list[float] = typer.Option([], "--heading", help="Compass heading update (repeatable)"),  # noqa: B008
    moves: list[str] = typer.Option([], "--move", help="Location update as LAT,LNG (repeatable)"),  # noqa: B008
    as_json: bool = typer.Option(False, "--json", help="Print each frame as JSON"),  # noqa: FBT001
) -> None:
    """Run a full navigation session against scripted sensor readings."""
    locations = [_parse_coordinate(m) for m in moves]
    state = asyncio.run(_simulate(lat, lng, headings, locations, as_json))
    if state is SessionState.FAILED:
        raise typer.Exit(code=1)


async def _resolve_region(lat: float, lng: float) -> str | None:
    """Async implementation of region lookup."""
    from shelter_nav.core.config import get_settings
    from shelter_nav.core.errors import NoDataFoundError
    from shelter_nav.lib.geocoder import create_region_resolver

    resolver = create_region_resolver(get_settings())
    try:
        return await resolver.resolve(Coordinate(lat=lat, lng=lng))
    except NoDataFoundError:
        return None


async def _nearest_shelters(lat: float, lng: float, count: int | None) -> tuple[str, list[str]]:
    """Async implementation of the nearest-shelter listing."""
    from shelter_nav.core.config import get_settings
    from shelter_nav.core.errors import NoDataFoundError
    from shelter_nav.lib.geo import direction_text, format_distance, select_nearest
    from shelter_nav.lib.geocoder import create_region_resolver
    from shelter_nav.lib.shelters import create_shelter_repository

    settings = get_settings()
    origin = Coordinate(lat=lat, lng=lng)
    code = await create_region_resolver(settings).resolve(origin)
    try:
        shelters = await create_shelter_repository(settings).fetch(code)
    except NoDataFoundError:
        return code, []

    ranked = select_nearest(origin, shelters, count or settings.nearest_shelter_count)
    return code, [
        f"{s.name} - {format_distance(s.distance_m)}, {direction_text(s.bearing_deg)} - {s.address}" for s in ranked
    ]


def _render_frame(view: NavigationViewModel, *, as_json: bool) -> None:
    """Print one view model frame."""
    if as_json:
        typer.echo(view.model_dump_json())
        return

    line = f"[{view.state}] {view.status}"
    if view.error:
        line += f" | error: {view.error}"
    if view.arrows:
        arrows = ", ".join(f"#{a.rank} {a.rotation_degrees:.1f}° {a.distance_label}" for a in view.arrows)
        line += f" | needle {view.needle.rotation_degrees:.1f}° | {arrows}"
    typer.echo(line)


async def _simulate(
    lat: float,
    lng: float,
    headings: list[float],
    locations: list[Coordinate],
    as_json: bool,
) -> SessionState:
    """Async implementation of the session simulator."""
    from shelter_nav.core.config import get_settings
    from shelter_nav.lib.sensors import ScriptedSensorSource
    from shelter_nav.services.navigation_service import create_navigation_session

    sensors = ScriptedSensorSource(Coordinate(lat=lat, lng=lng), locations=locations, headings=headings)
    session = create_navigation_session(
        get_settings(),
        sensors,
        renderer=lambda view: _render_frame(view, as_json=as_json),
    )
    state = await session.start()
    if state is SessionState.TRACKING:
        await session.track()
    return session.state
