"""
Command-line front end for the Station Finder client.

Usage:
    python -m mobile login EMAIL PASSWORD
    python -m mobile profile
    python -m mobile map (--at LAT,LON | --address TEXT) [--radius KM] [--out FILE]
"""

import argparse
import logging
import sys

from mobile.alerts import AlertCenter
from mobile.api import ApiClient, ApiError
from mobile.location import AddressLocationProvider, FixedLocationProvider
from mobile.navigation import Navigator
from mobile.radius import RadiusContext
from mobile.screens import HomePageScreen, ProfileScreen, ScreenState
from mobile.storage import LocalStorage


def _parse_coords(value: str) -> tuple[float, float]:
    try:
        lat, lon = (float(part) for part in value.split(","))
    except ValueError as exc:
        raise argparse.ArgumentTypeError("expected LAT,LON") from exc
    return lat, lon


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mobile", description="Station Finder client")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="Log in and store the session id.")
    login.add_argument("email")
    login.add_argument("password")

    sub.add_parser("profile", help="Show the logged-in profile.")

    map_cmd = sub.add_parser("map", help="Render nearby stations to an HTML map.")
    where = map_cmd.add_mutually_exclusive_group(required=True)
    where.add_argument("--at", type=_parse_coords, metavar="LAT,LON")
    where.add_argument("--address")
    map_cmd.add_argument("--radius", type=int, default=None, metavar="KM")
    map_cmd.add_argument("--out", default="stations_map.html")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )

    api = ApiClient(LocalStorage())
    alerts = AlertCenter(on_alert=lambda a: print(f"{a.title}: {a.message}", file=sys.stderr))
    radius = RadiusContext()
    navigator = Navigator()

    if args.command == "login":
        try:
            api.login(args.email, args.password)
        except ApiError as exc:
            print(f"Login failed: {exc}", file=sys.stderr)
            return 1
        print("Logged in.")
        return 0

    if args.command == "profile":
        screen = ProfileScreen(api=api, radius=radius, alerts=alerts, navigator=navigator)
        screen.mount()
        print("\n".join(screen.render()))
        return 0 if screen.profile_data else 1

    if args.radius is not None:
        radius.set_radius(args.radius)
    if args.at:
        provider = FixedLocationProvider(*args.at)
    else:
        provider = AddressLocationProvider(args.address)

    screen = HomePageScreen(
        api=api, location_provider=provider, radius=radius, alerts=alerts, navigator=navigator
    )
    screen.mount()
    if screen.state is ScreenState.ERROR:
        print(screen.error_msg, file=sys.stderr)
        return 1
    screen.render_map(args.out)
    print(
        f"{len(screen.gas_stations)} gas / {len(screen.washing_stations)} washing stations "
        f"within {radius.radius} km -> {args.out}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
