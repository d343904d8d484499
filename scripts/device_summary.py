"""Show a Tidbyt's status and installations, and optionally change them.

Usage:
    python device_summary.py DEVICE_ID                      Show device and installations
    python device_summary.py DEVICE_ID --push nyan.webp --installation-id NyanCat --background
    python device_summary.py DEVICE_ID --delete NyanCat     Remove an installation
    python device_summary.py DEVICE_ID --preview NyanCat --output preview.webp
    python device_summary.py DEVICE_ID --brightness 10      Change brightness

The API token is read from --token, the TIDBYT_API_TOKEN environment
variable, or scripts/.credentials.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from tidbyt_api import ApiError, TidbytClient, TidbytDevice

CUSTOM_DESCRIPTION = (
    'Unlike a regular Tidbyt app, this "installation" was pushed to {name} '
    "via Tidbyt's API."
)


async def show_installations(client: TidbytClient, device: TidbytDevice) -> None:
    """Print each installation with its app's name and description."""
    apps = await client.apps.list(as_map=True)
    installations = await device.installations.list()

    if not installations:
        print("  No installations")
        return

    for installation in installations:
        app = apps.get(installation.get("appID")) or {}
        name = app.get("name", "Custom")
        description = app.get(
            "description", CUSTOM_DESCRIPTION.format(name=device.display_name)
        )
        print()
        print(f"  {name} - {installation.get('id')}")
        print(f"      {description}")


async def main() -> int:
    parser = argparse.ArgumentParser(
        description="Show a Tidbyt's status and manage its installations.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("device_id", help="Device ID from the Tidbyt app")
    parser.add_argument("--token", help="API token (default: TIDBYT_API_TOKEN)")
    parser.add_argument("--push", type=Path, metavar="FILE", help="Image file to push")
    parser.add_argument(
        "--installation-id", help="Installation ID to create/update with --push"
    )
    parser.add_argument(
        "--background",
        action="store_true",
        help="Push without interrupting the current rotation",
    )
    parser.add_argument("--delete", metavar="ID", help="Installation ID to delete")
    parser.add_argument("--preview", metavar="ID", help="Installation ID to preview")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("preview.webp"),
        help="Where to save the preview (default: preview.webp)",
    )
    parser.add_argument("--brightness", type=int, help="New brightness (0-100)")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log HTTP requests"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    token = args.token
    if not token:
        sys.path.insert(0, str(Path(__file__).parent))
        from credentials import load_api_token

        try:
            token = load_api_token(Path(__file__).parent / ".credentials")
        except Exception as exc:
            print("Failed to load API token:", exc)
            return 1

    async with TidbytClient(token) as client:
        try:
            device = await client.devices.get(args.device_id)
        except ApiError as exc:
            print(f"Failed to fetch device: {exc}")
            return 1

        last_seen = device.last_seen.astimezone() if device.last_seen else "never"
        print(f"{device.display_name} Last Seen: ({last_seen})")
        print(f"  Brightness: {device.brightness}%  Auto-dim: {device.auto_dim}")

        await show_installations(client, device)

        if args.delete:
            try:
                print(await device.installations.delete(args.delete))
            except ApiError as exc:
                print(f"Failed to delete installation: {exc.message}")

        if args.push:
            image = args.push.read_bytes()
            await device.push(
                image,
                installation_id=args.installation_id,
                background=args.background,
            )
            print(f"Pushed {args.push} ({len(image)} bytes)")

        if args.preview:
            preview = await device.installations.preview(args.preview)
            args.output.write_bytes(preview)
            print(f"Saved preview of {args.preview} to {args.output}")

        if args.brightness is not None:
            updated = await device.update(brightness=args.brightness)
            print(
                f"Updated brightness from {device.brightness}% "
                f"to {updated.brightness}%"
            )

    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
