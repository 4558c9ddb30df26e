"""Lightweight REST client for the diamondstats API."""

from __future__ import annotations

import argparse
import json

import httpx


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the diamondstats REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--sort", default=None, help="Listing sort field (e.g. hits, home_runs)")
    parser.add_argument("--direction", default=None, help="asc or desc")
    parser.add_argument("--show", metavar="PLAYER_ID", type=int, help="Fetch one player and exit")
    parser.add_argument(
        "--describe",
        metavar="PLAYER_ID",
        type=int,
        help="Generate (or regenerate) a player's description and print it",
    )
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.show is not None:
            resp = client.get(f"/players/{args.show}")
            if resp.status_code == 404:
                raise SystemExit(f"player {args.show} not found")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.describe is not None:
            resp = client.post(f"/players/{args.describe}/generate-description")
            if resp.status_code == 404:
                raise SystemExit(resp.json().get("detail", f"player {args.describe} not found"))
            resp.raise_for_status()
            print(resp.json()["description"])
            return

        params = {key: value for key, value in (("sort", args.sort), ("direction", args.direction)) if value}
        resp = client.get("/players", params=params)
        resp.raise_for_status()
        payload = resp.json()
        print(f"Sorted by {payload['sort']} {payload['direction']}")
        for player in payload["players"]:
            value = player.get(payload["sort"])
            print(f"{player['id']:>5}  {player['name']:<30} {value if value is not None else '-'}")


if __name__ == "__main__":
    main()
