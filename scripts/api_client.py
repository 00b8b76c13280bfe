"""Lightweight REST client for the pysoftball API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the pysoftball REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--attend", nargs="*", default=None, help="Attending player names (default: everyone)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible plan")
    parser.add_argument("--min-women", type=int, default=None, help="Minimum women on the field")
    parser.add_argument("--roster", action="store_true", help="Print the roster and exit")
    parser.add_argument("--validate", type=Path, help="Validate a saved plan JSON and exit")
    parser.add_argument("--save", type=Path, help="Write the generated plan JSON here")
    parser.add_argument("--export-path", type=Path, help="Download the fielding CSV to this path")
    parser.add_argument("--share", action="store_true", help="Print a share query for the plan")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.roster:
            resp = client.get("/roster")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.validate:
            plan = json.loads(args.validate.read_text(encoding="utf-8"))
            resp = client.post("/plans/validate", json=plan)
            if resp.status_code == 400:
                raise SystemExit(resp.json().get("detail", "invalid plan"))
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        payload = {
            "attendance": args.attend,
            "seed": args.seed,
            "min_women_on_field": args.min_women,
        }
        resp = client.post("/plans", json=payload)
        if resp.status_code == 400:
            raise SystemExit(resp.json().get("detail", "plan request rejected"))
        resp.raise_for_status()
        body = resp.json()
        plan = body["plan"]

        for row in plan["pitching"]:
            print(f"{row['battingPosition']:>3}. {row['batter']:<15} pitcher: {row['pitcher']}")
        validation = body["validation"]
        if validation["issues"]:
            print("Validation issues:")
            for issue in validation["issues"]:
                print(f"  - {issue}")

        if args.save:
            args.save.write_text(json.dumps(plan, indent=2), encoding="utf-8")
            print(f"Plan saved to {args.save}")

        if args.export_path:
            resp = client.post("/plans/export.csv", json=plan)
            resp.raise_for_status()
            args.export_path.write_text(resp.text)
            print(f"CSV export saved to {args.export_path}")

        if args.share:
            resp = client.post("/plans/share", json=plan)
            resp.raise_for_status()
            print(f"{args.base_url.rstrip('/')}/shared?{resp.json()['query']}")


if __name__ == "__main__":
    main()
