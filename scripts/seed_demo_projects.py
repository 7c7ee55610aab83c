#!/usr/bin/env python3
"""Seed demo projects into a running Parcelbook backend.

Usage:
    # Start the backend first:
    uvicorn parcelbook.web.app:create_app --factory --port 8080

    # Seed demo data:
    python3 scripts/seed_demo_projects.py

    # Seed against a different host:
    python3 scripts/seed_demo_projects.py --base-url http://localhost:9000

All data goes through the public API, so it passes the same validation
and derived-figure computation as data entered by a user.

Data created:
    - 2 projects with buyers, land parcels and a building
    - transactions linked to land, buildings and the general ledger
    - 1 developer note
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime, timezone

import httpx

DEFAULT_BASE_URL = "http://localhost:8080"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def api(
    client: httpx.Client,
    method: str,
    path: str,
    *,
    json: dict | None = None,
) -> dict | list | None:
    """Make an API call and return parsed JSON, or None on failure."""
    resp = client.request(method, path, json=json)
    if resp.status_code >= 400:
        print(f"  FAILED {method} {path} -> {resp.status_code}: {resp.text[:200]}")
        return None
    if resp.headers.get("content-type", "").startswith("application/json"):
        return resp.json()
    return None


def section(title: str) -> None:
    print(f"\n{'='*60}")
    print(f"  {title}")
    print(f"{'='*60}")


# ---------------------------------------------------------------------------
# Demo data
# ---------------------------------------------------------------------------

DEMO_PROJECTS = [
    {
        "project": {"name": "Riverside Lots", "site": "North bank", "zone": "Industrial"},
        "buyers": [
            {"name": "Harbor Logistics Ltd.", "phone": "02-5550-1234", "address": "12 Quay Rd"},
        ],
        "lands": [
            {
                "section": "Riverside Sec. 3",
                "sellers": [{"name": "A. Lin"}, {"name": "B. Chen"}],
                "items": [
                    {"lotNumber": "101", "areaM2": 1200, "shareNum": 1, "shareDenom": 2,
                     "pricePerPing": 52000},
                    {"lotNumber": "101-1", "areaM2": 330.5, "pricePerPing": 52000},
                ],
            },
        ],
        "buildings": [],
        "transactions": [
            {"type": "expense", "category": "Land cost", "amount": 9_500_000,
             "linkedType": "land", "land": 0, "note": "First instalment"},
            {"type": "expense", "category": "Scrivener and registration fees",
             "amount": 48_000},
            {"type": "income", "category": "Sale deposit", "amount": 2_000_000},
        ],
    },
    {
        "project": {"name": "Station Plaza", "site": "East gate", "zone": "Commercial"},
        "buyers": [],
        "lands": [],
        "buildings": [
            {"permitNumber": "112-B-0456", "address": "88 Station Plaza, Unit 3F",
             "license": "U-2290", "buildNumber": "1044", "areaM2": 142.7,
             "pricePerUnit": 310000, "totalPrice": 13_500_000,
             "sellers": [{"name": "C. Wu"}]},
        ],
        "transactions": [
            {"type": "expense", "category": "Building cost", "amount": 13_500_000,
             "linkedType": "building", "building": 0},
            {"type": "income", "category": "Rental income", "amount": 45_000,
             "linkedType": "building", "building": 0},
        ],
    },
]


def seed_project(client: httpx.Client, demo: dict) -> None:
    project = api(client, "POST", "/api/projects", json=demo["project"])
    if not project:
        return
    project_id = project["id"]
    print(f"  Project {project['name']} ({project_id})")

    for buyer in demo["buyers"]:
        api(client, "PUT", f"/api/projects/{project_id}/buyers", json=buyer)

    for land in demo["lands"]:
        project = api(client, "PUT", f"/api/projects/{project_id}/lands", json=land) or project
    for building in demo["buildings"]:
        project = api(
            client, "PUT", f"/api/projects/{project_id}/buildings", json=building
        ) or project

    for tx in demo["transactions"]:
        body = {k: v for k, v in tx.items() if k not in ("land", "building")}
        if "land" in tx:
            body["linkedId"] = project["lands"][tx["land"]]["id"]
        if "building" in tx:
            body["linkedId"] = project["buildings"][tx["building"]]["id"]
        api(client, "PUT", f"/api/projects/{project_id}/transactions", json=body)

    stats = api(client, "GET", f"/api/projects/{project_id}/stats")
    if stats:
        print(f"    income={stats['totalIncome']} expense={stats['totalExpense']} "
              f"roi={stats['roi']}%")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Seed demo projects into a running Parcelbook backend"
    )
    parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help=f"Backend base URL (default: {DEFAULT_BASE_URL})",
    )
    args = parser.parse_args()

    print("Parcelbook Demo Data Seeder")
    print(f"Target: {args.base_url}")
    print(f"Time:   {datetime.now(timezone.utc).isoformat()}")

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        try:
            health = api(client, "GET", "/api/health")
        except httpx.ConnectError:
            health = None
        if not health:
            print(f"\nERROR: Cannot reach {args.base_url}. Start the backend first:")
            print("  uvicorn parcelbook.web.app:create_app --factory --port 8080")
            sys.exit(1)

        section("Projects")
        for demo in DEMO_PROJECTS:
            seed_project(client, demo)

        section("Developer notes")
        api(client, "POST", "/api/notes", json={"content": "Add a per-buyer payment schedule"})

        summary = api(client, "POST", "/api/portfolio/summary", json={})
        if summary:
            section("Portfolio")
            print(f"  projects={summary['projectCount']} "
                  f"land={summary['totalLandAreaM2']:.3f} m2 "
                  f"net profit={summary['netProfit']}")


if __name__ == "__main__":
    main()
