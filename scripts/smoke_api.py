#!/usr/bin/env python3
"""Smoke check for a running booking API."""

import sys
from datetime import date, timedelta

import httpx


BASE_URL = "http://127.0.0.1:8001"


def create_booking(payload: dict) -> str | None:
    """Create a booking, resubmitting with an override if it conflicts."""
    print("=" * 60)
    print("POST /bookings")
    print("=" * 60)

    try:
        response = httpx.post(f"{BASE_URL}/bookings", json=payload, timeout=10.0)
        if response.status_code == 409:
            conflicts = response.json()["detail"]["conflicts"]
            print(f"Conflicts with {len(conflicts)} booking(s), saving anyway")
            response = httpx.post(
                f"{BASE_URL}/bookings",
                json={**payload, "override_conflicts": True},
                timeout=10.0,
            )
        response.raise_for_status()

        data = response.json()
        print(f"Created booking {data['booking']['id']} ({data['booking']['service_name']})")
        return data["booking"]["id"]
    except httpx.HTTPStatusError as e:
        print(f"HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return None
    except httpx.HTTPError as e:
        print(f"Error: {e}")
        return None


def list_and_export() -> bool:
    print("\n" + "=" * 60)
    print("GET /bookings and /bookings/export.csv")
    print("=" * 60)

    try:
        response = httpx.get(f"{BASE_URL}/bookings", params={"sort": "date-asc"}, timeout=10.0)
        response.raise_for_status()
        data = response.json()
        for b in data["bookings"]:
            print(f"  {b['date']} {b['time']}  {b['service_name']:<20} {b['status']:<9} {b['name']}")
        print(f"Stats: {data['stats']}")

        response = httpx.get(f"{BASE_URL}/bookings/export.csv", timeout=10.0)
        response.raise_for_status()
        print(f"CSV: {len(response.text.splitlines()) - 1} row(s)")
        return True
    except httpx.HTTPStatusError as e:
        print(f"HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return False


def main():
    try:
        httpx.get(f"{BASE_URL}/health", timeout=5.0)
        print("Server is running\n")
    except httpx.HTTPError:
        print("Server is not running!")
        print("   Please start it with: uvicorn probook.main:app --reload --port 8001")
        sys.exit(1)

    booking_id = create_booking(
        {
            "name": "Smoke Test",
            "email": "smoke@example.com",
            "phone": "+1 555 0100 200",
            "service_id": "svc-yoga",
            "date": (date.today() + timedelta(days=7)).isoformat(),
            "time": "18:00",
            "notes": "created by smoke_api.py",
        }
    )
    if booking_id:
        httpx.post(f"{BASE_URL}/bookings/{booking_id}/status", json={"status": "Confirmed"}, timeout=10.0)

    ok = list_and_export()

    if booking_id:
        httpx.delete(f"{BASE_URL}/bookings/{booking_id}", timeout=10.0)

    print("\n" + "=" * 60)
    print("Smoke check complete!" if ok else "Smoke check failed")
    print("=" * 60 + "\n")
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
