#!/usr/bin/env python3
"""
Trigger the reminder scan on a running server.

Meant for cron, e.g. hourly:
  0 * * * * python3 scripts/send_reminders.py --url https://tutor.example.com --password "$ADMIN_PASSWORD"
"""
from __future__ import annotations

import argparse
import sys

import httpx
from httpx import ConnectError


def main() -> int:
    parser = argparse.ArgumentParser(description="Send due appointment reminders")
    parser.add_argument("--url", default="http://127.0.0.1:8000")
    parser.add_argument("--password", default="", help="Admin password (X-Admin-Password header)")
    args = parser.parse_args()

    headers = {"X-Admin-Password": args.password} if args.password else {}

    try:
        resp = httpx.post(f"{args.url.rstrip('/')}/api/admin/send-reminders", headers=headers, timeout=60.0)
    except ConnectError:
        print("Connection refused. Is the FastAPI server running?")
        return 1

    if resp.status_code >= 400:
        print(f"Reminder scan failed: {resp.status_code} {resp.text}")
        return 1

    data = resp.json()
    print(f"Reminders sent: {data['count']}")
    for error in data.get("notification_errors", []):
        print(f"  failed: {error['recipient']} ({error['reason']})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
