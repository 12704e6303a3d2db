#!/usr/bin/env python3
"""
Quick verification that the task board API works end-to-end.

Start the server first (python app.py), then:
    python scripts/verify_backend.py [API_URL]
"""
import sys
from datetime import datetime, timezone

import requests

API_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:3000/api"
USER_ID = "test-user-verification"
TASK_ID = "test-task-1"
HEADERS = {"Content-Type": "application/json", "x-user-id": USER_ID}


def fetch_tasks():
    r = requests.get(f"{API_URL}/tasks", headers=HEADERS)
    r.raise_for_status()
    return r.json()


def find_task(tasks):
    return next((t for t in tasks if t["id"] == TASK_ID), None)


def fail(message):
    print(f"❌ {message}")
    sys.exit(1)


def main():
    print("=" * 60)
    print("Task Board Backend Verification")
    print("=" * 60)

    print("\n[1/3] Creating task...")
    r = requests.post(f"{API_URL}/tasks", headers=HEADERS, json={
        "id": TASK_ID,
        "columnId": "todo",
        "content": "Verify Backend",
        "createdAt": datetime.now(timezone.utc).isoformat(),
    })
    r.raise_for_status()
    task = find_task(fetch_tasks())
    if not task or task["columnId"] != "todo":
        fail("Task not found.")
    print("✅ Task created and fetched.")

    print("\n[2/3] Updating task...")
    r = requests.put(f"{API_URL}/tasks/{TASK_ID}", headers=HEADERS, json={"columnId": "in-progress"})
    r.raise_for_status()
    task = find_task(fetch_tasks())
    if not task or task["columnId"] != "in-progress":
        fail("Task update failed.")
    print("✅ Task updated.")

    print("\n[3/3] Deleting task...")
    r = requests.delete(f"{API_URL}/tasks/{TASK_ID}", headers=HEADERS)
    r.raise_for_status()
    if find_task(fetch_tasks()):
        fail("Task deletion failed.")
    print("✅ Task deleted.")

    print("\n" + "=" * 60)
    print("✅ ALL CHECKS PASSED")
    print("=" * 60)


if __name__ == "__main__":
    try:
        main()
    except requests.RequestException as e:
        fail(f"Verification failed: {e}")
