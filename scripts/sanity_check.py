#!/usr/bin/env python3
"""
Sanity check script to verify the messaging flow against a running server.
This script:
1. Creates two users and a match between them
2. Sends a few messages
3. Verifies ordering, latest message and unread count
4. Marks one message read, then the whole match
5. Verifies the validation errors

Usage:
    python scripts/sanity_check.py
"""

import os
import sys
import uuid
import httpx
from rich.console import Console
from rich.table import Table

# Create console for nice output
console = Console()

# API URL (can be overridden with environment variable)
API_URL = os.getenv("API_URL", "http://localhost:8000")

# Generate unique ID for this run
run_id = str(uuid.uuid4())[:8]

SAMPLE_MESSAGES = [
    (0, "Hey! Want to trade French lessons for statistics help?"),
    (1, "  Definitely, I need help with R too.  "),
    (0, "Great, let's meet Tuesday."),
]

def check_health(client):
    """Check if the API is healthy"""
    console.print("\n[bold blue]Checking API health...[/bold blue]")
    response = client.get("/health")
    if response.status_code == 200:
        console.print("[green]✓ API is healthy![/green]")
        return True
    console.print(f"[red]✗ API returned status {response.status_code}[/red]")
    return False

def create_users_and_match(client):
    """Create two users and match them, returning (match_id, [user ids])"""
    console.print("\n[bold blue]Creating users and match...[/bold blue]")
    user_ids = []
    for name in ("Claire", "Dev"):
        response = client.post("/api/users/", json={
            "first_name": name,
            "last_name": f"Sanity_{run_id}",
            "email": f"{name.lower()}_{run_id}@example.com",
        })
        response.raise_for_status()
        user_ids.append(response.json()["id"])

    response = client.post("/api/matches/", json={"user1_id": user_ids[0], "user2_id": user_ids[1]})
    response.raise_for_status()
    match_id = response.json()["id"]
    console.print(f"[green]✓ Users {user_ids} matched (match ID: {match_id})[/green]")
    return match_id, user_ids

def send_messages(client, match_id, user_ids):
    console.print("\n[bold blue]Sending messages...[/bold blue]")
    sent = []
    for sender_index, content in SAMPLE_MESSAGES:
        response = client.post("/api/messages/", json={
            "match_id": match_id,
            "sender_id": user_ids[sender_index],
            "content": content,
        })
        if response.status_code != 201:
            console.print(f"[red]✗ Failed to send message: {response.status_code} - {response.text}[/red]")
            return None
        sent.append(response.json())
    console.print(f"[green]✓ Sent {len(sent)} messages[/green]")
    return sent

def show_conversation(client, match_id):
    response = client.get(f"/api/messages/match/{match_id}")
    response.raise_for_status()
    messages = response.json()

    table = Table(title=f"Match {match_id}")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Sender", style="green", justify="right")
    table.add_column("Content", style="cyan")
    table.add_column("Sent at", style="magenta")
    table.add_column("Read", justify="center")
    for msg in messages:
        table.add_row(str(msg["id"]), str(msg["sender_id"]), msg["content"], msg["sent_at"], "✓" if msg["is_read"] else "")
    console.print(table)
    return messages

def check_expectation(label, ok):
    if ok:
        console.print(f"[green]✓ {label}[/green]")
    else:
        console.print(f"[red]✗ {label}[/red]")
    return ok

def run_sanity_check():
    """Run the full sanity check flow"""
    console.print("[bold yellow]=== SkillSwap Messaging Sanity Check ===[/bold yellow]")
    console.print(f"API URL: {API_URL}")
    console.print(f"Run ID: {run_id}")

    with httpx.Client(base_url=API_URL, follow_redirects=True) as client:
        try:
            if not check_health(client):
                console.print("[bold red]Sanity check failed: API is not healthy![/bold red]")
                return False
        except httpx.HTTPError as e:
            console.print(f"[red]✗ Error connecting to API: {str(e)}[/red]")
            return False

        match_id, user_ids = create_users_and_match(client)
        sent = send_messages(client, match_id, user_ids)
        if not sent:
            console.print("[bold red]Sanity check failed: Couldn't send messages![/bold red]")
            return False

        messages = show_conversation(client, match_id)
        results = [
            check_expectation("Messages come back in send order", [m["id"] for m in messages] == [m["id"] for m in sent]),
            check_expectation("Content is trimmed", messages[1]["content"] == SAMPLE_MESSAGES[1][1].strip()),
            check_expectation(
                "Legacy route returns the same list",
                client.get(f"/api/messages/{match_id}").json() == messages,
            ),
            check_expectation(
                "Latest message is the last one sent",
                client.get(f"/api/messages/match/{match_id}/latest").json()["id"] == sent[-1]["id"],
            ),
            check_expectation(
                "Unread count for the second user is 2",
                client.get(
                    f"/api/messages/match/{match_id}/unread-count",
                    params={"reader_id": user_ids[1]},
                ).json()["unread_count"] == 2,
            ),
            check_expectation(
                "Single message can be marked read",
                client.put(f"/api/messages/{sent[0]['id']}/read").json()["is_read"] is True,
            ),
            check_expectation(
                "Whole match can be marked read",
                all(m["is_read"] for m in client.put(f"/api/messages/match/{match_id}/read").json()),
            ),
        ]

        empty = client.post("/api/messages/", json={"match_id": match_id, "sender_id": user_ids[0], "content": "   "})
        results.append(check_expectation("Blank content is rejected with 400", empty.status_code == 400))
        missing = client.post("/api/messages/", json={"match_id": 0, "sender_id": user_ids[0], "content": "hi"})
        results.append(check_expectation("Unknown match is rejected with 404", missing.status_code == 404))

        show_conversation(client, match_id)

    if not all(results):
        console.print("\n[bold red]=== Sanity Check Failed ===[/bold red]")
        return False

    # All steps passed!
    console.print("\n[bold green]=== Sanity Check Passed! ===[/bold green]")
    console.print("All messaging features are working as expected.")
    return True

if __name__ == "__main__":
    sys.exit(0 if run_sanity_check() else 1)
