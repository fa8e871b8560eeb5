"""Locust load testing script for MeetScribe.

Generation and email endpoints call external services, so only the
local endpoints are exercised here.
"""

import random

from locust import HttpUser, between, task

SAMPLE_TRANSCRIPT = (
    "Alice: Let's review the Q1 roadmap.\n"
    "Bob: Budget is approved for two new hires.\n"
    "Carol: I'll draft the hiring plan by Friday.\n"
) * 20


class MeetScribeUser(HttpUser):
    """Simulated user for load testing MeetScribe."""

    wait_time = between(1, 3)  # Wait 1-3 seconds between tasks

    @task(3)
    def fetch_templates(self) -> None:
        """Fetch the instruction presets - first call of every session."""
        self.client.get("/api/templates")

    @task(2)
    def upload_transcript(self) -> None:
        """Upload a plain-text transcript."""
        files = {"transcript": ("meeting.txt", SAMPLE_TRANSCRIPT.encode(), "text/plain")}
        self.client.post("/api/upload", files=files)

    @task(1)
    def fetch_unknown_summary(self) -> None:
        """Look up a summary id that does not exist."""
        summary_id = f"missing-{random.randint(1, 10_000)}"
        with self.client.get(
            f"/api/summaries/{summary_id}", name="/api/summaries/[id]", catch_response=True
        ) as response:
            if response.status_code == 404:
                response.success()

    @task(1)
    def health(self) -> None:
        """Hit the health check."""
        self.client.get("/health")
