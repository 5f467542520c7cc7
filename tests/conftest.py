"""Shared Statuspage payload builders."""

import pytest


def _incident(
    id="inc1",
    name="Elevated API error rates",
    status="investigating",
    impact="major",
    created_at="2024-05-01T10:00:00.000Z",
    updated_at="2024-05-01T10:30:00.000Z",
    started_at="2024-05-01T10:00:00.000Z",
    shortlink="https://stspg.io/abc123",
    components=None,
    updates=None,
):
    if updates is None:
        updates = [
            {
                "status": status,
                "body": "We are looking into elevated error rates.",
                "created_at": updated_at or created_at,
            }
        ]
    return {
        "id": id,
        "name": name,
        "status": status,
        "impact": impact,
        "created_at": created_at,
        "updated_at": updated_at,
        "started_at": started_at,
        "resolved_at": None,
        "shortlink": shortlink,
        "page_id": "page1",
        "components": components if components is not None else [
            {"id": "c1", "name": "API", "status": "partial_outage"},
        ],
        "incident_updates": updates,
    }


@pytest.fixture
def make_incident():
    """Factory for a single raw incident dict."""
    return _incident


@pytest.fixture
def incidents_payload():
    """Factory for an incidents.json body, newest incident first."""

    def build(*incidents):
        return {
            "page": {"id": "page1", "name": "Example", "url": "https://status.example.com"},
            "incidents": list(incidents),
        }

    return build
