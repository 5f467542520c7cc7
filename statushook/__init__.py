"""
statushook — status page to webhook bridge.

Polls a Statuspage-powered status page for incidents and scheduled
maintenances and mirrors each one into a webhook message, editing the
message as the incident is updated.
"""

__version__ = "1.0.0"
