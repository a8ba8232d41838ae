"""
wikimasters.notifications

Outbound notifications.

Responsibilities:
- Email provider client boundary (Resend HTTP API).
- Pageview celebration emails, sent in the background.
"""

# Package marker.
