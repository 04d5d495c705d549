"""TripDesk — agent portal for a travel booking site.

Registration, cookie sessions, profile management and account lifecycle
for travel agents, behind JWT authentication and role checks.
"""

__version__ = "0.1.0"
