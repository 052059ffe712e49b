"""Domain-level booking policies and business rules.

This package contains logic that defines *what* the booking rules are
(which proposed bookings a location accepts) independent from *where* they
are applied (services, repositories, HTTP handlers).

Everything here is synchronous and works purely on the in-memory objects it
is handed. Callers must serialize admissions per location themselves.
"""
