"""Billboards app package.

This app holds the billboard booking core: the availability engine that
decides whether a date range can be booked and how a billboard's status is
labelled, the coordinator that validates and stores booking requests, and
the storage gateway that falls back from the ``billboard_requests`` table to
the legacy ``billboard_bookings`` table in deployments that lack the former.
"""
