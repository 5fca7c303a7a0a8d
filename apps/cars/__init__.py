"""Cars app package.

Holds the rental agencies and their fleet. Cars are browsed publicly and
managed by back-office users; bookings reference them by id.
"""
