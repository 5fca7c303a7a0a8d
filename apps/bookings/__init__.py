"""Bookings app package.

This app encapsulates the booking domain: the booking model, the status
lifecycle, pricing and the date-conflict check. Writes for one car are
serialized by locking the car row inside a database transaction.
"""
