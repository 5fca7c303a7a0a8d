"""
Booking domain layer

Pure Python: entities, events, pricing and the car status policy.
Nothing here imports Django.
"""
