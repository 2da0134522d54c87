"""
Scheduling Domain

Services catalog, appointments and the day-view calendar.

Structure:
- validation.py  # Service and appointment field checks
- calendar.py    # Pixel layout of appointment cards, time slots, business hours
- schemas.py     # Request/response models
- repository.py  # Service, appointment and business-hours queries
- service.py     # Business logic (validation before every write)
- router.py      # /services and /appointments endpoints
"""
