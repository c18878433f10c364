# Models package (re-export feature modules for stable imports)
from .people.doctor import Doctor
from .people.patient import Patient
from .catalog.service import Service
from .scheduling.schedule import Schedule
from .scheduling.appointment import Appointment
from .messaging.notification import Notification

__all__ = [
    "Doctor",
    "Patient",
    "Service",
    "Schedule",
    "Appointment",
    "Notification",
]
