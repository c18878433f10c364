# Schemas package (re-export feature modules for stable imports)
from .appointments.appointment import *
from .doctors.doctor import *
from .schedules.schedule import *
from .notifications.notification import *
from .common.common import *
