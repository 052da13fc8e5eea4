"""Simulated upload settings."""

from server.settings.components import config

# Percentage points added to an upload's progress on every timer tick
MYCLOUD_UPLOAD_PROGRESS_STEP = config(
    'MYCLOUD_UPLOAD_PROGRESS_STEP',
    cast=int,
    default=10,
)

# Seconds between two timer ticks of a simulated upload
MYCLOUD_UPLOAD_TICK_INTERVAL = config(
    'MYCLOUD_UPLOAD_TICK_INTERVAL',
    cast=float,
    default=0.2,
)
