"""
Constants used throughout the visual assistant
"""

# Association
DEFAULT_IOU_THRESHOLD = 0.5  # IoU must exceed this to continue a track
DEFAULT_EXPIRY_SECONDS = 3.0  # Tracks unseen for longer are removed

# Approach alerts
DEFAULT_APPROACH_FRAMES = 3  # Consecutive qualifying frames before alerting
DEFAULT_APPROACH_COOLDOWN = 3.0  # Seconds between alerts for one track
DEFAULT_COSINE_THRESHOLD = 0.9  # Movement must point this closely at the viewer

# Signal alerts
DEFAULT_SIGNAL_REPEAT_FRAMES = 100  # Re-announce a steady light every N frames
DEFAULT_RED_LABELS = ("red pedestrian light",)
DEFAULT_GREEN_LABELS = ("green pedestrian light",)

# Motion vectors
DEFAULT_ARROW_FRAMES = 5  # Frames between displacement samples
DEFAULT_ARROW_MIN_DISPLACEMENT = 50.0  # Pixels

# Traffic summary
DEFAULT_SUMMARY_INTERVAL = 5.0  # Seconds between spoken summaries
DEFAULT_CONGESTED_BELOW = 5.0  # Average movement (px/frame)
DEFAULT_MODERATE_BELOW = 15.0
DEFAULT_LEFT_EDGE = 0.33  # Fraction of viewport width
DEFAULT_RIGHT_EDGE = 0.66
DEFAULT_SUMMARY_KEYWORDS = ("traffic", "situation")

# Viewport
DEFAULT_VIEWPORT_WIDTH = 390.0
DEFAULT_VIEWPORT_HEIGHT = 844.0

# Performance and monitoring
STATUS_REPORT_INTERVAL = 100  # Log status every N frames

# Output
DEFAULT_JSON_DIR = "data"
DEFAULT_SPEECH_TIMEOUT = 15  # Seconds before a speech command is abandoned
DEFAULT_WEBHOOK_TIMEOUT = 10

# Camera reconnection
MAX_CAMERA_RECONNECT_ATTEMPTS = 2
CAMERA_RECONNECT_DELAY = 2.0  # Seconds between reconnection attempts

# Environment variables
ENV_CAMERA_URL = "VA_CAMERA_URL"
ENV_WEBHOOK_URL = "VA_WEBHOOK_URL"
