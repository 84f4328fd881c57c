"""
mazecam_lib/constants.py: Named tuning constants shared by the analysis core,
the capture/rendering collaborators and the configuration defaults.
"""

# --- EDGE DETECTION (imaging collaborator) ---
CANNY_LOW = 50
CANNY_HIGH = 150

# --- QUADTREE ---
MIN_NODE_SIZE = 10  # px; a node this narrow or short is never split

# --- DEAD-END CLASSIFICATION ---
DEAD_END_DENSITY_THRESHOLD = 0.05  # strict: density must exceed this
DEAD_END_INTERSECTION_THRESHOLD = 1  # inclusive: at most this many branch pixels
BRANCH_NEIGHBOR_COUNT = 2  # a pixel with more edge neighbours than this is a branch

# --- CAPTURE / PACING ---
CAMERA_INDEX = 0
FRAME_DELAY_MS = 33  # Approx. 30 FPS

# --- OVERLAY (BGR colors) ---
MARKER_RADIUS = 3
MARKER_COLOR = (0, 0, 255)  # Red
TEXT_ORIGIN = (10, 30)
TEXT_COLOR = (255, 0, 0)  # Blue
TEXT_SCALE = 1
TEXT_THICKNESS = 2

WINDOW_NAME = "mazecam"
