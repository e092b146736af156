"""Fleet tables, simulation rates, session states and credentials."""

# =============================================================================
# Fleet Configuration
# =============================================================================

FLEET_SIZE = 5
TRUCK_ID_PREFIX = "TRK-"
TRUCK_ID_OFFSET = 100          # truck 1 -> "TRK-101"
TRUCK_NAME_PREFIX = "Orca Hauler"
LAST_UPDATED_LABEL = "Just now"

TANK_CAPACITY_GAL = 300
MPG_BASE = 6.5
MPG_SPREAD = 2.0               # current_mpg in [6.5, 8.5)

# Round-robin tables, indexed by (truck_number - 1) % len(table)
DRIVERS = ["John D.", "Sarah C.", "Mike R.", "Lisa M.", "Tom B."]
LOCATIONS = ["I-40 Westbound", "Dallas Depot", "Route 66", "Phoenix Yard", "I-5 Northbound"]

# =============================================================================
# Truck Status
# =============================================================================

STATUS_MOVING = "Moving"
STATUS_IDLING = "Idling"
STATUS_STOPPED = "Stopped"

TRUCK_STATUSES = [STATUS_MOVING, STATUS_IDLING, STATUS_STOPPED]

# Truck 2 idles, truck 4 is parked, everyone else is on the road
STATUS_PATTERN = [STATUS_MOVING, STATUS_IDLING, STATUS_MOVING, STATUS_STOPPED, STATUS_MOVING]

# =============================================================================
# Fuel History
# =============================================================================

HISTORY_LENGTH = 13            # hourly points, now-12h .. now
HISTORY_STEP_HOURS = 1
START_LEVEL_MAX = 85.0
START_LEVEL_SPREAD = 20.0      # starting level in [65, 85)
CONSUMPTION_RANGE = (0.0, 5.0) # gal/hr
CONSUMPTION_LEVEL_FACTOR = 0.5 # level drop per gal/hr of consumption

# =============================================================================
# Live Simulation
# =============================================================================

DRAIN_RATES = {
    STATUS_MOVING: 0.15,
    STATUS_IDLING: 0.05,
}
DRAIN_JITTER_MAX = 0.05        # jitter in [0, 0.05)
REFUEL_LEVEL = 100.0           # refuel-at-depot when the level would hit 0
TICK_INTERVAL_SEC = 2.0

FUEL_LEVEL_MIN = 0.0           # exclusive
FUEL_LEVEL_MAX = 100.0         # inclusive

# =============================================================================
# Session
# =============================================================================

STATE_LANDING = "landing"
STATE_LOGIN = "login"
STATE_DASHBOARD = "dashboard"

SESSION_STATES = [STATE_LANDING, STATE_LOGIN, STATE_DASHBOARD]

EVENT_OPEN_LOGIN = "open_login"
EVENT_SUBMIT = "submit"
EVENT_CANCEL = "cancel"
EVENT_LOGOUT = "logout"

FLEET_MANAGER_USERNAME = "fleetmanager"
FLEET_MANAGER_PASSWORD = "orca123"
LOGIN_ERROR_MESSAGE = "Invalid username or password."

# =============================================================================
# Presentation
# =============================================================================

LOW_FUEL_THRESHOLD = 20.0      # percent
CHART_COLOR_NORMAL = "#3b82f6"
CHART_COLOR_LOW_FUEL = "#ef4444"
