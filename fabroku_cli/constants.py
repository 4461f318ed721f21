"""
Fabroku CLI Constants

Platform URLs, timeouts and polling limits.
"""

# Platform
DEFAULT_API_URL = "https://fabroku-api.fabricadesoftware.ifc.edu.br"
DASHBOARD_URL = "https://fabroku.fabricadesoftware.ifc.edu.br"

# Config storage
CONFIG_DIR_NAME = ".fabroku"
CONFIG_FILE_NAME = "config.json"
HOME_ENV_VAR = "FABROKU_HOME"
API_URL_ENV_VAR = "FABROKU_API_URL"

# HTTP
AUTH_SCHEME = "CLI"
REQUEST_TIMEOUT_SECONDS = 15

# Deploy polling (5s * 120 = 10 min)
POLL_INTERVAL_SECONDS = 5
POLL_MAX_TICKS = 120
PROGRESS_BAR_WIDTH = 20

# Login callback
LOGIN_TIMEOUT_SECONDS = 120
LOGIN_PATH = "/api/auth/cli/login/"
CALLBACK_PATH = "/callback"
