AGENT_LANGUAGE = "python"
AGENT_VERSION = "0.4.0"

# The collector rejects host names longer than this, in bytes.
HOST_BYTE_LIMIT = 255
UNKNOWN_HOSTNAME = "unknown"

# Environment contract
METADATA_PREFIX = "NEW_RELIC_METADATA_"
DYNO_ENV_VAR = "DYNO"
DEFAULT_DYNO_NAME_PREFIXES_TO_SHORTEN = ["scheduler", "run"]

# Preconnect host derivation. The region is whatever precedes the first "x"
# of the license key; the collector side relies on this exact derivation.
PRECONNECT_HOST_DEFAULT = "collector.newrelic.com"
PRECONNECT_REGION_LICENSE_PATTERN = r"(^.+?)x"
PRECONNECT_REGION_HOST = "collector.{region}.nr-data.net"

# Config validation
LICENSE_LENGTH = 40
APP_NAME_LIMIT = 3
APP_NAME_SEPARATOR = ";"

# Event harvest limits
DEFAULT_CONFIGURABLE_EVENT_HARVEST_MS = 60 * 1000
MAX_TXN_EVENTS = 10 * 1000
MAX_CUSTOM_EVENTS = 10 * 1000
MAX_ERROR_EVENTS = 100
MAX_SPAN_EVENTS = 1000

UTILIZATION_METADATA_VERSION = 5

# Collector protocol
COLLECTOR_PROTOCOL_VERSION = 17
COLLECTOR_ENDPOINT = "https://{host}/agent_listener/invoke_raw_method"
USER_AGENT = "NewRelic-Python-Connect/{version}"
COLLECTOR_CONNECTION_TIMEOUT = 30  # seconds
