"""Header names, property prefixes and naming defaults."""

HEADER_PREFIX = "RouteMeter"

# Per-message overrides, read from the message headers
HEADER_METRIC_NAME = HEADER_PREFIX + "Name"
HEADER_METRIC_TAGS = HEADER_PREFIX + "Tags"
HEADER_TIMER_ACTION = HEADER_PREFIX + "TimerAction"
HEADER_COUNTER_INCREMENT = HEADER_PREFIX + "CounterIncrement"
HEADER_COUNTER_DECREMENT = HEADER_PREFIX + "CounterDecrement"
HEADER_HISTOGRAM_VALUE = HEADER_PREFIX + "HistogramValue"

# Exchange property slots owned by the instrumentation
TIMER_PROPERTY_PREFIX = "timer"
ROUTE_PROPERTY_PREFIX = "route"
PROPERTY_SEPARATOR = ":"

DEFAULT_NAME_PATTERN = "##prefix##.##name##.##routeId##.##type##"

ROUTE_ID_TAG = "routeId"
ROUTES_METRIC_NAME = "routes"
EXCHANGES_METRIC_NAME = "exchanges"
