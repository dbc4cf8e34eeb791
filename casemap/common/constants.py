"""Application constants."""

USER_AGENT = "casemap/0.1 (+covid-19 time series aggregation)"
SERIES_TYPES = ("confirmed", "deaths", "recovered")
METADATA_COLUMNS = 4
SEARCH_RESULT_LIMIT = 6
DEBOUNCE_SECONDS = 0.5
COMMANDS = ("load", "search")
EXIT_SUCCESS = 0
EXIT_HARD_FAIL = 20
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "stage",
    "source",
    "event",
    "status",
    "duration_ms",
    "rows_in",
    "rows_out",
    "error_code",
    "message",
)
