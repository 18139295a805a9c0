"""Built-in defaults for stream plumbing.

Environment overrides are applied in ``iris_providers.config``; nothing here
reads the environment.
"""

# Capacity of the deltas channel; the producer blocks when it is full.
STREAM_BUFFER_SIZE = 64

# Slice used by blocking waits so cancellation is observed promptly.
STREAM_POLL_INTERVAL_SECONDS = 0.05

# Arguments reported for a tool call whose stream carried no argument text.
EMPTY_ARGUMENTS_JSON = "{}"
