"""Centralized response text for tool results.

Placeholders are returned when the engine succeeds with empty output;
templates use format() placeholders.
"""

# Empty-output placeholders
NO_CONTAINERS_FOUND = "No containers found"
NO_LOGS_AVAILABLE = "No logs available"
NO_INSPECT_DATA = "No inspect data returned"
EXEC_NO_OUTPUT = "Command executed successfully (no output)"
NO_IMAGES_FOUND = "No images found"
NO_VOLUMES_FOUND = "No volumes found"
NO_NETWORKS_FOUND = "No networks found"
NO_SYSTEM_INFO = "No system information returned"
NOTHING_TO_PRUNE = "Nothing to prune"
COMPOSE_SERVICES_STARTED = "Compose services started"
COMPOSE_SERVICES_STOPPED = "Compose services stopped"
NO_COMPOSE_SERVICES_FOUND = "No compose services found"

# Success templates
CONTAINER_STARTED = "Container '{}' started successfully"
CONTAINER_STOPPED = "Container '{}' stopped successfully"
CONTAINER_RESTARTED = "Container '{}' restarted successfully"
CONTAINER_REMOVED = "Container '{}' removed successfully"
CONTAINER_RUN = "Container started: {}"
IMAGE_PULLED = "Image '{}' pulled successfully"
IMAGE_REMOVED = "Image '{}' removed successfully"

# Failure templates
COMMAND_FAILED = "Docker command '{}' failed with exit code {}"
