"""Constants used throughout the Maintenance Tracker application."""


# Project data directory and file names
DATA_DIR_NAME = ".maintenance-tracker"
CONFIG_FILE_NAME = "tracker_config.json"
DIRECTORY_FILE_NAME = "directory.json"
TASKS_DIR_NAME = "tasks"
REGISTRY_FILE_NAME = "task_registry.json"
METADATA_FILE_NAME = "metadata.json"
HISTORY_FILE_NAME = "status_history.json"

# Scheduling defaults
DEFAULT_HORIZON_DAYS = 3

# Display
SHORT_ID_LENGTH = 8
DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
