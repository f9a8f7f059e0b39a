"""Global constants for fleet-deploy"""

import re

APP_NAME = "fleet-deploy"

# Project identification
PROJECT_CONFIG_FILE = ".fleet-deploy.yaml"
DEFAULT_STORAGE_FILE = ".fleet-deploy/state.json"

# Logging
LOG_FORMAT = "%(message)s"

# Handles
HANDLE_SEPARATOR = "/"

# Credentials
ALREADY_DEFINED = True  # Credential value meaning "defined elsewhere, never persist"
SERVER_REQUIRED_FIELDS = ("host", "username")
REPOSITORY_CREDENTIAL_FIELDS = ("username", "password")

# Storage keys
STORAGE_CONNECTIONS_KEY = "connections"
STORAGE_CREDENTIALS_KEY = "credentials"
STORAGE_RELEASES_KEY = "releases"

# Configuration keys
CONFIG_DEFAULT_KEY = "default"
CONFIG_CONNECTIONS_KEY = "connections"
CONFIG_REMOTE_DEFAULT_KEY = "remote.default"
CONFIG_REMOTE_CONNECTIONS_KEY = "remote.connections"
CONFIG_LIVE_CREDENTIALS_KEY = "handles"
CONFIG_SCM_KEY = "scm"
CONFIG_STAGES_KEY = "stages.stages"
CONFIG_PLUGINS_KEY = "plugins"

# SCM
DEFAULT_BRANCH = "master"

# Remote folder layout
DEFAULT_ROOT_DIRECTORY = "/home/www/"
RELEASES_FOLDER = "releases"
SHARED_FOLDER = "shared"
CURRENT_FOLDER = "current"

# Releases
RELEASE_ID_FORMAT = "%Y%m%d%H%M%S"
NO_RELEASES_MESSAGE = "fleet-deploy could not rollback as no releases have yet been deployed"
ROLLBACK_QUESTION = "Here are the available releases, which one do you want to go back to?"

# Concurrency
DEFAULT_PARALLEL_WORKERS = 8

# Strategies
class StrategyFamily:
    CHECK = "check"
    DEPENDENCIES = "dependencies"


DEFAULT_STRATEGY = "polyglot"
POLYGLOT_CHILDREN = ["node", "php", "ruby"]

# Hook moments
HOOK_BEFORE = "before"
HOOK_AFTER = "after"

# Error codes
class ErrorCode:
    INVALID_CONNECTION = "FD001"
    CREDENTIALS_MISSING = "FD002"
    CONFIG_FORMAT_ERROR = "FD003"
    STRATEGY_NOT_FOUND = "FD004"
    TASK_NOT_FOUND = "FD005"
    REMOTE_COMMAND_FAILED = "FD006"
    PLUGIN_ERROR = "FD007"

# Environment variables
ENV_CONFIG_PATH = "FLEET_DEPLOY_CONFIG"
ENV_STORAGE_PATH = "FLEET_DEPLOY_STORAGE"
ENV_LOG_LEVEL = "FLEET_DEPLOY_LOG_LEVEL"

# Validation patterns
VERSION_NUMBER_PATTERN = re.compile(r"(\d+(?:\.\d+)*)")
CREDENTIALS_IN_URL_PATTERN = re.compile(r"https://(.+)@")
