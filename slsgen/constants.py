"""Constants used throughout the Serverless Python Generator."""

from __future__ import annotations

import os

# Global debug flag - can be set via environment variable or command line
DEBUG_MODE = os.getenv("DEBUG", "false").lower() in ("true", "1", "yes", "on")

# Persisted answers, relative to the invocation directory
CONFIG_FILE = ".generator-config"

# Project names: start with a letter, end with a letter or digit, 2-40 characters
PROJECT_NAME_PATTERN = r"^[A-Za-z][-A-Za-z0-9]{0,38}[A-Za-z0-9]$"

# Serverless Framework plugins offered by the plugin menu
PLUGIN_CATALOG: tuple[str, ...] = (
    "serverless-python-requirements",
    "serverless-iam-roles-per-function",
    "serverless-offline",
    "serverless-dynamodb-local",
    "serverless-localstack",
    "serverless-plugin-aws-alerts",
    "serverless-plugin-warmup",
    "serverless-prune-plugin",
)

# Tools the setup steps shell out to
REQUIRED_COMMANDS: tuple[str, ...] = ("python3", "pip3", "git", "node", "npm")

# Oldest interpreter and runtime versions the generated project supports
MIN_VERSIONS: dict[str, tuple[int, ...]] = {
    "python3": (3, 8),
    "node": (16,),
}

# DynamoDB Local distribution unpacked into the project for start-local.sh
DYNAMODB_LOCAL_URL = "https://s3.us-west-2.amazonaws.com/dynamodb-local/dynamodb_local_latest.zip"
DYNAMODB_LOCAL_DIR = ".dynamodb"

# Process exit codes
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

MAX_DEBUG_MESSAGES = 50  # Maximum number of debug messages to display at once
