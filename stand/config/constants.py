"""Constants for the configuration module."""

# Configuration document names, searched in order
CONFIG_FILE_NAME = ".stand.toml"
CONFIG_FILE_NAME_SHORT = ".stand"
LEGACY_CONFIG_DIR = ".stand"
LEGACY_CONFIG_FILE_NAME = "config.yaml"

# Environment metadata keys; every other key in an environment table is a variable
KEY_DESCRIPTION = "description"
KEY_EXTENDS = "extends"
KEY_COLOR = "color"
KEY_REQUIRES_CONFIRMATION = "requires_confirmation"
KEY_VARIABLES = "variables"
ENVIRONMENT_METADATA_KEYS = (
    KEY_DESCRIPTION,
    KEY_EXTENDS,
    KEY_COLOR,
    KEY_REQUIRES_CONFIRMATION,
)

# Log component names
COMPONENT_CONFIG = "config"
COMPONENT_INHERITANCE = "inheritance"
COMPONENT_VALIDATOR = "validator"

# Document formats
FORMAT_TOML = "toml"
FORMAT_YAML = "yaml"
