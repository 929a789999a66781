"""Fixed names and paths used while initializing the runtime configuration."""

TZ = "TZ"

# Embedded (package data) layout
EMBEDDED_ENV_PATH = "embeds/envs/.env"
EMBEDDED_PARAMS_DIR = "embeds/params/"
EMBEDDED_PARAMS_PATTERN = EMBEDDED_PARAMS_DIR + "*"

# On-disk layout, relative to the resolved working directory
REGULAR_PARAMS_DIR = "/params/"
REGULAR_PARAMS_ENV = REGULAR_PARAMS_DIR + ".env"
REGULAR_PARAMS_PATTERN = REGULAR_PARAMS_DIR + "*"

# Category used in the component registry for configuration parsers
CONFIG_TYPE_CATEGORY = "config_type"
