"""Application-wide constants."""

APP_TITLE = "lazytf"
APP_SUBTITLE = "Terraform Commander"

DEFAULT_THEME = "catppuccin-mocha"

# Terraform file conventions.
TF_EXTENSION = ".tf"
TFVARS_EXTENSION = ".tfvars"
TF_METADATA_DIR = ".terraform"
TF_LOCAL_STATE_FILE = "terraform.tfstate"
TFSTATE_SUFFIX = ".tfstate"

# Var-file locations, scanned in this order, non-recursively.
VAR_FILE_DIRS: tuple[str, ...] = (".", "variables", "env", "tfvars")

# Backend files live anywhere below this directory.
BACKEND_DIR: tuple[str, ...] = ("variables", "backend")
BACKEND_PREFIX = "backend_"
GENERIC_BACKEND_STEM = "backend"

# Backend config keys that may carry an environment, in priority order.
ENV_CANDIDATE_KEYS: tuple[str, ...] = ("key", "path", "prefix", "workspace_key_prefix")
# Path segments that never name an environment.
NON_ENV_SEGMENTS: frozenset[str] = frozenset({"terraform", "states"})

DEFAULT_SEARCH_PATHS: list[str] = [".", "~/Projects", "~/Documents"]
DEFAULT_IGNORE_PATTERNS: list[str] = ["node_modules", ".git", "vendor", ".terraform"]

PROJECT_COLUMNS = ("#", "Project", "Init")
ENV_COLUMNS = ("#", "Environment", "File")

INITIALIZED_MARK = "●"

HELP_TEXT = """\
 Navigation
 ──────────────────────────────
 j / ↓        Move down
 k / ↑        Move up
 Enter        Select project / environment
 Tab          Switch panel

 Terraform
 ──────────────────────────────
 i            Init an environment
 Backspace/p  Back to project list

 AWS
 ──────────────────────────────
 a            SSO login

 General
 ──────────────────────────────
 ?            Toggle this help
 q            Quit\
"""
