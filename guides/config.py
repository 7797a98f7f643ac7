"""Paths and configuration for the study-guide tooling."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Repository root (parent of guides/)
REPO_ROOT = Path(__file__).resolve().parent.parent

load_dotenv(REPO_ROOT / ".env")

DATA_DIR = REPO_ROOT / "data"
# Markdown study guides, one folder per topic (01-wcag-fundamentals/, 02-aria-roles/, ...)
GUIDES_DIR = Path(os.environ.get("A11Y_GUIDES_DIR", DATA_DIR / "guides"))
RESULTS_DIR = Path(os.environ.get("A11Y_RESULTS_DIR", REPO_ROOT / "results"))
MANIFEST_NAME = "manifest.json"

# Study progress and streaks
DEFAULT_PROGRESS_FILE = Path(
    os.environ.get("A11Y_PROGRESS_FILE", Path.home() / ".a11y-guides" / "progress.json")
)

# Code-fence languages audited as markup / as stylesheets
MARKUP_LANGUAGES = {"html", "htm", "xml", "svg", "jsx", "tsx", "vue"}
STYLESHEET_LANGUAGES = {"css", "scss"}

DEFAULT_TOPIC_ICON = "📘"

# LLM remediation review
DEFAULT_PROVIDER = "anthropic"
DEFAULT_MODEL = os.environ.get("A11Y_REVIEW_MODEL", "claude-sonnet-4-20250514")
