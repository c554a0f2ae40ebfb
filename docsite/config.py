"""Configuration constants and paths for docsite."""

import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path


class BuildMode(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"


# Build mode flag; the first variable that is set wins
MODE_ENV_VARS = ("DOCSITE_ENV", "NODE_ENV")

# Output directory; the inlined stylesheet is read from here in production
PUBLIC_DIR = Path(os.getenv("DOCSITE_PUBLIC_DIR", "./public"))
STYLES_FILENAME = "styles.css"

FAVICON_URL = "https://raw.githubusercontent.com/Akkatecture/Documentation/master/src/favicon.png"

# DocSearch widget (loaded from jsDelivr on every page)
DOCSEARCH_CSS_URL = "https://cdn.jsdelivr.net/npm/docsearch.js@2/dist/cdn/docsearch.min.css"
DOCSEARCH_JS_URL = "https://cdn.jsdelivr.net/npm/docsearch.js@2/dist/cdn/docsearch.min.js"
DOCSEARCH_API_KEY = os.getenv("DOCSITE_DOCSEARCH_API_KEY")
DOCSEARCH_INDEX_NAME = os.getenv("DOCSITE_DOCSEARCH_INDEX_NAME")
DOCSEARCH_INPUT_SELECTOR = "#search"

# Element ids in the document shell
INLINED_CSS_ID = "docsite-inlined-css"
BODY_ROOT_ID = "___docsite"

SITE_TITLE = "Akkatecture Documentation"


def build_mode_from_env(environ: Mapping[str, str] | None = None) -> BuildMode:
    """Resolve the build mode from the environment.

    Only the literal value ``production`` selects production mode.
    """
    env = os.environ if environ is None else environ
    for var in MODE_ENV_VARS:
        value = env.get(var)
        if value:
            return BuildMode.PRODUCTION if value.strip() == "production" else BuildMode.DEVELOPMENT
    return BuildMode.DEVELOPMENT
